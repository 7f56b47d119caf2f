"""
➡️ But : Pages publiques rendues côté serveur (Jinja2).

Les pages réutilisent les mêmes services que l'API JSON (injection via Depends()),
la carte Leaflet est seulement chargée par le navigateur.

Un slug inconnu affiche la page 404.
"""

import logging
from pathlib import Path
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request, status
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from app.api.v1.dependencies import (
    get_article_service,
    get_borne_service,
    get_partner_service,
    get_stats_service,
)
from app.features.articles.services import ArticleService
from app.features.bornes.services import BorneService
from app.features.partners.services import PartnerService
from app.features.stats.services import StatsService
from app.features.map import filters as map_filters
from app.web import formatting
from app.web.content import render_content

logger = logging.getLogger(__name__)

TEMPLATES_DIR = Path(__file__).parent / "templates"
HOME_BORNES = 4
HOME_ARTICLES = 3

templates = Jinja2Templates(directory=str(TEMPLATES_DIR))
templates.env.filters.update(
    date_fr=formatting.format_date,
    article_category=formatting.article_category_label,
    partner_category=formatting.partner_category_label,
    partner_emoji=formatting.partner_category_emoji,
    borne_status=formatting.borne_status_label,
    marker_color=map_filters.marker_color,
    content=render_content,
)

router = APIRouter(include_in_schema=False, default_response_class=HTMLResponse)


def _render(request: Request, name: str, context: Dict[str, Any], status_code: int = 200) -> HTMLResponse:
    return templates.TemplateResponse(request, name, context, status_code=status_code)


def not_found(request: Request, message: str) -> HTMLResponse:
    return _render(request, "404.html", {"message": message}, status_code=status.HTTP_404_NOT_FOUND)


def _category_filter(category: Optional[str]) -> Optional[str]:
    if not category or category == formatting.ALL_CATEGORIES:
        return None
    return category


# -----------------------------
# Accueil
# -----------------------------
@router.get("/")
def home(
    request: Request,
    articles: ArticleService = Depends(get_article_service),
    bornes: BorneService = Depends(get_borne_service),
    partners: PartnerService = Depends(get_partner_service),
    stats: StatsService = Depends(get_stats_service),
):
    global_stats = stats.global_stats()
    active_bornes = list(bornes.list(is_active=True))[:HOME_BORNES]
    center, zoom = map_filters.map_view()
    stats_display = [
        {"value": formatting.format_tonnes(global_stats.total_glass_collected), "unit": "tonnes", "label": "de verre collecté"},
        {"value": formatting.format_number(global_stats.total_users), "unit": "", "label": "utilisateurs inscrits"},
        {"value": formatting.format_count(global_stats.total_bornes), "unit": "", "label": "bornes actives"},
        {"value": formatting.format_count(global_stats.total_partners), "unit": "", "label": "partenaires commerçants"},
    ]
    return _render(request, "home.html", {
        "stats": stats_display,
        "bornes": active_bornes,
        "markers": map_filters.to_markers(active_bornes),
        "center": center,
        "zoom": zoom,
        "articles": articles.list_published(limit=HOME_ARTICLES),
        "partners": partners.list(is_featured=True),
    })


# -----------------------------
# Actualités
# -----------------------------
@router.get("/actualites")
def article_list(
    request: Request,
    category: Optional[str] = Query(None),
    svc: ArticleService = Depends(get_article_service),
):
    selected = _category_filter(category)
    items = svc.list_published(category=selected)
    featured = next((a for a in items if a.is_featured), None)
    others = [a for a in items if featured is None or a.id != featured.id]
    return _render(request, "articles.html", {
        "categories": formatting.ARTICLE_CATEGORIES,
        "selected_category": selected or formatting.ALL_CATEGORIES,
        "featured": featured,
        "articles": others,
    })


@router.get("/actualites/{slug}")
def article_detail(
    request: Request,
    slug: str,
    svc: ArticleService = Depends(get_article_service),
):
    try:
        article = svc.get_by_slug(slug)
    except HTTPException as exc:
        if exc.status_code != status.HTTP_404_NOT_FOUND:
            raise
        logger.info("Article introuvable pour le slug %s", slug)
        return not_found(request, "Cet article n'existe pas ou n'est plus disponible.")
    return _render(request, "article.html", {
        "article": article,
        "related": svc.related(article, limit=2),
    })


# -----------------------------
# Partenaires
# -----------------------------
@router.get("/partenaires")
def partner_list(
    request: Request,
    category: Optional[str] = Query(None),
    svc: PartnerService = Depends(get_partner_service),
):
    selected = _category_filter(category)
    items = svc.list(category=selected)
    return _render(request, "partners.html", {
        "categories": formatting.PARTNER_CATEGORIES,
        "selected_category": selected or formatting.ALL_CATEGORIES,
        "featured": [p for p in items if p.is_featured],
        "partners": items,
    })


@router.get("/partenaires/{slug}")
def partner_detail(
    request: Request,
    slug: str,
    svc: PartnerService = Depends(get_partner_service),
):
    try:
        partner = svc.get_by_slug(slug)
    except HTTPException as exc:
        if exc.status_code != status.HTTP_404_NOT_FOUND:
            raise
        logger.info("Partenaire introuvable pour le slug %s", slug)
        return not_found(request, "Ce partenaire n'existe pas ou n'est plus actif.")
    return _render(request, "partner.html", {
        "partner": partner,
        "similar": svc.similar(partner, limit=3),
    })


# -----------------------------
# Carte des bornes
# -----------------------------
@router.get("/carte")
def borne_map(
    request: Request,
    city: Optional[str] = Query(None),
    status_: Optional[str] = Query(None, alias="status"),
    q: Optional[str] = Query(None),
    borne: Optional[int] = Query(None),
    svc: BorneService = Depends(get_borne_service),
):
    filters = map_filters.MapFilters.from_params(city=city, status=status_, query=q)
    all_bornes = list(svc.list(is_active=True))
    shown = map_filters.filter_bornes(all_bornes, filters)
    selected = map_filters.find_borne(all_bornes, borne)
    center, zoom = map_filters.map_view(selected)
    return _render(request, "map.html", {
        "filters": filters,
        "cities": map_filters.CITIES,
        "statuses": map_filters.STATUSES,
        "bornes": shown,
        "selected": selected,
        "markers": map_filters.to_markers(shown),
        "center": center,
        "zoom": zoom,
        "user_zoom": map_filters.USER_LOCATION_ZOOM,
        "user_color": map_filters.USER_MARKER_COLOR,
    })
