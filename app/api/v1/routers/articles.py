"""
➡️ But : Définir les endpoints de l’API articles.

Lecture publique des articles publiés, CRUD réservé au back-office.

Isolation totale du reste du code : les routes ne contiennent ni SQL ni logique métier.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Path, Query, status

from app.api.v1.dependencies import get_article_service, require_editor
from app.db.models.users import User
from app.features.articles.schemas import ArticleCreateIn, ArticleUpdateIn, ArticleOut
from app.features.articles.services import ArticleService
from app.features.shared.schemas import CategoryCountOut, MessageOut

router = APIRouter(
    prefix="/articles",
    tags=["articles"],
    responses={404: {"description": "Article non trouvé"}},
)

# -----------------------------
# Public
# -----------------------------
@router.get(
    "",
    summary="Lister les articles publiés",
    description="Du plus récent au plus ancien. Filtres optionnels : catégorie, mise en avant, limite.",
    response_model=List[ArticleOut],
)
def list_published(
    category: Optional[str] = Query(None, examples=["ACTUALITE"]),
    is_featured: Optional[bool] = Query(None, alias="isFeatured"),
    limit: Optional[int] = Query(None, ge=1),
    svc: ArticleService = Depends(get_article_service),
):
    return svc.list_published(category=category, is_featured=is_featured, limit=limit)

@router.get(
    "/categories/list",
    summary="Catégories des articles publiés avec leur nombre",
    response_model=List[CategoryCountOut],
)
def list_categories(svc: ArticleService = Depends(get_article_service)):
    return svc.categories()

@router.get(
    "/slug/{slug}",
    summary="Lire un article publié (compte une vue)",
    response_model=ArticleOut,
)
def get_by_slug(slug: str, svc: ArticleService = Depends(get_article_service)):
    return svc.get_by_slug(slug)

# -----------------------------
# Back-office
# -----------------------------
@router.get(
    "/admin/all",
    summary="Lister tous les articles (brouillons compris)",
    response_model=List[ArticleOut],
)
def list_all(
    _user: User = Depends(require_editor),
    svc: ArticleService = Depends(get_article_service),
):
    return svc.list_all()

@router.get(
    "/{article_id}",
    summary="Récupérer un article par id",
    response_model=ArticleOut,
)
def get_one(
    article_id: int = Path(..., ge=1),
    _user: User = Depends(require_editor),
    svc: ArticleService = Depends(get_article_service),
):
    return svc.get(article_id)

@router.post(
    "",
    summary="Créer un article",
    status_code=status.HTTP_201_CREATED,
    response_model=MessageOut,
    responses={400: {"description": "Champs manquants ou slug déjà utilisé"}},
)
def create(
    payload: ArticleCreateIn,
    user: User = Depends(require_editor),
    svc: ArticleService = Depends(get_article_service),
):
    article = svc.create(payload, author_id=user.id)
    return MessageOut(id=article.id, message="Article créé avec succès")

@router.put(
    "/{article_id}",
    summary="Mettre à jour un article (champs fournis uniquement)",
    response_model=MessageOut,
)
def update(
    payload: ArticleUpdateIn,
    article_id: int = Path(..., ge=1),
    _user: User = Depends(require_editor),
    svc: ArticleService = Depends(get_article_service),
):
    article = svc.update(article_id, payload)
    return MessageOut(id=article.id, message="Article mis à jour avec succès")

@router.delete(
    "/{article_id}",
    summary="Supprimer un article",
    response_model=MessageOut,
)
def delete(
    article_id: int = Path(..., ge=1),
    _user: User = Depends(require_editor),
    svc: ArticleService = Depends(get_article_service),
):
    svc.delete(article_id)
    return MessageOut(id=article_id, message="Article supprimé avec succès")
