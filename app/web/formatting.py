"""
➡️ But : Libellés et formats d'affichage des pages publiques (en français).

Utilisés comme filtres Jinja2 (voir app.web.router).
"""

from datetime import datetime
from typing import Dict, List, Optional, Tuple, Union

from app.db.models.bornes import BorneStatus

EMPTY_VALUE = "-"
THOUSANDS_SEPARATOR = "\u202f"

MONTHS_FR = [
    "janvier", "février", "mars", "avril", "mai", "juin",
    "juillet", "août", "septembre", "octobre", "novembre", "décembre",
]

ALL_CATEGORIES = "ALL"

ARTICLE_CATEGORIES: List[Tuple[str, str]] = [
    (ALL_CATEGORIES, "Toutes les catégories"),
    ("ACTUALITE", "Actualités"),
    ("EVENEMENT", "Événements"),
    ("PARTENAIRES", "Partenaires"),
    ("RESULTATS", "Résultats"),
    ("CONSEILS", "Conseils"),
    ("TRI", "Tri & Recyclage"),
]

# (valeur, libellé, emoji)
PARTNER_CATEGORIES: List[Tuple[str, str, str]] = [
    (ALL_CATEGORIES, "Toutes les catégories", "🏪"),
    ("RESTAURANT", "Restaurants", "🍽️"),
    ("BAR", "Bars", "🍹"),
    ("CAFE", "Cafés", "☕"),
    ("BOUTIQUE", "Boutiques", "🛍️"),
    ("SUPERMARCHE", "Supermarchés", "🛒"),
    ("BEAUTE", "Beauté & Bien-être", "💆"),
    ("LOISIRS", "Loisirs", "🎮"),
    ("SERVICES", "Services", "🔧"),
]

BORNE_STATUS_LABELS: Dict[str, str] = {
    BorneStatus.ACTIVE.value: "Disponible",
    BorneStatus.MAINTENANCE.value: "En maintenance",
    BorneStatus.FULL.value: "Pleine",
}

_ARTICLE_LABELS = dict(ARTICLE_CATEGORIES)
_PARTNER_LABELS = {value: label for value, label, _ in PARTNER_CATEGORIES}
_PARTNER_EMOJIS = {value: emoji for value, _, emoji in PARTNER_CATEGORIES}


def article_category_label(category: Optional[str]) -> str:
    if not category:
        return ""
    return _ARTICLE_LABELS.get(category, category.capitalize())


def partner_category_label(category: Optional[str]) -> str:
    if not category:
        return ""
    return _PARTNER_LABELS.get(category, category.capitalize())


def partner_category_emoji(category: Optional[str]) -> str:
    return _PARTNER_EMOJIS.get(category or "", "🏪")


def borne_status_label(status: Union[BorneStatus, str, None]) -> str:
    if status is None:
        return ""
    value = status.value if isinstance(status, BorneStatus) else str(status)
    return BORNE_STATUS_LABELS.get(value, value)


def format_date(value: Optional[datetime]) -> str:
    """12 mars 2025"""
    if value is None:
        return ""
    return f"{value.day} {MONTHS_FR[value.month - 1]} {value.year}"


def format_number(value: Union[int, float, None]) -> str:
    """Séparateur de milliers français (espace fine insécable), "-" si nul."""
    if not value:
        return EMPTY_VALUE
    return f"{int(round(value)):,}".replace(",", THOUSANDS_SEPARATOR)


def format_tonnes(kilograms: Union[int, float, None]) -> str:
    """Kilogrammes → tonnes avec une décimale, "-" si nul."""
    if not kilograms or kilograms <= 0:
        return EMPTY_VALUE
    return f"{kilograms / 1000:.1f}"


def format_count(value: Optional[int]) -> str:
    if not value or value <= 0:
        return EMPTY_VALUE
    return str(value)
