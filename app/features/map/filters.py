"""
➡️ But : État dérivé de la carte des bornes (page /carte et mini-carte de l'accueil).

Fonctions pures sur une liste de bornes déjà chargée :

MapFilters : filtres ville / statut / recherche libre. Les bornes affichées
sont exactement celles qui satisfont tous les filtres actifs.

marker_color() : couleur du marqueur selon le statut.

map_view() : centre et zoom, recentrés sur la borne sélectionnée.

to_markers() : données sérialisables pour Leaflet (le rendu reste côté navigateur).
"""

from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple

from app.db.models.bornes import Borne, BorneStatus

REUNION_CENTER: Tuple[float, float] = (-21.1151, 55.5364)
DEFAULT_ZOOM = 10
USER_LOCATION_ZOOM = 13
SELECTED_BORNE_ZOOM = 15

ALL_CITIES = "Toutes les villes"
CITIES: List[str] = [
    ALL_CITIES,
    "Saint-Denis",
    "Saint-Pierre",
    "Saint-Paul",
    "Le Port",
    "Saint-Louis",
    "Sainte-Marie",
    "Saint-André",
]

ALL_STATUSES = "ALL"
STATUSES: List[Tuple[str, str]] = [
    (ALL_STATUSES, "Tous les états"),
    (BorneStatus.ACTIVE.value, "Disponibles"),
    (BorneStatus.MAINTENANCE.value, "En maintenance"),
    (BorneStatus.FULL.value, "Pleines"),
]

DEFAULT_MARKER_COLOR = "#78d8a3"
USER_MARKER_COLOR = "#3b82f6"
MARKER_COLORS: Dict[str, str] = {
    BorneStatus.MAINTENANCE.value: "#f59e0b",
    BorneStatus.FULL.value: "#ef4444",
}


def _status_value(status: Any) -> str:
    return status.value if isinstance(status, BorneStatus) else str(status)


@dataclass(frozen=True)
class MapFilters:
    city: str = ALL_CITIES
    status: str = ALL_STATUSES
    query: str = ""

    @classmethod
    def from_params(
        cls,
        city: Optional[str] = None,
        status: Optional[str] = None,
        query: Optional[str] = None,
    ) -> "MapFilters":
        """Paramètres vides ou absents → filtre inactif."""
        return cls(
            city=(city or "").strip() or ALL_CITIES,
            status=(status or "").strip().upper() or ALL_STATUSES,
            query=(query or "").strip(),
        )

    @property
    def active_count(self) -> int:
        return sum([
            self.city != ALL_CITIES,
            self.status != ALL_STATUSES,
            self.query != "",
        ])

    @property
    def is_default(self) -> bool:
        return self.active_count == 0

    def matches(self, borne: Borne) -> bool:
        if self.city != ALL_CITIES and borne.city != self.city:
            return False
        if self.status != ALL_STATUSES and _status_value(borne.status) != self.status:
            return False
        if self.query:
            needle = self.query.lower()
            haystacks = (borne.name, borne.address, borne.city)
            if not any(needle in (h or "").lower() for h in haystacks):
                return False
        return True


def filter_bornes(bornes: Iterable[Borne], filters: MapFilters) -> List[Borne]:
    """Conserve l'ordre d'origine."""
    return [b for b in bornes if filters.matches(b)]


def marker_color(status: Any) -> str:
    return MARKER_COLORS.get(_status_value(status), DEFAULT_MARKER_COLOR)


def map_view(selected: Optional[Borne] = None) -> Tuple[Tuple[float, float], int]:
    if selected is None:
        return REUNION_CENTER, DEFAULT_ZOOM
    return (selected.latitude, selected.longitude), SELECTED_BORNE_ZOOM


def find_borne(bornes: Sequence[Borne], borne_id: Optional[int]) -> Optional[Borne]:
    if borne_id is None:
        return None
    return next((b for b in bornes if b.id == borne_id), None)


def to_markers(bornes: Iterable[Borne]) -> List[Dict[str, Any]]:
    return [
        {
            "id": b.id,
            "name": b.name,
            "address": b.address,
            "city": b.city,
            "lat": b.latitude,
            "lng": b.longitude,
            "status": _status_value(b.status),
            "color": marker_color(b.status),
        }
        for b in bornes
    ]
