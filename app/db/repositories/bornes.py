from typing import Any, Dict, List, Optional, Sequence, Tuple
from sqlalchemy import case
from sqlmodel import select, func

from app.db.repositories.base import BaseRepository
from app.db.models.bornes import Borne, BorneStatus


def _count_status(status: BorneStatus):
    return func.coalesce(func.sum(case((Borne.status == status, 1), else_=0)), 0)


class BorneRepository(BaseRepository[Borne]):
    """CRUD Bornes + agrégats par statut / par ville."""
    model = Borne

    def list_filtered(
        self,
        *,
        city: Optional[str] = None,
        status: Optional[BorneStatus] = None,
        is_active: Optional[bool] = None,
    ) -> Sequence[Borne]:
        """Chaque filtre fourni est combiné en ET. Tri : ville puis nom."""
        stmt = select(Borne)
        if city:
            stmt = stmt.where(Borne.city == city)
        if status is not None:
            stmt = stmt.where(Borne.status == status)
        if is_active is not None:
            stmt = stmt.where(Borne.is_active.is_(is_active))
        stmt = stmt.order_by(Borne.city, Borne.name)
        return self.session.exec(stmt).all()

    def summary(self) -> Dict[str, Any]:
        """Compteurs sur les bornes actives."""
        stmt = select(
            func.count(Borne.id),
            _count_status(BorneStatus.ACTIVE),
            _count_status(BorneStatus.MAINTENANCE),
            _count_status(BorneStatus.FULL),
            func.count(func.distinct(Borne.city)),
        ).where(Borne.is_active.is_(True))
        total, active, maintenance, full, cities = self.session.exec(stmt).one()
        return {
            "total_bornes": int(total or 0),
            "active_bornes": int(active or 0),
            "maintenance_bornes": int(maintenance or 0),
            "full_bornes": int(full or 0),
            "total_cities": int(cities or 0),
        }

    def cities_with_count(self) -> List[Tuple[str, int]]:
        stmt = (
            select(Borne.city, func.count(Borne.id).label("count"))
            .where(Borne.is_active.is_(True))
            .group_by(Borne.city)
            .order_by(Borne.city)
        )
        return self.session.exec(stmt).all()

    def by_city(self) -> List[Tuple[str, int, int]]:
        """(ville, total, actives) sur les bornes actives, ville la mieux équipée d'abord."""
        total = func.count(Borne.id)
        stmt = (
            select(Borne.city, total.label("total_bornes"), _count_status(BorneStatus.ACTIVE).label("active_bornes"))
            .where(Borne.is_active.is_(True))
            .group_by(Borne.city)
            .order_by(total.desc(), Borne.city)
        )
        return self.session.exec(stmt).all()

    def count_active(self) -> int:
        return self.count(Borne.is_active.is_(True))
