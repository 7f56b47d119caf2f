from typing import List, Optional, Sequence, Tuple
from sqlmodel import select, func

from app.db.repositories.base import BaseRepository
from app.db.models.partners import Partner


class PartnerRepository(BaseRepository[Partner]):
    """CRUD Partenaires + requêtes spécifiques."""
    model = Partner

    def list_filtered(
        self,
        *,
        category: Optional[str] = None,
        is_featured: Optional[bool] = None,
        is_active: bool = True,
    ) -> Sequence[Partner]:
        """Partenaires mis en avant d'abord, puis ordre alphabétique."""
        stmt = select(Partner).where(Partner.is_active.is_(is_active))
        if category:
            stmt = stmt.where(Partner.category == category)
        if is_featured is not None:
            stmt = stmt.where(Partner.is_featured.is_(is_featured))
        stmt = stmt.order_by(Partner.is_featured.desc(), Partner.name)
        return self.session.exec(stmt).all()

    def get_active_by_slug(self, slug: str) -> Optional[Partner]:
        stmt = select(Partner).where(Partner.slug == slug).where(Partner.is_active.is_(True))
        return self.session.exec(stmt).first()

    def categories_with_count(self) -> List[Tuple[str, int]]:
        count = func.count(Partner.id)
        stmt = (
            select(Partner.category, count.label("count"))
            .where(Partner.is_active.is_(True))
            .group_by(Partner.category)
            .order_by(count.desc(), Partner.category)
        )
        return self.session.exec(stmt).all()

    def count_active(self) -> int:
        return self.count(Partner.is_active.is_(True))
