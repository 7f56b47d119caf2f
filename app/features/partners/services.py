import logging
from datetime import datetime, timezone
from typing import Callable, List, Optional

from fastapi import HTTPException, status
from sqlalchemy.exc import IntegrityError

from app.db.models.partners import Partner
from app.db.repositories.partners import PartnerRepository
from app.features.partners.schemas import PartnerCreateIn, PartnerUpdateIn, PartnerOut
from app.features.shared.schemas import CategoryCountOut
from app.features.shared.validation import require_fields, present_changes

logger = logging.getLogger(__name__)

NOT_FOUND = "Partenaire non trouvé"
DUPLICATE_SLUG = "Ce slug existe déjà"


class PartnerService:
    """
    Logique métier des partenaires commerçants.
    Seuls les partenaires actifs sont visibles publiquement.
    """

    def __init__(
        self,
        repo: PartnerRepository,
        now_fn: Callable[[], datetime] = lambda: datetime.now(timezone.utc),
    ):
        self.repo = repo
        self.now_fn = now_fn

    @staticmethod
    def _to_out(partner: Partner) -> PartnerOut:
        data = partner.model_dump()
        data["advantages"] = data.get("advantages") or []
        return PartnerOut(**data)

    def _get_entity(self, partner_id: int) -> Partner:
        partner = self.repo.get(partner_id)
        if not partner:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=NOT_FOUND)
        return partner

    def _assert_slug_free(self, slug: str, *, exclude_id: Optional[int] = None) -> None:
        if self.repo.exists("slug", slug, exclude_id=exclude_id):
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=DUPLICATE_SLUG)

    # -------- Reads --------

    def list(
        self,
        *,
        category: Optional[str] = None,
        is_featured: Optional[bool] = None,
        is_active: Optional[bool] = None,
    ) -> List[PartnerOut]:
        rows = self.repo.list_filtered(
            category=category,
            is_featured=is_featured,
            is_active=True if is_active is None else is_active,
        )
        return [self._to_out(p) for p in rows]

    def categories(self) -> List[CategoryCountOut]:
        return [CategoryCountOut(category=c, count=n) for c, n in self.repo.categories_with_count()]

    def get(self, partner_id: int) -> PartnerOut:
        return self._to_out(self._get_entity(partner_id))

    def get_by_slug(self, slug: str) -> PartnerOut:
        partner = self.repo.get_active_by_slug(slug)
        if not partner:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=NOT_FOUND)
        return self._to_out(partner)

    def similar(self, partner: PartnerOut, *, limit: int = 3) -> List[PartnerOut]:
        """Partenaires actifs de la même catégorie, hors partenaire courant."""
        others = [p for p in self.list(category=partner.category) if p.slug != partner.slug]
        return others[:limit]

    # -------- Writes --------

    def create(self, payload: PartnerCreateIn) -> Partner:
        require_fields(payload.model_dump(), ("name", "slug", "category", "address", "city", "zip_code"))
        self._assert_slug_free(payload.slug)
        try:
            partner = self.repo.create(**payload.model_dump())
        except IntegrityError:
            self.repo.rollback()
            if self.repo.exists("slug", payload.slug):
                raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=DUPLICATE_SLUG)
            raise
        logger.info("Partenaire %s créé (slug=%s)", partner.id, partner.slug)
        return partner

    def update(self, partner_id: int, payload: PartnerUpdateIn) -> Partner:
        partner = self._get_entity(partner_id)
        changes = present_changes(payload.model_dump(exclude_unset=True))
        if "slug" in changes and changes["slug"] != partner.slug:
            self._assert_slug_free(changes["slug"], exclude_id=partner.id)
        changes["updated_at"] = self.now_fn()
        slug = changes.get("slug", partner.slug)
        try:
            return self.repo.update(partner, **changes)
        except IntegrityError:
            self.repo.rollback()
            if self.repo.exists("slug", slug, exclude_id=partner_id):
                raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=DUPLICATE_SLUG)
            raise

    def delete(self, partner_id: int) -> None:
        partner = self._get_entity(partner_id)
        self.repo.delete(partner)
        logger.info("Partenaire %s supprimé", partner_id)
