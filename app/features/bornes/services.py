import logging
from datetime import datetime, timezone
from typing import Callable, List, Optional, Sequence

from fastapi import HTTPException, status

from app.db.models.bornes import Borne, BorneStatus
from app.db.repositories.bornes import BorneRepository
from app.features.bornes.schemas import BorneCreateIn, BorneUpdateIn, BorneSummaryOut, CityCountOut
from app.features.shared.validation import require_fields, present_changes

logger = logging.getLogger(__name__)

NOT_FOUND = "Borne non trouvée"


class BorneService:
    def __init__(
        self,
        repo: BorneRepository,
        now_fn: Callable[[], datetime] = lambda: datetime.now(timezone.utc),
    ):
        self.repo = repo
        self.now_fn = now_fn

    # -------- Reads --------

    def list(
        self,
        *,
        city: Optional[str] = None,
        status: Optional[BorneStatus] = None,
        is_active: Optional[bool] = None,
    ) -> Sequence[Borne]:
        return self.repo.list_filtered(city=city, status=status, is_active=is_active)

    def summary(self) -> BorneSummaryOut:
        return BorneSummaryOut(**self.repo.summary())

    def cities(self) -> List[CityCountOut]:
        return [CityCountOut(city=c, count=n) for c, n in self.repo.cities_with_count()]

    def get(self, borne_id: int) -> Borne:
        borne = self.repo.get(borne_id)
        if not borne:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=NOT_FOUND)
        return borne

    # -------- Writes --------

    def create(self, payload: BorneCreateIn) -> Borne:
        require_fields(payload.model_dump(), ("name", "address", "city", "zip_code", "latitude", "longitude"))
        borne = self.repo.create(**payload.model_dump())
        logger.info("Borne %s créée à %s", borne.id, borne.city)
        return borne

    def update(self, borne_id: int, payload: BorneUpdateIn) -> Borne:
        borne = self.get(borne_id)
        changes = present_changes(payload.model_dump(exclude_unset=True))
        changes["updated_at"] = self.now_fn()
        return self.repo.update(borne, **changes)

    def delete(self, borne_id: int) -> None:
        borne = self.get(borne_id)
        self.repo.delete(borne)
        logger.info("Borne %s supprimée", borne_id)
