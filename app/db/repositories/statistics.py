from typing import Optional, Sequence
from sqlmodel import select

from app.db.repositories.base import BaseRepository
from app.db.models.statistics import Statistics


class StatisticsRepository(BaseRepository[Statistics]):
    model = Statistics

    def get_for_month(self, year: int, month: int) -> Optional[Statistics]:
        return self.session.exec(
            select(Statistics).where(Statistics.year == year, Statistics.month == month)
        ).first()

    def list_recent(self, *, year: Optional[int] = None, limit: int = 12) -> Sequence[Statistics]:
        stmt = select(Statistics)
        if year is not None:
            stmt = stmt.where(Statistics.year == year)
        stmt = stmt.order_by(Statistics.year.desc(), Statistics.month.desc()).limit(limit)
        return self.session.exec(stmt).all()
