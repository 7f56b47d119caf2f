from sqlalchemy import UniqueConstraint
from sqlmodel import Field

from .base import BaseModelDB


class Statistics(BaseModelDB, table=True):
    """Cumul mensuel : une seule ligne par (année, mois)."""

    __table_args__ = (UniqueConstraint("year", "month", name="uq_statistics_year_month"),)

    year: int = Field(index=True)
    month: int = Field(ge=1, le=12)
    total_glass_collected: float = Field(default=0, description="Verre collecté (kg)")
    total_points: int = Field(default=0)
    total_users: int = Field(default=0)
    total_partners: int = Field(default=0)
