from enum import Enum
from typing import Optional

from sqlmodel import Field

from .base import BaseModelDB


class BorneStatus(str, Enum):
    ACTIVE = "ACTIVE"
    MAINTENANCE = "MAINTENANCE"
    FULL = "FULL"


class Borne(BaseModelDB, table=True):
    """Borne de collecte du verre, géolocalisée."""

    name: str = Field(index=True)
    address: str
    city: str = Field(index=True)
    zip_code: str
    latitude: float
    longitude: float
    status: BorneStatus = Field(default=BorneStatus.ACTIVE, index=True)
    description: Optional[str] = None
    is_active: bool = Field(default=True, index=True)
