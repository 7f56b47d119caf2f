from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field as PydField

from app.db.models.bornes import BorneStatus


# ---------- IN / UPDATE ----------

class BorneCreateIn(BaseModel):
    name: str = PydField(..., examples=["Borne Jardin de l'État"])
    address: str
    city: str = PydField(..., examples=["Saint-Denis"])
    zip_code: str = PydField(..., examples=["97400"])
    latitude: float = PydField(..., ge=-90, le=90)
    longitude: float = PydField(..., ge=-180, le=180)
    status: BorneStatus = BorneStatus.ACTIVE
    description: Optional[str] = None


class BorneUpdateIn(BaseModel):
    name: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    zip_code: Optional[str] = None
    latitude: Optional[float] = PydField(None, ge=-90, le=90)
    longitude: Optional[float] = PydField(None, ge=-180, le=180)
    status: Optional[BorneStatus] = None
    description: Optional[str] = None
    is_active: Optional[bool] = None


# ---------- OUT ----------

class BorneOut(BaseModel):
    id: int
    name: str
    address: str
    city: str
    zip_code: str
    latitude: float
    longitude: float
    status: BorneStatus
    description: Optional[str] = None
    is_active: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class BorneSummaryOut(BaseModel):
    total_bornes: int
    active_bornes: int
    maintenance_bornes: int
    full_bornes: int
    total_cities: int


class CityCountOut(BaseModel):
    city: str
    count: int
