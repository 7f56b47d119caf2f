from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, Field as PydField

from app.features.articles.schemas import SLUG_PATTERN


# ---------- IN / UPDATE ----------

class PartnerCreateIn(BaseModel):
    name: str = PydField(..., examples=["Le Rond-Point Café"])
    slug: str = PydField(..., pattern=SLUG_PATTERN, examples=["le-rond-point-cafe"])
    category: str = PydField(..., examples=["CAFE"])
    address: str
    city: str
    zip_code: str
    description: Optional[str] = None
    long_description: Optional[str] = None
    latitude: Optional[float] = PydField(None, ge=-90, le=90)
    longitude: Optional[float] = PydField(None, ge=-180, le=180)
    phone: Optional[str] = None
    email: Optional[str] = None
    website: Optional[str] = None
    logo_url: Optional[str] = None
    image_url: Optional[str] = None
    advantages: List[str] = PydField(default_factory=list)
    points_required: Optional[int] = PydField(None, ge=0)
    discount: Optional[str] = None
    is_active: bool = True
    is_featured: bool = False


class PartnerUpdateIn(BaseModel):
    name: Optional[str] = None
    slug: Optional[str] = PydField(None, pattern=SLUG_PATTERN)
    category: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    zip_code: Optional[str] = None
    description: Optional[str] = None
    long_description: Optional[str] = None
    latitude: Optional[float] = PydField(None, ge=-90, le=90)
    longitude: Optional[float] = PydField(None, ge=-180, le=180)
    phone: Optional[str] = None
    email: Optional[str] = None
    website: Optional[str] = None
    logo_url: Optional[str] = None
    image_url: Optional[str] = None
    advantages: Optional[List[str]] = None
    points_required: Optional[int] = PydField(None, ge=0)
    discount: Optional[str] = None
    is_active: Optional[bool] = None
    is_featured: Optional[bool] = None


# ---------- OUT ----------

class PartnerOut(BaseModel):
    id: int
    name: str
    slug: str
    category: str
    address: str
    city: str
    zip_code: str
    description: Optional[str] = None
    long_description: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    website: Optional[str] = None
    logo_url: Optional[str] = None
    image_url: Optional[str] = None
    advantages: List[str] = []
    points_required: Optional[int] = None
    discount: Optional[str] = None
    is_active: bool
    is_featured: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
