from typing import List, Optional

from sqlalchemy import Column, JSON
from sqlmodel import Field

from .base import BaseModelDB


class Partner(BaseModelDB, table=True):
    """Commerçant partenaire où les points Cliiink s'échangent contre des avantages."""

    name: str = Field(index=True)
    slug: str = Field(index=True, unique=True)
    description: Optional[str] = None
    long_description: Optional[str] = None
    category: str = Field(index=True, description="RESTAURANT, BAR, CAFE, BOUTIQUE, ...")

    # Adresse
    address: str
    city: str
    zip_code: str
    latitude: Optional[float] = None
    longitude: Optional[float] = None

    # Contact
    phone: Optional[str] = None
    email: Optional[str] = None
    website: Optional[str] = None
    logo_url: Optional[str] = None
    image_url: Optional[str] = None

    # Programme de fidélité
    advantages: List[str] = Field(default_factory=list, sa_column=Column(JSON, nullable=False))
    points_required: Optional[int] = None
    discount: Optional[str] = None

    is_active: bool = Field(default=True, index=True)
    is_featured: bool = Field(default=False)
