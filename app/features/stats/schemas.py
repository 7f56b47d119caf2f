from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field as PydField


class GlobalStatsOut(BaseModel):
    total_bornes: int
    total_partners: int
    total_articles: int
    # absents tant que la configuration du site ne les renseigne pas
    total_glass_collected: Optional[float] = None  # kg
    total_users: Optional[int] = None


class MonthlyStatsIn(BaseModel):
    # présence contrôlée par le service ("Année et mois requis")
    year: Optional[int] = PydField(None, examples=[2025])
    month: Optional[int] = PydField(None, examples=[3])
    total_glass_collected: Optional[float] = PydField(None, ge=0)
    total_points: Optional[int] = PydField(None, ge=0)
    total_users: Optional[int] = PydField(None, ge=0)
    total_partners: Optional[int] = PydField(None, ge=0)


class MonthlyStatsOut(BaseModel):
    id: int
    year: int
    month: int
    total_glass_collected: float
    total_points: int
    total_users: int
    total_partners: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class CityStatsOut(BaseModel):
    city: str
    total_bornes: int
    active_bornes: int
