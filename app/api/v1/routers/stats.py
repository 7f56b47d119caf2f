from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status

from app.api.v1.dependencies import get_stats_service, require_editor
from app.db.models.users import User
from app.features.stats.schemas import GlobalStatsOut, MonthlyStatsIn, MonthlyStatsOut, CityStatsOut
from app.features.stats.services import StatsService
from app.features.shared.schemas import MessageOut

router = APIRouter(
    prefix="/stats",
    tags=["stats"],
)

@router.get(
    "",
    summary="Statistiques globales",
    description="Bornes et partenaires actifs, articles publiés, et compteurs de la configuration du site s'ils existent.",
    response_model=GlobalStatsOut,
    response_model_exclude_none=True,
)
def global_stats(svc: StatsService = Depends(get_stats_service)):
    return svc.global_stats()

@router.get(
    "/monthly",
    summary="Statistiques mensuelles (12 derniers mois)",
    response_model=List[MonthlyStatsOut],
)
def monthly(
    year: Optional[int] = Query(None, ge=2000, le=2100),
    svc: StatsService = Depends(get_stats_service),
):
    return svc.monthly(year=year)

@router.get(
    "/by-city",
    summary="Bornes actives par ville",
    response_model=List[CityStatsOut],
)
def by_city(svc: StatsService = Depends(get_stats_service)):
    return svc.by_city()

@router.post(
    "/monthly",
    summary="Enregistrer le cumul d'un mois",
    description="Une ligne existante pour (année, mois) est écrasée, jamais dupliquée.",
    status_code=status.HTTP_201_CREATED,
    response_model=MessageOut,
)
def upsert_monthly(
    payload: MonthlyStatsIn,
    _user: User = Depends(require_editor),
    svc: StatsService = Depends(get_stats_service),
):
    entity = svc.upsert_month(payload)
    return MessageOut(id=entity.id, message="Statistiques enregistrées avec succès")
