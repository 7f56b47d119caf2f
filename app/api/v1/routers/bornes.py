from typing import List, Optional

from fastapi import APIRouter, Depends, Path, Query, status

from app.api.v1.dependencies import get_borne_service, require_editor
from app.db.models.bornes import BorneStatus
from app.db.models.users import User
from app.features.bornes.schemas import (
    BorneCreateIn,
    BorneUpdateIn,
    BorneOut,
    BorneSummaryOut,
    CityCountOut,
)
from app.features.bornes.services import BorneService
from app.features.shared.schemas import MessageOut

router = APIRouter(
    prefix="/bornes",
    tags=["bornes"],
    responses={404: {"description": "Borne non trouvée"}},
)

@router.get(
    "",
    summary="Lister les bornes",
    description="Chaque filtre fourni (ville, statut, actif) est combiné en ET. Tri : ville puis nom.",
    response_model=List[BorneOut],
)
def list_bornes(
    city: Optional[str] = Query(None, examples=["Saint-Denis"]),
    status_: Optional[BorneStatus] = Query(None, alias="status"),
    is_active: Optional[bool] = Query(None, alias="isActive"),
    svc: BorneService = Depends(get_borne_service),
):
    return svc.list(city=city, status=status_, is_active=is_active)

@router.get(
    "/stats/summary",
    summary="Compteurs des bornes actives par statut",
    response_model=BorneSummaryOut,
)
def summary(svc: BorneService = Depends(get_borne_service)):
    return svc.summary()

@router.get(
    "/cities/list",
    summary="Villes équipées avec leur nombre de bornes actives",
    response_model=List[CityCountOut],
)
def list_cities(svc: BorneService = Depends(get_borne_service)):
    return svc.cities()

@router.get(
    "/{borne_id}",
    summary="Récupérer une borne",
    response_model=BorneOut,
)
def get_one(borne_id: int = Path(..., ge=1), svc: BorneService = Depends(get_borne_service)):
    return svc.get(borne_id)

@router.post(
    "",
    summary="Créer une borne",
    status_code=status.HTTP_201_CREATED,
    response_model=MessageOut,
)
def create(
    payload: BorneCreateIn,
    _user: User = Depends(require_editor),
    svc: BorneService = Depends(get_borne_service),
):
    borne = svc.create(payload)
    return MessageOut(id=borne.id, message="Borne créée avec succès")

@router.put(
    "/{borne_id}",
    summary="Mettre à jour une borne (champs fournis uniquement)",
    response_model=MessageOut,
)
def update(
    payload: BorneUpdateIn,
    borne_id: int = Path(..., ge=1),
    _user: User = Depends(require_editor),
    svc: BorneService = Depends(get_borne_service),
):
    borne = svc.update(borne_id, payload)
    return MessageOut(id=borne.id, message="Borne mise à jour avec succès")

@router.delete(
    "/{borne_id}",
    summary="Supprimer une borne",
    response_model=MessageOut,
)
def delete(
    borne_id: int = Path(..., ge=1),
    _user: User = Depends(require_editor),
    svc: BorneService = Depends(get_borne_service),
):
    svc.delete(borne_id)
    return MessageOut(id=borne_id, message="Borne supprimée avec succès")
