from typing import List, Optional

from fastapi import APIRouter, Depends, Path, Query, status

from app.api.v1.dependencies import get_partner_service, require_editor
from app.db.models.users import User
from app.features.partners.schemas import PartnerCreateIn, PartnerUpdateIn, PartnerOut
from app.features.partners.services import PartnerService
from app.features.shared.schemas import CategoryCountOut, MessageOut

router = APIRouter(
    prefix="/partners",
    tags=["partners"],
    responses={404: {"description": "Partenaire non trouvé"}},
)

@router.get(
    "",
    summary="Lister les partenaires",
    description="Partenaires actifs par défaut, mis en avant d'abord puis par nom.",
    response_model=List[PartnerOut],
)
def list_partners(
    category: Optional[str] = Query(None, examples=["RESTAURANT"]),
    is_featured: Optional[bool] = Query(None, alias="isFeatured"),
    is_active: Optional[bool] = Query(None, alias="isActive"),
    svc: PartnerService = Depends(get_partner_service),
):
    return svc.list(category=category, is_featured=is_featured, is_active=is_active)

@router.get(
    "/categories/list",
    summary="Catégories des partenaires actifs avec leur nombre",
    response_model=List[CategoryCountOut],
)
def list_categories(svc: PartnerService = Depends(get_partner_service)):
    return svc.categories()

@router.get(
    "/slug/{slug}",
    summary="Récupérer un partenaire actif par slug",
    response_model=PartnerOut,
)
def get_by_slug(slug: str, svc: PartnerService = Depends(get_partner_service)):
    return svc.get_by_slug(slug)

@router.get(
    "/{partner_id}",
    summary="Récupérer un partenaire par id",
    response_model=PartnerOut,
)
def get_one(partner_id: int = Path(..., ge=1), svc: PartnerService = Depends(get_partner_service)):
    return svc.get(partner_id)

@router.post(
    "",
    summary="Créer un partenaire",
    status_code=status.HTTP_201_CREATED,
    response_model=MessageOut,
    responses={400: {"description": "Champs manquants ou slug déjà utilisé"}},
)
def create(
    payload: PartnerCreateIn,
    _user: User = Depends(require_editor),
    svc: PartnerService = Depends(get_partner_service),
):
    partner = svc.create(payload)
    return MessageOut(id=partner.id, message="Partenaire créé avec succès")

@router.put(
    "/{partner_id}",
    summary="Mettre à jour un partenaire (champs fournis uniquement)",
    response_model=MessageOut,
)
def update(
    payload: PartnerUpdateIn,
    partner_id: int = Path(..., ge=1),
    _user: User = Depends(require_editor),
    svc: PartnerService = Depends(get_partner_service),
):
    partner = svc.update(partner_id, payload)
    return MessageOut(id=partner.id, message="Partenaire mis à jour avec succès")

@router.delete(
    "/{partner_id}",
    summary="Supprimer un partenaire",
    response_model=MessageOut,
)
def delete(
    partner_id: int = Path(..., ge=1),
    _user: User = Depends(require_editor),
    svc: PartnerService = Depends(get_partner_service),
):
    svc.delete(partner_id)
    return MessageOut(id=partner_id, message="Partenaire supprimé avec succès")
