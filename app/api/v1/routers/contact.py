from typing import List, Optional

from fastapi import APIRouter, Depends, Path, Query, status

from app.api.v1.dependencies import get_contact_service, require_editor
from app.db.models.contact_messages import ContactType
from app.db.models.users import User
from app.features.contact.schemas import ContactCreateIn, ContactMessageOut, ContactSummaryOut
from app.features.contact.services import ContactService
from app.features.shared.schemas import MessageOut

router = APIRouter(
    prefix="/contact",
    tags=["contact"],
    responses={404: {"description": "Message non trouvé"}},
)

# -----------------------------
# Public : formulaire de contact
# -----------------------------
@router.post(
    "",
    summary="Envoyer un message de contact",
    status_code=status.HTTP_201_CREATED,
    response_model=MessageOut,
)
def create(payload: ContactCreateIn, svc: ContactService = Depends(get_contact_service)):
    entity = svc.create(payload)
    return MessageOut(id=entity.id, message="Message envoyé avec succès")

# -----------------------------
# Back-office : boîte de réception
# -----------------------------
@router.get(
    "",
    summary="Lister les messages",
    description="Messages non archivés par défaut, du plus récent au plus ancien.",
    response_model=List[ContactMessageOut],
)
def list_messages(
    type_: Optional[ContactType] = Query(None, alias="type"),
    is_read: Optional[bool] = Query(None, alias="isRead"),
    is_archived: Optional[bool] = Query(None, alias="isArchived"),
    _user: User = Depends(require_editor),
    svc: ContactService = Depends(get_contact_service),
):
    return svc.list(type_=type_, is_read=is_read, is_archived=is_archived)

@router.get(
    "/stats/summary",
    summary="Compteurs de la boîte de réception",
    response_model=ContactSummaryOut,
)
def summary(
    _user: User = Depends(require_editor),
    svc: ContactService = Depends(get_contact_service),
):
    return svc.summary()

@router.get(
    "/{message_id}",
    summary="Récupérer un message",
    response_model=ContactMessageOut,
)
def get_one(
    message_id: int = Path(..., ge=1),
    _user: User = Depends(require_editor),
    svc: ContactService = Depends(get_contact_service),
):
    return svc.get(message_id)

@router.put(
    "/{message_id}/read",
    summary="Marquer comme lu",
    response_model=MessageOut,
)
def mark_read(
    message_id: int = Path(..., ge=1),
    _user: User = Depends(require_editor),
    svc: ContactService = Depends(get_contact_service),
):
    svc.mark_read(message_id)
    return MessageOut(id=message_id, message="Message marqué comme lu")

@router.put(
    "/{message_id}/archive",
    summary="Archiver",
    response_model=MessageOut,
)
def archive(
    message_id: int = Path(..., ge=1),
    _user: User = Depends(require_editor),
    svc: ContactService = Depends(get_contact_service),
):
    svc.archive(message_id)
    return MessageOut(id=message_id, message="Message archivé")

@router.delete(
    "/{message_id}",
    summary="Supprimer un message",
    response_model=MessageOut,
)
def delete(
    message_id: int = Path(..., ge=1),
    _user: User = Depends(require_editor),
    svc: ContactService = Depends(get_contact_service),
):
    svc.delete(message_id)
    return MessageOut(id=message_id, message="Message supprimé avec succès")
