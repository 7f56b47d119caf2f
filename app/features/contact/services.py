import logging
from datetime import datetime, timezone
from typing import Callable, Optional, Sequence

from fastapi import HTTPException, status

from app.db.models.contact_messages import ContactMessage, ContactType
from app.db.repositories.contact_messages import ContactMessageRepository
from app.features.contact.schemas import ContactCreateIn, ContactSummaryOut
from app.features.shared.validation import require_fields

logger = logging.getLogger(__name__)

NOT_FOUND = "Message non trouvé"


class ContactService:
    """
    Boîte de réception : dépôt public, lecture / archivage côté back-office.
    Un message archivé disparaît de la liste par défaut.
    """

    def __init__(
        self,
        repo: ContactMessageRepository,
        now_fn: Callable[[], datetime] = lambda: datetime.now(timezone.utc),
    ):
        self.repo = repo
        self.now_fn = now_fn

    def _get_entity(self, message_id: int) -> ContactMessage:
        entity = self.repo.get(message_id)
        if not entity:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=NOT_FOUND)
        return entity

    # -------- Reads --------

    def list(
        self,
        *,
        type_: Optional[ContactType] = None,
        is_read: Optional[bool] = None,
        is_archived: Optional[bool] = None,
    ) -> Sequence[ContactMessage]:
        return self.repo.list_filtered(
            type_=type_,
            is_read=is_read,
            is_archived=False if is_archived is None else is_archived,
        )

    def summary(self) -> ContactSummaryOut:
        return ContactSummaryOut(**self.repo.summary())

    def get(self, message_id: int) -> ContactMessage:
        return self._get_entity(message_id)

    # -------- Writes --------

    def create(self, payload: ContactCreateIn) -> ContactMessage:
        data = payload.model_dump()
        require_fields(data, ("type", "name", "email", "message"))
        if data["type"] not in {t.value for t in ContactType}:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Type de contact invalide")

        data["type"] = ContactType(data["type"])
        entity = self.repo.create(**data, is_read=False, is_archived=False)
        logger.info("Message de contact %s reçu (%s)", entity.id, entity.type.value)
        return entity

    def mark_read(self, message_id: int) -> ContactMessage:
        return self.repo.update(self._get_entity(message_id), is_read=True, updated_at=self.now_fn())

    def archive(self, message_id: int) -> ContactMessage:
        return self.repo.update(self._get_entity(message_id), is_archived=True, updated_at=self.now_fn())

    def delete(self, message_id: int) -> None:
        self.repo.delete(self._get_entity(message_id))
