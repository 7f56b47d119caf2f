from typing import Any, Dict, Optional, Sequence
from sqlalchemy import case
from sqlmodel import select, func

from app.db.repositories.base import BaseRepository
from app.db.models.contact_messages import ContactMessage, ContactType


class ContactMessageRepository(BaseRepository[ContactMessage]):
    model = ContactMessage

    def list_filtered(
        self,
        *,
        type_: Optional[ContactType] = None,
        is_read: Optional[bool] = None,
        is_archived: bool = False,
    ) -> Sequence[ContactMessage]:
        stmt = select(ContactMessage).where(ContactMessage.is_archived.is_(is_archived))
        if type_ is not None:
            stmt = stmt.where(ContactMessage.type == type_)
        if is_read is not None:
            stmt = stmt.where(ContactMessage.is_read.is_(is_read))
        stmt = stmt.order_by(ContactMessage.created_at.desc(), ContactMessage.id.desc())
        return self.session.exec(stmt).all()

    def summary(self) -> Dict[str, Any]:
        """Compteurs de la boîte de réception (messages non archivés)."""

        def _sum(condition):
            return func.coalesce(func.sum(case((condition, 1), else_=0)), 0)

        stmt = select(
            func.count(ContactMessage.id),
            _sum(ContactMessage.is_read.is_(False)),
            _sum(ContactMessage.type == ContactType.PARTICULIER),
            _sum(ContactMessage.type == ContactType.COMMERCANT),
        ).where(ContactMessage.is_archived.is_(False))
        total, unread, particulier, commercant = self.session.exec(stmt).one()
        return {
            "total_messages": int(total or 0),
            "unread_messages": int(unread or 0),
            "particulier_messages": int(particulier or 0),
            "commercant_messages": int(commercant or 0),
        }
