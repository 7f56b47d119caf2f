from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field as PydField

from app.db.models.contact_messages import ContactType


class ContactCreateIn(BaseModel):
    # type contrôlé par le service (message d'erreur dédié)
    type: Optional[str] = PydField(None, examples=["PARTICULIER"])
    name: Optional[str] = None
    email: Optional[str] = None
    message: Optional[str] = None
    company_name: Optional[str] = None
    phone: Optional[str] = None
    position: Optional[str] = None
    attachment_url: Optional[str] = None


class ContactMessageOut(BaseModel):
    id: int
    type: ContactType
    name: str
    email: str
    message: str
    company_name: Optional[str] = None
    phone: Optional[str] = None
    position: Optional[str] = None
    attachment_url: Optional[str] = None
    is_read: bool
    is_archived: bool
    created_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class ContactSummaryOut(BaseModel):
    total_messages: int
    unread_messages: int
    particulier_messages: int
    commercant_messages: int
