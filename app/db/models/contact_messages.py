from enum import Enum
from typing import Optional

from sqlmodel import Field

from .base import BaseModelDB


class ContactType(str, Enum):
    PARTICULIER = "PARTICULIER"
    COMMERCANT = "COMMERCANT"


class ContactMessage(BaseModelDB, table=True):
    """Message envoyé depuis le formulaire de contact (boîte de réception du back-office)."""

    __tablename__ = "contact_message"

    type: ContactType = Field(index=True)
    name: str
    email: str
    message: str
    company_name: Optional[str] = None
    phone: Optional[str] = None
    position: Optional[str] = None
    attachment_url: Optional[str] = None

    is_read: bool = Field(default=False)
    is_archived: bool = Field(default=False, index=True)
