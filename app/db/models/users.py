"""
➡️ But : Comptes du back-office (administrateurs, éditeurs).

Le mot de passe n'est jamais stocké en clair (hash bcrypt, voir app.security.password).
Le rôle pilote les droits : ADMIN et EDITOR écrivent, USER lit seulement.
"""

from enum import Enum
from typing import Optional

from sqlmodel import Field

from .base import BaseModelDB


class UserRole(str, Enum):
    ADMIN = "ADMIN"
    EDITOR = "EDITOR"
    USER = "USER"


class User(BaseModelDB, table=True):
    email: str = Field(index=True, unique=True)
    hashed_password: str
    name: Optional[str] = None
    role: UserRole = Field(default=UserRole.EDITOR)
