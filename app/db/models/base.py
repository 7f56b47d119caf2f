"""
➡️ But : Colonnes communes à toutes les tables (id entier, dates de création / modification en UTC).

Les services mettent à jour `updated_at` eux-mêmes lors d'une modification.
"""

from sqlmodel import SQLModel, Field
from datetime import datetime, timezone
from typing import Optional


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class BaseModelDB(SQLModel, table=False):
    id: Optional[int] = Field(default=None, primary_key=True)
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)
