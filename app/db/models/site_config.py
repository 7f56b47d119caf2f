from sqlmodel import Field

from .base import BaseModelDB


class SiteConfig(BaseModelDB, table=True):
    """Paires clé/valeur éditables (ex: total_glass_collected, total_users)."""

    __tablename__ = "site_config"

    key: str = Field(index=True, unique=True)
    value: str
