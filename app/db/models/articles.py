from datetime import datetime
from typing import List, Optional

from sqlalchemy import Column, JSON
from sqlmodel import Field

from .base import BaseModelDB


class Article(BaseModelDB, table=True):
    """Actualités du blog. Visibles publiquement seulement une fois publiées."""

    title: str = Field(description="Titre de l'article")
    slug: str = Field(index=True, unique=True, description="Identifiant lisible dans l'URL")
    excerpt: Optional[str] = Field(default=None, description="Chapô affiché dans les listes")
    content: str = Field(description="Contenu (markdown simplifié)")
    category: str = Field(index=True, description="ACTUALITE, EVENEMENT, PARTENAIRES, ...")
    tags: List[str] = Field(default_factory=list, sa_column=Column(JSON, nullable=False))
    image_url: Optional[str] = None

    # Visibilité
    is_published: bool = Field(default=False, index=True)
    is_featured: bool = Field(default=False)
    # Fixée à la première publication, jamais remise à zéro
    published_at: Optional[datetime] = Field(default=None, index=True)

    views: int = Field(default=0)

    author_id: Optional[int] = Field(default=None, foreign_key="user.id")
