from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, Field as PydField

SLUG_PATTERN = r"^[a-z0-9]+(?:-[a-z0-9]+)*$"


# ---------- IN / UPDATE ----------

class ArticleCreateIn(BaseModel):
    title: str = PydField(..., description="Titre de l'article", examples=["Record de collecte en mars"])
    slug: str = PydField(..., pattern=SLUG_PATTERN, examples=["record-de-collecte-en-mars"])
    content: str
    category: str = PydField(..., examples=["ACTUALITE"])
    excerpt: Optional[str] = None
    tags: List[str] = PydField(default_factory=list)
    image_url: Optional[str] = None
    is_published: bool = False
    is_featured: bool = False
    # par défaut : l'utilisateur connecté
    author_id: Optional[int] = None


class ArticleUpdateIn(BaseModel):
    title: Optional[str] = None
    slug: Optional[str] = PydField(None, pattern=SLUG_PATTERN)
    content: Optional[str] = None
    category: Optional[str] = None
    excerpt: Optional[str] = None
    tags: Optional[List[str]] = None
    image_url: Optional[str] = None
    is_published: Optional[bool] = None
    is_featured: Optional[bool] = None


# ---------- OUT ----------

class ArticleOut(BaseModel):
    id: int
    title: str
    slug: str
    excerpt: Optional[str] = None
    content: str
    category: str
    tags: List[str] = []
    image_url: Optional[str] = None
    is_published: bool
    is_featured: bool
    published_at: Optional[datetime] = None
    views: int = 0
    author_id: Optional[int] = None
    author_name: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
