import logging
from datetime import datetime, timezone
from typing import Callable, List, Optional

from fastapi import HTTPException, status
from sqlalchemy.exc import IntegrityError

from app.db.models.articles import Article
from app.db.repositories.articles import ArticleRepository, ArticleRow
from app.features.articles.schemas import ArticleCreateIn, ArticleUpdateIn, ArticleOut
from app.features.shared.schemas import CategoryCountOut
from app.features.shared.validation import require_fields, present_changes

logger = logging.getLogger(__name__)

NOT_FOUND = "Article non trouvé"
DUPLICATE_SLUG = "Ce slug existe déjà"


class ArticleService:
    """
    Logique métier des articles.
    - Public : lecture des articles publiés (liste, catégories, lecture par slug).
    - Éditeur : CRUD complet, lecture des brouillons.
    - published_at est posé à la première publication et n'est jamais effacé.
    """

    def __init__(
        self,
        repo: ArticleRepository,
        now_fn: Callable[[], datetime] = lambda: datetime.now(timezone.utc),
    ):
        self.repo = repo
        self.now_fn = now_fn

    # -------- Helpers --------

    @staticmethod
    def _to_out(row: ArticleRow) -> ArticleOut:
        article, author_name = row
        data = article.model_dump()
        data["tags"] = data.get("tags") or []
        return ArticleOut(**data, author_name=author_name)

    def _get_entity(self, article_id: int) -> Article:
        article = self.repo.get(article_id)
        if not article:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=NOT_FOUND)
        return article

    def _assert_slug_free(self, slug: str, *, exclude_id: Optional[int] = None) -> None:
        if self.repo.exists("slug", slug, exclude_id=exclude_id):
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=DUPLICATE_SLUG)

    # -------- Reads --------

    def list_published(
        self,
        *,
        category: Optional[str] = None,
        is_featured: Optional[bool] = None,
        limit: Optional[int] = None,
    ) -> List[ArticleOut]:
        rows = self.repo.list_published(category=category, is_featured=is_featured, limit=limit)
        return [self._to_out(r) for r in rows]

    def list_all(self) -> List[ArticleOut]:
        return [self._to_out(r) for r in self.repo.list_all()]

    def categories(self) -> List[CategoryCountOut]:
        return [CategoryCountOut(category=c, count=n) for c, n in self.repo.categories_with_count()]

    def get(self, article_id: int) -> ArticleOut:
        row = self.repo.get_with_author(article_id)
        if not row:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=NOT_FOUND)
        return self._to_out(row)

    def get_by_slug(self, slug: str) -> ArticleOut:
        """Lecture publique : compte une vue à chaque appel."""
        row = self.repo.get_published_by_slug(slug)
        if not row:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=NOT_FOUND)
        article, _ = row
        self.repo.increment_views(article.id)
        # relecture pour renvoyer le compteur à jour
        return self._to_out(self.repo.get_with_author(article.id))

    def related(self, article: ArticleOut, *, limit: int = 2) -> List[ArticleOut]:
        """Articles publiés de la même catégorie, hors article courant."""
        rows = self.repo.list_published(category=article.category, limit=limit + 1)
        return [self._to_out(r) for r in rows if r[0].slug != article.slug][:limit]

    # -------- Writes --------

    def create(self, payload: ArticleCreateIn, *, author_id: Optional[int]) -> Article:
        require_fields(payload.model_dump(), ("title", "slug", "content", "category"))
        self._assert_slug_free(payload.slug)

        now = self.now_fn()
        fields = payload.model_dump(exclude={"author_id"})
        try:
            article = self.repo.create(
                **fields,
                author_id=payload.author_id or author_id,
                published_at=now if payload.is_published else None,
            )
        except IntegrityError:
            self.repo.rollback()
            # slug pris entre la vérification et l'insertion
            if self.repo.exists("slug", payload.slug):
                raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=DUPLICATE_SLUG)
            raise
        logger.info("Article %s créé (slug=%s)", article.id, article.slug)
        return article

    def update(self, article_id: int, payload: ArticleUpdateIn) -> Article:
        article = self._get_entity(article_id)
        changes = present_changes(payload.model_dump(exclude_unset=True))

        if "slug" in changes and changes["slug"] != article.slug:
            self._assert_slug_free(changes["slug"], exclude_id=article.id)
        if changes.get("is_published") and article.published_at is None:
            changes["published_at"] = self.now_fn()
        changes["updated_at"] = self.now_fn()
        slug = changes.get("slug", article.slug)

        try:
            return self.repo.update(article, **changes)
        except IntegrityError:
            self.repo.rollback()
            if self.repo.exists("slug", slug, exclude_id=article_id):
                raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=DUPLICATE_SLUG)
            raise

    def delete(self, article_id: int) -> None:
        article = self._get_entity(article_id)
        self.repo.delete(article)
        logger.info("Article %s supprimé", article_id)
