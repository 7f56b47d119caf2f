# app/db/repositories/articles.py
from typing import List, Optional, Sequence, Tuple
from sqlalchemy import update
from sqlmodel import select, func

from app.db.repositories.base import BaseRepository
from app.db.models.articles import Article
from app.db.models.users import User

ArticleRow = Tuple[Article, Optional[str]]


class ArticleRepository(BaseRepository[Article]):
    """CRUD Articles + requêtes spécifiques (jointure auteur, compteur de vues)."""
    model = Article

    # ---------- HELPERS ----------

    def _select_with_author(self):
        """Projection standard : (Article, nom de l'auteur)."""
        return (
            select(Article, User.name.label("author_name"))
            .join(User, User.id == Article.author_id, isouter=True)
        )

    # ---------- GETTERS SPÉCIFIQUES ----------

    def get_with_author(self, article_id: int) -> Optional[ArticleRow]:
        stmt = self._select_with_author().where(Article.id == article_id)
        return self.session.exec(stmt).first()

    def get_published_by_slug(self, slug: str) -> Optional[ArticleRow]:
        stmt = (
            self._select_with_author()
            .where(Article.slug == slug)
            .where(Article.is_published.is_(True))
        )
        return self.session.exec(stmt).first()

    # ---------- LISTES ----------

    def list_published(
        self,
        *,
        category: Optional[str] = None,
        is_featured: Optional[bool] = None,
        limit: Optional[int] = None,
    ) -> Sequence[ArticleRow]:
        """
        Articles publiés, du plus récent au plus ancien.
        - category    : filtre exact sur la catégorie
        - is_featured : filtre sur la mise en avant
        - limit       : nombre maximum de lignes
        """
        stmt = self._select_with_author().where(Article.is_published.is_(True))
        if category:
            stmt = stmt.where(Article.category == category)
        if is_featured is not None:
            stmt = stmt.where(Article.is_featured.is_(is_featured))
        stmt = stmt.order_by(Article.published_at.desc(), Article.id.desc())
        if limit:
            stmt = stmt.limit(limit)
        return self.session.exec(stmt).all()

    def list_all(self) -> Sequence[ArticleRow]:
        """Tous les articles (back-office), du plus récent au plus ancien."""
        stmt = self._select_with_author().order_by(Article.created_at.desc(), Article.id.desc())
        return self.session.exec(stmt).all()

    def categories_with_count(self) -> List[Tuple[str, int]]:
        count = func.count(Article.id)
        stmt = (
            select(Article.category, count.label("count"))
            .where(Article.is_published.is_(True))
            .group_by(Article.category)
            .order_by(count.desc(), Article.category)
        )
        return self.session.exec(stmt).all()

    # ---------- COMPTEURS ----------

    def count_published(self) -> int:
        return self.count(Article.is_published.is_(True))

    def increment_views(self, article_id: int) -> None:
        """UPDATE ... SET views = views + 1 : une seule instruction SQL."""
        self.session.exec(
            update(Article).where(Article.id == article_id).values(views=Article.views + 1)
        )
        self.session.commit()
