from typing import Dict, Iterable
from sqlmodel import select

from app.db.repositories.base import BaseRepository
from app.db.models.site_config import SiteConfig


class SiteConfigRepository(BaseRepository[SiteConfig]):
    model = SiteConfig

    def get_values(self, keys: Iterable[str]) -> Dict[str, str]:
        """Retourne {clé: valeur} pour les clés présentes en base."""
        rows = self.session.exec(
            select(SiteConfig).where(SiteConfig.key.in_(list(keys)))
        ).all()
        return {row.key: row.value for row in rows}
