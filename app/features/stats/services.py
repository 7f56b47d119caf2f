import logging
import math
from datetime import datetime, timezone
from typing import Callable, List, Optional, Sequence

from fastapi import HTTPException, status

from app.db.models.statistics import Statistics
from app.db.repositories.articles import ArticleRepository
from app.db.repositories.bornes import BorneRepository
from app.db.repositories.partners import PartnerRepository
from app.db.repositories.site_config import SiteConfigRepository
from app.db.repositories.statistics import StatisticsRepository
from app.features.stats.schemas import GlobalStatsOut, MonthlyStatsIn, CityStatsOut

logger = logging.getLogger(__name__)

GLASS_KEY = "total_glass_collected"
USERS_KEY = "total_users"


class StatsService:
    """
    Agrégats en lecture seule + cumul mensuel (upsert sur (année, mois)).
    Les requêtes des stats globales sont indépendantes, sans transaction commune.
    """

    def __init__(
        self,
        *,
        stats_repo: StatisticsRepository,
        borne_repo: BorneRepository,
        partner_repo: PartnerRepository,
        article_repo: ArticleRepository,
        config_repo: SiteConfigRepository,
        now_fn: Callable[[], datetime] = lambda: datetime.now(timezone.utc),
    ):
        self.stats = stats_repo
        self.bornes = borne_repo
        self.partners = partner_repo
        self.articles = article_repo
        self.config = config_repo
        self.now_fn = now_fn

    # -------- Helpers --------

    @staticmethod
    def _parse_number(key: str, raw: Optional[str], cast):
        if raw is None:
            return None
        try:
            number = float(raw)
            if not math.isfinite(number):
                raise ValueError(raw)
            return cast(number)
        except (ValueError, OverflowError):
            logger.warning("Valeur de configuration illisible pour %s: %r", key, raw)
            return None

    # -------- Reads --------

    def global_stats(self) -> GlobalStatsOut:
        values = self.config.get_values([GLASS_KEY, USERS_KEY])
        return GlobalStatsOut(
            total_bornes=self.bornes.count_active(),
            total_partners=self.partners.count_active(),
            total_articles=self.articles.count_published(),
            total_glass_collected=self._parse_number(GLASS_KEY, values.get(GLASS_KEY), float),
            total_users=self._parse_number(USERS_KEY, values.get(USERS_KEY), int),
        )

    def monthly(self, *, year: Optional[int] = None) -> Sequence[Statistics]:
        return self.stats.list_recent(year=year, limit=12)

    def by_city(self) -> List[CityStatsOut]:
        return [
            CityStatsOut(city=city, total_bornes=total, active_bornes=active)
            for city, total, active in self.bornes.by_city()
        ]

    # -------- Writes --------

    def upsert_month(self, payload: MonthlyStatsIn) -> Statistics:
        """
        Enregistre le cumul d'un mois. Une ligne existante pour (année, mois)
        est écrasée, jamais dupliquée.
        """
        if not payload.year or not payload.month or not 1 <= payload.month <= 12:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Année et mois requis")

        counters = {
            "total_glass_collected": payload.total_glass_collected or 0,
            "total_points": payload.total_points or 0,
            "total_users": payload.total_users or 0,
            "total_partners": payload.total_partners or 0,
        }
        existing = self.stats.get_for_month(payload.year, payload.month)
        if existing:
            entity = self.stats.update(existing, **counters, updated_at=self.now_fn())
            logger.info("Statistiques %s-%02d mises à jour", payload.year, payload.month)
            return entity

        entity = self.stats.create(year=payload.year, month=payload.month, **counters)
        logger.info("Statistiques %s-%02d créées", payload.year, payload.month)
        return entity
