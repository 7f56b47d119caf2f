"""
➡️ But : Moteur SQLModel et sessions par requête.

engine : construit depuis DATABASE_URL (sqlite:///cliiink.db par défaut, sqlite:// en mémoire pour les tests).

init_db() : crée les tables déclarées par les modèles importés ci-dessous.

get_session() : dépendance FastAPI, une session par requête, fermée à la sortie.
"""

import logging
from typing import Dict, Any, Iterator
from sqlmodel import SQLModel, create_engine, Session
from sqlalchemy.engine import Engine
from sqlalchemy.pool import StaticPool

# Modèles importés pour enregistrer leurs tables dans SQLModel.metadata
from app.db.models.users import User
from app.db.models.articles import Article
from app.db.models.bornes import Borne
from app.db.models.partners import Partner
from app.db.models.contact_messages import ContactMessage
from app.db.models.statistics import Statistics
from app.db.models.site_config import SiteConfig

from app.core.config import settings

logger = logging.getLogger(__name__)

_MEMORY_URLS = ("sqlite://", "sqlite:///:memory:")


def _build_engine(url: str) -> Engine:
    connect_args: Dict[str, Any] = {}
    kwargs: Dict[str, Any] = {}
    is_sqlite = url.startswith("sqlite:")
    if is_sqlite:
        # sessions ouvertes dans le threadpool de FastAPI
        connect_args["check_same_thread"] = False
    if url in _MEMORY_URLS:
        # une seule connexion, sinon chaque connexion voit une base vide
        kwargs["poolclass"] = StaticPool

    return create_engine(
        url,
        echo=(settings.ENV == "dev"),
        connect_args=connect_args,
        pool_pre_ping=not is_sqlite,
        **kwargs,
    )

engine: Engine = _build_engine(settings.DATABASE_URL)

def init_db() -> None:
    """Crée les tables manquantes. Pas de migration : les tables existantes ne sont pas modifiées."""
    SQLModel.metadata.create_all(engine)
    logger.info("Tables initialisées sur %s", engine.url.render_as_string(hide_password=True))


def get_session() -> Iterator[Session]:
    with Session(engine) as session:
        yield session
