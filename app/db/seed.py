import logging
from pathlib import Path
from typing import Any, Callable, Dict, List, Type

import yaml
from sqlmodel import Session, SQLModel, select

from app.db.models.base import utcnow
from app.db.models.users import User, UserRole
from app.db.models.articles import Article
from app.db.models.bornes import Borne, BorneStatus
from app.db.models.partners import Partner
from app.db.models.statistics import Statistics
from app.db.models.site_config import SiteConfig
from app.security.password import hash_password

logger = logging.getLogger(__name__)


# -----------------------------
# YAML loader
# -----------------------------
def load_seed_yaml(seed_path: str | Path) -> Dict[str, Any]:
    path = Path(seed_path)
    if not path.exists():
        raise FileNotFoundError(f"Seed YAML introuvable: {path}")

    data = yaml.safe_load(path.read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        raise ValueError("Le YAML de seed doit contenir un objet racine (mapping).")
    return data


# -----------------------------
# Helpers
# -----------------------------
def _seed_table(
    session: Session,
    data: Dict[str, Any],
    *,
    key: str,
    model: Type[SQLModel],
    build: Callable[[Dict[str, Any]], SQLModel],
) -> int:
    """Insère les lignes de data[key] si la table est vide. Retourne le nombre inséré."""
    if session.exec(select(model)).first():
        logger.info("ℹ️ La table %s contient déjà des lignes, aucune insertion effectuée.", model.__tablename__)
        return 0

    rows: List[Dict[str, Any]] = data.get(key) or []
    if not rows:
        logger.warning("⚠️ Aucune entrée dans le YAML (clé '%s').", key)
        return 0

    session.add_all([build(row) for row in rows])
    session.commit()
    logger.info("✅ %s lignes insérées dans %s.", len(rows), model.__tablename__)
    return len(rows)


def _build_user(row: Dict[str, Any]) -> User:
    return User(
        email=row["email"].strip().lower(),
        hashed_password=hash_password(row["password"]),
        name=row.get("name"),
        role=UserRole(row.get("role", UserRole.EDITOR.value)),
    )


def _article_builder(session: Session) -> Callable[[Dict[str, Any]], Article]:
    authors = {u.email: u.id for u in session.exec(select(User)).all()}

    def build(row: Dict[str, Any]) -> Article:
        is_published = bool(row.get("is_published", False))
        return Article(
            title=row["title"],
            slug=row["slug"],
            excerpt=row.get("excerpt"),
            content=row["content"],
            category=row["category"],
            tags=list(row.get("tags") or []),
            image_url=row.get("image_url"),
            is_published=is_published,
            is_featured=bool(row.get("is_featured", False)),
            published_at=row.get("published_at") or (utcnow() if is_published else None),
            author_id=authors.get(row.get("author_email", "")),
        )

    return build


def _build_borne(row: Dict[str, Any]) -> Borne:
    return Borne(**{**row, "status": BorneStatus(row.get("status", BorneStatus.ACTIVE.value))})


def _build_partner(row: Dict[str, Any]) -> Partner:
    return Partner(**{**row, "advantages": list(row.get("advantages") or [])})


def _build_site_config(row: Dict[str, Any]) -> SiteConfig:
    return SiteConfig(key=row["key"], value=str(row["value"]))


# -----------------------------
# Orchestrator
# -----------------------------
def seed_all(session: Session, seed_path: str | Path) -> Dict[str, int]:
    """Charge le YAML et remplit chaque table encore vide (users d'abord : auteurs des articles)."""
    data = load_seed_yaml(seed_path)

    inserted = {
        "users": _seed_table(session, data, key="users", model=User, build=_build_user),
    }
    inserted["articles"] = _seed_table(
        session, data, key="articles", model=Article, build=_article_builder(session)
    )
    inserted["bornes"] = _seed_table(session, data, key="bornes", model=Borne, build=_build_borne)
    inserted["partners"] = _seed_table(session, data, key="partners", model=Partner, build=_build_partner)
    inserted["statistics"] = _seed_table(
        session, data, key="statistics", model=Statistics, build=lambda row: Statistics(**row)
    )
    inserted["site_config"] = _seed_table(
        session, data, key="site_config", model=SiteConfig, build=_build_site_config
    )
    logger.info("🌱 Seed terminé : %s", inserted)
    return inserted
