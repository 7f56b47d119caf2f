from pathlib import Path

import pytest
from sqlmodel import select

from app.core.config import settings
from app.db.models.articles import Article
from app.db.models.users import User, UserRole
from app.db.seed import load_seed_yaml, seed_all
from app.security.password import verify_password

SEED_FILE = Path(__file__).resolve().parent.parent / settings.SEED_PATH


def test_seed_fills_empty_tables(session):
    inserted = seed_all(session, SEED_FILE)
    assert inserted["users"] == 2
    assert inserted["bornes"] > 0
    assert inserted["site_config"] == 2

    admin = session.exec(select(User).where(User.role == UserRole.ADMIN)).one()
    assert verify_password("admin123", admin.hashed_password)

    published = session.exec(select(Article).where(Article.is_published.is_(True))).all()
    assert published and all(a.published_at is not None for a in published)
    assert all(a.author_id is not None for a in published)


def test_seed_skips_tables_with_rows(session):
    seed_all(session, SEED_FILE)
    again = seed_all(session, SEED_FILE)
    assert set(again.values()) == {0}


def test_seed_loaded_stats_feed_global_stats(client, session):
    seed_all(session, SEED_FILE)
    body = client.get("/api/stats").json()
    assert body["total_glass_collected"] == 1262500
    assert body["total_users"] == 43800


def test_missing_seed_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_seed_yaml(tmp_path / "absent.yaml")


def test_seed_file_must_be_a_mapping(tmp_path):
    path = tmp_path / "seed.yaml"
    path.write_text("- a\n- b\n", encoding="utf-8")
    with pytest.raises(ValueError):
        load_seed_yaml(path)
