"""Pytest configuration and fixtures."""

import os

# Avant tout import de l'app : base en mémoire, bcrypt rapide
os.environ["ENV"] = "test"
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["JWT_SECRET_KEY"] = "test-secret"
os.environ["BCRYPT_ROUNDS"] = "4"

from datetime import datetime, timezone
from typing import Dict, Optional

import pytest
from fastapi.testclient import TestClient
from sqlmodel import SQLModel, Session

from app.core.config import jwt_settings
from app.db.models.articles import Article
from app.db.models.bornes import Borne, BorneStatus
from app.db.models.contact_messages import ContactMessage, ContactType
from app.db.models.partners import Partner
from app.db.models.users import User, UserRole
from app.db.session import engine
from app.main import app
from app.security.password import hash_password
from app.security.tokens import create_access_token


@pytest.fixture(autouse=True)
def reset_db():
    """Base vide pour chaque test."""
    SQLModel.metadata.drop_all(engine)
    SQLModel.metadata.create_all(engine)
    yield


@pytest.fixture
def session():
    with Session(engine) as session:
        yield session


@pytest.fixture
def client():
    with TestClient(app) as client:
        yield client


def _make_user(session: Session, email: str, role: UserRole, password: str = "secret123") -> User:
    user = User(email=email, hashed_password=hash_password(password), name=email.split("@")[0], role=role)
    session.add(user)
    session.commit()
    session.refresh(user)
    return user


def bearer(user: User) -> Dict[str, str]:
    token = create_access_token(
        user_id=user.id,
        email=user.email,
        role=user.role.value,
        name=user.name,
        settings=jwt_settings,
    )
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def admin(session):
    return _make_user(session, "admin@cliiink.re", UserRole.ADMIN)


@pytest.fixture
def editor(session):
    return _make_user(session, "editor@cliiink.re", UserRole.EDITOR)


@pytest.fixture
def basic_user(session):
    return _make_user(session, "user@cliiink.re", UserRole.USER)


@pytest.fixture
def admin_headers(admin):
    return bearer(admin)


@pytest.fixture
def editor_headers(editor):
    return bearer(editor)


@pytest.fixture
def user_headers(basic_user):
    return bearer(basic_user)


# -----------------------------
# Factories
# -----------------------------
@pytest.fixture
def make_article(session):
    def _make(slug: str, *, category: str = "ACTUALITE", is_published: bool = True,
              is_featured: bool = False, published_at: Optional[datetime] = None,
              author_id: Optional[int] = None, **fields) -> Article:
        if is_published and published_at is None:
            published_at = datetime.now(timezone.utc)
        article = Article(
            title=fields.pop("title", slug.replace("-", " ").capitalize()),
            slug=slug,
            content=fields.pop("content", "Contenu"),
            category=category,
            tags=fields.pop("tags", []),
            is_published=is_published,
            is_featured=is_featured,
            published_at=published_at,
            author_id=author_id,
            **fields,
        )
        session.add(article)
        session.commit()
        session.refresh(article)
        return article
    return _make


@pytest.fixture
def make_borne(session):
    def _make(name: str, city: str = "Saint-Denis", status: BorneStatus = BorneStatus.ACTIVE,
              is_active: bool = True, **fields) -> Borne:
        borne = Borne(
            name=name,
            address=fields.pop("address", "1 rue de Paris"),
            city=city,
            zip_code=fields.pop("zip_code", "97400"),
            latitude=fields.pop("latitude", -20.88),
            longitude=fields.pop("longitude", 55.45),
            status=status,
            is_active=is_active,
            **fields,
        )
        session.add(borne)
        session.commit()
        session.refresh(borne)
        return borne
    return _make


@pytest.fixture
def make_partner(session):
    def _make(slug: str, *, category: str = "CAFE", is_active: bool = True,
              is_featured: bool = False, **fields) -> Partner:
        partner = Partner(
            name=fields.pop("name", slug.replace("-", " ").title()),
            slug=slug,
            category=category,
            address=fields.pop("address", "2 rue du Port"),
            city=fields.pop("city", "Saint-Denis"),
            zip_code=fields.pop("zip_code", "97400"),
            advantages=fields.pop("advantages", []),
            is_active=is_active,
            is_featured=is_featured,
            **fields,
        )
        session.add(partner)
        session.commit()
        session.refresh(partner)
        return partner
    return _make


@pytest.fixture
def make_message(session):
    def _make(name: str = "Marie", *, type_: ContactType = ContactType.PARTICULIER,
              is_read: bool = False, is_archived: bool = False, **fields) -> ContactMessage:
        message = ContactMessage(
            type=type_,
            name=name,
            email=f"{name.lower()}@example.re",
            message="Bonjour",
            is_read=is_read,
            is_archived=is_archived,
            **fields,
        )
        session.add(message)
        session.commit()
        session.refresh(message)
        return message
    return _make
