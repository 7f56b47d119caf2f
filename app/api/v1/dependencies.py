"""
➡️ But : Centraliser les dépendances réutilisables des routes.

Exemples :

get_article_service() : crée un ArticleService à partir d’une session DB.

require_editor() : exige un token d'un compte ADMIN ou EDITOR.

🔹 Avantages :

Routes plus propres (pas de code dupliqué).

Facile à injecter dans plusieurs endpoints (Depends()).
"""

from typing import Optional

from fastapi import Depends, HTTPException, status, Security
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlmodel import Session

from app.db.session import get_session
from app.db.models.users import User, UserRole

from app.db.repositories.users import UserRepository
from app.features.authentication.services import AuthService

from app.db.repositories.articles import ArticleRepository
from app.features.articles.services import ArticleService

from app.db.repositories.bornes import BorneRepository
from app.features.bornes.services import BorneService

from app.db.repositories.partners import PartnerRepository
from app.features.partners.services import PartnerService

from app.db.repositories.contact_messages import ContactMessageRepository
from app.features.contact.services import ContactService

from app.db.repositories.statistics import StatisticsRepository
from app.db.repositories.site_config import SiteConfigRepository
from app.features.stats.services import StatsService

from app.core.config import jwt_settings


# -----------------------------
# Auth
# -----------------------------
def get_auth_service(session: Session = Depends(get_session)) -> AuthService:
    return AuthService(user_repo=UserRepository(session), jwt_settings=jwt_settings)


# -----------------------------
# Repositories
# -----------------------------
def get_article_repository(session: Session = Depends(get_session)) -> ArticleRepository:
    return ArticleRepository(session)

def get_borne_repository(session: Session = Depends(get_session)) -> BorneRepository:
    return BorneRepository(session)

def get_partner_repository(session: Session = Depends(get_session)) -> PartnerRepository:
    return PartnerRepository(session)

def get_contact_repository(session: Session = Depends(get_session)) -> ContactMessageRepository:
    return ContactMessageRepository(session)

def get_statistics_repository(session: Session = Depends(get_session)) -> StatisticsRepository:
    return StatisticsRepository(session)

def get_site_config_repository(session: Session = Depends(get_session)) -> SiteConfigRepository:
    return SiteConfigRepository(session)


# -----------------------------
# Services
# -----------------------------
def get_article_service(repo: ArticleRepository = Depends(get_article_repository)) -> ArticleService:
    return ArticleService(repo)

def get_borne_service(repo: BorneRepository = Depends(get_borne_repository)) -> BorneService:
    return BorneService(repo)

def get_partner_service(repo: PartnerRepository = Depends(get_partner_repository)) -> PartnerService:
    return PartnerService(repo)

def get_contact_service(repo: ContactMessageRepository = Depends(get_contact_repository)) -> ContactService:
    return ContactService(repo)

def get_stats_service(
    stats_repo: StatisticsRepository = Depends(get_statistics_repository),
    borne_repo: BorneRepository = Depends(get_borne_repository),
    partner_repo: PartnerRepository = Depends(get_partner_repository),
    article_repo: ArticleRepository = Depends(get_article_repository),
    config_repo: SiteConfigRepository = Depends(get_site_config_repository),
) -> StatsService:
    # ✅ toutes les dépendances injectées via la signature (FastAPI les résout)
    return StatsService(
        stats_repo=stats_repo,
        borne_repo=borne_repo,
        partner_repo=partner_repo,
        article_repo=article_repo,
        config_repo=config_repo,
    )


# -----------------------------
# Authentication data
# -----------------------------
# auto_error=False : on renvoie nous-mêmes 401 + message
bearer_scheme = HTTPBearer(auto_error=False)

def get_access_token_from_bearer(
    credentials: Optional[HTTPAuthorizationCredentials] = Security(bearer_scheme),
) -> str:
    if not credentials or not credentials.credentials:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Token non fourni")
    if credentials.scheme.lower() != "bearer":
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Token invalide")
    return credentials.credentials


def get_current_user(
    access_token: str = Depends(get_access_token_from_bearer),
    auth_svc: AuthService = Depends(get_auth_service),
) -> User:
    return auth_svc.get_current_user(access_token=access_token)


def require_editor(user: User = Depends(get_current_user)) -> User:
    """Back-office : ADMIN ou EDITOR."""
    if user.role not in (UserRole.ADMIN, UserRole.EDITOR):
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Accès refusé")
    return user


def require_admin(user: User = Depends(get_current_user)) -> User:
    if user.role != UserRole.ADMIN:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Accès refusé")
    return user
