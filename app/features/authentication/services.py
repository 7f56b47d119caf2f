import logging
from datetime import datetime, timezone
from typing import Callable

from fastapi import HTTPException, status
from jose import JWTError

from app.db.models.users import User
from app.db.repositories.users import UserRepository
from app.security.password import verify_password, hash_password
from app.security.tokens import JWTSettings, create_access_token, decode_token
from app.features.shared.validation import require_fields
from app.features.authentication.schemas import (
    LoginIn,
    LoginOut,
    RegisterIn,
    ChangePasswordIn,
    UserOut,
)

logger = logging.getLogger(__name__)


class AuthService:
    """
    Service d'authentification : orchestre le repository utilisateurs + tokens.
    Ne contient pas d'accès SQL direct et lève des HTTPException propres.
    """

    def __init__(
        self,
        *,
        user_repo: UserRepository,
        jwt_settings: JWTSettings,
        now_fn: Callable[[], datetime] = lambda: datetime.now(timezone.utc),
    ):
        self.user_repo = user_repo
        self.jwt = jwt_settings
        self.now_fn = now_fn

    # ---------- Login ----------
    def login(self, payload: LoginIn) -> LoginOut:
        require_fields(payload.model_dump(), ("email", "password"), detail="Email et mot de passe requis")

        user = self.user_repo.get_by_email(payload.email.strip().lower())
        if not user or not verify_password(payload.password, user.hashed_password):
            # Ne pas révéler si l'utilisateur existe
            logger.info("Échec de connexion pour %s", payload.email)
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Email ou mot de passe incorrect",
            )

        token = create_access_token(
            user_id=user.id,
            email=user.email,
            role=user.role.value,
            name=user.name,
            settings=self.jwt,
        )
        return LoginOut(
            token=token,
            expires_in=int(self.jwt.access_ttl.total_seconds()),
            user=UserOut.model_validate(user),
        )

    # ---------- Register ----------
    def register(self, payload: RegisterIn) -> User:
        require_fields(payload.model_dump(), ("email", "password"), detail="Email et mot de passe requis")

        email = payload.email.strip().lower()
        if self.user_repo.get_by_email(email):
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Cet email est déjà utilisé",
            )
        user = self.user_repo.create(
            email=email,
            hashed_password=hash_password(payload.password),
            name=payload.name,
            role=payload.role,
        )
        logger.info("Utilisateur %s créé (%s)", user.email, user.role.value)
        return user

    # ---------- Current user depuis access token ----------
    def get_current_user(self, *, access_token: str) -> User:
        try:
            decoded = decode_token(access_token, self.jwt)
        except JWTError:
            raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Token invalide")

        if decoded.get("typ") != "access" or not decoded.get("sub"):
            raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Token invalide")

        try:
            user_id = int(decoded["sub"])
        except ValueError:
            raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Token invalide")

        user = self.user_repo.get(user_id)
        if not user:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Utilisateur non trouvé")
        return user

    # ---------- Changement de mot de passe ----------
    def change_password(self, *, user: User, payload: ChangePasswordIn) -> None:
        require_fields(
            payload.model_dump(),
            ("current_password", "new_password"),
            detail="Mot de passe actuel et nouveau requis",
        )

        if not verify_password(payload.current_password, user.hashed_password):
            raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Mot de passe actuel incorrect")

        self.user_repo.update(
            user,
            hashed_password=hash_password(payload.new_password),
            updated_at=self.now_fn(),
        )
        logger.info("Mot de passe modifié pour l'utilisateur %s", user.id)
