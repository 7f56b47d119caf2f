"""
➡️ But : Paramètres de Cliiink-Back lus depuis l'environnement ou un fichier .env (pydantic-settings).

settings : instance unique (nom d'app, base, CORS, logs, secrets JWT, coût bcrypt, fichier de seed).

jwt_settings : paramètres des tokens dérivés de settings, passés aux services d'authentification.

En test : ENV=test, DATABASE_URL=sqlite:// et BCRYPT_ROUNDS bas.
"""

from datetime import timedelta
from typing import List, Optional

from pydantic_settings import BaseSettings
from app.security.tokens import JWTSettings


class Settings(BaseSettings):
    # -----------------------------
    # App
    # -----------------------------
    APP_NAME: str = "Cliiink-Back"
    ENV: str = "dev"  # dev | prod | test
    LOG_LEVEL: Optional[str] = None  # auto selon ENV si None
    CORS_ORIGINS: str = "*"  # liste séparée par des virgules

    # -----------------------------
    # DB
    # -----------------------------
    SQLITE_PATH: str = "cliiink.db"  # fichier SQLite
    # Si tu veux forcer une URL différente (ex: Postgres), définis DATABASE_URL dans l'env.
    DATABASE_URL: Optional[str] = None
    SEED_PATH: str = "app/db/seed_data.yaml"

    # -----------------------------
    # JWT / Auth
    # -----------------------------
    JWT_SECRET_KEY: str = "CHANGE_ME"     # ⚠️ change en prod
    JWT_ISSUER: str = "cliiink-api"
    JWT_ALGORITHM: str = "HS256"

    ACCESS_TTL_MINUTES: int = 24 * 60     # token valable 24h
    BCRYPT_ROUNDS: int = 12

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": True,
    }

    # -----------------------------
    # Post-process values
    # -----------------------------
    def model_post_init(self, __context): # appelée automatiquement
        # DATABASE_URL par défaut depuis SQLITE_PATH si non fourni
        if not self.DATABASE_URL:
            object.__setattr__(self, "DATABASE_URL", f"sqlite:///{self.SQLITE_PATH}")

        # Niveau de log auto: DEBUG en dev, INFO ailleurs
        if self.LOG_LEVEL is None:
            object.__setattr__(self, "LOG_LEVEL", "DEBUG" if self.ENV == "dev" else "INFO")

    @property
    def cors_origins_list(self) -> List[str]:
        return [o.strip() for o in self.CORS_ORIGINS.split(",") if o.strip()]


# Instance globale importable partout
settings = Settings()

# Objet JWT prêt à l'emploi pour les services
jwt_settings = JWTSettings(
    secret=settings.JWT_SECRET_KEY,
    issuer=settings.JWT_ISSUER,
    algorithm=settings.JWT_ALGORITHM,
    access_ttl=timedelta(minutes=settings.ACCESS_TTL_MINUTES),
)
