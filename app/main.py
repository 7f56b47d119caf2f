"""
➡️ But : assembler toutes les pièces du puzzle.

Crée l’instance FastAPI (app).

Configure :

les logs et les gestionnaires d'erreurs ({"error": "..."})

CORS (autorisations de qui peut appeler ces API)

titre, version, tags

schéma OpenAPI personnalisé

Inclut les routers JSON sous /api (ex : /api/articles) et les pages publiques (/, /carte...).

Initialise la base au démarrage (lifespan).

🔹 Avantages :

Centralise la configuration du serveur HTTP.

Point unique d’exécution : uvicorn app.main:app --reload.
"""

import logging
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from app.core.config import settings
from app.core.errors import register_exception_handlers
from app.core.logs import setup_logging
from app.core.openapi import custom_openapi
from app.db.session import init_db

from app.api.v1.routers import authentication, articles, bornes, partners, contact, stats
from app.web import router as web

import uvicorn

setup_logging()
logger = logging.getLogger(__name__)

STATIC_DIR = Path(__file__).parent / "web" / "static"


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Démarrage
    logger.info("Démarrage de %s (env=%s)", settings.APP_NAME, settings.ENV)
    init_db()
    yield
    # Arrêt
    logger.info("Arrêt de %s", settings.APP_NAME)


app = FastAPI(
    title=settings.APP_NAME,
    version="1.0.0",
    lifespan=lifespan,
    openapi_tags=[
        {"name": "auth", "description": "Connexion et comptes du back-office"},
        {"name": "articles", "description": "Actualités du blog"},
        {"name": "bornes", "description": "Bornes de collecte du verre"},
        {"name": "partners", "description": "Commerçants partenaires"},
        {"name": "contact", "description": "Formulaire de contact et boîte de réception"},
        {"name": "stats", "description": "Statistiques de collecte"},
    ],
)

# CORS (origines séparées par des virgules dans CORS_ORIGINS)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list, allow_credentials=True,
    allow_methods=["*"], allow_headers=["*"],
)

register_exception_handlers(app)

# Routers API
app.include_router(authentication.router, prefix="/api")
app.include_router(articles.router, prefix="/api")
app.include_router(bornes.router, prefix="/api")
app.include_router(partners.router, prefix="/api")
app.include_router(contact.router, prefix="/api")
app.include_router(stats.router, prefix="/api")

# Pages publiques
app.mount("/static", StaticFiles(directory=str(STATIC_DIR)), name="static")
app.include_router(web.router)


@app.get("/api/health", tags=["stats"], summary="Vérifier que l'API répond")
def health():
    return {"status": "OK", "message": "Cliiink API is running"}


# Génération du schéma OpenAPI custom (facultatif, mais propre)
app.openapi = lambda: custom_openapi(app)

if __name__ == "__main__":
    uvicorn.run("app.main:app", host="127.0.0.1", port=8080, reload=(settings.ENV == "dev")) # http://localhost:8080
