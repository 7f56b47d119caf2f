"""
➡️ But : Uniformiser les réponses d'erreur de l'API.

Toutes les erreurs renvoient un corps {"error": "<message>"} :

HTTPException → même code, message = detail

Erreur de validation (corps / query manquant ou mal formé) → 400

Violation de contrainte d'unicité non interceptée → 400

Toute autre exception → 500 "Erreur serveur", loggée côté serveur.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)

SERVER_ERROR = "Erreur serveur"
MISSING_FIELDS = "Champs requis manquants"
INVALID_DATA = "Données invalides"
UNIQUE_VIOLATION = "Contrainte d'unicité violée"


def error_response(status_code: int, message: str, headers=None) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message}, headers=headers)


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("%s %s -> %s %s", request.method, request.url.path, exc.status_code, exc.detail)
    else:
        logger.info("%s %s -> %s %s", request.method, request.url.path, exc.status_code, exc.detail)
    return error_response(exc.status_code, str(exc.detail), headers=getattr(exc, "headers", None))


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    missing = any(e.get("type") == "missing" for e in errors)
    logger.info("%s %s -> 400 %s", request.method, request.url.path, errors)
    return error_response(status.HTTP_400_BAD_REQUEST, MISSING_FIELDS if missing else INVALID_DATA)


async def integrity_error_handler(request: Request, exc: IntegrityError) -> JSONResponse:
    logger.warning("%s %s -> 400 %s", request.method, request.url.path, exc.orig)
    return error_response(status.HTTP_400_BAD_REQUEST, UNIQUE_VIOLATION)


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Erreur non gérée sur %s %s", request.method, request.url.path)
    return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, SERVER_ERROR)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(IntegrityError, integrity_error_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
