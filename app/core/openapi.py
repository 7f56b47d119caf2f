"""
➡️ But : Personnaliser la documentation Swagger/OpenAPI.

custom_openapi(app) modifie le schéma généré par FastAPI pour :

ajouter une description détaillée et les conventions de l'API,

déclarer l'authentification bearer du back-office.
"""

from fastapi.openapi.utils import get_openapi

def custom_openapi(app):
    if app.openapi_schema:
        return app.openapi_schema
    openapi_schema = get_openapi(
        title=app.title,
        version=app.version,
        description=(
            "API de la plateforme Cliiink Réunion (recyclage du verre et fidélité).\n\n"
            "### Conventions\n"
            "- Toutes les heures sont en UTC.\n"
            "- Les erreurs renvoient `{\"error\": \"<message>\"}`.\n"
            "- Les créations renvoient `201` et `{id, message}`.\n"
            "- Les écritures exigent un token `Bearer` d'un compte ADMIN ou EDITOR.\n"
        ),
        routes=app.routes,
        tags=app.openapi_tags,
    )
    app.openapi_schema = openapi_schema
    return app.openapi_schema
