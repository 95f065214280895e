"""
➡️ But : Personnaliser la documentation Swagger/OpenAPI.

custom_openapi(app) complète le schéma généré par FastAPI avec une description
des conventions (authentification, corps bruts des routes /todos/toggle et DELETE /todos).
"""

from fastapi.openapi.utils import get_openapi

def custom_openapi(app):
    if app.openapi_schema:
        return app.openapi_schema
    openapi_schema = get_openapi(
        title=app.title,
        version=app.version,
        description=(
            "Liste de tâches hiérarchique, protégée par un mot de passe unique.\n\n"
            "### Conventions\n"
            "- Authentification : cookie de session posé par `POST /login`, "
            "ou paramètre `?password=` pour les clients API.\n"
            "- `POST /todos/toggle` et `DELETE /todos` attendent l'id du todo en corps brut (ex: `12`).\n"
            "- Supprimer un todo supprime toutes ses sous-tâches.\n"
            "- Dates au format `AAAA-MM-JJ`.\n"
        ),
        routes=app.routes,
    )
    app.openapi_schema = openapi_schema
    return app.openapi_schema
