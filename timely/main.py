"""
➡️ But : assembler toutes les pièces du puzzle.

Crée l’instance FastAPI (app).

Configure :

les logs (une ligne par requête)

titre, version, tags

schéma OpenAPI personnalisé

Inclut les routers (/, /login, /logout, /todos).

Initialise la base au démarrage (@app.on_event("startup")).

Point unique d’exécution : uvicorn timely.main:app --reload
(ou python -m timely.main).
"""

import logging
import time

from fastapi import FastAPI, Request
from timely.core.config import settings
from timely.core.logging import configure_logging
from timely.core.openapi import custom_openapi
from timely.db.session import init_db

from timely.api.routers import authentication, todos, web

import uvicorn

configure_logging(settings.LOG_LEVEL)
logger = logging.getLogger("timely.http")

app = FastAPI(
    title=settings.APP_NAME,
    version="0.1.0",
    openapi_tags=[
        {"name": "auth", "description": "Connexion / déconnexion par mot de passe"},
        {"name": "todos", "description": "Création, bascule et suppression des todos"},
    ],
)

# Une ligne de log par requête (méthode, chemin, statut, durée)
@app.middleware("http")
async def log_requests(request: Request, call_next):
    started = time.perf_counter()
    try:
        response = await call_next(request)
    except Exception:
        logger.exception("%s %s failed", request.method, request.url.path)
        raise
    elapsed_ms = (time.perf_counter() - started) * 1000
    level = logging.ERROR if response.status_code >= 500 else logging.INFO
    logger.log(level, "%s %s -> %d (%.1f ms)", request.method, request.url.path, response.status_code, elapsed_ms)
    return response

# Routers
# Sous-chemin optionnel (RUN_ON_SUBPATH) : toutes les routes sont préfixées
app.include_router(web.router, prefix=settings.ROOT_URL)
app.include_router(authentication.router, prefix=settings.ROOT_URL)
app.include_router(todos.router, prefix=settings.ROOT_URL)

# Génération du schéma OpenAPI custom
app.openapi = lambda: custom_openapi(app)

# Démarrage
@app.on_event("startup")
def on_startup():
    init_db()

if __name__ == "__main__":
    uvicorn.run("timely.main:app", host=settings.HOST, port=settings.PORT, reload=(settings.ENV == "dev"))
