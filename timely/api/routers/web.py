"""
➡️ But : Servir la page HTML (Jinja2).

Non connecté : formulaire de mot de passe.
Connecté : l'arbre des todos, avec bascule, suppression et ajout (script dans le template).
"""

import datetime as dt
from pathlib import Path
from typing import Optional

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from timely.api.dependencies import get_todo_service, is_authenticated
from timely.core.config import settings
from timely.features.todos.services import TodoService

templates = Jinja2Templates(directory=str(Path(__file__).resolve().parents[2] / "templates"))

router = APIRouter(tags=["web"], include_in_schema=False)


@router.get("/", response_class=HTMLResponse)
def index(
    request: Request,
    date_more: Optional[dt.date] = Query(None),
    date_less: Optional[dt.date] = Query(None),
    authenticated: bool = Depends(is_authenticated),
    svc: TodoService = Depends(get_todo_service),
):
    todos = svc.list(date_from=date_more, date_to=date_less) if authenticated else []
    return templates.TemplateResponse(
        request,
        "index.html",
        {
            "app_name": settings.APP_NAME,
            "authenticated": authenticated,
            "todos": todos,
            "root": settings.ROOT_URL,
            "date_more": date_more,
            "date_less": date_less,
        },
    )
