"""
➡️ But : Centraliser les dépendances réutilisables des routes.

get_todo_service() : crée un TodoService à partir d’une session DB.

require_auth() : barrière placée devant toutes les routes /todos.

read_todo_id() : lit l'identifiant envoyé en corps brut par le script de la page.
"""

import json
from typing import Optional

from fastapi import Cookie, Depends, HTTPException, Query, Request, status
from sqlmodel import Session

from timely.core.config import settings, jwt_settings
from timely.db.models.todos import MAX_ID
from timely.db.session import get_session
from timely.db.repositories.todos import TodoRepository
from timely.features.todos.services import TodoService
from timely.features.authentication.services import AuthService


# -----------------------------
# Todos
# -----------------------------
def get_todo_repository(session: Session = Depends(get_session)) -> TodoRepository:
    return TodoRepository(session)

def get_todo_service(repo: TodoRepository = Depends(get_todo_repository)) -> TodoService:
    return TodoService(repo)


# -----------------------------
# Auth
# -----------------------------
def get_auth_service() -> AuthService:
    return AuthService(password=settings.PASSWORD, jwt_settings=jwt_settings)


def is_authenticated(
    password: Optional[str] = Query(None, include_in_schema=False),
    session_token: Optional[str] = Cookie(default=None, alias=settings.AUTH_COOKIE_NAME),
    svc: AuthService = Depends(get_auth_service),
) -> bool:
    return svc.is_authenticated(token=session_token, password=password)


def require_auth(authenticated: bool = Depends(is_authenticated)) -> None:
    if not authenticated:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Failed authentication")


# -----------------------------
# Corps brut : "12", " 12\n" ou "\"12\""
# -----------------------------
async def read_todo_id(request: Request) -> int:
    raw = (await request.body()).decode("utf-8", errors="replace").strip()
    try:
        value = json.loads(raw) if raw.startswith('"') else raw
    except ValueError:
        value = None
    # décimal strict : ni "1_0", ni "+1", ni chiffres non ASCII
    if not (isinstance(value, str) and value.isascii() and value.isdigit()):
        raise HTTPException(status_code=422, detail="Body must be a todo id")
    todo_id = int(value)
    if not 1 <= todo_id <= MAX_ID:
        raise HTTPException(status_code=422, detail="Todo id out of range")
    return todo_id
