"""
➡️ But : Définir les endpoints JSON des todos.

C’est la couche la plus proche du web :

Réceptionne les requêtes HTTP (GET, POST, DELETE)

Appelle le TodoService

Traduit les erreurs métier en codes HTTP et retourne les schémas de sortie (response_model)

Toutes les routes passent par require_auth (cookie de session ou ?password=).
"""

import datetime as dt
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status

from timely.api.dependencies import get_todo_service, read_todo_id, require_auth
from timely.features.todos.forest import TodoNode
from timely.features.todos.schemas import TodoCreateIn, TodoNodeOut, TodoOut
from timely.features.todos.services import (
    NotFoundError,
    ReferentialIntegrityError,
    TodoService,
    ValidationError,
)

router = APIRouter(
    prefix="/todos",
    tags=["todos"],
    dependencies=[Depends(require_auth)],
    responses={401: {"description": "Failed authentication"}, 404: {"description": "Not Found"}},
)


def _to_node_out(node: TodoNode) -> TodoNodeOut:
    return TodoNodeOut(
        todo=TodoOut.model_validate(node.todo),
        children=[_to_node_out(child) for child in node.children],
    )


@router.get(
    "",
    summary="Lister les todos",
    description="Liste plate triée par id. `date_more` / `date_less` restreignent à une fenêtre de dates (bornes incluses).",
    response_model=List[TodoOut],
)
def list_todos(
    date_more: Optional[dt.date] = Query(None, description="Date minimale", examples=["2025-01-01"]),
    date_less: Optional[dt.date] = Query(None, description="Date maximale", examples=["2025-12-31"]),
    svc: TodoService = Depends(get_todo_service),
):
    return svc.list_flat(date_from=date_more, date_to=date_less)


@router.get(
    "/tree",
    summary="Lister les todos en arbre",
    description="Forêt : todos de premier niveau, chacun avec ses sous-tâches.",
    response_model=List[TodoNodeOut],
)
def list_todo_tree(
    date_more: Optional[dt.date] = Query(None, description="Date minimale"),
    date_less: Optional[dt.date] = Query(None, description="Date maximale"),
    svc: TodoService = Depends(get_todo_service),
):
    return [_to_node_out(node) for node in svc.list(date_from=date_more, date_to=date_less)]


@router.post(
    "",
    summary="Créer un todo",
    status_code=status.HTTP_201_CREATED,
    response_model=TodoOut,
)
def create_todo(payload: TodoCreateIn, svc: TodoService = Depends(get_todo_service)):
    try:
        return svc.create(
            name=payload.name,
            description=payload.description,
            parent_id=payload.parent_id,
            date=payload.date,
        )
    except ValidationError as e:
        raise HTTPException(status_code=422, detail=str(e))
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except ReferentialIntegrityError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))


@router.post(
    "/toggle",
    summary="Basculer l'état fait / à faire",
    description="Corps brut : l'identifiant du todo. Les sous-tâches ne sont pas modifiées.",
    response_model=TodoOut,
)
def toggle_todo(todo_id: int = Depends(read_todo_id), svc: TodoService = Depends(get_todo_service)):
    try:
        return svc.toggle(todo_id)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@router.delete(
    "",
    summary="Supprimer un todo et ses sous-tâches",
    description="Corps brut : l'identifiant du todo. Renvoie la liste restante.",
    response_model=List[TodoOut],
)
def delete_todo(todo_id: int = Depends(read_todo_id), svc: TodoService = Depends(get_todo_service)):
    try:
        svc.delete(todo_id)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except ReferentialIntegrityError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    return svc.list_flat()
