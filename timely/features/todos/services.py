"""
➡️ But : Contenir la logique métier des todos : orchestrer le repository, appliquer les règles, lever les erreurs.

TodoService : valide les entrées (nom non vide, date, parent existant, pas de cycle),
bascule l'état "fait", supprime un todo avec toute sa descendance.

Lève des exceptions métier ; les routes les traduisent en codes HTTP.

🔹 Avantages :

Code métier découplé du web.

Test unitaire possible sans passer par FastAPI.
"""

import datetime as dt
import logging
from typing import List, Optional, Sequence

from sqlalchemy.exc import IntegrityError

from timely.db.models.todos import Todo
from timely.db.repositories.todos import TodoRepository
from timely.features.todos.forest import TodoNode, build_forest

logger = logging.getLogger(__name__)


class ValidationError(Exception):
    pass


class NotFoundError(LookupError):
    pass


class ReferentialIntegrityError(Exception):
    pass


def parse_date(value: Optional[str]) -> Optional[dt.date]:
    if value is None or not value.strip():
        return None
    try:
        return dt.date.fromisoformat(value.strip())
    except ValueError:
        raise ValidationError(f"Invalid date {value!r}, expected YYYY-MM-DD")


class TodoService:
    def __init__(self, repo: TodoRepository):
        self.repo = repo

    # --------------- Helpers ---------------
    def _ensure_parent_chain(self, parent_id: int) -> None:
        """Le parent doit exister et sa chaîne d'ancêtres doit remonter jusqu'à une racine."""
        seen = set()
        current: Optional[int] = parent_id
        while current is not None:
            if current in seen:
                raise ValidationError(f"Todo {parent_id} belongs to a parent cycle")
            seen.add(current)
            todo = self.repo.get(current)
            if not todo:
                if current == parent_id:
                    raise NotFoundError(f"Parent todo {parent_id} not found")
                raise ValidationError(f"Todo {parent_id} has a dangling ancestor {current}")
            current = todo.parent_id

    # --------------- Queries ---------------
    def get(self, todo_id: int) -> Todo:
        todo = self.repo.get(todo_id)
        if not todo:
            raise NotFoundError(f"Todo {todo_id} not found")
        return todo

    def list_flat(
        self,
        *,
        date_from: Optional[dt.date] = None,
        date_to: Optional[dt.date] = None,
    ) -> Sequence[Todo]:
        return self.repo.list(date_from=date_from, date_to=date_to)

    def list(
        self,
        *,
        date_from: Optional[dt.date] = None,
        date_to: Optional[dt.date] = None,
    ) -> List[TodoNode]:
        return build_forest(self.list_flat(date_from=date_from, date_to=date_to))

    # --------------- Commands ---------------
    def create(
        self,
        name: str,
        description: Optional[str] = None,
        parent_id: Optional[int] = None,
        date: Optional[str | dt.date] = None,
    ) -> Todo:
        if name is None or not name.strip():
            raise ValidationError("Todo name must not be empty")
        if isinstance(date, str) or date is None:
            date = parse_date(date)
        if parent_id is not None:
            self._ensure_parent_chain(parent_id)
        if description is not None and not description.strip():
            description = None

        try:
            todo = self.repo.create(
                name=name.strip(),
                description=description,
                parent_id=parent_id,
                date=date,
                done=False,
            )
        except IntegrityError as e:
            self.repo.rollback()
            raise ReferentialIntegrityError(f"Could not create todo: {e.orig}") from e
        logger.info("Created todo %s (parent=%s)", todo.id, parent_id)
        return todo

    def toggle(self, todo_id: int) -> Todo:
        todo = self.get(todo_id)
        todo = self.repo.update(todo, done=not todo.done)
        logger.info("Toggled todo %s -> done=%s", todo.id, todo.done)
        return todo

    def delete(self, todo_id: int) -> List[int]:
        """Supprime le todo et toute sa descendance ; renvoie les ids supprimés."""
        self.get(todo_id)
        ids = [todo_id, *self.repo.descendant_ids(todo_id)]
        try:
            self.repo.delete_many(ids)
        except IntegrityError as e:
            self.repo.rollback()
            logger.warning("Refused to delete todo %s: %s", todo_id, e.orig)
            raise ReferentialIntegrityError(f"Todo {todo_id} is still referenced") from e
        logger.info("Deleted todo %s with %d descendant(s)", todo_id, len(ids) - 1)
        return ids
