"""
➡️ But : Encapsuler toutes les opérations de base de données sur la table todos.

TodoRepository : lecture (avec fenêtre de dates), création, bascule, suppression en lot,
parcours de la descendance d'un todo.

Ne contient aucune logique métier, juste de la persistance.
"""

import datetime as dt
from typing import Iterable, Optional, Sequence

from sqlalchemy import delete as sa_delete
from sqlmodel import Session, select

from timely.db.models.todos import MAX_ID, Todo


class TodoRepository:
    def __init__(self, session: Session):
        self.session = session

    # ---------- READ ----------

    def list(
        self,
        *,
        date_from: Optional[dt.date] = None,
        date_to: Optional[dt.date] = None,
    ) -> Sequence[Todo]:
        """Tous les todos par id croissant, éventuellement restreints à une fenêtre de dates (bornes incluses)."""
        stmt = select(Todo)
        if date_from is not None:
            stmt = stmt.where(Todo.date >= date_from)
        if date_to is not None:
            stmt = stmt.where(Todo.date <= date_to)
        return self.session.exec(stmt.order_by(Todo.id)).all()

    def get(self, todo_id: int) -> Optional[Todo]:
        # hors de la plage des clés stockables : ne peut pas exister
        if not 0 < todo_id <= MAX_ID:
            return None
        return self.session.get(Todo, todo_id)

    def child_ids(self, parent_ids: Iterable[int]) -> Sequence[int]:
        parent_ids = tuple(parent_ids)
        if not parent_ids:
            return []
        stmt = select(Todo.id).where(Todo.parent_id.in_(parent_ids)).order_by(Todo.id)
        return self.session.exec(stmt).all()

    def descendant_ids(self, todo_id: int) -> Sequence[int]:
        """Ids de tous les descendants (enfants, petits-enfants, ...) en largeur d'abord."""
        found: dict[int, None] = {}
        frontier = [todo_id]
        while frontier:
            frontier = [i for i in self.child_ids(frontier) if i not in found and i != todo_id]
            found.update(dict.fromkeys(frontier))
        return tuple(found)

    # ---------- WRITE ----------

    def create(self, **fields) -> Todo:
        todo = Todo(**fields)
        self.session.add(todo)
        self.session.commit()
        self.session.refresh(todo)
        return todo

    def update(self, todo: Todo, **changes) -> Todo:
        for k, v in changes.items():
            setattr(todo, k, v)
        self.session.add(todo)
        self.session.commit()
        self.session.refresh(todo)
        return todo

    def delete_many(self, todo_ids: Iterable[int]) -> int:
        """Supprime un lot de todos en une seule requête (les contraintes FK sont vérifiées en fin d'instruction)."""
        todo_ids = tuple(todo_ids)
        if not todo_ids:
            return 0
        result = self.session.execute(sa_delete(Todo).where(Todo.id.in_(todo_ids)))
        self.session.commit()
        return result.rowcount or 0

    def rollback(self) -> None:
        self.session.rollback()
