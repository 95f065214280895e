"""
➡️ But : Définir la structure de la table des todos (ORM).

Une seule table, avec une clé étrangère vers elle-même (parent_id) :
un todo sans parent est un todo de premier niveau, les autres forment des sous-tâches.

🔹 Avantages :

Tu manipules des objets Python, pas du SQL brut.

Facile à migrer vers PostgreSQL ou MySQL plus tard.
"""

import datetime as dt
from typing import Optional

from sqlmodel import SQLModel, Field


class Todo(SQLModel, table=True):
    __tablename__ = "todos"

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(description="Intitulé de la tâche")
    done: bool = Field(default=False)
    description: Optional[str] = Field(default=None)

    # Clé étrangère auto-référencée (NULL = premier niveau)
    parent_id: Optional[int] = Field(default=None, foreign_key="todos.id", index=True)

    date: Optional[dt.date] = Field(default=None, index=True, description="Échéance éventuelle")


# Plus grand identifiant représentable (BIGINT signé / INTEGER SQLite)
MAX_ID = 2**63 - 1
