"""
➡️ But : Définir les formats d’entrée/sortie de l’API (couche validation).

TodoCreateIn → corps JSON de POST /todos

TodoOut → un todo renvoyé par l'API

TodoNodeOut → un todo et ses sous-tâches (forêt renvoyée par /todos/tree)
"""

from __future__ import annotations

import datetime as dt
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from timely.db.models.todos import MAX_ID


class TodoCreateIn(BaseModel):
    name: str = Field(..., examples=["Acheter du lait"])
    description: Optional[str] = Field(None, examples=["Demi-écrémé"])
    parent_id: Optional[int] = Field(None, ge=1, le=MAX_ID, examples=[None])
    # Chaîne "AAAA-MM-JJ" telle que l'envoie un <input type="date"> ; vide = pas de date
    date: Optional[str] = Field(None, examples=["2025-03-01"])

    @field_validator("date", mode="before")
    @classmethod
    def _blank_date_is_none(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value


class TodoOut(BaseModel):
    id: int
    name: str
    done: bool
    description: Optional[str]
    parent_id: Optional[int]
    date: Optional[dt.date]

    model_config = {"from_attributes": True}


class TodoNodeOut(BaseModel):
    todo: TodoOut
    children: list[TodoNodeOut] = []
