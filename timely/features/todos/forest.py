"""
➡️ But : Transformer la liste plate des todos en forêt (parents → enfants) pour l'affichage.

build_forest() est pur : il ne touche pas à la base, ce qui le rend facile à tester.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional

from timely.db.models.todos import Todo

logger = logging.getLogger(__name__)


@dataclass
class TodoNode:
    todo: Todo
    children: List["TodoNode"] = field(default_factory=list)


def build_forest(todos: Iterable[Todo]) -> List[TodoNode]:
    """
    Regroupe les todos par parent_id.

    - racines : todos sans parent, ou dont le parent n'est pas dans la liste
      (cas d'un filtre par date qui écarte le parent) ;
    - frères et sœurs triés par id croissant ;
    - les todos inaccessibles depuis une racine (cycle) sont ignorés.
    """
    todos = sorted(todos, key=lambda t: t.id)
    nodes: Dict[int, TodoNode] = {t.id: TodoNode(t) for t in todos}

    roots: List[TodoNode] = []
    children_of: Dict[Optional[int], List[TodoNode]] = {}
    for todo in todos:
        node = nodes[todo.id]
        if todo.parent_id is None or todo.parent_id not in nodes:
            roots.append(node)
        else:
            children_of.setdefault(todo.parent_id, []).append(node)

    # Rattachement itératif depuis les racines : un cycle ne peut pas être atteint
    placed = 0
    stack = list(roots)
    while stack:
        node = stack.pop()
        placed += 1
        node.children = children_of.get(node.todo.id, [])
        stack.extend(node.children)

    if placed != len(nodes):
        logger.warning("Dropped %d todo(s) unreachable from any root (parent cycle)", len(nodes) - placed)
    return roots
