"""
➡️ But : Configurer la base et gérer les sessions de base de données.

engine : connexion à la base (sqlite:///timely.db par défaut).

init_db() : crée les tables à partir des modèles SQLModel.

get_session() : dépendance FastAPI qui ouvre une session, la fournit aux routes, puis la ferme proprement.

🔹 Avantages :

Un seul endroit pour gérer les connexions DB.

Réutilisable par injection (Depends(get_session)).
"""

import logging
from typing import Dict, Any

from sqlalchemy import event
from sqlalchemy.engine import Engine
from sqlmodel import SQLModel, create_engine, Session

# Import all models for creating all tables
from timely.db.models.todos import Todo  # noqa: F401

from timely.core.config import settings

logger = logging.getLogger(__name__)


def _enable_foreign_keys(dbapi_connection, connection_record) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def enable_sqlite_foreign_keys(engine: Engine) -> None:
    """SQLite n'applique les clés étrangères (parent_id) que si on le lui demande, connexion par connexion."""
    event.listen(engine, "connect", _enable_foreign_keys)


def _build_engine() -> Engine:
    url = settings.DATABASE_URL
    assert url, "DATABASE_URL must be set"

    is_sqlite = url.startswith("sqlite:")

    connect_args: Dict[str, Any] = {}
    if is_sqlite:
        # Requis pour SQLite quand utilisé dans un app serveur (multi-threads)
        connect_args["check_same_thread"] = False

    # echo seulement en dev pour ne pas polluer les logs en prod
    engine = create_engine(
        url,
        echo=(settings.ENV == "dev"),
        connect_args=connect_args,
        pool_pre_ping=not is_sqlite,  # ping utile pour Postgres/MySQL ; inutile pour SQLite
    )
    if is_sqlite:
        enable_sqlite_foreign_keys(engine)
    return engine

engine: Engine = _build_engine()

def init_db() -> None:
    """
    Crée les tables si elles n'existent pas.
    """
    logger.info("Initialising database schema on %s", engine.url.render_as_string(hide_password=True))
    SQLModel.metadata.create_all(engine)


def get_session():
    """
    Dépendance FastAPI : fournit une session par requête.
    Utilisation :
        def route(..., session: Session = Depends(get_session)):
            ...
    """
    with Session(engine) as session:
        yield session
