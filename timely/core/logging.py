"""
➡️ But : Configurer les logs de l'application une seule fois, au démarrage.

Chaque module récupère son logger avec logging.getLogger(__name__) ;
ici on installe seulement le handler console et le format.
"""

import logging
import sys

LOG_FORMAT = "%(asctime)s %(levelname)s:%(name)s: %(message)s"


def configure_logging(level: str = "INFO") -> None:
    root = logging.getLogger("timely")
    if not root.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(handler)
    root.setLevel(level.upper())
