"""
➡️ But : Configurer le logging de l'application une seule fois au démarrage.

Chaque module récupère ensuite son logger via `logging.getLogger(__name__)`.
"""

import logging
import sys

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=LOG_FORMAT,
        handlers=[logging.StreamHandler(sys.stdout)],
    )
    # le moteur SQL a son propre flag `echo`, on évite les doublons
    logging.getLogger("sqlalchemy.engine").propagate = False
