"""
Configuration de la journalisation pour ipfe.

Utilisé comme bibliothèque, ipfe n'écrit rien : le logger du paquet porte un
NullHandler et les fonctions cryptographiques ne journalisent pas elles-mêmes.
Les événements passent par un traceur optionnel (un callable recevant une
chaîne) que logger_tracer() branche sur un logger standard.

Exemple:
    >>> from ipfe.logging_config import setup_logging, logger_tracer
    >>> setup_logging(level="DEBUG")
    >>> scheme = InnerProductFE(params, tracer=logger_tracer())
"""

import logging
import sys
from typing import Any, Callable, Literal, Optional

from ipfe.config import LOG_DATE_FORMAT, LOG_FORMAT, LOGGER_NAME

Tracer = Callable[[str], None]


def setup_logging(
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO",
    format: Optional[str] = None,
    date_format: Optional[str] = None,
    filename: Optional[str] = None,
    stream: Any = None,
    force: bool = False,
    propagate: bool = False,
) -> None:
    """
    Configure le logger du paquet ipfe

    Args:
        level: Niveau de journalisation
        format: Format des messages (LOG_FORMAT par défaut)
        date_format: Format des dates (LOG_DATE_FORMAT par défaut)
        filename: Fichier de sortie, en plus du flux
        stream: Flux de sortie (sys.stderr par défaut, False pour aucun)
        force: Si True, retire les handlers existants avant d'en ajouter
        propagate: Si True, laisse remonter les messages au logger racine
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(getattr(logging, level.upper()))
    logger.propagate = propagate

    if force:
        for handler in logger.handlers[:]:
            logger.removeHandler(handler)
            handler.close()
    elif any(not isinstance(h, logging.NullHandler) for h in logger.handlers):
        # Déjà configuré
        return

    formatter = logging.Formatter(
        fmt=format or LOG_FORMAT,
        datefmt=date_format or LOG_DATE_FORMAT,
    )

    if stream is not False:
        stream_handler = logging.StreamHandler(stream or sys.stderr)
        stream_handler.setFormatter(formatter)
        logger.addHandler(stream_handler)

    if filename:
        file_handler = logging.FileHandler(filename)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)


def get_logger(name: str) -> logging.Logger:
    """Retourne un logger enfant de ipfe"""
    if name.startswith(LOGGER_NAME):
        return logging.getLogger(name)
    return logging.getLogger(f"{LOGGER_NAME}.{name}")


def logger_tracer(name: str = "trace", level: int = logging.DEBUG) -> Tracer:
    """Adapte un logger en traceur pour InnerProductFE et setup()"""
    logger = get_logger(name)

    def trace(message: str) -> None:
        logger.log(level, message)

    return trace


# Silencieux par défaut quand ipfe est utilisé comme bibliothèque
logging.getLogger(LOGGER_NAME).addHandler(logging.NullHandler())
