"""
Configuration du logging de l'application.

Console (stdout) toujours, fichier en option.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(
    log_level: str = "INFO",
    log_file: str | None = None,
) -> None:
    """
    Configure le logger racine pour toute l'application.

    Args:
        log_level: niveau (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: chemin optionnel d'un fichier de log
    """
    formatter = logging.Formatter(DEFAULT_FORMAT)

    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, log_level.upper(), logging.INFO))

    # évite les doublons si appelé plusieurs fois
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    if log_file:
        path = Path(log_file)
        path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(path, encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)


def get_logger(name: str) -> logging.Logger:
    """Logger d'un module (typiquement __name__)."""
    return logging.getLogger(name)
