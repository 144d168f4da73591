"""
Configuration du logging de l'application via loguru.

Deux sorties :
- Console (stderr) : colorée, niveau ajustable par -v/-q sur la ligne de commande
- Fichier : JSON avec rotation, niveau DEBUG (requêtes des sources, scans)

Les valeurs d'identifiants passées en contexte (logger.bind, kwargs) sont
masquées avant écriture ; les messages ne mentionnent que les ids de source.
"""

import sys
from pathlib import Path
from typing import Any, Optional

from loguru import logger

# Clés de contexte dont la valeur n'est jamais écrite
SENSITIVE_KEYS = frozenset({"apiKey", "token", "password", "api_key"})

CONSOLE_FORMAT = (
    "<green>{time:HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{line}</cyan> | "
    "<level>{message}</level>"
)

_console_handler: Optional[int] = None


def redact_credentials(record: dict[str, Any]) -> None:
    """Patcher loguru : masque les valeurs sensibles du contexte."""
    extra = record["extra"]
    for key in SENSITIVE_KEYS.intersection(extra):
        extra[key] = "***"


def level_for_verbosity(base_level: str, verbose: int = 0, quiet: bool = False) -> str:
    """Niveau console selon les options -v/-q (quiet l'emporte)."""
    if quiet:
        return "ERROR"
    if verbose >= 2:
        return "TRACE"
    if verbose == 1:
        return "DEBUG"
    return base_level


def set_console_level(level: str) -> None:
    """Remplace le handler console (sans effet si le logging n'est pas configuré)."""
    global _console_handler
    if _console_handler is None:
        return
    logger.remove(_console_handler)
    _console_handler = logger.add(sys.stderr, level=level, format=CONSOLE_FORMAT, colorize=True)


def configure_logging(
    log_level: str = "INFO",
    log_file: Path = Path("logs/cineradar.log"),
    rotation_size: str = "10 MB",
    retention_count: int = 5,
) -> None:
    """Configure le logging de l'application.

    Args :
        log_level : Niveau minimum pour la console (DEBUG, INFO, WARNING, ERROR)
        log_file : Chemin du fichier de log JSON
        rotation_size : Taille maximale avant rotation (ex: "10 MB")
        retention_count : Nombre de fichiers rotatifs conservés
    """
    global _console_handler
    logger.remove()
    logger.configure(patcher=redact_credentials)

    _console_handler = logger.add(
        sys.stderr, level=log_level, format=CONSOLE_FORMAT, colorize=True
    )

    log_file.parent.mkdir(parents=True, exist_ok=True)
    logger.add(
        log_file,
        level="DEBUG",
        format="{message}",
        serialize=True,
        rotation=rotation_size,
        retention=retention_count,
        compression="zip",
        enqueue=True,  # scans de répertoires exécutés dans des threads
    )

    logger.debug("Logging configuré", log_file=str(log_file), console_level=log_level)
