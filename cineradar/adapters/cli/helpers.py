"""
Utilitaires partages pour les commandes CLI de CineRadar.

Ce module fournit :
- console : instance Rich Console partagee
- suppress_loguru : context manager pour desactiver/reactiver les logs loguru
- with_container : decorateur injectant un container (sources restaurees,
  adaptateurs fermes en fin de commande)
- parse_assignments : conversion des arguments KEY=VALUE en identifiants
"""

from contextlib import contextmanager
from functools import wraps
from typing import Any

import typer
from loguru import logger as loguru_logger
from rich.console import Console

from cineradar.container import Container
from cineradar.core.errors import CredentialStoreError

console = Console()


@contextmanager
def suppress_loguru():
    """
    Context manager pour desactiver les logs loguru pendant l'affichage Rich.

    Usage:
        with suppress_loguru():
            console.print(...)
    """
    loguru_logger.disable("cineradar")
    try:
        yield
    finally:
        loguru_logger.enable("cineradar")


def with_container(restore: bool = True):
    """
    Decorateur qui injecte un container en premier argument.

    Args:
        restore: Si True (defaut), active les sources marquees enabled.

    Usage:
        @with_container()
        async def my_command(container, ...):
            registry = container.source_registry()
    """
    def decorator(func):
        @wraps(func)
        async def wrapper(*args, **kwargs):
            container = Container()
            registry = container.source_registry()
            try:
                if restore:
                    await registry.restore()
                return await func(container, *args, **kwargs)
            except CredentialStoreError as e:
                console.print(f"[red]Erreur:[/red] {e}")
                raise typer.Exit(code=1)
            finally:
                await registry.close()
        return wrapper
    return decorator


def _parse_value(raw: str) -> Any:
    lowered = raw.strip().lower()
    if lowered in ("true", "false"):
        return lowered == "true"
    return raw


def parse_assignments(assignments: list[str]) -> dict[str, Any]:
    """
    Convertit ["serverUrl=http://x", "recursive=true"] en dictionnaire.

    Une cle repetee accumule les valeurs separees par des retours a la
    ligne (ex: plusieurs paths=...).

    Raises:
        typer.BadParameter: Si un argument n'est pas de la forme KEY=VALUE
    """
    result: dict[str, Any] = {}
    for assignment in assignments:
        key, sep, value = assignment.partition("=")
        if not sep or not key.strip():
            raise typer.BadParameter(f"Expected KEY=VALUE, got '{assignment}'")
        key = key.strip()
        if key in result and isinstance(result[key], str):
            result[key] = f"{result[key]}\n{value}"
        else:
            result[key] = _parse_value(value)
    return result
