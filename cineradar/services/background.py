"""
Traitement des messages du contexte de page dans le contexte d'arriere-plan.

Un seul type de message:
    {"type": "CHECK_MOVIE", "title": "Inception", "year": 2010}
Reponse:
    {"success": true, "found": true, "results": [MediaMatch.to_dict(), ...]}
En cas d'echec:
    {"success": false, "found": false, "error": "..."}
"""

from typing import Any, Optional

from loguru import logger

from cineradar.core.ports.rendering import CHECK_MOVIE
from cineradar.services.aggregator import Aggregator


def _failure(error: str) -> dict[str, Any]:
    return {"success": False, "found": False, "results": [], "error": error}


def _coerce_year(value: Any) -> Optional[int]:
    """Annee depuis le message (int, "2010", None)."""
    if value is None or value == "" or isinstance(value, bool):
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


class BackgroundService:
    """Point d'entree des messages CHECK_MOVIE, delegue a l'agregateur."""

    def __init__(self, aggregator: Aggregator) -> None:
        self._aggregator = aggregator

    async def handle_message(self, message: dict[str, Any]) -> dict[str, Any]:
        """
        Traite un message et construit la reponse.

        Ne leve jamais : toute erreur est renvoyee dans la reponse.
        """
        if not isinstance(message, dict):
            return _failure("Invalid message")
        message_type = message.get("type")
        if message_type != CHECK_MOVIE:
            return _failure(f"Unknown message type: {message_type}")

        title = str(message.get("title") or "").strip()
        if not title:
            return _failure("Title is required")
        year = _coerce_year(message.get("year"))

        try:
            result = await self._aggregator.check_all_sources(title, year)
        except Exception as e:  # frontiere du canal : reponse d'erreur
            logger.exception(f"Erreur lors de la verification de '{title}'")
            return _failure(str(e) or e.__class__.__name__)

        return {
            "success": True,
            "found": result.found,
            "results": [match.to_dict() for match in result.matches],
        }
