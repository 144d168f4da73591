"""
Interfaces ports vers le contexte de page : rendu et messagerie.

- IIndicatorRenderer : dessine l'indicateur sur un element ancre
- IMessageChannel : transporte les requetes CHECK_MOVIE vers le contexte
  d'arriere-plan (registre + agregateur)
"""

from abc import ABC, abstractmethod
from typing import Any

from bs4 import Tag

from cineradar.core.entities import MediaMatch

CHECK_MOVIE = "CHECK_MOVIE"


class IIndicatorRenderer(ABC):
    """Rendu purement presentationnel de l'indicateur."""

    @abstractmethod
    def render(self, anchor: Tag, matching_sources: list[MediaMatch]) -> None:
        """
        Dessine l'indicateur.

        Args:
            anchor: Element d'ancrage retourne par get_badge_parent()
            matching_sources: Sources ayant trouve le film
        """
        ...


class IMessageChannel(ABC):
    """Canal requete/reponse entre contexte de page et arriere-plan."""

    @abstractmethod
    async def send(self, message: dict[str, Any]) -> dict[str, Any]:
        """
        Envoie un message et attend la reponse.

        Message: {"type": "CHECK_MOVIE", "title": str, "year": int | None}
        Reponse: {"success": bool, "found": bool, "results": list[dict]}
        """
        ...
