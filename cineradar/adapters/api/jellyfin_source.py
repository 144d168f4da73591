"""
Source Jellyfin : recherche de films via l'API REST d'un serveur Jellyfin.

Jellyfin partage le format de reponse d'Emby ({"Items": [...]}) mais
accepte une recherche globale sur /Items avec la cle en parametre api_key.
"""

from cineradar.adapters.api.base import HttpSourceAdapter, ServerCredentials
from cineradar.adapters.api.emby_source import parse_items
from cineradar.core.entities import MediaItem


class JellyfinSourceAdapter(HttpSourceAdapter):
    """
    Adaptateur de source pour un serveur Jellyfin.

    Endpoints utilises:
    - GET /System/Info : test de connexion
    - GET /Items : recherche des films
    """

    @property
    def name(self) -> str:
        return "Jellyfin"

    def _default_params(self, credentials: ServerCredentials) -> dict[str, str]:
        return {"api_key": credentials.token}

    async def _probe(self) -> None:
        await self._get_json("/System/Info")

    async def _search(self, title: str) -> list[MediaItem]:
        data = await self._get_json(
            "/Items",
            params={
                "SearchTerm": title,
                "IncludeItemTypes": "Movie",
                "Recursive": "true",
            },
        )
        return parse_items(data)
