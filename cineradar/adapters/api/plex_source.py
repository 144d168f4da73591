"""
Source Plex : recherche de films via l'API d'un Plex Media Server.

Authentification par jeton X-Plex-Token, reponses JSON demandees via
l'en-tete Accept. Les films sont sous MediaContainer.Metadata.
"""

from cineradar.adapters.api.base import HttpSourceAdapter, ServerCredentials, parse_year
from cineradar.core.entities import MediaItem
from cineradar.core.errors import SourceConnectionError

# Type Plex des films dans /search
PLEX_MOVIE_TYPE = "1"


class PlexSourceAdapter(HttpSourceAdapter):
    """
    Adaptateur de source pour un Plex Media Server.

    Endpoints utilises:
    - GET / : test de connexion (doit contenir MediaContainer)
    - GET /search?query=...&type=1 : recherche des films
    """

    TOKEN_FIELD = "token"
    TOKEN_LABEL = "Plex Token"

    @property
    def name(self) -> str:
        return "Plex"

    def _default_headers(self, credentials: ServerCredentials) -> dict[str, str]:
        return {
            "Accept": "application/json",
            "X-Plex-Token": credentials.token,
        }

    async def _probe(self) -> None:
        data = await self._get_json("/")
        if not isinstance(data, dict) or "MediaContainer" not in data:
            raise SourceConnectionError("Invalid Plex server response")

    async def _search(self, title: str) -> list[MediaItem]:
        data = await self._get_json(
            "/search", params={"query": title, "type": PLEX_MOVIE_TYPE}
        )
        container = data.get("MediaContainer") if isinstance(data, dict) else None
        metadata = (container or {}).get("Metadata") or []
        return [
            MediaItem(
                id=str(item.get("ratingKey", "")),
                name=item.get("title") or "",
                year=parse_year(item.get("year")),
            )
            for item in metadata
        ]
