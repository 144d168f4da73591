"""
Source Emby : recherche de films via l'API REST d'un serveur Emby.

Authentification par en-tete X-MediaBrowser-Token. La recherche passe par
la bibliotheque du premier utilisateur du serveur (/Users/{id}/Items).

Usage:
    source = EmbySourceAdapter()
    source.configure({"serverUrl": "http://emby:8096", "apiKey": "xxx"})
    result = await source.check_movie("Inception", 2010)
    await source.close()
"""

from typing import Any, Optional

from cineradar.adapters.api.base import HttpSourceAdapter, ServerCredentials, parse_year
from cineradar.core.entities import MediaItem
from cineradar.core.errors import SourceConnectionError


def parse_items(data: Any) -> list[MediaItem]:
    """Convertit la reponse {"Items": [...]} (Emby/Jellyfin) en MediaItem."""
    items = data.get("Items") if isinstance(data, dict) else None
    return [
        MediaItem(
            id=str(item.get("Id", "")),
            name=item.get("Name") or "",
            year=parse_year(item.get("ProductionYear")),
        )
        for item in items or []
    ]


class EmbySourceAdapter(HttpSourceAdapter):
    """
    Adaptateur de source pour un serveur Emby.

    Endpoints utilises:
    - GET /Users : test de connexion et resolution de l'utilisateur
    - GET /Users/{userId}/Items : recherche des films
    """

    def __init__(self, timeout: float = 10.0, max_attempts: int = 3) -> None:
        super().__init__(timeout=timeout, max_attempts=max_attempts)
        self._user_id: Optional[str] = None

    @property
    def name(self) -> str:
        return "Emby"

    def _on_configure(self) -> None:
        # Le serveur a pu changer : l'utilisateur memorise n'est plus valable
        self._user_id = None

    def _default_headers(self, credentials: ServerCredentials) -> dict[str, str]:
        return {
            "Accept": "application/json",
            "X-MediaBrowser-Token": credentials.token,
        }

    async def _probe(self) -> None:
        await self._get_json("/Users")

    async def get_user_id(self) -> str:
        """
        Identifiant du premier utilisateur du serveur (memorise).

        Raises:
            SourceConnectionError: Si le serveur ne declare aucun utilisateur
        """
        if self._user_id:
            return self._user_id

        users = await self._get_json("/Users")
        if not isinstance(users, list) or not users or not users[0].get("Id"):
            raise SourceConnectionError(f"No {self.name} user available")
        self._user_id = str(users[0]["Id"])
        return self._user_id

    async def _search(self, title: str) -> list[MediaItem]:
        user_id = await self.get_user_id()
        data = await self._get_json(
            f"/Users/{user_id}/Items",
            params={
                "searchTerm": title,
                "IncludeItemTypes": "Movie",
                "Recursive": "true",
                "Fields": "ProviderIds,UserData",
            },
        )
        return parse_items(data)
