"""
Canaux de messages entre le contexte de page et l'arriere-plan.

Les deux canaux renvoient toujours une reponse : un echec de transport
devient {"success": false, "error": ...} comme une erreur d'arriere-plan.
"""

from typing import Any, Optional

import httpx
from loguru import logger

from cineradar.core.ports.rendering import IMessageChannel
from cineradar.services.background import BackgroundService

MESSAGES_PATH = "/api/messages"


class InProcessMessageChannel(IMessageChannel):
    """Canal direct vers un BackgroundService du meme processus."""

    def __init__(self, background: BackgroundService) -> None:
        self._background = background

    async def send(self, message: dict[str, Any]) -> dict[str, Any]:
        return await self._background.handle_message(dict(message))


class HttpMessageChannel(IMessageChannel):
    """
    Canal HTTP vers le serveur d'arriere-plan (cineradar serve).

    Example:
        channel = HttpMessageChannel("http://127.0.0.1:8765")
        response = await channel.send({"type": "CHECK_MOVIE", "title": "Heat", "year": 1995})
        await channel.close()
    """

    def __init__(self, base_url: str, timeout: float = 30.0) -> None:
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._client: Optional[httpx.AsyncClient] = None

    def _get_client(self) -> httpx.AsyncClient:
        """Retourne le client HTTP, le cree si necessaire (lazy init)."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(base_url=self._base_url, timeout=self._timeout)
        return self._client

    async def send(self, message: dict[str, Any]) -> dict[str, Any]:
        try:
            response = await self._get_client().post(MESSAGES_PATH, json=message)
            response.raise_for_status()
            return response.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.warning(f"Canal HTTP indisponible ({self._base_url}): {e}")
            return {"success": False, "found": False, "results": [], "error": str(e)}

    async def close(self) -> None:
        """Ferme le client HTTP."""
        if self._client is not None and not self._client.is_closed:
            await self._client.aclose()
            self._client = None
