"""
Stockage des identifiants de sources.

Format (identique pour les deux implementations):
    {"sources": {"emby": {"serverUrl": "...", "apiKey": "...", "enabled": true}}}

JsonCredentialStore persiste ce document dans un fichier JSON, ecrit de
maniere atomique (fichier temporaire + os.replace). Les valeurs ne sont
jamais journalisees.
"""

import asyncio
import copy
import json
import os
import uuid
from pathlib import Path
from typing import Any

from loguru import logger

from cineradar.core.errors import CredentialStoreError
from cineradar.core.ports.credentials import ICredentialStore


class InMemoryCredentialStore(ICredentialStore):
    """Stockage en memoire (tests, usage programmatique)."""

    def __init__(self, initial: dict[str, dict[str, Any]] | None = None) -> None:
        self._sources: dict[str, dict[str, Any]] = copy.deepcopy(initial or {})

    async def get(self, source_id: str) -> dict[str, Any]:
        return copy.deepcopy(self._sources.get(source_id, {}))

    async def set(
        self, source_id: str, credentials: dict[str, Any], enabled: bool
    ) -> None:
        self._sources[source_id] = {**copy.deepcopy(credentials), "enabled": enabled}

    async def all(self) -> dict[str, dict[str, Any]]:
        return copy.deepcopy(self._sources)


class JsonCredentialStore(ICredentialStore):
    """
    Stockage des identifiants dans un fichier JSON.

    Les operations disque sont executees hors de la boucle d'evenements
    (asyncio.to_thread) et serialisees par un verrou.

    Example:
        store = JsonCredentialStore(Path("~/.config/cineradar/sources.json"))
        await store.set("plex", {"serverUrl": "...", "token": "..."}, enabled=True)
    """

    def __init__(self, path: Path) -> None:
        self._path = Path(path).expanduser()
        self._lock = asyncio.Lock()

    @property
    def path(self) -> Path:
        return self._path

    def _read(self) -> dict[str, dict[str, Any]]:
        if not self._path.exists():
            return {}
        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            logger.error(f"Fichier d'identifiants illisible {self._path}: {e}")
            raise CredentialStoreError(f"Unreadable credentials file {self._path}") from e
        sources = data.get("sources", {}) if isinstance(data, dict) else {}
        return sources if isinstance(sources, dict) else {}

    def _write(self, sources: dict[str, dict[str, Any]]) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        temp = self._path.with_name(f".tmp_{uuid.uuid4().hex}_{self._path.name}")
        try:
            temp.write_text(json.dumps({"sources": sources}, indent=2), encoding="utf-8")
            os.replace(temp, self._path)
        finally:
            if temp.exists():
                temp.unlink()

    async def get(self, source_id: str) -> dict[str, Any]:
        async with self._lock:
            sources = await asyncio.to_thread(self._read)
        return sources.get(source_id, {})

    async def set(
        self, source_id: str, credentials: dict[str, Any], enabled: bool
    ) -> None:
        async with self._lock:
            sources = await asyncio.to_thread(self._read)
            sources[source_id] = {**credentials, "enabled": enabled}
            await asyncio.to_thread(self._write, sources)

    async def all(self) -> dict[str, dict[str, Any]]:
        async with self._lock:
            return await asyncio.to_thread(self._read)
