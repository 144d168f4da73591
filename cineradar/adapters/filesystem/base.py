"""
Base commune des sources lisant des repertoires (locaux ou partages montes).

Le listing des fichiers video est mis en cache (TTLCache) avec une cle
derivee de l'ensemble des repertoires configures : check_movie() ne relit
pas le disque a chaque appel. Toute reconfiguration vide le cache.
"""

import asyncio
import json
from abc import abstractmethod
from pathlib import Path
from typing import Any, Optional

from loguru import logger

from cineradar.adapters.cache import TTLCache
from cineradar.adapters.filesystem.file_matcher import (
    LibraryFile,
    is_ignored_file,
    is_movie_file,
    search_movie_files,
)
from cineradar.core.entities import CheckResult, MediaItem
from cineradar.core.ports.sources import ISourceAdapter

NOT_CONFIGURED = "Source not configured"


def parse_bool(value: Any) -> bool:
    """Booleen depuis une case a cocher (True) ou sa forme texte ("true")."""
    return value is True or (isinstance(value, str) and value.strip().lower() == "true")


def list_movie_files(directories: list[Path], recursive: bool) -> list[str]:
    """
    Liste les noms de fichiers video des repertoires (bloquant).

    Les repertoires absents sont ignores avec un avertissement.
    Les extraits (sample, trailer) sont exclus.
    """
    names: list[str] = []
    for directory in directories:
        if not directory.is_dir():
            logger.warning(f"Repertoire introuvable: {directory}")
            continue
        entries = directory.rglob("*") if recursive else directory.iterdir()
        for path in entries:
            if not is_movie_file(path.name) or is_ignored_file(path.name):
                continue
            if path.is_file():
                names.append(path.name)
    return names


class DirectorySourceAdapter(ISourceAdapter):
    """
    Adaptateur abstrait pour les sources basees sur des repertoires.

    Les sous-classes fournissent la validation/normalisation des identifiants
    et la liste des repertoires a scanner.
    """

    def __init__(self, cache_ttl: float = TTLCache.DEFAULT_TTL) -> None:
        self._file_cache = TTLCache(ttl=cache_ttl)
        self._scan_lock = asyncio.Lock()

    @abstractmethod
    def _directories(self) -> list[Path]:
        """Repertoires a scanner pour la configuration courante."""
        ...

    @property
    @abstractmethod
    def recursive(self) -> bool:
        """True si les sous-repertoires sont parcourus."""
        ...

    def invalidate_cache(self) -> None:
        """Vide le cache des listings."""
        self._file_cache.clear()

    def _cache_key(self) -> str:
        return json.dumps(
            {"paths": [str(p) for p in self._directories()], "recursive": self.recursive}
        )

    async def _scan(self, directories: list[Path]) -> list[str]:
        """Scanne les repertoires hors de la boucle d'evenements."""
        return await asyncio.to_thread(list_movie_files, directories, self.recursive)

    async def get_all_movie_files(self) -> list[LibraryFile]:
        """
        Retourne les fichiers video des repertoires configures (cache-first).

        Raises:
            OSError: Si le scan echoue
        """
        key = self._cache_key()
        cached = self._file_cache.get(key)
        if cached is not None:
            return cached

        async with self._scan_lock:
            # Un autre appel a pu remplir le cache pendant l'attente du verrou
            cached = self._file_cache.get(key)
            if cached is not None:
                return cached

            names = await self._scan(self._directories())
            files = [LibraryFile.from_file_name(name) for name in names]
            self._file_cache.set(key, files)
            logger.debug(f"{self.name}: {len(files)} fichier(s) video en cache")
            return files

    async def check_movie(self, title: str, year: Optional[int]) -> CheckResult:
        if not self.is_configured:
            return CheckResult.not_found(error=NOT_CONFIGURED)
        try:
            files = await self.get_all_movie_files()
        except (OSError, asyncio.TimeoutError) as e:
            message = str(e) or e.__class__.__name__
            logger.warning(f"Erreur de scan {self.name} pour '{title}': {message}")
            return CheckResult.not_found(error=message)

        match = search_movie_files(title, year, files)
        if match is None:
            return CheckResult.not_found()
        return CheckResult(
            found=True,
            movie=MediaItem(id=match.file_name, name=match.title, year=match.year),
        )
