"""
Cache memoire a duree de vie limitee pour les adaptateurs de source.

Cache "best effort" sans persistance : une lecture apres expiration est
traitee comme une absence et l'entree est evincee.

TTL par defaut:
- Listings de fichiers (DEFAULT_TTL): 5 minutes
"""

import time
from dataclasses import dataclass
from typing import Any, Callable, Optional


@dataclass
class CacheEntry:
    """Entree du cache avec son instant d'expiration (horloge monotone)."""

    key: str
    value: Any
    expires_at: float


class TTLCache:
    """
    Cache cle-valeur en memoire avec TTL.

    Attributes:
        DEFAULT_TTL: Duree de vie par defaut des entrees (5 min)

    Example:
        cache = TTLCache(ttl=60)
        cache.set('["/movies"]', ["Inception (2010).mkv"])
        files = cache.get('["/movies"]')
    """

    DEFAULT_TTL = 5 * 60  # 5 minutes en secondes

    def __init__(
        self,
        ttl: float = DEFAULT_TTL,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """
        Initialise le cache.

        Args:
            ttl: Duree de vie par defaut en secondes
            clock: Horloge (injectable pour les tests)
        """
        self._ttl = ttl
        self._clock = clock
        self._entries: dict[str, CacheEntry] = {}

    def get(self, key: str) -> Optional[Any]:
        """
        Recupere une valeur du cache.

        Returns:
            La valeur stockee ou None si absente ou expiree
        """
        entry = self._entries.get(key)
        if entry is None:
            return None
        if self._clock() >= entry.expires_at:
            del self._entries[key]
            return None
        return entry.value

    def set(self, key: str, value: Any, ttl: Optional[float] = None) -> None:
        """Stocke une valeur avec un TTL (defaut: TTL du cache)."""
        lifetime = self._ttl if ttl is None else ttl
        self._entries[key] = CacheEntry(
            key=key, value=value, expires_at=self._clock() + lifetime
        )

    def clear(self) -> None:
        """Supprime toutes les entrees du cache."""
        self._entries.clear()

    def __contains__(self, key: str) -> bool:
        return self.get(key) is not None

    def __len__(self) -> int:
        return len(self._entries)
