"""
Sources serveur media interrogees via leur API REST.

- EmbySourceAdapter : Emby (X-MediaBrowser-Token)
- JellyfinSourceAdapter : Jellyfin (api_key)
- PlexSourceAdapter : Plex Media Server (X-Plex-Token)

Infrastructure partagee:
- HttpSourceAdapter : validation, client httpx, conversion des erreurs
- request_with_retry : retry avec backoff exponentiel sur 429/503
"""

from cineradar.adapters.api.base import HttpSourceAdapter
from cineradar.adapters.api.emby_source import EmbySourceAdapter
from cineradar.adapters.api.jellyfin_source import JellyfinSourceAdapter
from cineradar.adapters.api.plex_source import PlexSourceAdapter
from cineradar.adapters.api.retry import RateLimitError, request_with_retry, with_retry

__all__ = [
    "EmbySourceAdapter",
    "HttpSourceAdapter",
    "JellyfinSourceAdapter",
    "PlexSourceAdapter",
    "RateLimitError",
    "request_with_retry",
    "with_retry",
]
