"""
Adaptateurs de sites de listing de films.

L'ordre de DEFAULT_SITE_ADAPTERS fixe la priorite dans le registre.
"""

from cineradar.adapters.sites.base import BasePageAdapter, parse_document
from cineradar.adapters.sites.imdb import IMDBAdapter
from cineradar.adapters.sites.netflix import NetflixAdapter
from cineradar.adapters.sites.yts import YTSAdapter

DEFAULT_SITE_ADAPTERS = (NetflixAdapter, IMDBAdapter, YTSAdapter)

__all__ = [
    "BasePageAdapter",
    "DEFAULT_SITE_ADAPTERS",
    "IMDBAdapter",
    "NetflixAdapter",
    "YTSAdapter",
    "parse_document",
]
