"""
Ports (interfaces abstraites) définissant les contrats pour les adaptateurs.

Ports sources : ISourceAdapter (serveurs media, fichiers locaux, partages)
Ports sites : IPageAdapter (IMDb, Netflix, YTS)
Ports stockage : ICredentialStore
Ports contexte de page : IIndicatorRenderer, IMessageChannel
"""

from cineradar.core.ports.credentials import ICredentialStore
from cineradar.core.ports.pages import IPageAdapter
from cineradar.core.ports.rendering import (
    CHECK_MOVIE,
    IIndicatorRenderer,
    IMessageChannel,
)
from cineradar.core.ports.sources import ISourceAdapter

__all__ = [
    "CHECK_MOVIE",
    "ICredentialStore",
    "IIndicatorRenderer",
    "IMessageChannel",
    "IPageAdapter",
    "ISourceAdapter",
]
