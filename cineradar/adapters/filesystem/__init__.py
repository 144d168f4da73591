"""
Sources basees sur des repertoires.

- LocalSourceAdapter : repertoires locaux (kind "filesystem")
- NetworkShareSourceAdapter : partage reseau monte (kind "network")
- file_matcher : extraction titre/annee des noms de fichiers (guessit)
"""

from cineradar.adapters.filesystem.local_source import LocalSourceAdapter
from cineradar.adapters.filesystem.network_source import NetworkShareSourceAdapter

__all__ = ["LocalSourceAdapter", "NetworkShareSourceAdapter"]
