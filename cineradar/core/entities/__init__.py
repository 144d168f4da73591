"""
Entités et objets valeur du domaine.

- source : description des sources (SourceKind, SourceDescriptor, CredentialField)
- media : requetes et resultats (MediaQuery, MediaItem, CheckResult, MediaMatch, QueryResult)
"""

from cineradar.core.entities.media import (
    CheckResult,
    ConnectionResult,
    MediaItem,
    MediaMatch,
    MediaQuery,
    QueryResult,
    ValidationResult,
)
from cineradar.core.entities.source import (
    CredentialField,
    RegisteredSource,
    SourceDescriptor,
    SourceKind,
)

__all__ = [
    # Sources
    "CredentialField",
    "RegisteredSource",
    "SourceDescriptor",
    "SourceKind",
    # Media
    "CheckResult",
    "ConnectionResult",
    "MediaItem",
    "MediaMatch",
    "MediaQuery",
    "QueryResult",
    "ValidationResult",
]
