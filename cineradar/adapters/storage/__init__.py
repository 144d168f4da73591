"""Implementations du stockage des identifiants de sources."""

from cineradar.adapters.storage.credential_store import (
    InMemoryCredentialStore,
    JsonCredentialStore,
)

__all__ = ["InMemoryCredentialStore", "JsonCredentialStore"]
