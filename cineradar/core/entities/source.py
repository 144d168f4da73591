"""
Objets valeur decrivant les sources de videotheque.

Une source est identifiee par son id (ex: "emby", "local") et associee
a un adaptateur implementant ISourceAdapter.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from cineradar.core.ports.sources import ISourceAdapter


class SourceKind(Enum):
    """Type de backend d'une source.

    Valeurs:
        API: Serveur media interroge via une API REST (Emby, Jellyfin, Plex)
        FILESYSTEM: Repertoires locaux
        NETWORK: Partage reseau monte localement
    """

    API = "api"
    FILESYSTEM = "filesystem"
    NETWORK = "network"


@dataclass(frozen=True)
class SourceDescriptor:
    """
    Description immutable d'une source enregistree.

    Attributs:
        id: Identifiant unique dans le registre
        kind: Type de backend
        display_name: Nom affiche a l'utilisateur
    """

    id: str
    kind: SourceKind
    display_name: str


@dataclass(frozen=True)
class CredentialField:
    """
    Champ du schema d'identifiants d'une source.

    Attributs:
        key: Nom du champ dans le dictionnaire d'identifiants (ex: "serverUrl")
        label: Libelle affiche dans les formulaires
        input_kind: Type de saisie ("url", "password", "textarea", "checkbox", "text")
        required: True si le champ est obligatoire
    """

    key: str
    label: str
    input_kind: str
    required: bool = True


@dataclass(frozen=True)
class RegisteredSource:
    """Couple (id, adaptateur) tel que retourne par le registre."""

    id: str
    adapter: ISourceAdapter

    @property
    def descriptor(self) -> SourceDescriptor:
        """Construit le SourceDescriptor de cette source."""
        return SourceDescriptor(
            id=self.id,
            kind=self.adapter.kind,
            display_name=self.adapter.name,
        )
