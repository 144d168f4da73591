"""
Interface port pour le stockage des identifiants de sources.

Le stockage est un simple magasin cle-valeur indexe par id de source.
Le drapeau "enabled" est conserve a cote des champs d'identifiants.
"""

from abc import ABC, abstractmethod
from typing import Any


class ICredentialStore(ABC):
    """Magasin cle-valeur persistant des identifiants."""

    @abstractmethod
    async def get(self, source_id: str) -> dict[str, Any]:
        """
        Recupere les identifiants d'une source.

        Returns:
            Dictionnaire des champs (incluant "enabled"), vide si absent
        """
        ...

    @abstractmethod
    async def set(
        self, source_id: str, credentials: dict[str, Any], enabled: bool
    ) -> None:
        """Enregistre les identifiants d'une source et son etat d'activation."""
        ...

    @abstractmethod
    async def all(self) -> dict[str, dict[str, Any]]:
        """Retourne toutes les entrees stockees, indexees par id de source."""
        ...
