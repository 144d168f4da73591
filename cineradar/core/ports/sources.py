"""
Interface port pour les sources de videotheque.

Chaque backend (serveur media via API, repertoires locaux, partage reseau)
implemente ISourceAdapter. Le registre et l'agregateur ne manipulent que
ce contrat et ignorent tout du backend sous-jacent.
"""

from abc import ABC, abstractmethod
from typing import Any, Optional

from cineradar.core.entities import (
    CheckResult,
    ConnectionResult,
    CredentialField,
    SourceKind,
    ValidationResult,
)


class ISourceAdapter(ABC):
    """
    Contrat commun a tous les adaptateurs de source.

    Cycle de vie:
        adapter.validate_credentials(raw)   # pur, sans I/O
        adapter.configure(raw)              # ConfigError si invalide
        await adapter.test_connection()     # ne leve jamais
        await adapter.check_movie(t, y)     # ne leve jamais sur erreur backend
        await adapter.close()               # fin d'utilisation
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Nom affiche de la source (ex: 'Emby')."""
        ...

    @property
    @abstractmethod
    def kind(self) -> SourceKind:
        """Type de backend de la source."""
        ...

    @abstractmethod
    def get_required_fields(self) -> list[CredentialField]:
        """Schema des identifiants attendus par configure()."""
        ...

    @abstractmethod
    def validate_credentials(self, candidate: dict[str, Any]) -> ValidationResult:
        """
        Valide la structure des identifiants, sans appel reseau.

        Args:
            candidate: Identifiants bruts (cles du schema)

        Returns:
            ValidationResult avec la liste des erreurs
        """
        ...

    @abstractmethod
    def configure(self, credentials: dict[str, Any]) -> None:
        """
        Configure l'adaptateur avec une copie normalisee des identifiants.

        Invalide tout cache local de l'adaptateur.

        Raises:
            ConfigError: Si validate_credentials() signale des erreurs
        """
        ...

    @property
    @abstractmethod
    def is_configured(self) -> bool:
        """True si configure() a reussi au moins une fois."""
        ...

    @abstractmethod
    async def test_connection(self) -> ConnectionResult:
        """Effectue un aller-retour minimal vers le backend."""
        ...

    @abstractmethod
    async def check_movie(self, title: str, year: Optional[int]) -> CheckResult:
        """
        Recherche un film dans la source.

        Args:
            title: Titre du film
            year: Annee de sortie (optionnelle)

        Returns:
            CheckResult, found=False avec error en cas d'echec backend
        """
        ...

    async def close(self) -> None:
        """Libere les ressources de l'adaptateur (clients reseau). Rien par defaut."""
        return None
