"""
Taxonomie des erreurs du domaine.

- ConfigError : identifiants invalides ou manquants, bloque l'activation
- SourceConnectionError : echec reseau/authentification d'une source
- SourceNotFoundError : identifiant de source inconnu du registre
- DuplicateSourceError : enregistrement d'un identifiant deja pris
- CredentialStoreError : stockage des identifiants illisible
"""


class CineRadarError(Exception):
    """Erreur de base de l'application."""


class ConfigError(CineRadarError):
    """
    Identifiants refuses par validate_credentials().

    Attributes:
        errors: Liste des messages de validation
    """

    def __init__(self, errors: list[str], prefix: str = "Invalid credentials") -> None:
        self.errors = list(errors)
        super().__init__(f"{prefix}: {', '.join(self.errors)}")


class SourceConnectionError(CineRadarError, ConnectionError):
    """Echec reseau ou d'authentification lors d'un appel a une source."""


class SourceNotFoundError(CineRadarError):
    """Identifiant de source inconnu du registre."""

    def __init__(self, source_id: str) -> None:
        self.source_id = source_id
        super().__init__(f'Source "{source_id}" not found')


class DuplicateSourceError(CineRadarError):
    """Identifiant de source deja enregistre (sans remplacement autorise)."""

    def __init__(self, source_id: str) -> None:
        self.source_id = source_id
        super().__init__(f'Source "{source_id}" is already registered')


class CredentialStoreError(CineRadarError):
    """Stockage des identifiants illisible (fichier corrompu)."""
