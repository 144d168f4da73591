"""
Requetes et resultats de verification de presence d'un film.

Ces objets sont transitoires : crees pour chaque element de page detecte,
ils n'ont aucune identite persistante.
"""

from dataclasses import dataclass, field
from typing import Any, Optional


@dataclass(frozen=True)
class ValidationResult:
    """Resultat de validate_credentials() : valide ou liste d'erreurs."""

    valid: bool
    errors: tuple[str, ...] = ()

    @classmethod
    def from_errors(cls, errors: list[str]) -> "ValidationResult":
        return cls(valid=not errors, errors=tuple(errors))


@dataclass(frozen=True)
class ConnectionResult:
    """
    Resultat de test_connection().

    Attributs:
        success: True si l'aller-retour a reussi
        error: Message d'erreur en cas d'echec
        warning: Avertissement non bloquant (ex: acces local limite)
    """

    success: bool
    error: Optional[str] = None
    warning: Optional[str] = None


@dataclass(frozen=True)
class MediaItem:
    """Element de videotheque correspondant a une requete."""

    id: str
    name: str
    year: Optional[int] = None

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "name": self.name, "year": self.year}


@dataclass(frozen=True)
class CheckResult:
    """
    Reponse d'un adaptateur a check_movie().

    Attributs:
        found: True si un element correspondant existe dans la source
        movie: Element trouve (si found)
        error: Diagnostic quand l'adaptateur a absorbe une erreur backend
    """

    found: bool
    movie: Optional[MediaItem] = None
    error: Optional[str] = None

    @classmethod
    def not_found(cls, error: Optional[str] = None) -> "CheckResult":
        return cls(found=False, error=error)


@dataclass(frozen=True)
class MediaQuery:
    """Requete (titre, annee) construite pour un element de page."""

    title: str
    year: Optional[int] = None


@dataclass
class MediaMatch:
    """
    Resultat d'une source pour une requete.

    Une MediaMatch est produite par source active et par requete,
    y compris pour les sources en erreur (observabilite).
    """

    source_id: str
    source_name: str
    found: bool
    item: Optional[MediaItem] = None
    error: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "sourceId": self.source_id,
            "sourceName": self.source_name,
            "found": self.found,
        }
        if self.item is not None:
            data["item"] = self.item.to_dict()
        if self.error is not None:
            data["error"] = self.error
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "MediaMatch":
        item_data = data.get("item")
        item = (
            MediaItem(
                id=str(item_data.get("id", "")),
                name=item_data.get("name", ""),
                year=item_data.get("year"),
            )
            if item_data
            else None
        )
        return cls(
            source_id=data.get("sourceId", ""),
            source_name=data.get("sourceName", ""),
            found=bool(data.get("found")),
            item=item,
            error=data.get("error"),
        )


@dataclass
class QueryResult:
    """Agregat des MediaMatch de toutes les sources actives pour une requete."""

    query: MediaQuery
    matches: list[MediaMatch] = field(default_factory=list)

    @property
    def found(self) -> bool:
        """True si au moins une source a trouve le film."""
        return any(match.found for match in self.matches)

    @property
    def matching_sources(self) -> list[MediaMatch]:
        """Sous-liste des sources ayant trouve le film."""
        return [match for match in self.matches if match.found]
