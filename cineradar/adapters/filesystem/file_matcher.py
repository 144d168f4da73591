"""
Correspondance entre une requete (titre, annee) et des noms de fichiers video.

L'extraction du titre et de l'annee depuis un nom de fichier passe par
guessit, qui gere les conventions courantes:
- Standard: "Movie Name (2010).mkv"
- Points: "Movie.Name.2010.1080p.BluRay.mkv"
- Espaces: "Movie Name 2010.mkv"
- Simple: "Movie Name.mkv" (sans annee)
"""

import re
from dataclasses import dataclass
from functools import lru_cache
from pathlib import PurePath
from typing import Iterable, Optional

from guessit import guessit

from cineradar.services.fuzzy_matcher import best_match

MOVIE_EXTENSIONS: frozenset[str] = frozenset({
    ".mp4", ".mkv", ".avi", ".mov", ".wmv", ".flv",
    ".webm", ".m4v", ".mpg", ".mpeg", ".3gp", ".ts",
    ".m2ts", ".divx", ".xvid",
})

# Patterns a ignorer dans les noms de fichiers (insensible a la casse)
IGNORED_PATTERNS: frozenset[str] = frozenset({"sample", "trailer"})


@dataclass(frozen=True)
class LibraryFile:
    """Fichier video d'une videotheque avec son titre/annee extraits."""

    file_name: str
    title: str
    year: Optional[int] = None

    @classmethod
    def from_file_name(cls, file_name: str) -> "LibraryFile":
        title, year = extract_movie_info(file_name)
        return cls(file_name=file_name, title=title, year=year)


def is_movie_file(file_name: str) -> bool:
    """True si l'extension correspond a un fichier video."""
    return PurePath(file_name).suffix.lower() in MOVIE_EXTENSIONS


def is_ignored_file(file_name: str) -> bool:
    """True pour les extraits (sample, trailer) qui ne sont pas le film."""
    lowered = file_name.lower()
    return any(pattern in lowered for pattern in IGNORED_PATTERNS)


def _clean_title(value: str) -> str:
    return re.sub(r"\s+", " ", re.sub(r"[._]", " ", value)).strip()


@lru_cache(maxsize=4096)
def extract_movie_info(file_name: str) -> tuple[str, Optional[int]]:
    """
    Extrait le titre et l'annee d'un nom de fichier.

    Args:
        file_name: Nom du fichier (sans le chemin)

    Returns:
        Tuple (titre, annee), annee None si absente
    """
    result = guessit(file_name, {"type": "movie"})

    title = result.get("title")
    if isinstance(title, list):
        title = " ".join(str(part) for part in title)
    year = result.get("year")
    if isinstance(year, list):
        year = year[0] if year else None

    if not title:
        # Fallback: nom sans extension nettoye
        title = _clean_title(PurePath(file_name).stem)

    return str(title).strip(), int(year) if year else None


def search_movie_files(
    query_title: str,
    query_year: Optional[int],
    files: Iterable[LibraryFile],
) -> Optional[LibraryFile]:
    """
    Cherche le fichier correspondant le mieux a la requete.

    Args:
        query_title: Titre recherche
        query_year: Annee recherchee (optionnelle)
        files: Fichiers deja analyses (voir LibraryFile.from_file_name)

    Returns:
        Le LibraryFile retenu, ou None
    """
    return best_match(
        query_title.strip(),
        query_year,
        (f for f in files if is_movie_file(f.file_name)),
        key=lambda f: (f.title, f.year),
    )
