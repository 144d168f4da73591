"""
Correspondance approximative titre/annee entre une requete et une source.

Deux predicats independants combines par un ET logique:
- Titre: egalite insensible a la casse apres trim, ou inclusion dans un sens
  ou dans l'autre ("Matrix" correspond a "The Matrix")
- Annee: tolerance de +/-1 an (sortie FR vs sortie originale), toujours
  vrai si l'une des annees est absente

Les predicats sont purs et totaux. Une chaine vide est incluse dans toute
chaine : les appelants doivent exiger un titre non vide en amont.

Parmi les candidats qui passent le filtre, best_match() retient le plus
proche selon token_sort_ratio (rapidfuzz).
"""

from typing import Callable, Iterable, Optional, TypeVar

from rapidfuzz import fuzz, utils

T = TypeVar("T")


def fuzzy_match_title(search_term: str, item_title: str) -> bool:
    """Egalite ou inclusion, insensible a la casse (symetrique)."""
    s1 = search_term.lower().strip()
    s2 = item_title.lower().strip()
    return s1 == s2 or s2 in s1 or s1 in s2


def fuzzy_match_year(year1: Optional[int], year2: Optional[int]) -> bool:
    """Vrai si une annee manque, sinon ecart <= 1 an."""
    if not year1 or not year2:
        return True
    return abs(year1 - year2) <= 1


def fuzzy_match(
    search_term: str,
    item_title: str,
    search_year: Optional[int],
    item_year: Optional[int],
) -> bool:
    """Correspondance combinee titre ET annee."""
    return fuzzy_match_title(search_term, item_title) and fuzzy_match_year(
        search_year, item_year
    )


def title_similarity(query_title: str, candidate_title: str) -> float:
    """
    Score de similarite des titres (0-100).

    token_sort_ratio : insensible a l'ordre des mots, apres normalisation
    par default_process (minuscules, ponctuation retiree).
    """
    return fuzz.token_sort_ratio(
        query_title, candidate_title, processor=utils.default_process
    )


def best_match(
    title: str,
    year: Optional[int],
    candidates: Iterable[T],
    key: Callable[[T], tuple[str, Optional[int]]],
) -> Optional[T]:
    """
    Retourne le meilleur candidat correspondant a (title, year).

    Args:
        title: Titre recherche
        year: Annee recherchee (optionnelle)
        candidates: Candidats retournes par le backend, dans leur ordre
        key: Extrait (titre, annee) d'un candidat

    Returns:
        Le candidat le plus similaire parmi ceux qui passent fuzzy_match(),
        le premier en cas d'egalite, ou None
    """
    best: Optional[T] = None
    best_score = -1.0
    for candidate in candidates:
        item_title, item_year = key(candidate)
        # Un titre vide serait inclus dans toute requete
        if not item_title or not fuzzy_match(title, item_title, year, item_year):
            continue
        score = title_similarity(title, item_title)
        if score > best_score:
            best, best_score = candidate, score
    return best
