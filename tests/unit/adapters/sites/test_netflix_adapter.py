"""
Tests de l'adaptateur Netflix.
"""

import pytest

from cineradar.adapters.sites import NetflixAdapter, parse_document
from tests.fixtures.pages import NETFLIX_BROWSE_PAGE


@pytest.fixture
def adapter() -> NetflixAdapter:
    return NetflixAdapter()


@pytest.fixture
def document():
    return parse_document(NETFLIX_BROWSE_PAGE)


class TestNetflixAdapter:
    def test_handles_netflix(self, adapter: NetflixAdapter) -> None:
        assert adapter.can_handle("www.netflix.com") is True
        assert adapter.can_handle("www.imdb.com") is False

    def test_title_card_uses_fallback_text(self, adapter: NetflixAdapter, document) -> None:
        cards = document.select(".title-card")
        assert [adapter.extract_title(c) for c in cards] == ["Heat", "Collateral"]
        assert adapter.extract_year(cards[0]) is None

    def test_title_card_badge_on_boxart(self, adapter: NetflixAdapter, document) -> None:
        card = document.select_one(".title-card")
        assert adapter.get_badge_parent(card) is card.select_one(".boxart-container")

    def test_jawbone_uses_logo_alt(self, adapter: NetflixAdapter, document) -> None:
        jawbone = document.select_one(".jawBoneContent")
        assert adapter.extract_title(jawbone) == "Inception"
        assert adapter.get_badge_parent(jawbone) is jawbone

    def test_jawbone_falls_back_to_title_text(self, adapter: NetflixAdapter) -> None:
        document = parse_document(
            '<div class="jawBoneContent"><div class="title-title">Ronin</div></div>'
        )
        assert adapter.extract_title(document.div) == "Ronin"

    def test_card_without_anchor_has_no_badge_parent(self, adapter: NetflixAdapter) -> None:
        document = parse_document('<div class="title-card"><p class="fallback-text">Heat</p></div>')
        assert adapter.get_badge_parent(document.div) is None
