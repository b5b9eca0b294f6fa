"""Tests for the query engine -- filtering, pagination and clamping."""
import math

import pytest

from cryptoicons.catalog.builder import build_catalog
from cryptoicons.catalog.query import clamp_page, count_pages, filter_icons, query

QUERIES = ["", "   ", "eth", "ETH", "coin", "zzz", "(", "-", "e"]


def _is_subsequence(sub, seq) -> bool:
    it = iter(seq)
    return all(any(x is y for y in it) for x in sub)


class TestMatching:
    def test_eth_scenario(self, crypto_catalog):
        view = query(crypto_catalog, "ETH", 1, 10)
        assert view.total_matches == 1
        assert view.total_pages == 1
        assert view.page_items[0].display_name == "Ethereum"

    def test_empty_query_matches_everything(self, crypto_catalog):
        view = query(crypto_catalog, "", 1, 10)
        assert view.total_matches == 3

    def test_whitespace_query_matches_everything(self, sample_catalog):
        assert query(sample_catalog, "   ", 1, 10).total_matches == len(sample_catalog)

    def test_case_insensitive(self, sample_catalog):
        lower = query(sample_catalog, "monero", 1, 10)
        upper = query(sample_catalog, "MONERO", 1, 10)
        assert [i.id for i in lower.matches] == [i.id for i in upper.matches] == ["Monero (XMR)"]

    def test_matches_symbol(self, sample_catalog):
        view = query(sample_catalog, "usdt", 1, 10)
        assert [i.display_name for i in view.matches] == ["Tether"]

    def test_matches_id_only(self):
        """The id keeps separators the display name drops."""
        catalog = build_catalog(["crypto-name.svg", "other.svg"])
        view = query(catalog, "o-n", 1, 10)
        assert [i.id for i in view.matches] == ["crypto-name"]

    def test_matches_display_name(self, sample_catalog):
        view = query(sample_catalog, "classic", 1, 10)
        assert [i.symbol for i in view.matches] == ["ETC"]

    def test_no_matches(self, sample_catalog):
        view = query(sample_catalog, "zzz", 1, 10)
        assert view.total_matches == 0
        assert view.total_pages == 1
        assert view.page_index == 1
        assert view.page_items == ()

    def test_surrounding_whitespace_is_part_of_the_query(self):
        catalog = build_catalog(["crypto-name.svg", "Wrapped Token (WT).svg"])
        assert query(catalog, "name ", 1, 10).total_matches == 0
        assert query(catalog, " token", 1, 10).total_matches == 1
        assert query(catalog, "name", 1, 10).total_matches == 1

    def test_lowercase_comparison_not_casefold(self):
        """A sharp s is not folded to "ss"."""
        catalog = build_catalog(["Stra\u00dfe (STR).svg"])
        assert query(catalog, "ss", 1, 10).total_matches == 0
        assert query(catalog, "STRA\u00df", 1, 10).total_matches == 1

    def test_filter_icons_empty_returns_catalog_order(self, sample_catalog):
        assert filter_icons(sample_catalog, "") == sample_catalog.icons


class TestProperties:
    @pytest.mark.parametrize("q", QUERIES)
    def test_matches_are_ordered_subsequence(self, sample_catalog, q):
        view = query(sample_catalog, q, 1, 5)
        assert _is_subsequence(view.matches, sample_catalog.icons)

    @pytest.mark.parametrize("q", QUERIES)
    def test_total_bounded_by_catalog(self, sample_catalog, q):
        view = query(sample_catalog, q, 1, 5)
        assert view.total_matches <= len(sample_catalog)
        if not q.strip():
            assert view.total_matches == len(sample_catalog)

    @pytest.mark.parametrize("q", QUERIES)
    def test_idempotent(self, sample_catalog, q):
        assert query(sample_catalog, q, 2, 3) == query(sample_catalog, q, 2, 3)

    @pytest.mark.parametrize("page_size", [1, 2, 3, 5, 7, 12, 50])
    @pytest.mark.parametrize("q", ["", "e", "coin"])
    def test_pages_cover_matches_exactly(self, sample_catalog, q, page_size):
        first = query(sample_catalog, q, 1, page_size)
        assert first.total_pages == max(1, math.ceil(first.total_matches / page_size))
        pages = [query(sample_catalog, q, p, page_size).page_items for p in range(1, first.total_pages + 1)]
        assert tuple(item for page in pages for item in page) == first.matches
        assert all(len(page) <= page_size for page in pages)


class TestPagination:
    def test_slices_requested_page(self, sample_catalog):
        view = query(sample_catalog, "", 2, 5)
        assert view.page_index == 2
        assert view.page_items == sample_catalog.icons[5:10]

    def test_last_page_is_partial(self, sample_catalog):
        view = query(sample_catalog, "", 3, 5)
        assert len(view.page_items) == len(sample_catalog) - 10

    def test_page_below_range_is_clamped(self, sample_catalog):
        view = query(sample_catalog, "", 0, 5)
        assert view.page_index == 1

    def test_page_above_range_is_clamped(self, sample_catalog):
        view = query(sample_catalog, "", 99, 5)
        assert view.page_index == view.total_pages == 3
        assert view.page_items == sample_catalog.icons[10:]

    @pytest.mark.parametrize("bad", [0, -1])
    def test_non_positive_page_size_rejected(self, sample_catalog, bad):
        with pytest.raises(ValueError):
            query(sample_catalog, "", 1, bad)

    def test_empty_catalog_has_one_page(self):
        view = query(build_catalog([]), "", 1, 10)
        assert view.total_pages == 1
        assert view.page_items == ()


class TestHelpers:
    def test_count_pages(self):
        assert count_pages(0, 10) == 1
        assert count_pages(10, 10) == 1
        assert count_pages(11, 10) == 2

    def test_count_pages_rejects_zero(self):
        with pytest.raises(ValueError):
            count_pages(5, 0)

    def test_clamp_page(self):
        assert clamp_page(0, 3) == 1
        assert clamp_page(2, 3) == 2
        assert clamp_page(9, 3) == 3
        assert clamp_page(5, 0) == 1
