"""Tests for locale_utils.py.

Covers normalize_locale, get_system_locale and Accept-Language parsing
and negotiation.

Python 3.13+.
"""

import os
from unittest.mock import patch

import pytest
from hypothesis import given
from hypothesis import strategies as st

from lazylocale.locale_utils import (
    get_locale_from_accept_language,
    get_system_locale,
    normalize_locale,
    parse_accept_language,
)
from tests.strategies import locale_codes


class TestNormalizeLocale:
    """Test normalize_locale function."""

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("en", "en"),
            ("en_US", "en-US"),
            ("pt_BR.UTF-8", "pt-BR"),
            ("sr_RS@latin", "sr-RS"),
            ("de_DE.ISO-8859-1@euro", "de-DE"),
            ("zh-Hant-TW", "zh-Hant-TW"),
        ],
    )
    def test_normalize(self, raw: str, expected: str) -> None:
        """Encoding and modifier are stripped, underscores become hyphens."""
        assert normalize_locale(raw) == expected

    @given(locale=locale_codes())
    def test_hyphenated_codes_unchanged(self, locale: str) -> None:
        """Already normalized codes are a fixed point."""
        assert normalize_locale(locale) == locale


class TestGetSystemLocale:
    """Test get_system_locale with OS and environment detection."""

    def test_getlocale_success(self) -> None:
        """OS-level locale.getlocale() result is used first."""
        with patch("locale.getlocale", return_value=("en_US", "UTF-8")):
            assert get_system_locale() == "en-US"

    def test_getlocale_c_filtered(self) -> None:
        """'C' from getlocale() falls through to the environment."""
        with patch("locale.getlocale", return_value=("C", None)):  # noqa: SIM117
            with patch.dict(os.environ, {"LANG": "fr_FR"}, clear=True):
                assert get_system_locale() == "fr-FR"

    def test_getlocale_c_utf8_filtered(self) -> None:
        """'C.UTF-8' counts as the C pseudo-locale."""
        with patch("locale.getlocale", return_value=("C.UTF-8", None)):  # noqa: SIM117
            with patch.dict(os.environ, {"LANG": "it_IT"}, clear=True):
                assert get_system_locale() == "it-IT"

    def test_getlocale_valueerror_fallback(self) -> None:
        """getlocale() raising ValueError falls through to the environment."""
        with patch("locale.getlocale", side_effect=ValueError("mock error")):  # noqa: SIM117
            with patch.dict(os.environ, {"LANG": "pt_BR"}, clear=True):
                assert get_system_locale() == "pt-BR"

    def test_lc_all_priority(self) -> None:
        """LC_ALL has the highest priority among environment variables."""
        with patch("locale.getlocale", return_value=(None, None)):
            env = {"LC_ALL": "de_DE", "LC_MESSAGES": "fr_FR", "LANG": "en_US"}
            with patch.dict(os.environ, env, clear=True):
                assert get_system_locale() == "de-DE"

    def test_lc_messages_before_lang(self) -> None:
        """LC_MESSAGES is used if LC_ALL is not set."""
        with patch("locale.getlocale", return_value=(None, None)):
            env = {"LC_MESSAGES": "fr_FR", "LANG": "en_US"}
            with patch.dict(os.environ, env, clear=True):
                assert get_system_locale() == "fr-FR"

    def test_env_posix_filtered(self) -> None:
        """POSIX in the environment is skipped."""
        with patch("locale.getlocale", return_value=(None, None)):
            env = {"LC_ALL": "POSIX", "LANG": "ja_JP.UTF-8"}
            with patch.dict(os.environ, env, clear=True):
                assert get_system_locale() == "ja-JP"

    def test_undetermined_returns_none(self) -> None:
        """Nothing usable yields None by default."""
        with patch("locale.getlocale", return_value=(None, None)):  # noqa: SIM117
            with patch.dict(os.environ, {}, clear=True):
                assert get_system_locale() is None

    def test_undetermined_raises_when_requested(self) -> None:
        """raise_on_failure=True turns the None result into RuntimeError."""
        with patch("locale.getlocale", return_value=(None, None)):  # noqa: SIM117
            with patch.dict(os.environ, {"LANG": "C"}, clear=True):
                with pytest.raises(RuntimeError, match="Could not determine"):
                    get_system_locale(raise_on_failure=True)


class TestParseAcceptLanguage:
    """Test Accept-Language header parsing."""

    def test_orders_by_quality(self) -> None:
        """Higher quality first; missing q means 1.0."""
        assert parse_accept_language("en;q=0.7, da, en-GB;q=0.8") == ["da", "en-GB", "en"]

    def test_equal_quality_keeps_header_order(self) -> None:
        """Ties are stable."""
        assert parse_accept_language("fr, de, it;q=1.0") == ["fr", "de", "it"]

    @pytest.mark.parametrize(
        "header",
        ["", "*", "de;q=0", "de;q=abc", " , ;q=0.5", "en;q=nan", "en;q=inf", "en;q=-inf"],
    )
    def test_dropped_entries(self, header: str) -> None:
        """Wildcards, zero weights and malformed entries are dropped."""
        assert parse_accept_language(header) == []

    def test_non_finite_weight_does_not_break_order(self) -> None:
        """A NaN weight is dropped instead of corrupting the sort."""
        assert parse_accept_language("de;q=0.5, en;q=nan, fr;q=0.9") == ["fr", "de"]

    def test_weight_above_one_clamped(self) -> None:
        """Out-of-range weights count as 1 and keep header order."""
        assert parse_accept_language("fr;q=2, de, it;q=0.5") == ["fr", "de", "it"]

    def test_duplicates_removed(self) -> None:
        """A locale appears once, at its best position."""
        assert parse_accept_language("de;q=0.5, en, de") == ["en", "de"]

    def test_underscore_tags_normalized(self) -> None:
        """Non-standard underscore tags are hyphenated."""
        assert parse_accept_language("pt_BR, pt;q=0.9") == ["pt-BR", "pt"]

    @given(
        entries=st.lists(
            st.tuples(locale_codes(max_segments=2), st.integers(min_value=1, max_value=10)),
            max_size=8,
        )
    )
    def test_qualities_non_increasing(self, entries: list[tuple[str, int]]) -> None:
        """Result order never puts a lower weight before a higher one."""
        header = ", ".join(f"{tag};q={weight / 10}" for tag, weight in entries)
        best: dict[str, int] = {}
        for tag, weight in entries:
            best[tag] = max(weight, best.get(tag, 0))

        result = parse_accept_language(header)
        weights = [best[tag] for tag in result]

        assert set(result) == set(best)
        assert weights == sorted(weights, reverse=True)


class TestGetLocaleFromAcceptLanguage:
    """Test picking a locale from a header."""

    def test_first_preference_without_available(self) -> None:
        """Without available locales the top preference wins."""
        assert get_locale_from_accept_language("de-AT, en;q=0.5") == "de-AT"

    def test_empty_header(self) -> None:
        """Empty header yields None."""
        assert get_locale_from_accept_language("") is None

    def test_negotiates_against_available(self) -> None:
        """Territory is dropped when only the language is available."""
        assert get_locale_from_accept_language("de-AT, en;q=0.5", ["en", "de"]) == "de"

    def test_exact_match_preferred(self) -> None:
        """An exact available match wins over later preferences."""
        header = "en-GB, en;q=0.9"
        assert get_locale_from_accept_language(header, ["en", "en-GB"]) == "en-GB"

    def test_case_insensitive(self) -> None:
        """Matching ignores case."""
        result = get_locale_from_accept_language("EN-us", ["en-US"])
        assert result is not None
        assert result.lower() == "en-us"

    def test_no_match(self) -> None:
        """No overlap yields None."""
        assert get_locale_from_accept_language("ja, ko;q=0.5", ["en", "de"]) is None
