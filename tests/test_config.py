"""Tests for I18nConfig validation and errors.

Python 3.13+.
"""

from __future__ import annotations

import dataclasses

import pytest
from hypothesis import given
from hypothesis import strategies as st

from lazylocale import ConfigurationError, I18nConfig, LazyLocaleError, LoaderError


class TestI18nConfig:
    """Test configuration defaults and validation."""

    def test_defaults(self) -> None:
        """Every field has a usable default."""
        config = I18nConfig()

        assert config.fallback_locale is None
        assert config.initial_locale is None
        assert config.loading_delay == 0.2
        assert config.warn_on_missing_messages is True
        assert config.handle_missing_message is None
        assert config.startup_locale is None

    def test_frozen(self) -> None:
        """Configuration is immutable."""
        config = I18nConfig(fallback_locale="en")
        with pytest.raises(dataclasses.FrozenInstanceError):
            config.fallback_locale = "de"  # type: ignore[misc]

    @pytest.mark.parametrize(
        ("fallback", "initial", "expected"),
        [
            ("en", None, "en"),
            ("en", "de", "de"),
            (None, "de", "de"),
            (None, None, None),
        ],
    )
    def test_startup_locale(
        self, fallback: str | None, initial: str | None, expected: str | None
    ) -> None:
        """initial_locale is preferred over fallback_locale."""
        config = I18nConfig(fallback_locale=fallback, initial_locale=initial)
        assert config.startup_locale == expected

    @pytest.mark.parametrize("delay", [-0.1, float("nan"), float("inf")])
    def test_invalid_loading_delay(self, delay: float) -> None:
        """Negative or non-finite delays are rejected."""
        with pytest.raises(ConfigurationError, match="loading_delay"):
            I18nConfig(loading_delay=delay)

    def test_configuration_error_is_value_error(self) -> None:
        """Callers catching ValueError also catch configuration errors."""
        with pytest.raises(ValueError):  # noqa: PT011
            I18nConfig(loading_delay=-1)

    def test_non_callable_handler_rejected(self) -> None:
        """handle_missing_message must be callable."""
        with pytest.raises(ConfigurationError, match="callable"):
            I18nConfig(handle_missing_message="oops")  # type: ignore[arg-type]

    @given(delay=st.floats(min_value=0, max_value=3600, allow_nan=False))
    def test_valid_delays_accepted(self, delay: float) -> None:
        """Any finite non-negative delay is valid."""
        assert I18nConfig(loading_delay=delay).loading_delay == delay


class TestErrors:
    """Test the exception hierarchy."""

    def test_hierarchy(self) -> None:
        """Library errors share one base class."""
        assert issubclass(LoaderError, LazyLocaleError)
        assert issubclass(ConfigurationError, LazyLocaleError)

    def test_loader_error_message(self) -> None:
        """LoaderError names the locale and the first failure."""
        error = LoaderError("de", (ValueError("bad json"), OSError("gone")))

        assert error.locale == "de"
        assert len(error.failures) == 2
        assert str(error) == "2 loaders failed for locale 'de': ValueError: bad json"

    def test_single_failure_message(self) -> None:
        """Singular wording for one failure."""
        error = LoaderError("de", (KeyError("x"),))
        assert str(error).startswith("1 loader failed for locale 'de'")
