"""Locale resolution and message catalog tests."""

import pytest

from app.shared.messages import MESSAGES, resolve_locale, supported_locales, translate


@pytest.mark.parametrize(
    ("header", "expected"),
    [
        (None, "en"),
        ("", "en"),
        ("tr", "tr"),
        ("tr-TR,tr;q=0.9,en;q=0.8", "tr"),
        ("de-DE, en;q=0.5", "en"),
        ("fr", "en"),
    ],
)
def test_resolve_locale(header: str | None, expected: str) -> None:
    assert resolve_locale(header) == expected


def test_resolve_locale_falls_back_to_configured_default() -> None:
    assert resolve_locale("fr", default="tr") == "tr"
    assert resolve_locale("fr", default="xx") == "en"


def test_catalogs_define_the_same_codes() -> None:
    assert set(MESSAGES["tr"]) == set(MESSAGES["en"])
    assert supported_locales() == ["en", "tr"]


def test_translate_fills_params() -> None:
    assert translate("password_min_length", "en", {"min": 8}) == (
        "Password must be at least 8 characters"
    )
    assert translate("password_min_length", "tr", {"min": 8}) == (
        "Şifre en az 8 karakter olmalıdır"
    )


def test_translate_unknown_code_returns_none() -> None:
    assert translate("no_such_rule", "en") is None


def test_translate_missing_params_returns_template() -> None:
    assert translate("number_range", "en") == "Must be between {min} and {max}"
