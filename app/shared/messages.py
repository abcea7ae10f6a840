"""Localized user-facing messages for validation failures.

Keys are stable rule codes (see app.shared.validation). Templates use
str.format placeholders filled from the failure's params.
"""

from typing import Any

DEFAULT_LOCALE = "en"

MESSAGES: dict[str, dict[str, str]] = {
    "en": {
        "required": "This field is required",
        "invalid_email": "Enter a valid email address",
        "not_string": "Must be a string",
        "name_length": "Must be between {min} and {max} characters",
        "not_blank": "Must not be empty",
        "password_min_length": "Password must be at least {min} characters",
        "password_max_length": "Password must be at most {max} characters",
        "password_composition": (
            "Password must contain at least one uppercase letter, "
            "one lowercase letter and one digit"
        ),
        "invalid_url": "Enter a valid URL",
        "credential_min_length": "Must be at least {min} characters",
        "number_range": "Must be between {min} and {max}",
        "number_min": "Must be at least {min}",
        "not_finite": "Must be a finite number",
        "too_long": "Must be at most {max} characters",
        "invalid_choice": "Must be one of: {choices}",
        "invalid_logo": "Logo must be a base64 image (png, jpeg, jpg, gif, webp, svg)",
        "invalid_date_range": "Start date must not be after end date",
        "invalid_value": "Invalid value",
    },
    "tr": {
        "required": "Bu alan zorunludur",
        "invalid_email": "Geçerli bir e-posta adresi giriniz",
        "not_string": "Metin olmalıdır",
        "name_length": "En az {min}, en fazla {max} karakter olmalıdır",
        "not_blank": "Boş olamaz",
        "password_min_length": "Şifre en az {min} karakter olmalıdır",
        "password_max_length": "Şifre en fazla {max} karakter olabilir",
        "password_composition": (
            "Şifre en az bir büyük harf, bir küçük harf ve bir rakam içermelidir"
        ),
        "invalid_url": "Geçerli bir URL giriniz",
        "credential_min_length": "En az {min} karakter olmalı",
        "number_range": "{min} ile {max} arasında olmalıdır",
        "number_min": "En az {min} olmalıdır",
        "not_finite": "Sonlu bir sayı olmalıdır",
        "too_long": "En fazla {max} karakter olmalıdır",
        "invalid_choice": "Geçersiz değer; izin verilenler: {choices}",
        "invalid_logo": "Logo base64 formatında bir resim olmalıdır (png, jpeg, jpg, gif, webp, svg)",
        "invalid_date_range": "Başlangıç tarihi bitiş tarihinden sonra olamaz",
        "invalid_value": "Geçersiz değer",
    },
}

# Pydantic's own error types mapped onto catalog codes.
PYDANTIC_TYPE_CODES: dict[str, str] = {
    "missing": "required",
    "string_type": "not_string",
    "enum": "invalid_choice",
    "literal_error": "invalid_choice",
}


def supported_locales() -> list[str]:
    return list(MESSAGES)


def resolve_locale(accept_language: str | None, default: str = DEFAULT_LOCALE) -> str:
    """Pick the first supported language from an Accept-Language header.

    Quality values are ignored; order in the header is treated as preference.
    """
    if accept_language:
        for part in accept_language.split(","):
            tag = part.split(";")[0].strip().lower()
            primary = tag.split("-")[0]
            if primary in MESSAGES:
                return primary
    return default if default in MESSAGES else DEFAULT_LOCALE


def translate(code: str, locale: str, params: dict[str, Any] | None = None) -> str | None:
    """Return the localized message for code, or None if the code is unknown."""
    catalog = MESSAGES.get(locale) or MESSAGES[DEFAULT_LOCALE]
    template = catalog.get(code) or MESSAGES[DEFAULT_LOCALE].get(code)
    if template is None:
        return None
    try:
        return template.format(**(params or {}))
    except (KeyError, IndexError):
        return template
