"""Shared utilities: datetime, generators, slugs."""

from app.shared.utils.datetime import (
    ensure_utc,
    parse_api_datetime,
    start_of_day_utc,
    utc_now,
)
from app.shared.utils.generators import generate_cuid, generate_invite_token, slugify

__all__ = [
    "generate_cuid",
    "generate_invite_token",
    "slugify",
    "utc_now",
    "ensure_utc",
    "parse_api_datetime",
    "start_of_day_utc",
]
