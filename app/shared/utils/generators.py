"""ID and value generators (CUID, invite tokens, slugs)."""

import re
import secrets
import unicodedata

from cuid2 import cuid_wrapper

cuid_generator = cuid_wrapper()

INVITE_TOKEN_BYTES = 32
_SLUG_STRIP_RE = re.compile(r"[^a-z0-9\s-]")
_SLUG_DASH_RE = re.compile(r"[\s_-]+")


def generate_cuid() -> str:
    """Generate a collision-resistant unique identifier (CUID2).

    Returns:
        A new CUID string.
    """
    result = cuid_generator()
    if not isinstance(result, str):
        raise TypeError(
            f"Expected str from cuid_generator, got {type(result).__name__}"
        )
    return result


def generate_invite_token() -> str:
    """Return a URL-safe random token for invitation links (64 hex chars)."""
    return secrets.token_hex(INVITE_TOKEN_BYTES)


def slugify(value: str) -> str:
    """Lower-case ASCII slug: accents folded, punctuation dropped, runs of spaces/dashes collapsed.

    Turkish dotless i and similar letters are folded to their ASCII base first.
    """
    folded = value.translate(str.maketrans("ıİşŞğĞçÇöÖüÜ", "iIsSgGcCoOuU"))
    ascii_value = (
        unicodedata.normalize("NFKD", folded).encode("ascii", "ignore").decode("ascii")
    )
    slug = _SLUG_STRIP_RE.sub("", ascii_value.lower().strip())
    return _SLUG_DASH_RE.sub("-", slug).strip("-")
