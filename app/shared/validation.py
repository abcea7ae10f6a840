"""Composable field rules for request contracts.

Each rule is a pure function: value -> RuleFailure | None. A field's rules
all run (no short-circuit inside a field) so independent failures are
reported together; pydantic collects failures across fields in one pass.

Use enforce(...) as an Annotated validator on a pydantic field:

    password: Annotated[str, enforce(min_length(8, "password_min_length"), ...)]

Failures are raised as PydanticCustomError("rule_violation") with the list of
failure codes in ctx["failures"]; app.core.exception_handlers expands them
into one localized message each.
"""

from __future__ import annotations

import math
import re
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass, field
from typing import Any

from email_validator import EmailNotValidError, validate_email
from pydantic import AfterValidator, BeforeValidator
from pydantic_core import PydanticCustomError

from app.core.constants import STORE_NAME_MAX_LENGTH, STORE_URL_MAX_LENGTH
from app.shared.messages import DEFAULT_LOCALE, translate

RULE_VIOLATION = "rule_violation"

PASSWORD_COMPOSITION_RE = re.compile(r"^(?=.*[a-z])(?=.*[A-Z])(?=.*\d)")
STORE_URL_RE = re.compile(
    r"^(https?://)?[a-zA-Z0-9][-a-zA-Z0-9]*(\.[a-zA-Z0-9][-a-zA-Z0-9]*)+(:\d+)?(/.*)?$"
)
LOGO_DATA_URL_RE = re.compile(r"^data:image/(png|jpeg|jpg|gif|webp|svg\+xml);base64,")


@dataclass(frozen=True)
class RuleFailure:
    """A single failed rule: stable code plus template params."""

    code: str
    params: dict[str, Any] = field(default_factory=dict)

    def as_ctx(self) -> dict[str, Any]:
        return {"code": self.code, "params": dict(self.params)}


Rule = Callable[[Any], RuleFailure | None]


def length_between(min_len: int, max_len: int, code: str = "name_length") -> Rule:
    """Trimmed length within [min_len, max_len]."""

    def rule(value: Any) -> RuleFailure | None:
        n = len(str(value).strip())
        if n < min_len or n > max_len:
            return RuleFailure(code, {"min": min_len, "max": max_len})
        return None

    return rule


def min_length(min_len: int, code: str) -> Rule:
    def rule(value: Any) -> RuleFailure | None:
        if len(value) < min_len:
            return RuleFailure(code, {"min": min_len})
        return None

    return rule


def max_length(max_len: int, code: str) -> Rule:
    def rule(value: Any) -> RuleFailure | None:
        if len(value) > max_len:
            return RuleFailure(code, {"max": max_len})
        return None

    return rule


def not_blank() -> Rule:
    def rule(value: Any) -> RuleFailure | None:
        if not str(value).strip():
            return RuleFailure("not_blank")
        return None

    return rule


def matches(pattern: re.Pattern[str], code: str) -> Rule:
    """Value must match pattern (re.search semantics; anchor in the pattern)."""

    def rule(value: Any) -> RuleFailure | None:
        if not pattern.search(value):
            return RuleFailure(code)
        return None

    return rule


def valid_email() -> Rule:
    """Syntax check only; no DNS lookup."""

    def rule(value: Any) -> RuleFailure | None:
        try:
            validate_email(value, check_deliverability=False)
        except EmailNotValidError:
            return RuleFailure("invalid_email")
        return None

    return rule


def number_between(lower: float, upper: float) -> Rule:
    """Inclusive range check. NaN and infinities fail as not_finite."""

    def rule(value: Any) -> RuleFailure | None:
        if not math.isfinite(value):
            return RuleFailure("not_finite")
        if value < lower or value > upper:
            return RuleFailure("number_range", {"min": lower, "max": upper})
        return None

    return rule


def number_at_least(lower: float) -> Rule:
    def rule(value: Any) -> RuleFailure | None:
        if not math.isfinite(value):
            return RuleFailure("not_finite")
        if value < lower:
            return RuleFailure("number_min", {"min": lower})
        return None

    return rule


def one_of(choices: Iterable[str]) -> Rule:
    allowed = tuple(choices)

    def rule(value: Any) -> RuleFailure | None:
        if value not in allowed:
            return RuleFailure("invalid_choice", {"choices": ", ".join(allowed)})
        return None

    return rule


def evaluate(value: Any, rules: Sequence[Rule]) -> list[RuleFailure]:
    """Run every rule against value and return all failures (empty when valid)."""
    return [failure for rule in rules if (failure := rule(value)) is not None]


def _raise_if_failed(value: Any, rules: Sequence[Rule]) -> Any:
    failures = evaluate(value, rules)
    if failures:
        summary = "; ".join(
            translate(f.code, DEFAULT_LOCALE, f.params) or f.code for f in failures
        )
        raise PydanticCustomError(
            RULE_VIOLATION,
            summary.replace("{", "(").replace("}", ")"),
            {"failures": [f.as_ctx() for f in failures]},
        )
    return value


def enforce(*rules: Rule) -> AfterValidator:
    """Annotated validator that runs rules after type coercion."""
    return AfterValidator(lambda value: _raise_if_failed(value, rules))


def precheck(*rules: Rule) -> BeforeValidator:
    """Annotated validator that runs rules on the raw input (e.g. before enum parsing)."""
    return BeforeValidator(lambda value: _raise_if_failed(value, rules))


# Reusable rule chains for the request contracts.
EMAIL_RULES: tuple[Rule, ...] = (valid_email(),)
NAME_RULES: tuple[Rule, ...] = (length_between(2, 100),)
REGISTER_PASSWORD_RULES: tuple[Rule, ...] = (
    min_length(8, "password_min_length"),
    max_length(50, "password_max_length"),
    matches(PASSWORD_COMPOSITION_RE, "password_composition"),
)
PROFILE_PASSWORD_RULES: tuple[Rule, ...] = (
    min_length(6, "password_min_length"),
    matches(PASSWORD_COMPOSITION_RE, "password_composition"),
)
STORE_NAME_RULES: tuple[Rule, ...] = (
    not_blank(),
    max_length(STORE_NAME_MAX_LENGTH, "too_long"),
)
# Leaves room for the https:// prefix added when the URL is normalized.
STORE_URL_RULES: tuple[Rule, ...] = (
    matches(STORE_URL_RE, "invalid_url"),
    max_length(STORE_URL_MAX_LENGTH - len("https://"), "too_long"),
)
CREDENTIAL_RULES: tuple[Rule, ...] = (min_length(32, "credential_min_length"),)
COMMISSION_RATE_RULES: tuple[Rule, ...] = (number_between(0, 100),)
SHIPPING_COST_RULES: tuple[Rule, ...] = (number_at_least(0),)
LOGO_RULES: tuple[Rule, ...] = (matches(LOGO_DATA_URL_RE, "invalid_logo"),)
