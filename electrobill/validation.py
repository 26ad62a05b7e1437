from __future__ import annotations

import re
from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from typing import Any

from .time_utils import parse_iso_datetime


# Largest amount the billing API stores (decimal(12,2))
MAX_AMOUNT = Decimal("9999999999.99")

_EMAIL = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


class ValidationError(ValueError):
    """
    Form input problem, raised before anything is sent to the API.

    errors maps field name -> message so templates can show them inline.
    """

    def __init__(self, message: str, errors: dict[str, str] | None = None):
        super().__init__(message)
        self.message = message
        self.errors = errors or {}


@dataclass(frozen=True)
class FormPolicy:
    """
    Central policy layer for one form:
    - writable_fields: what the form may send to the API (anything else is ignored)
    - required_on_create: fields required when creating
    - numeric_fields / integer_fields: coerced to float / int, must be >= 0
    - boolean_fields: checkboxes; absent means False
    - date_fields: YYYY-MM-DD or ISO-8601 datetimes
    - email_fields: must look like an address
    """
    writable_fields: frozenset[str]
    required_on_create: frozenset[str] = frozenset()
    numeric_fields: frozenset[str] = frozenset()
    integer_fields: frozenset[str] = frozenset()
    boolean_fields: frozenset[str] = frozenset()
    date_fields: frozenset[str] = frozenset()
    email_fields: frozenset[str] = frozenset()
    labels: dict[str, str] = field(default_factory=dict)

    def label(self, name: str) -> str:
        if name in self.labels:
            return self.labels[name]
        # camelCase -> "Camel case"
        words = re.sub(r"(?<!^)(?=[A-Z])", " ", name).lower()
        return words[:1].upper() + words[1:]


_TRUE = {"1", "true", "on", "yes", "y"}


def _coerce(name: str, raw: str, policy: FormPolicy) -> Any:
    label = policy.label(name)

    if name in policy.integer_fields:
        stripped = raw.strip()
        if "e" in stripped.lower() or "." in stripped:
            raise ValueError(f"{label} must be a whole number")
        try:
            value = int(stripped)
        except ValueError:
            raise ValueError(f"{label} must be a whole number") from None
        if value < 0:
            raise ValueError(f"{label} cannot be negative")
        return value

    if name in policy.numeric_fields:
        try:
            value = Decimal(raw.strip().replace(",", ""))
        except InvalidOperation:
            raise ValueError(f"{label} must be a number") from None
        if not value.is_finite():
            raise ValueError(f"{label} must be a number")
        if value < 0:
            raise ValueError(f"{label} cannot be negative")
        if value > MAX_AMOUNT:
            raise ValueError(f"{label} is too large")
        return float(value)

    if name in policy.date_fields:
        try:
            parse_iso_datetime(raw)
        except ValueError:
            raise ValueError(f"{label} must be a valid date") from None
        return raw.strip()

    value = raw.strip()
    if name in policy.email_fields and not _EMAIL.match(value):
        raise ValueError(f"{label} must be a valid email address")
    return value


def validate_form(form, policy: FormPolicy, *, partial: bool = False) -> dict:
    """
    Validates + normalizes submitted form data against a FormPolicy.
    Returns a JSON-ready dict holding only writable fields.

    partial=False: create semantics (enforce required_on_create)
    partial=True: edit semantics (required fields may not be blanked, the
    rest is optional)

    Blank optional values are dropped rather than sent as "".
    """
    if form is None:
        form = {}

    errors: dict[str, str] = {}
    cleaned: dict[str, Any] = {}

    for name in sorted(policy.writable_fields):
        if name in policy.boolean_fields:
            raw = form.get(name)
            cleaned[name] = raw is not None and str(raw).strip().lower() in _TRUE
            continue

        raw = form.get(name)
        present = raw is not None
        blank = not present or str(raw).strip() == ""

        if blank:
            required = name in policy.required_on_create
            if required and (not partial or present):
                errors[name] = f"{policy.label(name)} is required"
            continue

        try:
            cleaned[name] = _coerce(name, str(raw), policy)
        except ValueError as exc:
            errors[name] = str(exc)

    if errors:
        raise ValidationError("Please correct the highlighted fields", errors)
    return cleaned
