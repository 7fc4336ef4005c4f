"""Form parsing and validation for listing records."""

import math
from collections.abc import Mapping

from listings_admin.domain.errors import ValidationError
from listings_admin.domain.listings import EntityKind


def parse_number(raw: object) -> int | float:
    """Parse a numeric form value, rejecting anything that is not a finite number."""
    if isinstance(raw, bool):
        raise ValueError("must be a number")
    if isinstance(raw, int):
        return raw
    if isinstance(raw, float):
        value = raw
    elif isinstance(raw, str):
        cleaned = raw.strip().replace(",", "")
        if not cleaned:
            raise ValueError("is required")
        try:
            return int(cleaned)
        except ValueError:
            pass
        try:
            value = float(cleaned)
        except ValueError:
            raise ValueError("must be a number") from None
    else:
        raise ValueError("must be a number")
    if not math.isfinite(value):
        raise ValueError("must be a finite number")
    if value.is_integer():
        return int(value)
    return value


def validate_form(kind: EntityKind, fields: Mapping[str, object]) -> dict[str, object]:
    """Return a backend payload for the form or raise ValidationError."""
    payload: dict[str, object] = {}
    errors: dict[str, str] = {}
    for name in kind.text_fields:
        raw = fields.get(name)
        text = raw.strip() if isinstance(raw, str) else ""
        if not text:
            errors[name] = "is required"
            continue
        payload[name] = text
    for name in kind.optional_fields:
        raw = fields.get(name)
        text = str(raw).strip() if raw is not None else ""
        payload[name] = text or None
    for name in kind.numeric_fields:
        raw = fields.get(name)
        if raw is None:
            errors[name] = "is required"
            continue
        try:
            payload[name] = parse_number(raw)
        except ValueError as exc:
            errors[name] = str(exc)
    if errors:
        raise ValidationError(errors)
    return payload
