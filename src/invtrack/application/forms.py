from __future__ import annotations

from invtrack.domain.errors import ValidationError


def is_blank(value) -> bool:
    return value is None or str(value).strip() == ""


def check_required(fields: dict, required: dict[str, str]) -> None:
    """Presence check only; value rules belong to the server."""
    missing = [label for key, label in required.items() if is_blank(fields.get(key))]
    if missing:
        raise ValidationError(f"Required: {', '.join(missing)}.")
