# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Sequence

from pydantic import ValidationError as PydanticValidationError

from .base import FieldError

_MISSING_MESSAGES = {
    "missing": "{field} is required",
    "string_type": "{field} must be a string",
}


def format_pydantic_errors(
    exc: PydanticValidationError, *, field_order: Sequence[str] = ()
) -> list[FieldError]:
    """Collapse pydantic errors into one ``FieldError`` per field.

    Only the first error reported for a field is kept. Fields listed in
    ``field_order`` come first, in that order.
    """
    by_field: dict[str, FieldError] = {}

    for error in exc.errors():
        loc = error.get("loc", ())
        field_path = ".".join(str(part) for part in loc if part is not None) or "unknown"
        if field_path in by_field:
            continue

        template = _MISSING_MESSAGES.get(error.get("type", ""))
        if template:
            message = template.format(field=field_path.capitalize())
        else:
            message = error.get("msg", "Invalid value")
        by_field[field_path] = FieldError(field=field_path, message=message)

    ordered = [by_field.pop(name) for name in field_order if name in by_field]
    ordered.extend(by_field.values())
    return ordered


__all__ = ["format_pydantic_errors"]
