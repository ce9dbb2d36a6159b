"""Normalization of raw field entries into "number or absent" values."""

from __future__ import annotations

import logging
import math
import numbers

logger = logging.getLogger(__name__)

# A normalized field: a finite float, or None when nothing has been entered.
RawField = float | None


def _parse_number(raw: object) -> float | None:
    """Return *raw* as a finite float, or None if it cannot be read as one."""
    if isinstance(raw, bool):
        return None
    if isinstance(raw, numbers.Real):
        source: object = raw
    elif isinstance(raw, str):
        source = raw.strip()
    else:
        return None
    try:
        value = float(source)  # type: ignore[arg-type]
    except (OverflowError, ValueError):
        return None
    if not math.isfinite(value):
        return None
    # -0.0 would otherwise print as "-0.00"
    return value + 0.0


def normalize(raw: object, previous: RawField = None) -> RawField:
    """Normalize a raw entry for one field.

    Empty input clears the field.  A parseable real number (negative,
    fractional and scientific notation included) replaces it.  Anything else
    is treated as a transient keystroke and *previous* is kept unchanged.
    No range checks happen here.
    """
    if raw is None:
        return None
    if isinstance(raw, str) and not raw.strip():
        return None

    value = _parse_number(raw)
    if value is None:
        logger.debug("Ignoring unparseable entry %r, keeping %r", raw, previous)
        return previous
    return value
