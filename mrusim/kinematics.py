"""Validation and velocity derivation for uniform rectilinear motion.

Turns a pair of normalized fields (distance in metres, time in seconds) into
per-field errors and, when both are usable, a :class:`VelocityResult`.  All
invalid states are returned as data; nothing in this module raises.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

from mrusim.constants import MPS_TO_KPH, PACE_REFERENCE_M, SECONDS_PER_MINUTE
from mrusim.inputs import RawField

# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------


class FieldError(StrEnum):
    """Out-of-range condition for a single input field."""

    NEGATIVE_DISTANCE = "negative_distance"
    ZERO_TIME = "zero_time"
    NEGATIVE_TIME = "negative_time"

    @property
    def message(self) -> str:
        """User-facing text shown under the offending field."""
        return ERROR_MESSAGES[self]


ERROR_MESSAGES: dict[FieldError, str] = {
    FieldError.NEGATIVE_DISTANCE: "La distancia no puede ser negativa",
    FieldError.ZERO_TIME: "División por cero",
    FieldError.NEGATIVE_TIME: "El tiempo debe ser positivo",
}


# ---------------------------------------------------------------------------
# Results
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class VelocityResult:
    """Velocity derived from a valid distance/time pair."""

    velocity_mps: float

    @property
    def km_per_hour(self) -> float:
        return self.velocity_mps * MPS_TO_KPH

    @property
    def pace_min_per_km(self) -> float | None:
        """Minutes per kilometre, or None when standing still."""
        if self.velocity_mps <= 0:
            return None
        return PACE_REFERENCE_M / self.velocity_mps / SECONDS_PER_MINUTE


@dataclass(frozen=True)
class Evaluation:
    """Outcome of evaluating one input snapshot."""

    distance_error: FieldError | None
    time_error: FieldError | None
    result: VelocityResult | None

    @property
    def is_valid(self) -> bool:
        return self.result is not None

    @property
    def distance_message(self) -> str | None:
        return self.distance_error.message if self.distance_error else None

    @property
    def time_message(self) -> str | None:
        return self.time_error.message if self.time_error else None


EMPTY_EVALUATION = Evaluation(distance_error=None, time_error=None, result=None)


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------


def check_distance(distance: RawField) -> FieldError | None:
    """Zero distance is allowed; only negative values are rejected."""
    if distance is not None and distance < 0:
        return FieldError.NEGATIVE_DISTANCE
    return None


def check_time(time: RawField) -> FieldError | None:
    if time is None:
        return None
    if time == 0:
        return FieldError.ZERO_TIME
    if time < 0:
        return FieldError.NEGATIVE_TIME
    return None


def evaluate(distance: RawField, time: RawField) -> Evaluation:
    """Validate both fields and derive the velocity when possible.

    Both fields are always checked so that their messages can be shown at
    the same time.  An absent field carries no error but suppresses the
    result.
    """
    distance_error = check_distance(distance)
    time_error = check_time(time)

    if distance is None or time is None or distance_error or time_error:
        return Evaluation(distance_error=distance_error, time_error=time_error, result=None)

    # time > 0 is guaranteed by check_time
    return Evaluation(
        distance_error=None,
        time_error=None,
        result=VelocityResult(velocity_mps=distance / time),
    )
