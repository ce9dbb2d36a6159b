"""Velocity-vs-time projection at fixed distance.

Holding the distance constant, ``v = d / t`` decays hyperbolically with time.
The projection samples that curve over a window around the current operating
point so the chart can show where the user sits on it.
"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from mrusim.constants import (
    PROJECTION_DECIMALS,
    PROJECTION_END_FRACTION,
    PROJECTION_MIN_START_S,
    PROJECTION_SAMPLES,
    PROJECTION_START_FRACTION,
)
from mrusim.kinematics import Evaluation


@dataclass(frozen=True)
class ProjectionPoint:
    """One sampled point of the curve."""

    time_s: float
    velocity_mps: float


@dataclass(frozen=True)
class HighlightPoint:
    """The user's current operating point."""

    time_s: float
    velocity_mps: float


@dataclass(frozen=True)
class Projection:
    """Sampled curve plus the highlighted operating point."""

    curve: tuple[ProjectionPoint, ...]
    highlight: HighlightPoint

    @property
    def is_empty(self) -> bool:
        return not self.curve


def sampling_window(time_s: float) -> tuple[float, float]:
    """Return the (start, end) of the sampled time axis for *time_s*."""
    start = max(PROJECTION_MIN_START_S, time_s * PROJECTION_START_FRACTION)
    end = time_s * PROJECTION_END_FRACTION
    return start, end


def project(distance_m: float, time_s: float, current_velocity_mps: float) -> Projection:
    """Sample ``v = distance / t`` across the window around *time_s*.

    Returns an empty curve when the distance is not positive (the curve would
    be flat zero) or the time is not positive.  Sampled velocities are
    rounded for display; the highlight is the caller's point verbatim.
    """
    highlight = HighlightPoint(time_s=time_s, velocity_mps=current_velocity_mps)
    if distance_m <= 0 or time_s <= 0:
        return Projection(curve=(), highlight=highlight)

    start, end = sampling_window(time_s)
    # Below 0.04 s the floored start lies past the end; keep time ascending
    times = np.linspace(min(start, end), max(start, end), PROJECTION_SAMPLES)
    velocities = np.round(distance_m / times, PROJECTION_DECIMALS)

    curve = tuple(
        ProjectionPoint(time_s=float(t), velocity_mps=float(v))
        for t, v in zip(times, velocities, strict=True)
    )
    return Projection(curve=curve, highlight=highlight)


def project_evaluation(
    distance_m: float | None,
    time_s: float | None,
    evaluation: Evaluation,
) -> Projection | None:
    """Build the projection for an evaluated snapshot, or None without a result."""
    if evaluation.result is None or distance_m is None or time_s is None:
        return None
    return project(distance_m, time_s, evaluation.result.velocity_mps)
