"""Formatted values shown in the result panel."""

from __future__ import annotations

from dataclasses import dataclass

from mrusim.kinematics import VelocityResult

PLACEHOLDER = "--"


@dataclass(frozen=True)
class DisplayValues:
    """Text for the primary and secondary result metrics."""

    velocity: str
    km_per_hour: str
    pace: str


def format_velocity(result: VelocityResult | None) -> str:
    if result is None:
        return PLACEHOLDER
    return f"{result.velocity_mps + 0.0:.2f}"


def format_km_per_hour(result: VelocityResult | None) -> str:
    if result is None:
        return PLACEHOLDER
    return f"{result.km_per_hour + 0.0:.1f}"


def format_pace(result: VelocityResult | None) -> str:
    """Pace to one decimal; undefined pace at zero velocity is shown as ``0``."""
    if result is None:
        return PLACEHOLDER
    pace = result.pace_min_per_km
    if pace is None:
        return "0"
    return f"{pace:.1f}"


def display_values(result: VelocityResult | None) -> DisplayValues | None:
    """Return the formatted metrics, or None when there is nothing to show."""
    if result is None:
        return None
    return DisplayValues(
        velocity=format_velocity(result),
        km_per_hour=format_km_per_hour(result),
        pace=format_pace(result),
    )
