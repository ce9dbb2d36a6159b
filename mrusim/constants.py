"""Shared constants for the mrusim kinematics core.

Centralises conversion factors and projection policy used across modules.
"""

from __future__ import annotations

# Speed conversion: meters per second → kilometers per hour
MPS_TO_KPH: float = 3.6

# Pace reference distance (m) and seconds per minute
PACE_REFERENCE_M: float = 1000.0
SECONDS_PER_MINUTE: float = 60.0

# Projection window: 20%–250% of the current time, floored to avoid v → ∞
PROJECTION_START_FRACTION: float = 0.2
PROJECTION_END_FRACTION: float = 2.5
PROJECTION_MIN_START_S: float = 0.1
PROJECTION_SAMPLES: int = 40  # both endpoints included
PROJECTION_DECIMALS: int = 2
