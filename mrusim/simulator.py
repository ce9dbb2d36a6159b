"""Simulator session: the current input cell and everything derived from it.

``MotionSimulator`` is the host-side object a UI talks to.  Each field edit is
normalized, then the whole evaluation and projection are recomputed from the
two current values.  The only asynchronous step is the optional analogy
request, guarded by an input generation counter so a late answer for an
older input pair is dropped instead of shown.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from mrusim.analogy import TextExplainer, safe_explain
from mrusim.inputs import RawField, normalize
from mrusim.kinematics import EMPTY_EVALUATION, Evaluation, evaluate
from mrusim.projection import Projection, project_evaluation

logger = logging.getLogger(__name__)

INPUT_PLACEHOLDER = "0.00"


@dataclass(frozen=True)
class FieldView:
    """What an input control needs to render one field."""

    label: str
    unit: str
    value: RawField
    placeholder: str
    error: str | None


@dataclass(frozen=True)
class SimulatorState:
    """Immutable snapshot of the simulator after the latest change."""

    distance_m: RawField
    time_s: RawField
    evaluation: Evaluation
    projection: Projection | None
    analogy: str | None
    generation: int


class MotionSimulator:
    """Recomputes velocity and projection whenever an input changes."""

    def __init__(self, explainer: TextExplainer | None = None) -> None:
        self._explainer = explainer
        self._distance: RawField = None
        self._time: RawField = None
        self._evaluation: Evaluation = EMPTY_EVALUATION
        self._projection: Projection | None = None
        self._analogy: str | None = None
        self._generation = 0

    # -- inputs ------------------------------------------------------------

    def set_distance(self, raw: object) -> SimulatorState:
        self._apply(normalize(raw, self._distance), self._time)
        return self.state

    def set_time(self, raw: object) -> SimulatorState:
        self._apply(self._distance, normalize(raw, self._time))
        return self.state

    def reset(self) -> SimulatorState:
        """Clear both fields, errors, result, curve and analogy text."""
        self._apply(None, None)
        self._analogy = None
        return self.state

    def _apply(self, distance: RawField, time: RawField) -> None:
        if (distance, time) != (self._distance, self._time):
            self._generation += 1
            self._analogy = None
        self._distance = distance
        self._time = time
        self._evaluation = evaluate(distance, time)
        self._projection = project_evaluation(distance, time, self._evaluation)

    # -- derived state -----------------------------------------------------

    @property
    def state(self) -> SimulatorState:
        return SimulatorState(
            distance_m=self._distance,
            time_s=self._time,
            evaluation=self._evaluation,
            projection=self._projection,
            analogy=self._analogy,
            generation=self._generation,
        )

    def field_views(self) -> tuple[FieldView, FieldView]:
        """Return the (distance, time) views for the input controls."""
        return (
            FieldView(
                label="Distancia",
                unit="m",
                value=self._distance,
                placeholder=INPUT_PLACEHOLDER,
                error=self._evaluation.distance_message,
            ),
            FieldView(
                label="Tiempo",
                unit="s",
                value=self._time,
                placeholder=INPUT_PLACEHOLDER,
                error=self._evaluation.time_message,
            ),
        )

    # -- analogy -----------------------------------------------------------

    async def request_analogy(self) -> str | None:
        """Ask the explainer about the current result.

        Returns the text that was applied, or None when there is no result,
        no explainer, or the inputs changed while the request was pending.
        """
        result = self._evaluation.result
        if result is None or self._explainer is None:
            return None
        if self._distance is None or self._time is None:
            return None

        generation = self._generation
        text = await safe_explain(self._explainer, result.velocity_mps, self._distance, self._time)

        if generation != self._generation:
            logger.debug(
                "Discarding stale analogy for generation %d (current %d)",
                generation,
                self._generation,
            )
            return None
        self._analogy = text
        return text
