"""Simulador MRU — uniform rectilinear motion calculator."""

from __future__ import annotations

import asyncio
import logging

import streamlit as st

from mrusim.analogy import create_explainer
from mrusim.charts import velocity_projection_chart
from mrusim.config import get_settings
from mrusim.display import PLACEHOLDER, display_values
from mrusim.simulator import FieldView, MotionSimulator

settings = get_settings()
logging.basicConfig(level=settings.log_level)

st.set_page_config(page_title="Simulador MRU", page_icon="📈", layout="wide")

st.title("Simulador MRU")
st.caption("Cinemática")


# ---------------------------------------------------------------------------
# Session state
# ---------------------------------------------------------------------------
def _simulator() -> MotionSimulator:
    if "simulator" not in st.session_state:
        st.session_state["simulator"] = MotionSimulator(create_explainer(settings))
    return st.session_state["simulator"]


sim = _simulator()


def _on_distance_change() -> None:
    sim.set_distance(st.session_state["distance_raw"])


def _on_time_change() -> None:
    sim.set_time(st.session_state["time_raw"])


def _on_reset() -> None:
    sim.reset()
    st.session_state["distance_raw"] = ""
    st.session_state["time_raw"] = ""


def _fmt_field(value: float | None) -> str:
    return "" if value is None else f"{value:g}"


def _input_control(view: FieldView, key: str, on_change: object) -> None:
    """Text entry for one field; unparseable text keeps the last valid value."""
    st.text_input(
        f"{view.label} ({view.unit})",
        key=key,
        placeholder=view.placeholder,
        on_change=on_change,  # type: ignore[arg-type]
    )
    if view.error:
        st.error(view.error)


# Seed the widgets from the simulator on the first run of a session
st.session_state.setdefault("distance_raw", _fmt_field(sim.state.distance_m))
st.session_state.setdefault("time_raw", _fmt_field(sim.state.time_s))

# ---------------------------------------------------------------------------
# Layout
# ---------------------------------------------------------------------------
col_inputs, col_results = st.columns([1, 2])

with col_inputs:
    head, reset_col = st.columns([3, 1])
    head.subheader("Parámetros")
    reset_col.button("Reiniciar", on_click=_on_reset)

    distance_view, time_view = sim.field_views()
    _input_control(distance_view, "distance_raw", _on_distance_change)
    _input_control(time_view, "time_raw", _on_time_change)

    st.markdown("---")
    st.markdown("**Fórmula Base**")
    st.latex(r"v = \frac{d}{t}")
    st.caption("v · velocidad  ·  d · distancia  ·  t · tiempo")

state = sim.state
result = state.evaluation.result
values = display_values(result)

with col_results:
    c1, c2, c3 = st.columns(3)
    c1.metric("Velocidad Resultante (m/s)", values.velocity if values else PLACEHOLDER)
    if values:
        c2.metric("Km/h", values.km_per_hour)
        c3.metric("Ritmo (min/km)", values.pace)

    st.subheader("Proyección Gráfica")
    st.plotly_chart(velocity_projection_chart(state.projection), use_container_width=True)

    st.subheader("Analogía")
    if st.button("Generar analogía", disabled=result is None):
        with st.spinner("Consultando al asistente..."):
            asyncio.run(sim.request_analogy())

    if sim.state.analogy:
        st.info(sim.state.analogy)
