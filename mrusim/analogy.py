"""Claude API integration for natural-language velocity analogies.

The analogy is a best-effort extra on top of the numeric result.  Every
failure mode (no API key, feature disabled, API errors, empty answers) is
turned into a fixed Spanish message here, so callers never see an exception.
"""

from __future__ import annotations

import logging
from typing import Any, Protocol

from mrusim.config import Settings

logger = logging.getLogger(__name__)

MISSING_KEY_MESSAGE = "Configura tu API Key para obtener analogías inteligentes."
DISABLED_MESSAGE = "Las analogías inteligentes están desactivadas."
EMPTY_RESPONSE_MESSAGE = "No se pudo generar una analogía en este momento."
ERROR_MESSAGE = "Hubo un error al conectar con el asistente inteligente."

ANALOGY_SYSTEM_PROMPT = "Actúa como un profesor de física experto."


class TextExplainer(Protocol):
    """Anything that can describe a velocity in plain words."""

    async def explain(self, velocity: float, distance: float, time: float) -> str: ...


def build_analogy_prompt(velocity: float, distance: float, time: float) -> str:
    """Build the user prompt asking for a real-world comparison."""
    return (
        f"El usuario ha calculado una velocidad de {velocity:.2f} metros por segundo "
        f"(basado en {distance:g}m en {time:g}s).\n\n"
        "Por favor, proporciona:\n"
        "1. Una comparación con el mundo real para esta velocidad "
        "(ej. ¿es tan rápido como una persona caminando, un coche, un avión, la luz?).\n"
        f"2. Una breve explicación intuitiva de lo que significa recorrer {distance:g} "
        f"metros en {time:g} segundos.\n\n"
        "Mantén la respuesta breve (máximo 3 frases), educativa y en español.\n"
        "No uses formato Markdown complejo, solo texto plano o viñetas simples."
    )


def _create_client(settings: Settings) -> Any:
    """Create an async Anthropic client, or None if the API key is not set.

    The SDK retries 429, 5xx and 529 responses with exponential backoff.
    """
    import anthropic

    if not settings.anthropic_api_key:
        return None
    return anthropic.AsyncAnthropic(
        api_key=settings.anthropic_api_key,
        max_retries=settings.analogy_max_retries,
        timeout=settings.analogy_timeout_s,
    )


def _response_text(message: Any) -> str:
    if not message.content:
        return ""
    block = message.content[0]
    text = block.text if hasattr(block, "text") else str(block)
    return text.strip()


class ClaudeExplainer:
    """Velocity analogies generated by Claude."""

    def __init__(self, settings: Settings) -> None:
        self._settings = settings

    async def explain(self, velocity: float, distance: float, time: float) -> str:
        client = _create_client(self._settings)
        if client is None:
            logger.warning("ANTHROPIC_API_KEY is not set; returning fallback analogy")
            return MISSING_KEY_MESSAGE

        prompt = build_analogy_prompt(velocity, distance, time)
        try:
            async with client:
                message = await client.messages.create(
                    model=self._settings.analogy_model,
                    max_tokens=self._settings.analogy_max_tokens,
                    system=ANALOGY_SYSTEM_PROMPT,
                    messages=[{"role": "user", "content": prompt}],
                )
        except Exception as e:
            logger.warning("Analogy API call failed after retries: %s", e)
            return ERROR_MESSAGE

        return _response_text(message) or EMPTY_RESPONSE_MESSAGE


class StaticExplainer:
    """Returns the same text for every request."""

    def __init__(self, text: str) -> None:
        self.text = text
        self.calls: list[tuple[float, float, float]] = []

    async def explain(self, velocity: float, distance: float, time: float) -> str:
        self.calls.append((velocity, distance, time))
        return self.text


async def safe_explain(
    explainer: TextExplainer,
    velocity: float,
    distance: float,
    time: float,
) -> str:
    """Call *explainer*, converting any failure into the fallback message."""
    try:
        text = await explainer.explain(velocity, distance, time)
    except Exception as e:
        logger.warning("Analogy explainer %s failed: %s", type(explainer).__name__, e)
        return ERROR_MESSAGE
    return text or EMPTY_RESPONSE_MESSAGE


def create_explainer(settings: Settings) -> TextExplainer:
    """Return the explainer configured by *settings*."""
    if not settings.analogy_enabled:
        return StaticExplainer(DISABLED_MESSAGE)
    return ClaudeExplainer(settings)
