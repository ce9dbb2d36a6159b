"""Tests for mrusim.analogy."""

from __future__ import annotations

import sys
from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import pytest

from conftest import FailingExplainer
from mrusim.analogy import (
    DISABLED_MESSAGE,
    EMPTY_RESPONSE_MESSAGE,
    ERROR_MESSAGE,
    MISSING_KEY_MESSAGE,
    ClaudeExplainer,
    StaticExplainer,
    build_analogy_prompt,
    create_explainer,
    safe_explain,
)
from mrusim.config import Settings


def _settings(**overrides: object) -> Settings:
    values: dict[str, object] = {"anthropic_api_key": "sk-test"}
    values.update(overrides)
    return Settings(_env_file=None, **values)  # type: ignore[arg-type]


def _make_mock_anthropic(response_text: str | None) -> MagicMock:
    """Create a mock anthropic module whose async client returns *response_text*."""
    mock_msg = MagicMock()
    mock_msg.content = [] if response_text is None else [MagicMock(text=response_text)]
    mock_client = MagicMock()
    mock_client.messages.create = AsyncMock(return_value=mock_msg)
    mock_client.__aenter__ = AsyncMock(return_value=mock_client)
    mock_client.__aexit__ = AsyncMock(return_value=False)
    mock_module = MagicMock()
    mock_module.AsyncAnthropic.return_value = mock_client
    return mock_module


class TestBuildAnalogyPrompt:
    def test_includes_velocity_two_decimals(self) -> None:
        prompt = build_analogy_prompt(100.0 / 9.58, 100.0, 9.58)
        assert "10.44 metros por segundo" in prompt

    def test_includes_distance_and_time(self) -> None:
        prompt = build_analogy_prompt(10.0, 100.0, 10.0)
        assert "100m en 10s" in prompt
        assert "recorrer 100 metros en 10 segundos" in prompt

    def test_asks_for_short_spanish_answer(self) -> None:
        prompt = build_analogy_prompt(1.0, 1.0, 1.0)
        assert "máximo 3 frases" in prompt
        assert "en español" in prompt


class TestClaudeExplainer:
    @pytest.mark.asyncio
    async def test_missing_key_returns_fallback(self, offline_settings: Settings) -> None:
        explainer = ClaudeExplainer(offline_settings)
        mock_anthropic = _make_mock_anthropic("unused")
        with patch.dict(sys.modules, {"anthropic": mock_anthropic}):
            text = await explainer.explain(10.0, 100.0, 10.0)
        assert text == MISSING_KEY_MESSAGE
        mock_anthropic.AsyncAnthropic.assert_not_called()

    @pytest.mark.asyncio
    async def test_returns_model_text(self) -> None:
        mock_anthropic = _make_mock_anthropic("  Tan rápido como Usain Bolt.  ")
        with patch.dict(sys.modules, {"anthropic": mock_anthropic}):
            text = await ClaudeExplainer(_settings()).explain(10.44, 100.0, 9.58)
        assert text == "Tan rápido como Usain Bolt."

    @pytest.mark.asyncio
    async def test_passes_settings_to_client(self) -> None:
        settings = _settings(analogy_model="claude-test", analogy_max_tokens=123)
        mock_anthropic = _make_mock_anthropic("ok")
        with patch.dict(sys.modules, {"anthropic": mock_anthropic}):
            await ClaudeExplainer(settings).explain(10.0, 100.0, 10.0)

        client_kwargs = mock_anthropic.AsyncAnthropic.call_args.kwargs
        assert client_kwargs["api_key"] == "sk-test"
        assert client_kwargs["max_retries"] == settings.analogy_max_retries
        assert client_kwargs["timeout"] == settings.analogy_timeout_s

        create = mock_anthropic.AsyncAnthropic.return_value.messages.create
        call_kwargs = create.call_args.kwargs
        assert call_kwargs["model"] == "claude-test"
        assert call_kwargs["max_tokens"] == 123
        assert "profesor de física" in call_kwargs["system"]
        assert "10.00 metros por segundo" in call_kwargs["messages"][0]["content"]

    @pytest.mark.asyncio
    async def test_empty_response_returns_fallback(self) -> None:
        mock_anthropic = _make_mock_anthropic("")
        with patch.dict(sys.modules, {"anthropic": mock_anthropic}):
            text = await ClaudeExplainer(_settings()).explain(10.0, 100.0, 10.0)
        assert text == EMPTY_RESPONSE_MESSAGE

    @pytest.mark.asyncio
    async def test_no_content_blocks_returns_fallback(self) -> None:
        mock_anthropic = _make_mock_anthropic(None)
        with patch.dict(sys.modules, {"anthropic": mock_anthropic}):
            text = await ClaudeExplainer(_settings()).explain(10.0, 100.0, 10.0)
        assert text == EMPTY_RESPONSE_MESSAGE

    @pytest.mark.asyncio
    async def test_api_error_returns_fallback(self) -> None:
        mock_anthropic = _make_mock_anthropic("unused")
        create = mock_anthropic.AsyncAnthropic.return_value.messages.create
        create.side_effect = httpx.ConnectError(
            "connection refused",
            request=httpx.Request("POST", "https://api.anthropic.com/v1/messages"),
        )
        with patch.dict(sys.modules, {"anthropic": mock_anthropic}):
            text = await ClaudeExplainer(_settings()).explain(10.0, 100.0, 10.0)
        assert text == ERROR_MESSAGE
        mock_anthropic.AsyncAnthropic.return_value.__aexit__.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_client_closed_after_success(self) -> None:
        mock_anthropic = _make_mock_anthropic("Como un coche en autopista.")
        with patch.dict(sys.modules, {"anthropic": mock_anthropic}):
            await ClaudeExplainer(_settings()).explain(30.0, 300.0, 10.0)
        mock_client = mock_anthropic.AsyncAnthropic.return_value
        mock_client.__aenter__.assert_awaited_once()
        mock_client.__aexit__.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_each_request_uses_its_own_client(self) -> None:
        mock_anthropic = _make_mock_anthropic("ok")
        explainer = ClaudeExplainer(_settings())
        with patch.dict(sys.modules, {"anthropic": mock_anthropic}):
            await explainer.explain(1.0, 1.0, 1.0)
            await explainer.explain(2.0, 2.0, 1.0)
        assert mock_anthropic.AsyncAnthropic.call_count == 2
        assert mock_anthropic.AsyncAnthropic.return_value.__aexit__.await_count == 2


class TestSafeExplain:
    @pytest.mark.asyncio
    async def test_passes_through_text(self) -> None:
        explainer = StaticExplainer("Como un coche en ciudad.")
        text = await safe_explain(explainer, 13.9, 139.0, 10.0)
        assert text == "Como un coche en ciudad."
        assert explainer.calls == [(13.9, 139.0, 10.0)]

    @pytest.mark.asyncio
    async def test_exception_becomes_fallback(self) -> None:
        text = await safe_explain(FailingExplainer(RuntimeError("boom")), 1.0, 1.0, 1.0)
        assert text == ERROR_MESSAGE

    @pytest.mark.asyncio
    async def test_timeout_becomes_fallback(self) -> None:
        text = await safe_explain(FailingExplainer(TimeoutError()), 1.0, 1.0, 1.0)
        assert text == ERROR_MESSAGE

    @pytest.mark.asyncio
    async def test_empty_text_becomes_fallback(self) -> None:
        text = await safe_explain(StaticExplainer(""), 1.0, 1.0, 1.0)
        assert text == EMPTY_RESPONSE_MESSAGE


class TestCreateExplainer:
    def test_enabled_uses_claude(self) -> None:
        assert isinstance(create_explainer(_settings()), ClaudeExplainer)

    @pytest.mark.asyncio
    async def test_disabled_returns_static_message(self) -> None:
        explainer = create_explainer(_settings(analogy_enabled=False))
        assert isinstance(explainer, StaticExplainer)
        assert await explainer.explain(1.0, 1.0, 1.0) == DISABLED_MESSAGE
