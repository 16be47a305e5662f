"""Shared pytest configuration and fixtures for the test suite."""

import os
from collections.abc import Callable
from typing import Any
from unittest.mock import Mock

import pytest

from llm_function_tools.tools.tool import ToolEntry


def get_weather(location: str, unit: str = "celsius") -> dict[str, Any]:
    """Get the current weather in a given location.

    Args:
        location: The city and state, e.g. San Francisco, CA
        unit: Temperature unit to report in.
    """
    return {"temperature": 23, "unit": unit}


@pytest.fixture
def weather_tool() -> ToolEntry:
    """``get_weather(location, unit="celsius")`` as a tool entry."""
    return ToolEntry.from_function(get_weather)


@pytest.fixture
def make_tool_call() -> Callable[..., Mock]:
    """Factory for LiteLLM-style ``tool_calls`` items."""

    def _make(call_id: str, name: str, arguments: Any = "{}") -> Mock:
        tool_call = Mock()
        tool_call.id = call_id
        tool_call.type = "function"
        tool_call.function = Mock()
        tool_call.function.name = name
        tool_call.function.arguments = arguments
        return tool_call

    return _make


@pytest.fixture
def make_response() -> Callable[..., Mock]:
    """Factory for LiteLLM-style chat-completion responses with one choice."""

    def _make(content: str | None = None, tool_calls: list[Mock] | None = None) -> Mock:
        response = Mock()
        response.choices = [Mock()]
        response.choices[0].message.content = content
        response.choices[0].message.tool_calls = tool_calls
        return response

    return _make


@pytest.fixture
def sample_api_key() -> str:
    """Sample API key for testing."""
    return "test-api-key-12345"


class SecureTestConfig:
    """Test configuration that doesn't expose API keys in repr."""

    def __init__(self, openai_key: str | None, anthropic_key: str | None) -> None:
        self._openai_key = openai_key
        self._anthropic_key = anthropic_key

    def __getitem__(self, key: str) -> Any:
        if key == "openai_api_key":
            return self._openai_key
        elif key == "anthropic_api_key":
            return self._anthropic_key
        else:
            raise KeyError(key)

    def __repr__(self) -> str:
        return "SecureTestConfig(keys_available=True)"


@pytest.fixture
def integration_test_setup() -> SecureTestConfig:
    """Setup fixture for integration tests - requires real API keys."""
    openai_key = os.getenv("OPENAI_API_KEY")
    anthropic_key = os.getenv("ANTHROPIC_API_KEY")

    if not openai_key and not anthropic_key:
        pytest.skip(
            "Integration tests require real API keys. Set OPENAI_API_KEY or "
            "ANTHROPIC_API_KEY environment variables."
        )

    return SecureTestConfig(openai_key=openai_key, anthropic_key=anthropic_key)
