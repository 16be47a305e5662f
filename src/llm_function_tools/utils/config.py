"""Configuration utilities for environment-based setup."""

import os
from collections.abc import Iterable

from dotenv import load_dotenv

from llm_function_tools.agents.chat_client import LiteLLMChatClient
from llm_function_tools.agents.orchestrator import (
    DEFAULT_MAX_ROUNDS,
    ConversationOrchestrator,
)
from llm_function_tools.exceptions import ConfigurationException
from llm_function_tools.tools.registry import ToolRegistry
from llm_function_tools.tools.tool import ToolEntry

MAX_ROUNDS_ENV_VAR = "LLM_TOOLS_MAX_ROUNDS"


def load_environment() -> None:
    """Load environment variables from .env file if it exists."""
    load_dotenv()


def get_default_models() -> dict[str, str]:
    """Get default models for each provider.

    Returns:
        Dictionary mapping provider names to default model names
    """
    return {
        "openai": "gpt-4o-mini",
        "anthropic": "claude-3-haiku-20240307",
    }


def get_available_providers() -> dict[str, bool]:
    """Check which providers have API keys available.

    Returns:
        Dictionary mapping provider names to availability status
    """
    load_environment()

    return {
        "openai": os.getenv("OPENAI_API_KEY") is not None,
        "anthropic": os.getenv("ANTHROPIC_API_KEY") is not None,
    }


def get_max_rounds() -> int:
    """Read the round limit from ``LLM_TOOLS_MAX_ROUNDS``.

    Returns:
        The configured limit, or ``DEFAULT_MAX_ROUNDS`` when unset

    Raises:
        ConfigurationException: If the value is not a positive integer
    """
    load_environment()

    raw_value = os.getenv(MAX_ROUNDS_ENV_VAR)
    if raw_value is None or not raw_value.strip():
        return DEFAULT_MAX_ROUNDS

    try:
        max_rounds = int(raw_value)
    except ValueError as e:
        raise ConfigurationException(
            f"{MAX_ROUNDS_ENV_VAR} must be an integer, got '{raw_value}'",
            config_key=MAX_ROUNDS_ENV_VAR,
            config_value=raw_value,
        ) from e

    if max_rounds < 1:
        raise ConfigurationException(
            f"{MAX_ROUNDS_ENV_VAR} must be at least 1, got {max_rounds}",
            config_key=MAX_ROUNDS_ENV_VAR,
            config_value=raw_value,
        )
    return max_rounds


def create_litellm_client(
    model: str | None = None,
    api_key: str | None = None,
    max_tokens: int = 1000,
) -> LiteLLMChatClient:
    """Create a LiteLLM chat client with environment-based configuration.

    Args:
        model: Model name (default: the OpenAI default model)
        api_key: API key (if None, tries to infer from model and environment)
        max_tokens: Maximum tokens for response

    Returns:
        Configured LiteLLMChatClient

    Raises:
        ValueError: If no API key is found and cannot be inferred
    """
    load_environment()

    if model is None:
        model = get_default_models()["openai"]

    if api_key is None:
        # Try to infer API key based on model name
        if model.startswith(("gpt", "o1", "o3", "openai/")):
            api_key = os.getenv("OPENAI_API_KEY")
        elif model.startswith(("claude", "anthropic/")):
            api_key = os.getenv("ANTHROPIC_API_KEY")

    if api_key is None:
        raise ValueError(
            f"API key not found for model '{model}'. Set appropriate environment "
            "variable or pass api_key parameter."
        )

    return LiteLLMChatClient(model=model, api_key=api_key, max_tokens=max_tokens)


def create_orchestrator(
    tools: Iterable[ToolEntry],
    model: str | None = None,
    api_key: str | None = None,
    max_rounds: int | None = None,
    max_tokens: int = 1000,
) -> ConversationOrchestrator:
    """Create a conversation orchestrator backed by LiteLLM.

    Args:
        tools: Tool entries to register; later duplicates win
        model: Model name passed to ``create_litellm_client``
        api_key: API key passed to ``create_litellm_client``
        max_rounds: Round limit (if None, read from ``LLM_TOOLS_MAX_ROUNDS``)
        max_tokens: Maximum tokens per response

    Returns:
        Configured ConversationOrchestrator
    """
    client = create_litellm_client(model=model, api_key=api_key, max_tokens=max_tokens)
    return ConversationOrchestrator(
        client=client,
        registry=ToolRegistry.build(tools),
        max_rounds=max_rounds if max_rounds is not None else get_max_rounds(),
    )
