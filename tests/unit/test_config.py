"""Unit tests for configuration utilities."""

from typing import Any
from unittest.mock import patch

import pytest

from llm_function_tools.agents.chat_client import LiteLLMChatClient
from llm_function_tools.agents.orchestrator import ConversationOrchestrator
from llm_function_tools.exceptions import ConfigurationException
from llm_function_tools.tools.tool import ToolEntry
from llm_function_tools.utils.config import (
    MAX_ROUNDS_ENV_VAR,
    create_litellm_client,
    create_orchestrator,
    get_available_providers,
    get_default_models,
    get_max_rounds,
    load_environment,
)


class TestConfigurationUtils:
    """Test configuration utility functions."""

    @pytest.mark.unit
    @patch("llm_function_tools.utils.config.load_dotenv")
    def test_load_environment(self, mock_load_dotenv: Any) -> None:
        """Test loading environment variables."""
        load_environment()
        mock_load_dotenv.assert_called_once()

    @pytest.mark.unit
    def test_get_default_models(self) -> None:
        """Test default model names per provider."""
        models = get_default_models()

        assert models["openai"] == "gpt-4o-mini"
        assert models["anthropic"] == "claude-3-haiku-20240307"

    @pytest.mark.unit
    @patch("llm_function_tools.utils.config.os.getenv")
    @patch("llm_function_tools.utils.config.load_dotenv")
    def test_get_available_providers(
        self, mock_load_dotenv: Any, mock_getenv: Any
    ) -> None:
        """Test provider availability follows the API key variables."""
        mock_getenv.side_effect = (
            lambda key: "openai-key" if key == "OPENAI_API_KEY" else None
        )

        assert get_available_providers() == {"openai": True, "anthropic": False}


class TestMaxRounds:
    """Test reading the round limit from the environment."""

    @pytest.mark.unit
    @patch("llm_function_tools.utils.config.os.getenv")
    @patch("llm_function_tools.utils.config.load_dotenv")
    def test_default_when_unset(self, mock_load_dotenv: Any, mock_getenv: Any) -> None:
        """Test the default applies when the variable is missing."""
        mock_getenv.return_value = None

        assert get_max_rounds() == 10
        mock_getenv.assert_called_with(MAX_ROUNDS_ENV_VAR)

    @pytest.mark.unit
    @patch("llm_function_tools.utils.config.os.getenv")
    @patch("llm_function_tools.utils.config.load_dotenv")
    def test_default_when_blank(self, mock_load_dotenv: Any, mock_getenv: Any) -> None:
        """Test a blank value is treated as unset."""
        mock_getenv.return_value = "  "

        assert get_max_rounds() == 10

    @pytest.mark.unit
    @patch("llm_function_tools.utils.config.os.getenv")
    @patch("llm_function_tools.utils.config.load_dotenv")
    def test_explicit_value(self, mock_load_dotenv: Any, mock_getenv: Any) -> None:
        """Test a positive integer is used as given."""
        mock_getenv.return_value = "4"

        assert get_max_rounds() == 4

    @pytest.mark.unit
    @pytest.mark.parametrize("raw_value", ["many", "2.5"])
    @patch("llm_function_tools.utils.config.os.getenv")
    @patch("llm_function_tools.utils.config.load_dotenv")
    def test_non_integer_raises(
        self, mock_load_dotenv: Any, mock_getenv: Any, raw_value: str
    ) -> None:
        """Test non-integer values raise ConfigurationException."""
        mock_getenv.return_value = raw_value

        with pytest.raises(ConfigurationException, match="must be an integer") as exc_info:
            get_max_rounds()

        assert exc_info.value.config_key == MAX_ROUNDS_ENV_VAR
        assert exc_info.value.config_value == raw_value

    @pytest.mark.unit
    @patch("llm_function_tools.utils.config.os.getenv")
    @patch("llm_function_tools.utils.config.load_dotenv")
    def test_zero_raises(self, mock_load_dotenv: Any, mock_getenv: Any) -> None:
        """Test values below one raise ConfigurationException."""
        mock_getenv.return_value = "0"

        with pytest.raises(ConfigurationException, match="at least 1"):
            get_max_rounds()


class TestClientFactories:
    """Test client and orchestrator factories."""

    @pytest.mark.unit
    @patch("llm_function_tools.utils.config.os.getenv")
    @patch("llm_function_tools.utils.config.load_dotenv")
    def test_create_litellm_client_openai_model(
        self, mock_load_dotenv: Any, mock_getenv: Any
    ) -> None:
        """Test creating a client with OpenAI key inference."""
        mock_getenv.side_effect = (
            lambda key: "openai-key" if key == "OPENAI_API_KEY" else None
        )

        client = create_litellm_client()

        assert isinstance(client, LiteLLMChatClient)
        assert client.model == "gpt-4o-mini"
        assert client.api_key == "openai-key"

    @pytest.mark.unit
    @patch("llm_function_tools.utils.config.os.getenv")
    @patch("llm_function_tools.utils.config.load_dotenv")
    def test_create_litellm_client_claude_model(
        self, mock_load_dotenv: Any, mock_getenv: Any
    ) -> None:
        """Test creating a client with Anthropic key inference."""
        mock_getenv.side_effect = (
            lambda key: "anthropic-key" if key == "ANTHROPIC_API_KEY" else None
        )

        client = create_litellm_client(model="claude-3-haiku-20240307", max_tokens=500)

        assert client.api_key == "anthropic-key"
        assert client.max_tokens == 500

    @pytest.mark.unit
    @patch("llm_function_tools.utils.config.os.getenv")
    @patch("llm_function_tools.utils.config.load_dotenv")
    def test_create_litellm_client_unknown_model_no_key(
        self, mock_load_dotenv: Any, mock_getenv: Any
    ) -> None:
        """Test that an unknown model without a key raises ValueError."""
        mock_getenv.return_value = None

        with pytest.raises(ValueError, match="API key not found"):
            create_litellm_client(model="mistral/mistral-small")

    @pytest.mark.unit
    @patch("llm_function_tools.utils.config.load_dotenv")
    def test_create_orchestrator(
        self, mock_load_dotenv: Any, weather_tool: ToolEntry
    ) -> None:
        """Test the orchestrator is wired to a client and registry."""
        orchestrator = create_orchestrator(
            [weather_tool], model="gpt-4o", api_key="explicit-key", max_rounds=3
        )

        assert isinstance(orchestrator, ConversationOrchestrator)
        assert isinstance(orchestrator.client, LiteLLMChatClient)
        assert orchestrator.client.model == "gpt-4o"
        assert orchestrator.registry.lookup("get_weather") is weather_tool
        assert orchestrator.max_rounds == 3

    @pytest.mark.unit
    @patch("llm_function_tools.utils.config.os.getenv")
    @patch("llm_function_tools.utils.config.load_dotenv")
    def test_create_orchestrator_reads_round_limit(
        self, mock_load_dotenv: Any, mock_getenv: Any
    ) -> None:
        """Test the round limit falls back to the environment variable."""
        mock_getenv.side_effect = lambda key: "7" if key == MAX_ROUNDS_ENV_VAR else None

        orchestrator = create_orchestrator([], api_key="explicit-key")

        assert orchestrator.max_rounds == 7
