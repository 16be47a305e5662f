"""Chat-completion clients used by the conversation orchestrator."""

from abc import ABC, abstractmethod
from typing import Any

from litellm import acompletion


class ChatCompletionClient(ABC):
    """Abstract base class for chat-completion transports."""

    @abstractmethod
    async def complete(
        self,
        messages: list[dict[str, Any]],
        tools: list[dict[str, Any]],
        **options: Any,
    ) -> Any:
        """Send one chat-completion request.

        Args:
            messages: Conversation history in chat-completion format
            tools: Tool advertisement dicts; may be empty
            **options: Request options such as model or temperature

        Returns:
            The provider response, with ``choices[i].message`` carrying
            ``content`` and ``tool_calls``
        """
        pass


class LiteLLMChatClient(ChatCompletionClient):
    """Chat client using LiteLLM for multi-provider support."""

    def __init__(
        self,
        model: str,
        api_key: str | None = None,
        max_tokens: int = 1000,
    ):
        """Initialize the LiteLLM client.

        Args:
            model: The model name (e.g., 'gpt-4o-mini', 'claude-3-haiku-20240307')
            api_key: The API key for authentication
            max_tokens: Maximum tokens for response (default: 1000)

        Raises:
            ValueError: If model or api_key is None
        """
        if model is None:
            raise ValueError("Model is required")
        if api_key is None:
            raise ValueError("API key is required")

        self.model = model
        self.api_key = api_key
        self.max_tokens = max_tokens

    async def complete(
        self,
        messages: list[dict[str, Any]],
        tools: list[dict[str, Any]],
        **options: Any,
    ) -> Any:
        request: dict[str, Any] = {
            "model": self.model,
            "messages": messages,
            "max_tokens": self.max_tokens,
            "api_key": self.api_key,
        }
        # Providers reject an empty tools array
        if tools:
            request["tools"] = tools
        request.update(options)
        return await acompletion(**request)
