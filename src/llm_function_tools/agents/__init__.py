"""Chat clients and the tool-calling conversation orchestrator."""

from .chat_client import ChatCompletionClient, LiteLLMChatClient
from .orchestrator import (
    DEFAULT_MAX_ROUNDS,
    FUNCTION_CALL_OUTPUT,
    ConversationOrchestrator,
    ConversationState,
    ToolCallOutput,
    ToolCallRequest,
    extract_tool_calls,
    final_text,
)

__all__ = [
    "ChatCompletionClient",
    "LiteLLMChatClient",
    "ConversationOrchestrator",
    "ConversationState",
    "ToolCallOutput",
    "ToolCallRequest",
    "extract_tool_calls",
    "final_text",
    "DEFAULT_MAX_ROUNDS",
    "FUNCTION_CALL_OUTPUT",
]
