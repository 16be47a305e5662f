"""LLM Function Tools - expose Python functions to chat-completion tool calling."""

__version__ = "0.1.0"

# Conversation orchestration
from .agents import (
    ChatCompletionClient,
    ConversationOrchestrator,
    ConversationState,
    LiteLLMChatClient,
    ToolCallOutput,
    ToolCallRequest,
)

# Custom exceptions
from .exceptions import (
    ConfigurationException,
    DecodeError,
    EncodeError,
    EncodingFailure,
    ExpectedSingleTextResponse,
    InvalidArguments,
    RoundLimitExceeded,
    ToolCallingException,
    UnknownFunctionCall,
)

# Schema inference
from .schema import ParameterSpec, ToolSchema, build_parameters_schema, infer_schema

# Tool helpers
from .tools import (
    FunctionExecutor,
    ParameterCodec,
    ToolDefinition,
    ToolEntry,
    ToolExecutor,
    ToolRegistry,
    tool,
)

# Configuration utilities
from .utils import (
    create_litellm_client,
    create_orchestrator,
    get_available_providers,
    get_default_models,
    get_max_rounds,
    load_environment,
)

__all__ = [
    "__version__",
    "ChatCompletionClient",
    "LiteLLMChatClient",
    "ConversationOrchestrator",
    "ConversationState",
    "ToolCallOutput",
    "ToolCallRequest",
    "ParameterSpec",
    "ToolSchema",
    "build_parameters_schema",
    "infer_schema",
    "FunctionExecutor",
    "ParameterCodec",
    "ToolDefinition",
    "ToolEntry",
    "ToolExecutor",
    "ToolRegistry",
    "tool",
    "load_environment",
    "create_litellm_client",
    "create_orchestrator",
    "get_available_providers",
    "get_default_models",
    "get_max_rounds",
    # Exceptions
    "ToolCallingException",
    "ConfigurationException",
    "DecodeError",
    "EncodeError",
    "EncodingFailure",
    "ExpectedSingleTextResponse",
    "InvalidArguments",
    "RoundLimitExceeded",
    "UnknownFunctionCall",
]
