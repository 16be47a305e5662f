"""Tool helpers for LiteLLM tool-calling flows."""

from .codec import ParameterCodec
from .registry import ToolRegistry
from .tool import FunctionExecutor, ToolDefinition, ToolEntry, ToolExecutor, tool

__all__ = [
    "FunctionExecutor",
    "ParameterCodec",
    "ToolDefinition",
    "ToolEntry",
    "ToolExecutor",
    "ToolRegistry",
    "tool",
]
