"""Tool definitions and executors for chat-completion tool calling.

Provides the ``ToolDefinition`` frozen dataclass describing a tool to the model,
the ``ToolExecutor`` interface that runs it, and ``ToolEntry`` which pairs the two.
``ToolEntry.from_function`` and the ``tool`` decorator build entries straight from
an annotated, documented Python function.
"""

import inspect
from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, overload

from llm_function_tools.exceptions import (
    DecodeError,
    EncodeError,
    EncodingFailure,
    InvalidArguments,
)
from llm_function_tools.schema.docstrings import (
    DEFAULT_FUNCTION_DESCRIPTION,
    parse_summary,
)
from llm_function_tools.schema.inference import ToolSchema
from llm_function_tools.schema.parameters import (
    build_parameters_schema,
    parameters_from_function,
)
from llm_function_tools.tools.codec import ParameterCodec


@dataclass(frozen=True)
class ToolDefinition:
    """Immutable description of a tool as advertised to the model.

    Args:
        name: Tool name. Uniqueness is enforced by the registry.
        description: Human-readable description of what the tool does.
        parameters: Root ``object`` schema of the tool's arguments.
    """

    name: str
    description: str
    parameters: ToolSchema

    def __post_init__(self) -> None:
        if self.parameters.type != "object":
            raise ValueError(
                f"Parameters schema of tool '{self.name}' must be an object"
            )

    def to_litellm_schema(self) -> dict[str, Any]:
        """Convert to the OpenAI-format dict expected by LiteLLM.

        Returns:
            A tool definition dict with ``type`` and ``function`` keys.
        """
        return {
            "type": "function",
            "function": {
                "name": self.name,
                "description": self.description,
                "parameters": self.parameters.to_dict(),
            },
        }


class ToolExecutor(ABC):
    """Runs one tool: JSON argument bytes in, JSON result bytes out."""

    @abstractmethod
    async def execute(self, arguments: bytes) -> bytes:
        """Execute the tool.

        Exceptions raised by the tool itself propagate unchanged.

        Args:
            arguments: JSON-encoded arguments sent by the model.

        Returns:
            JSON-encoded result.

        Raises:
            InvalidArguments: If the arguments do not match the tool's
                parameters.
            EncodingFailure: If the result cannot be serialized.
        """
        pass


class FunctionExecutor(ToolExecutor):
    """Executor backed by a plain or ``async`` Python callable."""

    def __init__(self, func: Callable[..., Any], codec: ParameterCodec) -> None:
        self.func = func
        self.codec = codec
        self._positional_only = {
            name
            for name, param in inspect.signature(func).parameters.items()
            if param.kind is inspect.Parameter.POSITIONAL_ONLY
        }

    async def execute(self, arguments: bytes) -> bytes:
        try:
            values = self.codec.decode(arguments)
        except DecodeError as exc:
            detail = "; ".join(exc.errors) or str(exc)
            raise InvalidArguments(self.codec.name, detail) from exc

        args = [
            values.pop(name) for name in list(values) if name in self._positional_only
        ]

        result = self.func(*args, **values)
        if inspect.isawaitable(result):
            result = await result

        try:
            return self.codec.encode(result)
        except EncodeError as exc:
            raise EncodingFailure(self.codec.name, exc) from exc


@dataclass(frozen=True)
class ToolEntry:
    """A tool definition paired with the executor that implements it."""

    definition: ToolDefinition
    executor: ToolExecutor

    @property
    def name(self) -> str:
        return self.definition.name

    @classmethod
    def from_function(
        cls,
        func: Callable[..., Any],
        name: str | None = None,
        description: str | None = None,
    ) -> "ToolEntry":
        """Build a tool entry from an annotated function.

        The tool description defaults to the first docstring line and parameter
        descriptions are read from its ``Args:`` section.

        Args:
            func: Function, coroutine function or bound method to expose.
            name: Tool name (default: the function's ``__name__``).
            description: Tool description (default: docstring summary).

        Returns:
            A ``ToolEntry`` whose executor calls ``func``.
        """
        tool_name = name or func.__name__
        parameters = parameters_from_function(func)
        definition = ToolDefinition(
            name=tool_name,
            description=description
            or parse_summary(inspect.getdoc(func))
            or DEFAULT_FUNCTION_DESCRIPTION,
            parameters=build_parameters_schema(parameters),
        )
        codec = ParameterCodec(parameters, name=tool_name)
        return cls(definition=definition, executor=FunctionExecutor(func, codec))


@overload
def tool(func: Callable[..., Any]) -> ToolEntry: ...


@overload
def tool(
    func: None = None,
    *,
    name: str | None = None,
    description: str | None = None,
) -> Callable[[Callable[..., Any]], ToolEntry]: ...


def tool(
    func: Callable[..., Any] | None = None,
    *,
    name: str | None = None,
    description: str | None = None,
) -> ToolEntry | Callable[[Callable[..., Any]], ToolEntry]:
    """Decorator turning a function into a ``ToolEntry``.

    Usable bare (``@tool``) or with overrides (``@tool(name="lookup")``). The
    original function stays reachable as ``entry.executor.func``.
    """

    def decorate(target: Callable[..., Any]) -> ToolEntry:
        return ToolEntry.from_function(target, name=name, description=description)

    if func is not None:
        return decorate(func)
    return decorate
