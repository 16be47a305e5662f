"""Conversation orchestration for multi-round tool calling."""

import asyncio
import json
import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any

from llm_function_tools.agents.chat_client import ChatCompletionClient
from llm_function_tools.exceptions import (
    EncodingFailure,
    ExpectedSingleTextResponse,
    RoundLimitExceeded,
    UnknownFunctionCall,
)
from llm_function_tools.tools.registry import ToolRegistry

logger = logging.getLogger(__name__)

FUNCTION_CALL_OUTPUT = "function_call_output"
DEFAULT_MAX_ROUNDS = 10


def _field(obj: Any, name: str) -> Any:
    """Read a response field by attribute or, for plain dicts, by key."""
    if isinstance(obj, Mapping):
        return obj.get(name)
    return getattr(obj, name, None)


class ConversationState:
    """Append-only message history plus the options sent with every request.

    Options are opaque to the orchestrator and forwarded to the chat client
    unchanged (model identifier, temperature, ...).
    """

    def __init__(
        self,
        messages: Iterable[dict[str, Any]] | None = None,
        options: Mapping[str, Any] | None = None,
    ) -> None:
        self._messages: list[dict[str, Any]] = list(messages or [])
        self._options: dict[str, Any] = dict(options or {})

    @classmethod
    def from_prompt(
        cls,
        message: str,
        system_message: str | None = None,
        **options: Any,
    ) -> "ConversationState":
        """Start a conversation from a user message and optional system prompt."""
        messages: list[dict[str, Any]] = []
        if system_message:
            messages.append({"role": "system", "content": system_message})
        messages.append({"role": "user", "content": message})
        return cls(messages, options)

    @property
    def messages(self) -> list[dict[str, Any]]:
        return list(self._messages)

    @property
    def options(self) -> dict[str, Any]:
        return dict(self._options)

    def append(self, message: dict[str, Any]) -> None:
        self._messages.append(message)

    def extend(self, messages: Iterable[dict[str, Any]]) -> None:
        self._messages.extend(messages)

    def __len__(self) -> int:
        return len(self._messages)


@dataclass(frozen=True)
class ToolCallRequest:
    """A tool invocation requested by the model."""

    id: str
    function_name: str
    arguments: bytes

    @classmethod
    def from_litellm(cls, tool_call: Any) -> "ToolCallRequest":
        """Build a request from a LiteLLM/OpenAI ``tool_calls`` item.

        The item may be an attribute-style object or a plain dict. Arguments
        may arrive as a JSON string or as an already-parsed dict.
        """
        function_call = _field(tool_call, "function")
        name = _field(function_call, "name") or ""
        arguments = _field(function_call, "arguments")

        if arguments is None:
            arguments = "{}"
        if isinstance(arguments, str):
            raw = arguments.encode("utf-8")
        elif isinstance(arguments, bytes):
            raw = arguments
        else:
            raw = json.dumps(arguments).encode("utf-8")

        call_id = _field(tool_call, "id") or name
        return cls(id=call_id, function_name=name, arguments=raw)

    def to_litellm(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "type": "function",
            "function": {
                "name": self.function_name,
                "arguments": self.arguments.decode("utf-8", errors="replace"),
            },
        }


@dataclass(frozen=True)
class ToolCallOutput:
    """The encoded result of one tool call, correlated by call id."""

    call_id: str
    output: str
    type: str = FUNCTION_CALL_OUTPUT

    def to_message(self) -> dict[str, Any]:
        """Render as a chat-completion ``tool`` message."""
        return {"role": "tool", "tool_call_id": self.call_id, "content": self.output}


def extract_tool_calls(response: Any) -> list[ToolCallRequest]:
    """Collect the tool calls of every choice in a chat-completion response.

    Responses may be LiteLLM objects or plain OpenAI-shaped dicts.
    """
    calls: list[ToolCallRequest] = []
    for choice in _field(response, "choices") or []:
        message = _field(choice, "message")
        for tool_call in _field(message, "tool_calls") or []:
            calls.append(ToolCallRequest.from_litellm(tool_call))
    return calls


def final_text(response: Any) -> str:
    """Return the text of a response that has exactly one choice.

    Raises:
        ExpectedSingleTextResponse: If there is not exactly one choice or its
            content is not text.
    """
    choices = _field(response, "choices") or []
    if len(choices) != 1:
        raise ExpectedSingleTextResponse(response)
    content = _field(_field(choices[0], "message"), "content")
    if not isinstance(content, str):
        raise ExpectedSingleTextResponse(response)
    return content


class ConversationOrchestrator:
    """Drives the request / dispatch cycle until the model stops calling tools.

    Each round sends the conversation and the registry's tool definitions to the
    chat client. Requested tools run one after another in call order; their
    outputs are appended to the conversation and the next round starts. The
    first response without tool calls is returned unchanged.
    """

    def __init__(
        self,
        client: ChatCompletionClient,
        registry: ToolRegistry,
        max_rounds: int | None = DEFAULT_MAX_ROUNDS,
    ) -> None:
        """Initialize the orchestrator.

        Args:
            client: Chat-completion transport.
            registry: Tools the model may call. Only read, never modified.
            max_rounds: Maximum number of requests per run. ``None`` removes
                the limit.

        Raises:
            ValueError: If max_rounds is smaller than 1
        """
        if max_rounds is not None and max_rounds < 1:
            raise ValueError("max_rounds must be at least 1")

        self.client = client
        self.registry = registry
        self.max_rounds = max_rounds

    async def run(self, state: ConversationState) -> Any:
        """Run the conversation to completion.

        Args:
            state: Conversation to continue. Assistant tool-call messages and
                tool outputs are appended to it.

        Returns:
            The first chat-completion response that requests no tool calls.

        Raises:
            UnknownFunctionCall: If the model calls a tool that is not registered.
            InvalidArguments: If a call's arguments fail to decode.
            EncodingFailure: If a tool's result cannot be encoded.
            RoundLimitExceeded: If the model still calls tools in the last round.
        """
        tools = self.registry.to_litellm_tools()
        round_number = 0

        try:
            while True:
                round_number += 1
                logger.info(
                    "Starting round %d with %d message(s)", round_number, len(state)
                )
                response = await self.client.complete(
                    state.messages, tools, **state.options
                )

                calls = extract_tool_calls(response)
                if not calls:
                    logger.info("Conversation finished after %d round(s)", round_number)
                    return response

                if self.max_rounds is not None and round_number >= self.max_rounds:
                    raise RoundLimitExceeded(self.max_rounds)

                outputs = await self.dispatch(calls)
                if not outputs:
                    return response

                state.append(_assistant_message(response, calls))
                state.extend(output.to_message() for output in outputs)
        except asyncio.CancelledError:
            logger.info("Conversation cancelled during round %d", round_number)
            raise

    async def dispatch(self, calls: Iterable[ToolCallRequest]) -> list[ToolCallOutput]:
        """Execute tool calls sequentially, in the order given.

        The first failing call aborts the whole batch.

        Args:
            calls: Tool-call requests of one round.

        Returns:
            One output per call, in call order.
        """
        outputs: list[ToolCallOutput] = []
        for call in calls:
            outputs.append(await self._dispatch_call(call))
        return outputs

    async def _dispatch_call(self, call: ToolCallRequest) -> ToolCallOutput:
        entry = self.registry.lookup(call.function_name)
        if entry is None:
            raise UnknownFunctionCall(call.function_name)

        logger.debug("Dispatching tool '%s' for call %s", call.function_name, call.id)
        output = await entry.executor.execute(call.arguments)

        try:
            text = output.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise EncodingFailure(call.function_name, exc) from exc

        return ToolCallOutput(call_id=call.id, output=text)

    async def ask(
        self,
        message: str,
        system_message: str | None = None,
        **options: Any,
    ) -> str:
        """Run a fresh conversation and return the final text.

        Args:
            message: The user message to send
            system_message: Optional system message to set context
            **options: Request options forwarded to the chat client

        Returns:
            The content of the single final choice

        Raises:
            ExpectedSingleTextResponse: If the final response is not one text choice
        """
        state = ConversationState.from_prompt(message, system_message, **options)
        response = await self.run(state)
        return final_text(response)


def _assistant_message(response: Any, calls: list[ToolCallRequest]) -> dict[str, Any]:
    """Assistant turn that carries the round's tool calls."""
    content = None
    for choice in _field(response, "choices") or []:
        content = _field(_field(choice, "message"), "content")
        if content is not None:
            break
    return {
        "role": "assistant",
        "content": content,
        "tool_calls": [call.to_litellm() for call in calls],
    }
