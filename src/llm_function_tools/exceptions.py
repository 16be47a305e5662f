"""Custom exceptions for the LLM function tools package."""

from typing import Any


class ToolCallingException(Exception):
    """Base exception for LLM function tools.

    All custom exceptions in this package should inherit from this base class.
    """

    pass


class ConfigurationException(ToolCallingException):
    """Raised when configuration errors occur.

    This exception is raised when:
    - Required configuration is missing
    - Invalid configuration values are provided
    - Environment setup is incorrect

    Attributes:
        config_key: The configuration key that caused the error
        config_value: The invalid configuration value
    """

    def __init__(
        self,
        message: str,
        config_key: str | None = None,
        config_value: str | None = None,
    ):
        super().__init__(message)
        self.config_key = config_key
        self.config_value = config_value


class DecodeError(ToolCallingException):
    """Raised when raw tool arguments cannot be decoded into parameters.

    This exception is raised when:
    - The argument bytes are not well-formed JSON
    - A required parameter is absent
    - A present value does not coerce to its declared type

    Attributes:
        errors: Individual error messages reported by the validator
    """

    def __init__(self, message: str, errors: list[str] | None = None):
        super().__init__(message)
        self.errors = errors or []


class EncodeError(ToolCallingException):
    """Raised when a tool result cannot be serialized to JSON."""

    pass


class UnknownFunctionCall(ToolCallingException):
    """Raised when the model requests a tool missing from the registry.

    Attributes:
        function_name: The name the model asked for
    """

    def __init__(self, function_name: str):
        super().__init__(f"Unknown function call: '{function_name}'")
        self.function_name = function_name


class InvalidArguments(ToolCallingException):
    """Raised when a tool call's arguments fail to decode.

    Attributes:
        function_name: The tool whose arguments were rejected
        detail: Human-readable description of the decoding failure
    """

    def __init__(self, function_name: str, detail: str):
        super().__init__(f"Invalid arguments for '{function_name}': {detail}")
        self.function_name = function_name
        self.detail = detail


class EncodingFailure(ToolCallingException):
    """Raised when a tool's result cannot be encoded for the model.

    Attributes:
        function_name: The tool whose result could not be encoded
        original_error: The underlying serialization error, if any
    """

    def __init__(
        self,
        function_name: str,
        original_error: Exception | None = None,
    ):
        super().__init__(f"Failed to encode output for '{function_name}'")
        self.function_name = function_name
        self.original_error = original_error


class RoundLimitExceeded(ToolCallingException):
    """Raised when the model keeps requesting tools past the round limit.

    Attributes:
        max_rounds: The configured maximum number of rounds
    """

    def __init__(self, max_rounds: int):
        super().__init__(
            f"Model still requested tool calls after {max_rounds} round(s)"
        )
        self.max_rounds = max_rounds


class ExpectedSingleTextResponse(ToolCallingException):
    """Raised when a final response is not exactly one text choice.

    Attributes:
        response: The raw chat-completion response that was rejected
    """

    def __init__(self, response: Any):
        super().__init__("Expected a single text choice in the final response")
        self.response = response
