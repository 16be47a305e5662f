"""JSON codec between raw tool-call arguments and typed Python values."""

from collections.abc import Sequence
from typing import Any

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    TypeAdapter,
    ValidationError,
    create_model,
)

from llm_function_tools.exceptions import DecodeError, EncodeError
from llm_function_tools.schema.parameters import ParameterSpec

_RESULT_ADAPTER: TypeAdapter[Any] = TypeAdapter(Any)


def parameters_model_name(tool_name: str) -> str:
    """Name of the generated arguments model, e.g. ``GetWeatherParameters``."""
    parts = [part for part in tool_name.replace("-", "_").split("_") if part]
    return "".join(part[:1].upper() + part[1:] for part in parts) + "Parameters"


class ParameterCodec:
    """Decodes tool arguments and encodes tool results.

    Arguments are validated by a Pydantic model generated from the parameter
    specs. Parameters with a default are decoded if present and defaulted
    otherwise; parameters without one, nullable ones included, must be present.
    """

    def __init__(self, parameters: Sequence[ParameterSpec], name: str = "tool") -> None:
        """Initialize the codec.

        Args:
            parameters: Parameter specs in declaration order.
            name: Tool name, used for the generated model and error messages.
        """
        self.name = name
        self.parameters = list(parameters)
        # Positional field names keep parameter names such as ``json`` or
        # ``_private`` from clashing with BaseModel attributes.
        self._fields = {
            f"p{index}": spec for index, spec in enumerate(self.parameters)
        }
        self._model = self._build_model()

    @property
    def model(self) -> type[BaseModel]:
        return self._model

    def _build_model(self) -> type[BaseModel]:
        field_definitions: dict[str, Any] = {}
        for field_name, spec in self._fields.items():
            default = spec.default if spec.has_default else ...
            field_definitions[field_name] = (
                spec.annotation,
                Field(default, alias=spec.name),
            )

        return create_model(  # type: ignore[call-overload,no-any-return]
            parameters_model_name(self.name),
            __config__=ConfigDict(arbitrary_types_allowed=True),
            **field_definitions,
        )

    def decode(self, raw: bytes | str) -> dict[str, Any]:
        """Decode raw JSON arguments into keyword arguments.

        Args:
            raw: JSON object text as sent by the model.

        Returns:
            Mapping of parameter name to its typed value, in declaration order.

        Raises:
            DecodeError: If the JSON is malformed, a required parameter is
                missing, or a value does not coerce to its declared type.
        """
        try:
            instance = self._model.model_validate_json(raw)
        except ValidationError as exc:
            errors = [_format_error(error) for error in exc.errors()]
            raise DecodeError(
                f"Could not decode arguments for '{self.name}': {'; '.join(errors)}",
                errors=errors,
            ) from exc

        return {
            spec.name: getattr(instance, field_name)
            for field_name, spec in self._fields.items()
        }

    def encode(self, value: Any) -> bytes:
        """Encode a tool result as JSON bytes.

        Raises:
            EncodeError: If the value cannot be serialized.
        """
        try:
            return _RESULT_ADAPTER.dump_json(value)
        except (TypeError, ValueError) as exc:
            raise EncodeError(
                f"Could not encode result of '{self.name}': {exc}"
            ) from exc


def _format_error(error: Any) -> str:
    location = ".".join(str(part) for part in error.get("loc", ()))
    return f"{location or '<arguments>'}: {error.get('msg', 'invalid value')}"
