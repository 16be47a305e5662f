"""Type-to-schema inference for tool parameters.

``infer_schema`` maps a Python annotation onto a JSON-Schema node. It is total:
annotations it does not recognise get the ``string`` fallback instead of an
error, so schema generation never blocks tool registration.
"""

import collections.abc
import dataclasses
import enum
import logging
import types
from collections.abc import Callable
from dataclasses import dataclass
from typing import Annotated, Any, Literal, Union, get_args, get_origin, is_typeddict

from pydantic import BaseModel
from pydantic.fields import FieldInfo

logger = logging.getLogger(__name__)

SCHEMA_KINDS = frozenset(
    {"string", "integer", "number", "boolean", "object", "array"}
)

# Scalar types that may appear as enum literals in a schema
_LITERAL_VALUE_TYPES = (str, int, float, bool)


@dataclass(frozen=True)
class ToolSchema:
    """A JSON-Schema node describing a tool argument.

    Args:
        type: Primitive kind of the node.
        description: Optional free-text description shown to the model.
        properties: Ordered child schemas, ``object`` nodes only.
        required: Property names the model must supply, ``object`` nodes only.
        enum: Closed set of permitted literal values.
    """

    type: str
    description: str | None = None
    properties: dict[str, "ToolSchema"] | None = None
    required: list[str] | None = None
    enum: list[Any] | None = None

    def __post_init__(self) -> None:
        if self.type not in SCHEMA_KINDS:
            raise ValueError(f"Unsupported schema type '{self.type}'")
        if self.type != "object" and (
            self.properties is not None or self.required is not None
        ):
            raise ValueError("Only object schemas may declare properties")
        if self.required:
            known = self.properties or {}
            missing = [name for name in self.required if name not in known]
            if missing:
                raise ValueError(
                    f"Required names {missing} are not declared in properties"
                )

    def with_description(self, description: str | None) -> "ToolSchema":
        """Return a copy of this node carrying ``description``."""
        if description is None:
            return self
        return dataclasses.replace(self, description=description)

    def to_dict(self) -> dict[str, Any]:
        """Render the node as a plain JSON Schema dictionary.

        Returns:
            A dict with ``type`` and whichever optional keys are set.
        """
        schema: dict[str, Any] = {"type": self.type}
        if self.description is not None:
            schema["description"] = self.description
        if self.enum is not None:
            schema["enum"] = list(self.enum)
        if self.properties is not None:
            schema["properties"] = {
                name: child.to_dict() for name, child in self.properties.items()
            }
        if self.required is not None:
            schema["required"] = list(self.required)
        return schema


def infer_schema(annotation: Any, description: str | None = None) -> ToolSchema:
    """Infer the schema node for a parameter annotation.

    ``Optional``/``X | None`` and ``Annotated`` wrappers are peeled before the
    type rules apply. A string or ``pydantic.Field(description=...)`` inside
    ``Annotated`` metadata is used when no explicit description is passed.

    Args:
        annotation: The type annotation to describe.
        description: Optional description attached to the resulting node.

    Returns:
        The inferred schema node. Never raises.
    """
    try:
        target, annotated_description = _unwrap(annotation)
        schema = _schema_for(target)
    except Exception as exc:
        logger.debug("Falling back to string schema for %r: %s", annotation, exc)
        annotated_description = None
        schema = ToolSchema(type="string")

    return schema.with_description(
        description if description is not None else annotated_description
    )


def is_optional_type(annotation: Any) -> bool:
    """Check whether an annotation admits ``None``.

    Args:
        annotation: The type annotation to check.

    Returns:
        True for ``Optional[T]``, ``T | None`` and ``Union[..., None]``.
    """
    while get_origin(annotation) is Annotated:
        annotation = get_args(annotation)[0]
    if _is_union(annotation):
        return type(None) in get_args(annotation)
    return annotation is None or annotation is type(None)


def _is_union(annotation: Any) -> bool:
    origin = get_origin(annotation)
    return origin is Union or origin is types.UnionType


def _unwrap(annotation: Any) -> tuple[Any, str | None]:
    """Strip ``Annotated`` and single-type ``Optional`` wrappers."""
    description: str | None = None
    while True:
        if get_origin(annotation) is Annotated:
            base, *metadata = get_args(annotation)
            if description is None:
                description = _description_from_metadata(metadata)
            annotation = base
            continue
        if _is_union(annotation):
            members = [arg for arg in get_args(annotation) if arg is not type(None)]
            if len(members) == 1:
                annotation = members[0]
                continue
        return annotation, description


def _description_from_metadata(metadata: list[Any]) -> str | None:
    for item in metadata:
        if isinstance(item, str):
            return item
        if isinstance(item, FieldInfo) and item.description:
            return item.description
    return None


def _runtime_class(annotation: Any) -> type | None:
    """Return the runtime class behind a plain or parameterised annotation."""
    origin = get_origin(annotation) or annotation
    return origin if isinstance(origin, type) else None


def _is_enumeration(annotation: Any) -> bool:
    if get_origin(annotation) is Literal:
        return True
    return isinstance(annotation, type) and issubclass(annotation, enum.Enum)


def _is_mapping(annotation: Any) -> bool:
    cls = _runtime_class(annotation)
    return cls is not None and issubclass(cls, collections.abc.Mapping)


def _is_sequence(annotation: Any) -> bool:
    cls = _runtime_class(annotation)
    if cls is None or issubclass(cls, (str, bytes, bytearray)):
        return False
    return issubclass(cls, collections.abc.Collection)


def _is_structured(annotation: Any) -> bool:
    if not isinstance(annotation, type):
        return False
    return (
        issubclass(annotation, BaseModel)
        or dataclasses.is_dataclass(annotation)
        or is_typeddict(annotation)
    )


def _enumeration_schema(annotation: Any) -> ToolSchema:
    if get_origin(annotation) is Literal:
        raw_values = list(get_args(annotation))
    else:
        raw_values = [member.value for member in annotation]
    values = [value for value in raw_values if isinstance(value, _LITERAL_VALUE_TYPES)]
    return ToolSchema(type="string", enum=values)


# Checked in order; the first matching predicate wins.
_RULES: list[tuple[Callable[[Any], bool], Callable[[Any], ToolSchema]]] = [
    (lambda tp: tp is str, lambda tp: ToolSchema(type="string")),
    (lambda tp: tp is int, lambda tp: ToolSchema(type="integer")),
    (lambda tp: tp is float, lambda tp: ToolSchema(type="number")),
    (lambda tp: tp is bool, lambda tp: ToolSchema(type="boolean")),
    (_is_enumeration, _enumeration_schema),
    (_is_mapping, lambda tp: ToolSchema(type="object")),
    (_is_sequence, lambda tp: ToolSchema(type="array")),
    (_is_structured, lambda tp: ToolSchema(type="object")),
]


def _schema_for(annotation: Any) -> ToolSchema:
    for matches, build in _RULES:
        if matches(annotation):
            return build(annotation)
    return ToolSchema(type="string")
