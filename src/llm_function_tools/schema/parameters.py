"""Parameter metadata and root parameter schema construction."""

import inspect
import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Any, get_type_hints

from llm_function_tools.schema.docstrings import parse_parameter_descriptions
from llm_function_tools.schema.inference import (
    ToolSchema,
    infer_schema,
    is_optional_type,
)

logger = logging.getLogger(__name__)

# Marks a parameter that declares no default value
MISSING: Any = inspect.Parameter.empty


@dataclass(frozen=True)
class ParameterSpec:
    """Structured description of a single tool parameter.

    Args:
        name: Parameter name as it appears in the JSON arguments.
        annotation: Declared Python type. Unannotated parameters use ``str``.
        default: Default value, or ``MISSING`` when none is declared.
        description: Optional description shown to the model.
    """

    name: str
    annotation: Any = str
    default: Any = MISSING
    description: str | None = None

    @property
    def has_default(self) -> bool:
        return self.default is not MISSING

    @property
    def is_required(self) -> bool:
        """Whether the model must supply this parameter.

        A declared default or a nullable type each make the parameter optional.
        """
        return not self.has_default and not is_optional_type(self.annotation)


def build_parameters_schema(parameters: Sequence[ParameterSpec]) -> ToolSchema:
    """Build the root ``object`` schema for a tool's parameter list.

    Args:
        parameters: Parameter specs in declaration order.

    Returns:
        Object schema with one property per parameter and the required names.
    """
    properties = {
        spec.name: infer_schema(spec.annotation, spec.description)
        for spec in parameters
    }
    required = [spec.name for spec in parameters if spec.is_required]
    return ToolSchema(type="object", properties=properties, required=required)


def parameters_from_function(func: Callable[..., Any]) -> list[ParameterSpec]:
    """Read parameter specs from a callable's signature and docstring.

    ``*args``/``**kwargs`` cannot be filled from JSON arguments and are skipped.

    Args:
        func: Function or bound method to inspect.

    Returns:
        Parameter specs in declaration order.
    """
    signature = inspect.signature(func)
    hints = _type_hints(func)
    descriptions = parse_parameter_descriptions(inspect.getdoc(func))

    specs: list[ParameterSpec] = []
    for name, param in signature.parameters.items():
        if param.kind in (
            inspect.Parameter.VAR_POSITIONAL,
            inspect.Parameter.VAR_KEYWORD,
        ):
            continue
        specs.append(
            ParameterSpec(
                name=name,
                annotation=hints.get(name, str),
                default=param.default,
                description=descriptions.get(name),
            )
        )
    return specs


def _type_hints(func: Callable[..., Any]) -> dict[str, Any]:
    """Resolve a callable's annotations, falling back to ``Any`` per parameter.

    Annotations that cannot be evaluated (for example names imported only
    under ``TYPE_CHECKING``) become ``Any`` instead of failing the whole
    function.
    """
    try:
        return get_type_hints(func, include_extras=True)
    except (NameError, TypeError) as exc:
        logger.debug(
            "Resolving annotations of %r one by one: %s",
            getattr(func, "__qualname__", func),
            exc,
        )

    try:
        raw_annotations = inspect.get_annotations(func)
    except (NameError, TypeError) as exc:
        logger.debug("Annotations of %r are unavailable: %s", func, exc)
        return {}

    globalns = getattr(inspect.unwrap(func), "__globals__", {})
    return {
        name: _resolve_annotation(name, annotation, globalns)
        for name, annotation in raw_annotations.items()
    }


def _resolve_annotation(name: str, annotation: Any, globalns: dict[str, Any]) -> Any:
    def holder() -> None:
        pass

    holder.__annotations__ = {name: annotation}
    try:
        return get_type_hints(holder, globalns=globalns, include_extras=True)[name]
    except Exception as exc:
        logger.debug("Unresolvable annotation %r for '%s': %s", annotation, name, exc)
        return Any
