"""Schema inference for tool parameters.

This module provides:
- Type-to-schema inference with a guaranteed fallback for unknown types
- Root parameter schemas with required/optional resolution
- Docstring parsing for tool and parameter descriptions
"""

from .docstrings import (
    DEFAULT_FUNCTION_DESCRIPTION,
    parse_parameter_descriptions,
    parse_summary,
)
from .inference import ToolSchema, infer_schema, is_optional_type
from .parameters import (
    MISSING,
    ParameterSpec,
    build_parameters_schema,
    parameters_from_function,
)

__all__ = [
    # Inference
    "ToolSchema",
    "infer_schema",
    "is_optional_type",
    # Parameters
    "MISSING",
    "ParameterSpec",
    "build_parameters_schema",
    "parameters_from_function",
    # Docstrings
    "DEFAULT_FUNCTION_DESCRIPTION",
    "parse_parameter_descriptions",
    "parse_summary",
]
