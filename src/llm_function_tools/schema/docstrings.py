"""Docstring parsing for tool and parameter descriptions.

Understands Google-style ``Args:`` sections as well as bullet lists of the form
``- Parameters:`` / ``- name: description`` and ``- Parameter name: description``.
"""

import inspect
import re

DEFAULT_FUNCTION_DESCRIPTION = "Generated function"

_PARAMETER_HEADERS = frozenset(
    {"args:", "arguments:", "parameters:", "params:", "- parameters:"}
)
_SINGLE_PARAMETER = re.compile(r"^-\s*Parameter\s+(\w+)\s*:\s*(.*)$")
_ENTRY = re.compile(r"^(?:-\s*)?\*{0,2}(\w+)\s*(?:\([^)]*\))?\s*:\s*(.*)$")
_SECTION = re.compile(r"^-?\s*[A-Z][\w ]*:$")


def parse_summary(docstring: str | None) -> str | None:
    """Return the first non-empty line of a docstring, or None."""
    if not docstring:
        return None
    for line in inspect.cleandoc(docstring).splitlines():
        stripped = line.strip()
        if stripped:
            return stripped
    return None


def parse_parameter_descriptions(docstring: str | None) -> dict[str, str]:
    """Extract per-parameter descriptions from a docstring.

    Args:
        docstring: Raw docstring text, possibly None.

    Returns:
        Mapping of parameter name to its description. Parameters without a
        non-empty description are left out.
    """
    if not docstring:
        return {}

    descriptions: dict[str, str] = {}
    in_section = False
    entry_indent: int | None = None
    current: str | None = None

    for line in inspect.cleandoc(docstring).splitlines():
        stripped = line.strip()
        indent = len(line) - len(line.lstrip())

        single = _SINGLE_PARAMETER.match(stripped)
        if single:
            _store(descriptions, single.group(1), single.group(2))
            current = single.group(1)
            continue

        if stripped.lower() in _PARAMETER_HEADERS:
            in_section = True
            entry_indent = None
            current = None
            continue

        if not in_section:
            continue

        if not stripped:
            current = None
            continue

        if _SECTION.match(stripped) and (entry_indent is None or indent < entry_indent):
            in_section = False
            current = None
            continue

        if current is not None and entry_indent is not None and indent > entry_indent:
            previous = descriptions.get(current, "")
            descriptions[current] = f"{previous} {stripped}".strip()
            continue

        entry = _ENTRY.match(stripped)
        if entry:
            if entry_indent is None:
                entry_indent = indent
            current = entry.group(1)
            _store(descriptions, current, entry.group(2))

    return descriptions


def _store(descriptions: dict[str, str], name: str, text: str) -> None:
    text = text.strip()
    if text:
        descriptions[name] = text
