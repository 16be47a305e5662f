"""Name-indexed collection of tools for one conversation."""

import logging
from collections.abc import Iterable, Iterator
from typing import Any

from llm_function_tools.tools.tool import ToolDefinition, ToolEntry

logger = logging.getLogger(__name__)


class ToolRegistry:
    """Maps tool names to ``ToolEntry`` objects.

    When several entries share a name the one registered last wins. The name
    keeps the position of its first registration. A registry is never mutated
    after ``build`` and can be shared between concurrent conversations.
    """

    def __init__(self, entries: dict[str, ToolEntry] | None = None) -> None:
        self._entries: dict[str, ToolEntry] = dict(entries or {})

    @classmethod
    def build(cls, entries: Iterable[ToolEntry]) -> "ToolRegistry":
        """Collect entries into a registry, later duplicates replacing earlier ones.

        Args:
            entries: Tool entries in registration order.

        Returns:
            The populated registry.
        """
        resolved: dict[str, ToolEntry] = {}
        for entry in entries:
            if entry.name in resolved:
                logger.info(
                    "Tool '%s' registered again; keeping the later entry", entry.name
                )
            resolved[entry.name] = entry
        return cls(resolved)

    def lookup(self, name: str) -> ToolEntry | None:
        """Return the entry registered under ``name``, or None."""
        return self._entries.get(name)

    def tool_list(self) -> list[ToolDefinition]:
        """Definitions of all registered tools, in registration order."""
        return [entry.definition for entry in self._entries.values()]

    def to_litellm_tools(self) -> list[dict[str, Any]]:
        """Tool advertisement payload for a chat-completion request."""
        return [definition.to_litellm_schema() for definition in self.tool_list()]

    def __contains__(self, name: object) -> bool:
        return name in self._entries

    def __iter__(self) -> Iterator[ToolEntry]:
        return iter(self._entries.values())

    def __len__(self) -> int:
        return len(self._entries)
