"""Unit tests for the tool registry."""

import logging

import pytest

from llm_function_tools.schema.inference import ToolSchema
from llm_function_tools.tools.registry import ToolRegistry
from llm_function_tools.tools.tool import ToolDefinition, ToolEntry, ToolExecutor

EMPTY_PARAMETERS = ToolSchema(type="object", properties={}, required=[])


class StaticExecutor(ToolExecutor):
    """Executor returning a fixed payload."""

    def __init__(self, payload: bytes) -> None:
        self.payload = payload

    async def execute(self, arguments: bytes) -> bytes:
        return self.payload


def make_entry(name: str, description: str = "", payload: bytes = b"null") -> ToolEntry:
    return ToolEntry(
        definition=ToolDefinition(
            name=name, description=description, parameters=EMPTY_PARAMETERS
        ),
        executor=StaticExecutor(payload),
    )


@pytest.mark.unit
class TestToolRegistry:
    """Tests for building and querying the registry."""

    def test_build_and_lookup(self) -> None:
        """Test entries are found by name."""
        alpha = make_entry("alpha")
        beta = make_entry("beta")

        registry = ToolRegistry.build([alpha, beta])

        assert registry.lookup("alpha") is alpha
        assert registry.lookup("beta") is beta
        assert len(registry) == 2
        assert "alpha" in registry

    def test_lookup_missing_returns_none(self) -> None:
        """Test an unknown name yields None rather than an error."""
        registry = ToolRegistry.build([make_entry("alpha")])

        assert registry.lookup("gamma") is None
        assert "gamma" not in registry

    def test_later_duplicate_wins(self) -> None:
        """Test the second entry with a name replaces the first."""
        first = make_entry("lookup", description="first", payload=b'"one"')
        second = make_entry("lookup", description="second", payload=b'"two"')

        registry = ToolRegistry.build([first, second])

        entry = registry.lookup("lookup")
        assert entry is second
        assert entry.executor is second.executor
        assert [d.description for d in registry.tool_list()] == ["second"]

    def test_duplicate_keeps_first_position(self) -> None:
        """Test an overridden name stays where it was first registered."""
        registry = ToolRegistry.build(
            [
                make_entry("alpha", description="old"),
                make_entry("beta"),
                make_entry("alpha", description="new"),
            ]
        )

        assert [d.name for d in registry.tool_list()] == ["alpha", "beta"]
        assert registry.tool_list()[0].description == "new"

    def test_duplicate_is_logged(self, caplog: pytest.LogCaptureFixture) -> None:
        """Test overrides are reported at INFO level."""
        with caplog.at_level(logging.INFO, logger="llm_function_tools.tools.registry"):
            ToolRegistry.build([make_entry("alpha"), make_entry("alpha")])

        assert "alpha" in caplog.text

    def test_tool_list_preserves_insertion_order(self) -> None:
        """Test definitions are listed in registration order."""
        registry = ToolRegistry.build([make_entry(n) for n in ("c", "a", "b")])

        assert [d.name for d in registry.tool_list()] == ["c", "a", "b"]
        assert [e.name for e in registry] == ["c", "a", "b"]

    def test_to_litellm_tools(self) -> None:
        """Test the advertisement payload is built from the definitions."""
        registry = ToolRegistry.build([make_entry("alpha", description="A")])

        assert registry.to_litellm_tools() == [
            {
                "type": "function",
                "function": {
                    "name": "alpha",
                    "description": "A",
                    "parameters": {"type": "object", "properties": {}, "required": []},
                },
            }
        ]

    def test_empty_registry(self) -> None:
        """Test an empty registry advertises nothing."""
        registry = ToolRegistry.build([])

        assert len(registry) == 0
        assert registry.tool_list() == []
        assert registry.to_litellm_tools() == []
