"""
Port and types for agent tools (function calls), independent of the agent runtime.
"""

from abc import ABC, abstractmethod
from typing import Mapping, TypedDict


class ToolSpec(TypedDict):
    """Specification of a tool an agent may call."""

    name: str
    description: str
    parameters: dict[str, object]  # JSON Schema


def missing_required(spec: ToolSpec, arguments: Mapping[str, object]) -> list[str]:
    """Return the names of required parameters absent from ``arguments``."""
    required = spec["parameters"].get("required") or []
    return [field for field in required if field not in arguments]  # type: ignore[union-attr]


class ToolsHandlerPort(ABC):
    """
    Port interface for a family of agent tools.

    Implementations advertise their tools and run an invocation by name.
    """

    @abstractmethod
    def available_tools(self) -> list[ToolSpec]:
        """Return the specifications of every tool this handler serves."""
        pass

    @abstractmethod
    def dispatch(self, name: str, arguments: dict[str, object]) -> object:
        """
        Run the named tool.

        Raises:
            ValueError: If the tool name is unknown to this handler
            ToolError: If the invocation fails
        """
        pass
