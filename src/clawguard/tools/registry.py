"""
Tools Registry for Agent System

Central registry for the policy-gated tools. Tools are registered by name
and can be retrieved individually, in bulk, or filtered through the Tool
Gate of the policy engine.
"""

import logging
from collections.abc import Callable
from pathlib import Path
from typing import Any

from agent_framework import FunctionTool, tool as agent_tool

from ..policy.engine import PolicyEngine
from .execution import create_bash_tool
from .filesystem import create_glob_tool, create_grep_tool, create_read_file_tool
from .git import create_git_tool

logger = logging.getLogger(__name__)


class ToolsRegistry:
    """
    Registry of all available tools.

    Keeps both the framework-facing FunctionTool (offered to the LLM) and
    the plain callable (invoked by the dispatcher) for every tool.

    Usage:
        registry = ToolsRegistry(engine, workspace="~/.clawguard/workspace")
        offered = registry.get_allowed()
        bash = registry.get_callable("bash")
    """

    def __init__(self, engine: PolicyEngine, workspace: str | Path = ".") -> None:
        """
        Initialize registry and register core tools.

        Args:
            engine: Policy engine the tools consult.
            workspace: Workspace root for filesystem tools.
        """
        self.engine = engine
        self.workspace = Path(workspace).expanduser()
        self.tools: dict[str, FunctionTool] = {}
        self._callables: dict[str, Callable[..., Any]] = {}
        self._register_core_tools()
        logger.info(f"🔧 ToolsRegistry initialized with {self.count()} tools")

    def _register_core_tools(self) -> None:
        """Register the built-in tools."""
        # Runtime
        self.register("bash", create_bash_tool(self.engine))

        # Filesystem
        self.register("read_file", create_read_file_tool(self.workspace))
        self.register("glob", create_glob_tool(self.workspace))
        self.register("grep", create_grep_tool(self.workspace))

        # Development
        self.register("git", create_git_tool(self.engine))

    def register(self, name: str, tool_func: Callable[..., Any]) -> None:
        """
        Register a tool in the registry.

        Plain callables are wrapped as FunctionTool via the agent_framework
        @tool decorator so they can be offered to the model.

        Args:
            name: Unique tool name
            tool_func: Tool function (plain callable or FunctionTool)

        Raises:
            ValueError: If tool name already registered
        """
        if name in self.tools:
            raise ValueError(f"Tool '{name}' is already registered")

        if isinstance(tool_func, FunctionTool):
            self.tools[name] = tool_func
        else:
            self.tools[name] = agent_tool(tool_func, name=name)
        self._callables[name] = tool_func

    def get(self, name: str) -> FunctionTool | None:
        """
        Get tool by name.

        Args:
            name: Tool name

        Returns:
            FunctionTool or None if not found
        """
        return self.tools.get(name)

    def get_callable(self, name: str) -> Callable[..., Any] | None:
        """
        Get the plain callable registered under a name.

        Args:
            name: Tool name

        Returns:
            Callable or None if not found
        """
        return self._callables.get(name)

    def get_all(self) -> list[FunctionTool]:
        """
        Get all registered tools.

        Returns:
            List of all tools
        """
        return list(self.tools.values())

    def get_allowed(self) -> list[FunctionTool]:
        """
        Get the tools the active policy allows.

        Returns:
            Tools that pass the Tool Gate
        """
        allowed = self.engine.filter_tools(self.get_all())
        logger.info(f"📦 Allowed tools: {len(allowed)}/{self.count()}")
        return allowed

    def list_names(self) -> list[str]:
        """
        Get list of all registered tool names.

        Returns:
            Sorted list of tool names
        """
        return sorted(self.tools.keys())

    def count(self) -> int:
        """
        Get count of registered tools.

        Returns:
            Number of tools registered
        """
        return len(self.tools)
