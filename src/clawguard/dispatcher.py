"""
Tool dispatcher.

Entry point for tool calls coming back from the model: the Tool Gate is
consulted first, then the tool runs. Command-executing tools apply the
Command Policy Evaluator themselves. Rejections are terminal and are
returned as user-visible text, never raised.
"""

import logging
from collections.abc import Mapping
from typing import Any

from .policy.engine import PolicyEngine
from .tools.registry import ToolsRegistry

logger = logging.getLogger(__name__)


class ToolDispatcher:
    """
    Runs model-requested tool calls through the policy engine.

    Usage:
        dispatcher = ToolDispatcher(engine, registry)
        output = dispatcher.dispatch("bash", {"command": "git status"})
    """

    def __init__(self, engine: PolicyEngine, registry: ToolsRegistry) -> None:
        """
        Initialize the dispatcher.

        Args:
            engine: Policy engine for the tool gate.
            registry: Registry holding the tool callables.
        """
        self.engine = engine
        self.registry = registry

    def dispatch(self, tool_name: str, tool_input: Mapping[str, Any] | None = None) -> str:
        """
        Execute one tool call if policy allows it.

        Args:
            tool_name: Tool requested by the model.
            tool_input: Keyword arguments for the tool.

        Returns:
            Tool output, or a ⛔/❌ message explaining why it did not run.
        """
        verdict = self.engine.check_tool(tool_name)
        if not verdict.allowed:
            logger.warning(f"⛔ Tool not allowed: {tool_name} ({verdict.reason})")
            return f"⛔ {verdict.reason}"

        func = self.registry.get_callable(tool_name)
        if func is None:
            return f"❌ Error: Unknown tool '{tool_name}'"

        arguments = dict(tool_input or {})
        logger.info(f"🔧 Executing tool: {tool_name}")

        try:
            return str(func(**arguments))
        except TypeError as e:
            return f"❌ Error: Invalid arguments for tool '{tool_name}': {e}"
