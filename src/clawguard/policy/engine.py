"""
Policy Engine: one object bound to the active SecurityConfig.

Wraps the Tool Gate and Command Policy Evaluator so hosts thread a single
object through their tool dispatch path instead of a process-wide global.
Each check reads the snapshot once, so a concurrent reload never mixes
two configs inside one decision.
"""

import logging

from agent_framework import FunctionTool

from ..config.parser import SecurityConfigStore
from ..config.schema import SecurityConfig
from .commands import evaluate_command
from .gate import is_tool_allowed
from .verdict import Verdict

logger = logging.getLogger(__name__)


class PolicyEngine:
    """
    Tool and command policy checks over a config snapshot.

    Usage:
        engine = PolicyEngine(SecurityConfig(command_policy_tier="allow-all"))
        engine.check_tool("bash")
        engine.check_command("git status && rm -rf /")
    """

    def __init__(
        self,
        config: SecurityConfig | None = None,
        store: SecurityConfigStore | None = None,
    ) -> None:
        """
        Initialize the policy engine.

        Args:
            config: Fixed snapshot to evaluate against.
            store: Reloadable snapshot holder; takes precedence over
                ``config`` when both are given.
        """
        self._config = config if config is not None else SecurityConfig()
        self._store = store

        current = self.config
        logger.info(
            f"🔒 PolicyEngine initialized (profile={current.tool_profile}, "
            f"tier={current.command_policy_tier})"
        )

    @property
    def config(self) -> SecurityConfig:
        """Return the snapshot decisions are made against right now."""
        if self._store is not None:
            return self._store.current
        return self._config

    def check_tool(self, tool_name: str) -> Verdict:
        """
        Check whether a tool may be invoked.

        Args:
            tool_name: Tool name.

        Returns:
            Gate verdict.
        """
        return is_tool_allowed(tool_name, self.config)

    def check_command(self, command: str) -> Verdict:
        """
        Check whether a raw shell command may run.

        Args:
            command: Raw command string.

        Returns:
            Command policy verdict.
        """
        return evaluate_command(command, self.config)

    def filter_tools(self, tools: list[FunctionTool]) -> list[FunctionTool]:
        """
        Keep only the tools the gate allows.

        Args:
            tools: Candidate tools (anything with a ``name`` attribute).

        Returns:
            Allowed tools, in their original order.
        """
        snapshot = self.config
        result = [t for t in tools if is_tool_allowed(t.name, snapshot).allowed]

        if len(result) != len(tools):
            removed = sorted({t.name for t in tools} - {t.name for t in result})
            logger.debug(
                f"🔒 Policy filter: {len(tools)} → {len(result)} tools "
                f"(removed={removed})"
            )
        return result
