"""
Unit tests for PolicyEngine.

Tests cover delegation to the gate and the command evaluator, tool-list
filtering, and reading the live snapshot from a SecurityConfigStore.
"""

from unittest.mock import MagicMock

from agent_framework import FunctionTool

from clawguard.config.parser import SecurityConfigStore
from clawguard.config.schema import SecurityConfig
from clawguard.policy.engine import PolicyEngine


def make_tool(name: str) -> FunctionTool:
    """
    Create a mock FunctionTool with the given name.

    Args:
        name: Tool name to assign.

    Returns:
        MagicMock with FunctionTool spec and .name set.
    """
    tool = MagicMock(spec=FunctionTool)
    tool.name = name
    return tool


class TestEngineConfig:
    """Tests for snapshot selection."""

    def test_defaults_without_config(self) -> None:
        """Test the engine falls back to the default snapshot."""
        engine = PolicyEngine()

        assert engine.config == SecurityConfig()

    def test_fixed_config(self, allowlist_config: SecurityConfig) -> None:
        """Test a fixed snapshot is used as given."""
        engine = PolicyEngine(allowlist_config)

        assert engine.config is allowlist_config

    def test_store_takes_precedence(self, allowlist_config: SecurityConfig) -> None:
        """Test a store overrides the fixed snapshot and tracks replacement."""
        store = SecurityConfigStore(initial=allowlist_config)
        engine = PolicyEngine(SecurityConfig(), store=store)

        assert engine.config is allowlist_config

        updated = SecurityConfig(command_policy_tier="allow-all")
        store.replace(updated)
        assert engine.config is updated


class TestEngineChecks:
    """Tests for check_tool and check_command."""

    def test_check_tool(self) -> None:
        """Test tool checks apply the profile."""
        engine = PolicyEngine(SecurityConfig(tool_profile="minimal"))

        assert engine.check_tool("get_system_info").allowed is True
        verdict = engine.check_tool("bash")
        assert verdict.allowed is False
        assert verdict.reason == "Tool group 'runtime' is disabled"

    def test_check_command(self, allowlist_config: SecurityConfig) -> None:
        """Test command checks apply the tier."""
        engine = PolicyEngine(allowlist_config)

        assert engine.check_command("git status").allowed is True
        assert engine.check_command("rm file.txt").allowed is False

    def test_reload_changes_decisions(self) -> None:
        """Test decisions follow the store after a swap."""
        store = SecurityConfigStore()
        engine = PolicyEngine(store=store)
        assert engine.check_command("rm notes.txt").allowed is True

        store.replace(
            SecurityConfig(
                command_policy_tier="allowlist-only", allowed_commands=("ls",)
            )
        )
        assert engine.check_command("rm notes.txt").allowed is False


class TestFilterTools:
    """Tests for filter_tools."""

    def test_keeps_allowed_in_order(self) -> None:
        """Test disabled groups are removed and order is preserved."""
        engine = PolicyEngine(SecurityConfig(tool_profile="minimal"))
        tools = [make_tool(n) for n in ("get_system_info", "bash", "get_env", "git")]

        result = engine.filter_tools(tools)

        assert [t.name for t in result] == ["get_system_info", "get_env"]

    def test_ungrouped_tools_kept(self) -> None:
        """Test tools outside every group pass the profile."""
        engine = PolicyEngine(SecurityConfig(tool_profile="minimal"))

        result = engine.filter_tools([make_tool("my_plugin")])

        assert [t.name for t in result] == ["my_plugin"]

    def test_blocklist_removes_tool(self) -> None:
        """Test a blocked substring removes matching tools."""
        engine = PolicyEngine(
            SecurityConfig(tool_profile="full", blocked_commands=("web",))
        )
        tools = [make_tool("web_fetch"), make_tool("web_search"), make_tool("bash")]

        result = engine.filter_tools(tools)

        assert [t.name for t in result] == ["bash"]

    def test_empty_list(self) -> None:
        """Test an empty tool list stays empty."""
        assert PolicyEngine().filter_tools([]) == []
