"""
Tool Gate.

Single allow/deny decision for a tool invocation, combining the
blocklist, the allowlist and profile group enablement.
"""

import logging

from ..config.schema import SecurityConfig
from .groups import classify
from .profiles import get_profile
from .verdict import Verdict

logger = logging.getLogger(__name__)


def _matches_allowed_tool(tool_name: str, allowed: str) -> bool:
    # "browser" also admits its "browser_*" variants
    return tool_name == allowed or tool_name.startswith(allowed + "_")


def is_tool_allowed(tool_name: str, config: SecurityConfig | None = None) -> Verdict:
    """
    Decide whether a tool may be invoked.

    Precedence: blocklist (substring), allowlist (exact or ``_`` suffix),
    profile group enablement. Ungrouped tools are never blocked by the
    profile.

    Args:
        tool_name: Name of the tool the agent wants to call.
        config: Active security snapshot (None = defaults, coding profile).

    Returns:
        Verdict for the invocation.
    """
    if config is None:
        config = SecurityConfig()

    if not isinstance(tool_name, str) or not tool_name:
        return Verdict.deny("Tool name is missing")

    # Substring match: a name containing a blocked token is rejected
    if any(blocked in tool_name for blocked in config.blocked_commands):
        logger.warning(f"⛔ Tool '{tool_name}' rejected by blocklist")
        return Verdict.deny(f"Tool '{tool_name}' is blocked")

    if config.allowed_commands:
        if not any(
            _matches_allowed_tool(tool_name, allowed)
            for allowed in config.allowed_commands
        ):
            logger.warning(f"⛔ Tool '{tool_name}' not in allowlist")
            return Verdict.deny(f"Tool '{tool_name}' not in allowlist")

    group = classify(tool_name)
    if group is not None:
        profile = get_profile(config.tool_profile)
        if not profile.is_group_enabled(group):
            logger.warning(
                f"⛔ Tool '{tool_name}' rejected: group '{group.value}' "
                f"disabled by profile '{config.tool_profile}'"
            )
            return Verdict.deny(f"Tool group '{group.value}' is disabled")

    if config.allowed_commands:
        return Verdict.allow(f"Tool '{tool_name}' matched allowlist")
    return Verdict.allow()
