"""
Tool Groups for Tool Policy.

Maps concrete tool names onto the capability bucket they belong to.
Profiles enable or disable whole buckets at once.
"""

from enum import Enum


class ToolGroup(str, Enum):
    """Capability buckets used by profiles."""

    RUNTIME = "runtime"
    FILESYSTEM = "filesystem"
    WEB = "web"
    MESSAGING = "messaging"
    SYSTEM = "system"
    DEVELOPMENT = "development"
    CUSTOM = "custom"


TOOL_GROUPS: dict[ToolGroup, tuple[str, ...]] = {
    ToolGroup.RUNTIME: ("bash", "exec", "process", "nodejs"),
    ToolGroup.FILESYSTEM: (
        "read_file",
        "write_file",
        "list_directory",
        "glob",
        "grep",
        "edit_file",
    ),
    ToolGroup.WEB: ("search", "web_search", "web_fetch", "curl"),
    ToolGroup.MESSAGING: ("message", "send_message"),
    ToolGroup.SYSTEM: ("get_system_info", "get_env", "get_config"),
    ToolGroup.DEVELOPMENT: ("git", "npm", "node", "python", "docker"),
    ToolGroup.CUSTOM: (),
}

# Reverse index: tool name -> group. A tool belongs to at most one group.
_MEMBERSHIP: dict[str, ToolGroup] = {
    tool: group for group, tools in TOOL_GROUPS.items() for tool in tools
}


def classify(tool_name: str) -> ToolGroup | None:
    """
    Resolve the group a tool belongs to.

    Args:
        tool_name: Tool name (e.g., "bash", "read_file").

    Returns:
        The tool's group, or None for ungrouped tools.
    """
    return _MEMBERSHIP.get(tool_name)


def group_tools(group: ToolGroup | str) -> list[str]:
    """
    List tool names belonging to a group.

    Args:
        group: Group member or its string value.

    Returns:
        Tool names in the group (empty for unknown groups).
    """
    try:
        return list(TOOL_GROUPS[ToolGroup(group)])
    except ValueError:
        return []


def all_groups() -> list[ToolGroup]:
    """Return every defined group in declaration order."""
    return list(ToolGroup)
