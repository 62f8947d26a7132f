"""Policy-gated tools and their registry."""

from .execution import create_bash_tool
from .filesystem import create_glob_tool, create_grep_tool, create_read_file_tool
from .git import create_git_tool
from .registry import ToolsRegistry

__all__ = [
    "ToolsRegistry",
    "create_bash_tool",
    "create_git_tool",
    "create_glob_tool",
    "create_grep_tool",
    "create_read_file_tool",
]
