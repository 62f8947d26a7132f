"""
Git tool for agent system.

Runs git subcommands without a shell. The full ``git ...`` command line
is still checked by the Command Policy Evaluator first, so allowlists
such as ``git status`` apply to this tool exactly as they do to bash.
"""

import shlex
import subprocess
from collections.abc import Callable
from typing import Annotated

from pydantic import Field

from ..policy.engine import PolicyEngine
from .execution import format_output


def create_git_tool(engine: PolicyEngine) -> Callable[..., str]:
    """
    Create tool for running git subcommands.

    Args:
        engine: Policy engine consulted before every command.

    Returns:
        Callable that runs allowed git commands and returns output.
    """

    def git(
        command: Annotated[
            str, Field(description="Git arguments (e.g., 'status', 'log --oneline -10')")
        ],
        repo_path: Annotated[
            str, Field(description="Repository directory")
        ] = ".",
    ) -> str:
        """
        Run a git subcommand.

        Args:
            command: Arguments after ``git``
            repo_path: Working directory (defaults to current directory)

        Returns:
            Git output or error message
        """
        if not command or not command.strip():
            return "❌ Error: No git command provided"

        full_command = f"git {command.strip()}"
        verdict = engine.check_command(full_command)
        if not verdict.allowed:
            return f"⛔ This command has been blocked for safety: {verdict.reason}"

        try:
            args = shlex.split(command)
        except ValueError as e:
            return f"❌ Error: Could not parse git arguments: {e}"

        try:
            result = subprocess.run(
                ["git", *args],
                capture_output=True,
                text=True,
                timeout=30,
                cwd=repo_path,
            )
            return format_output(result)

        except subprocess.TimeoutExpired:
            return "❌ Error: Git command timed out"
        except Exception as e:
            return f"❌ Error: {str(e)}"

    return git
