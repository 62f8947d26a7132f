"""
Execution tools for agent system.

Provides policy-gated command execution with proper timeouts and error
handling. Every command passes the Command Policy Evaluator before a
shell ever sees it.
"""

import logging
import subprocess
from collections.abc import Callable
from typing import Annotated

from pydantic import Field

from ..policy.engine import PolicyEngine

logger = logging.getLogger(__name__)

MAX_OUTPUT_LENGTH = 10000


def format_output(result: subprocess.CompletedProcess[str]) -> str:
    """
    Combine stdout, stderr and exit code into one tool response.

    Args:
        result: Completed subprocess.

    Returns:
        Output text, truncated at MAX_OUTPUT_LENGTH characters.
    """
    output = result.stdout or ""

    if result.stderr:
        output += f"\n\n[stderr]\n{result.stderr}"

    if result.returncode != 0:
        output += f"\n\n[Exit code: {result.returncode}]"

    if len(output) > MAX_OUTPUT_LENGTH:
        output = (
            output[:MAX_OUTPUT_LENGTH]
            + f"\n\n[Output truncated at {MAX_OUTPUT_LENGTH:,} characters]"
        )

    return output if output.strip() else "(no output)"


def create_bash_tool(engine: PolicyEngine) -> Callable[..., str]:
    """
    Create tool for executing bash commands.

    Args:
        engine: Policy engine consulted before every command.

    Returns:
        Callable that executes allowed bash commands and returns output.
    """

    def bash(
        command: Annotated[str, Field(description="Bash command to execute")],
        timeout: Annotated[
            int, Field(description="Timeout in seconds", gt=0, le=300)
        ] = 30,
    ) -> str:
        """
        Execute a bash command and return output.

        Args:
            command: Bash command to execute
            timeout: Maximum execution time in seconds (max 300)

        Returns:
            Command output (stdout + stderr) or error message
        """
        if not command or not command.strip():
            return "❌ Error: Command cannot be empty"

        verdict = engine.check_command(command)
        if not verdict.allowed:
            return f"⛔ This command has been blocked for safety: {verdict.reason}"

        timeout = max(1, min(int(timeout), 300))

        try:
            logger.info(f"🔧 Executing bash command (timeout={timeout}s)")
            result = subprocess.run(
                command,
                shell=True,
                capture_output=True,
                text=True,
                timeout=timeout,
            )
            return format_output(result)

        except subprocess.TimeoutExpired:
            return f"❌ Error: Command timed out after {timeout} seconds"
        except Exception as e:
            return f"❌ Error executing command: {str(e)}"

    return bash
