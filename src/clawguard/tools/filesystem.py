"""
Filesystem tools for agent system.

Read-only file access confined to the workspace. Every path goes through
sanitize_path and every search pattern through validate_pattern before
the filesystem is touched.
"""

import re
from collections.abc import Callable
from pathlib import Path
from typing import Annotated

from pydantic import Field

from ..validation import is_within, sanitize_path, validate_pattern

MAX_GREP_FILE_BYTES = 1_000_000


def create_read_file_tool(workspace: str | Path) -> Callable[..., str]:
    """
    Create tool for reading file contents.

    Args:
        workspace: Workspace root the tool is confined to.

    Returns:
        Callable that reads file contents with line numbers.
    """
    root = Path(workspace).expanduser().resolve()

    def read_file(
        path: Annotated[str, Field(description="File path to read")],
        offset: Annotated[
            int, Field(description="Line number to start from (1-based)", ge=1)
        ] = 1,
        limit: Annotated[
            int, Field(description="Maximum number of lines to read", gt=0, le=10000)
        ] = 100,
    ) -> str:
        """
        Read file contents with optional offset and limit.

        Args:
            path: File path to read (relative to the workspace)
            offset: Line number to start from (1-based)
            limit: Maximum number of lines to read (max 10000)

        Returns:
            File contents formatted with line numbers, or error message.
        """
        check = sanitize_path(path, root)
        if not check.valid:
            return f"❌ Error: {check.error}"

        try:
            file_path = root / check.value

            if not file_path.exists():
                return f"❌ Error: File not found: {path}"

            if not file_path.is_file():
                return f"❌ Error: Not a file: {path}"

            with open(file_path, "r", encoding="utf-8", errors="replace") as f:
                lines = f.readlines()

            total_lines = len(lines)
            start = offset - 1

            if total_lines and start >= total_lines:
                return f"❌ Error: Offset {offset} exceeds file length ({total_lines} lines)"

            selected_lines = lines[start : start + limit]

            result: list[str] = []
            for i, line in enumerate(selected_lines, start=offset):
                result.append(f"{i:6d}\t{line.rstrip()}")

            output = "\n".join(result)

            if total_lines > start + limit:
                remaining = total_lines - (start + limit)
                output += (
                    f"\n\n[Showing lines {offset}-{start + len(selected_lines)} "
                    f"of {total_lines} total lines. {remaining} more lines available]"
                )

            return output if output else "(empty file)"

        except PermissionError:
            return f"❌ Error: Permission denied: {path}"
        except Exception as e:
            return f"❌ Error reading file: {str(e)}"

    return read_file


def create_glob_tool(workspace: str | Path) -> Callable[..., str]:
    """
    Create tool for finding files by pattern.

    Args:
        workspace: Workspace root the tool is confined to.

    Returns:
        Callable that finds files matching a glob pattern.
    """
    root = Path(workspace).expanduser().resolve()

    def glob(
        pattern: Annotated[str, Field(description="Glob pattern (e.g., '**/*.py')")],
        max_results: Annotated[
            int, Field(description="Maximum number of results", gt=0, le=1000)
        ] = 100,
    ) -> str:
        """
        Find workspace files matching a glob pattern.

        Args:
            pattern: Glob pattern (supports ** for recursive)
            max_results: Maximum number of results (max 1000)

        Returns:
            List of matching files or error message
        """
        check = validate_pattern(pattern)
        if not check.valid:
            return f"❌ Error: {check.error}"
        if pattern.startswith("/"):
            return "❌ Error: Pattern must be relative to the workspace"

        try:
            # Symlinks may point outside the workspace
            matches = sorted(
                p for p in root.glob(pattern) if is_within(p.resolve(), root)
            )

            if not matches:
                return f"No files found matching pattern: {pattern}"

            total_matches = len(matches)
            matches = matches[:max_results]

            output = "\n".join(str(match.relative_to(root)) for match in matches)

            if total_matches > max_results:
                output += f"\n\n[Showing first {max_results} of {total_matches} matches]"
            else:
                output += f"\n\n[Found {total_matches} matches]"

            return output

        except Exception as e:
            return f"❌ Error finding files: {str(e)}"

    return glob


def create_grep_tool(workspace: str | Path) -> Callable[..., str]:
    """
    Create tool for searching text within workspace files.

    Args:
        workspace: Workspace root the tool is confined to.

    Returns:
        Callable that searches file contents.
    """
    root = Path(workspace).expanduser().resolve()

    def grep(
        pattern: Annotated[str, Field(description="Text pattern to search for")],
        path: Annotated[
            str, Field(description="Directory or file to search")
        ] = ".",
        max_results: Annotated[
            int, Field(description="Maximum number of results", gt=0, le=1000)
        ] = 100,
    ) -> str:
        """
        Search file contents for a pattern.

        Args:
            pattern: Regular expression pattern
            path: Directory or file to search (relative to the workspace)
            max_results: Maximum number of results (max 1000)

        Returns:
            Search results or error message
        """
        pattern_check = validate_pattern(pattern)
        if not pattern_check.valid:
            return f"❌ Error: {pattern_check.error}"

        path_check = sanitize_path(path, root)
        if not path_check.valid:
            return f"❌ Error: {path_check.error}"

        try:
            regex = re.compile(pattern)
        except re.error as e:
            return f"❌ Error: Invalid pattern: {e}"

        try:
            target = root / path_check.value
            if not target.exists():
                return f"❌ Error: Path not found: {path}"

            files = [target] if target.is_file() else sorted(
                p
                for p in target.rglob("*")
                if p.is_file() and is_within(p.resolve(), root)
            )

            hits: list[str] = []
            for file_path in files:
                if file_path.stat().st_size > MAX_GREP_FILE_BYTES:
                    continue
                with open(file_path, "r", encoding="utf-8", errors="replace") as f:
                    for line_no, line in enumerate(f, start=1):
                        if regex.search(line):
                            rel = file_path.relative_to(root)
                            hits.append(f"{rel}:{line_no}:{line.rstrip()}")
                            if len(hits) >= max_results:
                                break
                if len(hits) >= max_results:
                    break

            if not hits:
                return f"No matches found for pattern: {pattern}"

            return "\n".join(hits) + f"\n\n[Found {len(hits)} matches]"

        except PermissionError:
            return f"❌ Error: Permission denied: {path}"
        except Exception as e:
            return f"❌ Error searching: {str(e)}"

    return grep
