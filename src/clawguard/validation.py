"""
Input validation for tool arguments.

Guards filesystem paths and search patterns before any tool touches the
host. All functions are pure and return a ValidationResult instead of
raising.
"""

import re
from dataclasses import dataclass
from pathlib import Path, PurePosixPath


@dataclass(frozen=True)
class ValidationResult:
    """
    Outcome of a validation check.

    Attributes:
        valid: Whether the input passed.
        error: Explanation when ``valid`` is False.
        value: Sanitized value (e.g. workspace-relative path) when valid.
    """

    valid: bool
    error: str | None = None
    value: str | None = None


SENSITIVE_PATH_PATTERNS = [
    re.compile(r"(?:^|/)proc/", re.IGNORECASE),
    re.compile(r"(?:^|/)sys/", re.IGNORECASE),
    re.compile(r"(?:^|/)etc/(?:shadow|passwd|sudoers)", re.IGNORECASE),
    re.compile(r"(?:^|/)dev/", re.IGNORECASE),
    re.compile(r"(?:^|/)\.ssh/", re.IGNORECASE),
    re.compile(r"(?:^|/)\.gnupg/", re.IGNORECASE),
    re.compile(r"(?:^|/)\.aws/", re.IGNORECASE),
    re.compile(r"(?:^|/)\.kube/", re.IGNORECASE),
]

DANGEROUS_REGEX_PATTERNS = [
    re.compile(r"\(\?:.*\)\*"),  # Non-capturing group with star
    re.compile(r"\(\?=.*\)\*"),  # Lookahead with star
    re.compile(r"\{[0-9]+,[0-9]+\}"),  # Range quantifiers
]


def is_within(path: Path, base: Path) -> bool:
    """Check whether an already resolved path lies under ``base``."""
    try:
        path.relative_to(base)
        return True
    except ValueError:
        return False


def sanitize_path(
    input_path: str,
    workspace: str | Path,
    allow_absolute: bool = False,
    allowed_base_dirs: list[str] | None = None,
) -> ValidationResult:
    """
    Validate a path and resolve it relative to the workspace.

    Args:
        input_path: Path supplied by the agent.
        workspace: Workspace root all paths must stay inside.
        allow_absolute: Accept absolute paths outside the workspace.
        allowed_base_dirs: Workspace-relative directories the path must
            fall under (optional).

    Returns:
        Result whose ``value`` is the workspace-relative path (or the
        normalized absolute path when ``allow_absolute`` admits one).
    """
    if not input_path or not isinstance(input_path, str):
        return ValidationResult(False, "Invalid path: empty or not a string")

    if "\0" in input_path:
        return ValidationResult(False, "Invalid path: contains null bytes")

    workspace_root = Path(workspace).expanduser().resolve()
    candidate = Path(input_path).expanduser()

    if candidate.is_absolute():
        resolved = candidate.resolve()
        if not is_within(resolved, workspace_root):
            if not allow_absolute:
                return ValidationResult(
                    False,
                    "Absolute paths outside workspace are not allowed. "
                    "Use relative paths.",
                )
            normalized = resolved.as_posix()
        else:
            normalized = resolved.relative_to(workspace_root).as_posix()
    else:
        resolved = (workspace_root / candidate).resolve()
        if not is_within(resolved, workspace_root):
            return ValidationResult(
                False,
                "Path traversal detected: access outside workspace is not allowed",
            )
        normalized = resolved.relative_to(workspace_root).as_posix()

    if allowed_base_dirs:
        relative = PurePosixPath(normalized)
        if not any(
            relative == PurePosixPath(base) or PurePosixPath(base) in relative.parents
            for base in allowed_base_dirs
        ):
            return ValidationResult(
                False,
                "Path must be within allowed directories: "
                + ", ".join(allowed_base_dirs),
            )

    # Check both the normalized path and what the agent literally asked for
    for pattern in SENSITIVE_PATH_PATTERNS:
        if pattern.search(normalized) or pattern.search(input_path):
            return ValidationResult(False, "Access to sensitive paths is not allowed")

    return ValidationResult(True, value=normalized)


def validate_pattern(pattern: str, max_length: int = 500) -> ValidationResult:
    """
    Validate a glob/grep pattern against ReDoS and traversal.

    Args:
        pattern: Search pattern supplied by the agent.
        max_length: Maximum accepted length.

    Returns:
        Validation result.
    """
    if not pattern or not isinstance(pattern, str):
        return ValidationResult(False, "Invalid pattern: empty or not a string")

    if len(pattern) > max_length:
        return ValidationResult(
            False, f"Pattern too long (max {max_length} characters)"
        )

    if ".." in pattern:
        return ValidationResult(False, "Pattern contains path traversal")

    if pattern.count("(") > 10 or pattern.count("[") > 10:
        return ValidationResult(
            False, "Pattern too complex (too many nested groups)"
        )

    for dangerous in DANGEROUS_REGEX_PATTERNS:
        if dangerous.search(pattern):
            return ValidationResult(
                False, "Pattern contains potentially dangerous regex constructs"
            )

    return ValidationResult(True, value=pattern)
