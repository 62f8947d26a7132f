"""
Configuration Schema for the Security Policy Engine

Defines the immutable SecurityConfig snapshot consumed by every policy
decision. Values are parsed from the ``security`` section of the persisted
configuration and validated at load time; evaluation never mutates them.
"""

from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any

TOOL_PROFILES = frozenset({"minimal", "coding", "messaging", "full", "custom"})

TIER_ALLOW_ALL = "allow-all"
TIER_BLOCK_DESTRUCTIVE = "block-destructive"
TIER_ALLOWLIST_ONLY = "allowlist-only"
POLICY_TIERS = frozenset({TIER_ALLOW_ALL, TIER_BLOCK_DESTRUCTIVE, TIER_ALLOWLIST_ONLY})

DEFAULT_TOOL_PROFILE = "coding"
DEFAULT_POLICY_TIER = TIER_BLOCK_DESTRUCTIVE

# Blocklist written by the interactive setup; hosts opt into it explicitly.
DEFAULT_BLOCKED_COMMANDS: tuple[str, ...] = (
    "rm -rf /",
    "dd if=",
    ":(){:|:&};:",
    "curl | sh",
    "wget | sh",
    "mkfs",
    "fdisk",
    "dd",
    "> /dev/sda",
)


def _as_entries(value: Iterable[str] | None, name: str) -> tuple[str, ...]:
    """
    Normalize an allow/block list into a tuple of non-blank strings.

    Args:
        value: Raw list (any iterable of strings) or None.
        name: Field name, used in error messages.

    Returns:
        Tuple of stripped entries; blank entries dropped.

    Raises:
        ValueError: If the value is a bare string or holds non-strings.
    """
    if value is None:
        return ()
    if isinstance(value, str):
        raise ValueError(f"{name} must be a list of strings, got a string")

    entries: list[str] = []
    for item in value:
        if not isinstance(item, str):
            raise ValueError(
                f"{name} entries must be strings, got {type(item).__name__}"
            )
        # A blank entry would substring-match every input
        if item.strip():
            entries.append(item.strip())
    return tuple(entries)


@dataclass(frozen=True)
class SecurityConfig:
    """
    Immutable security policy snapshot.

    Attributes:
        tool_profile: Named profile (minimal/coding/messaging/full/custom)
        allowed_commands: Tool allowlist and command allowlist (prefixes)
        blocked_commands: Substring blocklist; always wins
        command_policy_tier: allow-all, block-destructive or allowlist-only
    """

    tool_profile: str = DEFAULT_TOOL_PROFILE
    allowed_commands: tuple[str, ...] = field(default_factory=tuple)
    blocked_commands: tuple[str, ...] = field(default_factory=tuple)
    command_policy_tier: str = DEFAULT_POLICY_TIER

    def __post_init__(self) -> None:
        """
        Validate and normalize the snapshot.

        Raises:
            ValueError: If the profile or tier name is unknown, or a list
                holds non-string entries.
        """
        if self.tool_profile not in TOOL_PROFILES:
            raise ValueError(
                f"Invalid tool profile '{self.tool_profile}'. "
                f"Must be: minimal, coding, messaging, full, or custom"
            )
        if self.command_policy_tier not in POLICY_TIERS:
            raise ValueError(
                f"Invalid command policy tier '{self.command_policy_tier}'. "
                f"Must be: allow-all, block-destructive, or allowlist-only"
            )

        object.__setattr__(
            self,
            "allowed_commands",
            _as_entries(self.allowed_commands, "allowed_commands"),
        )
        object.__setattr__(
            self,
            "blocked_commands",
            _as_entries(self.blocked_commands, "blocked_commands"),
        )

    @classmethod
    def from_dict(cls, raw: dict[str, Any] | None) -> "SecurityConfig":
        """
        Build a snapshot from the persisted ``security`` section.

        Missing keys fall back to documented defaults. The tier is read
        from ``toolPolicy`` or, failing that, ``commandPolicyTier``.

        Args:
            raw: Parsed ``security`` mapping (camelCase keys), or None

        Returns:
            Validated configuration snapshot

        Raises:
            ValueError: If the section is not a mapping or holds invalid values
        """
        if raw is None:
            return cls()
        if not isinstance(raw, dict):
            raise ValueError(
                f"Invalid security section: expected dict, got {type(raw)}"
            )

        tier = raw.get("toolPolicy") or raw.get("commandPolicyTier")
        return cls(
            tool_profile=raw.get("toolProfile") or DEFAULT_TOOL_PROFILE,
            allowed_commands=raw.get("allowedCommands") or (),
            blocked_commands=raw.get("blockedCommands") or (),
            command_policy_tier=tier or DEFAULT_POLICY_TIER,
        )
