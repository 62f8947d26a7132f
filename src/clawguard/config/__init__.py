"""Configuration system for the security policy engine."""

from .parser import ConfigParser, SecurityConfigStore
from .schema import (
    DEFAULT_BLOCKED_COMMANDS,
    POLICY_TIERS,
    TOOL_PROFILES,
    SecurityConfig,
)

__all__ = [
    "ConfigParser",
    "DEFAULT_BLOCKED_COMMANDS",
    "POLICY_TIERS",
    "SecurityConfig",
    "SecurityConfigStore",
    "TOOL_PROFILES",
]
