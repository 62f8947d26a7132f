"""
Pytest configuration and fixtures for ClawGuard tests.

The three policy fixtures mirror the reference scenarios: an
allowlist-only developer sandbox, a block-destructive default install and
an allow-all install that still keeps a blocklist.
"""

import pytest

from clawguard.config.schema import SecurityConfig


@pytest.fixture
def allowlist_config() -> SecurityConfig:
    """Allowlist-only tier with a small developer allowlist."""
    return SecurityConfig(
        command_policy_tier="allowlist-only",
        allowed_commands=("git status", "git log", "ls", "cat", "echo", "npm run"),
        blocked_commands=("rm -rf /", "dd if="),
    )


@pytest.fixture
def destructive_config() -> SecurityConfig:
    """Block-destructive tier with the destructive-command catalogue."""
    return SecurityConfig(
        command_policy_tier="block-destructive",
        blocked_commands=("rm -rf /", "dd if=", "mkfs", "fdisk"),
    )


@pytest.fixture
def allow_all_config() -> SecurityConfig:
    """Allow-all tier that still carries a blocklist."""
    return SecurityConfig(
        command_policy_tier="allow-all",
        blocked_commands=("rm -rf /", "dd if="),
    )
