"""
Configuration Parser for the Security Policy Engine

Loads the ``security`` section of a YAML (or JSON) configuration file and
converts it to an immutable SecurityConfig snapshot. Supports environment
variable expansion using ${VAR} or ${VAR:-default} syntax.
"""

import logging
import os
import re
import threading
from pathlib import Path
from typing import Any

import yaml

from .schema import SecurityConfig

logger = logging.getLogger(__name__)

_ENV_PATTERN = re.compile(r"\$\{([^}:]+)(?::-(.*?))?\}")


class ConfigParser:
    """
    YAML configuration parser with environment variable expansion.

    JSON documents are valid YAML, so ``config.json`` files load as well.

    Usage:
        parser = ConfigParser("~/.clawguard/config.yaml")
        security = parser.load()
    """

    def __init__(self, config_path: str | Path) -> None:
        """
        Initialize parser with configuration file path.

        Args:
            config_path: Path to YAML/JSON configuration file

        Raises:
            FileNotFoundError: If config file doesn't exist
        """
        self.config_path = Path(config_path).expanduser()
        if not self.config_path.exists():
            raise FileNotFoundError(
                f"Configuration file not found: {self.config_path}"
            )

    def load(self) -> SecurityConfig:
        """
        Load and parse the configuration file.

        A document without a ``security`` section yields the default
        snapshot (coding profile, empty lists, block-destructive tier).

        Returns:
            Parsed and validated security snapshot

        Raises:
            yaml.YAMLError: If YAML parsing fails
            ValueError: If configuration is invalid
        """
        with open(self.config_path, "r", encoding="utf-8") as f:
            raw_config = yaml.safe_load(f)

        if raw_config is None:
            raw_config = {}
        if not isinstance(raw_config, dict):
            raise ValueError(
                f"Invalid configuration: expected dict, got {type(raw_config)}"
            )

        expanded = self._expand_env_vars(raw_config)
        security = SecurityConfig.from_dict(expanded.get("security"))

        logger.info(
            f"🔒 Loaded security config from {self.config_path} "
            f"(profile={security.tool_profile}, "
            f"tier={security.command_policy_tier}, "
            f"allowed={len(security.allowed_commands)}, "
            f"blocked={len(security.blocked_commands)})"
        )
        return security

    def _expand_env_vars(self, config: Any) -> Any:
        """
        Recursively expand ${ENV_VAR} and ${ENV_VAR:-default} placeholders.

        Args:
            config: Configuration value (can be dict, list, str, etc.)

        Returns:
            Configuration with environment variables expanded
        """

        def replacer(match: re.Match[str]) -> str:
            env_var = match.group(1)
            default = match.group(2) or ""
            return os.getenv(env_var, default)

        def expand_value(value: Any) -> Any:
            if isinstance(value, str):
                return _ENV_PATTERN.sub(replacer, value)
            elif isinstance(value, dict):
                return {k: expand_value(v) for k, v in value.items()}
            elif isinstance(value, list):
                return [expand_value(v) for v in value]
            else:
                return value

        return expand_value(config)


class SecurityConfigStore:
    """
    Holder for the current SecurityConfig snapshot.

    Reload builds a complete new snapshot first and then swaps the
    reference, so in-flight evaluations keep the snapshot they started
    with and never see a partially updated config.

    Usage:
        store = SecurityConfigStore.from_file("config.yaml")
        engine = PolicyEngine(store=store)
        store.reload()
    """

    def __init__(
        self,
        initial: SecurityConfig | None = None,
        parser: ConfigParser | None = None,
    ) -> None:
        """
        Initialize the store.

        Args:
            initial: Starting snapshot (defaults when omitted)
            parser: Parser used by reload() (optional)
        """
        self._parser = parser
        self._current = initial if initial is not None else SecurityConfig()
        self._reload_lock = threading.Lock()

    @classmethod
    def from_file(cls, config_path: str | Path) -> "SecurityConfigStore":
        """
        Create a store and load its first snapshot from a file.

        Args:
            config_path: Path to YAML/JSON configuration file

        Returns:
            Store holding the loaded snapshot
        """
        parser = ConfigParser(config_path)
        return cls(initial=parser.load(), parser=parser)

    @property
    def current(self) -> SecurityConfig:
        """Return the active snapshot."""
        return self._current

    def replace(self, config: SecurityConfig) -> None:
        """
        Swap in an already-built snapshot.

        Args:
            config: New snapshot
        """
        with self._reload_lock:
            self._current = config

    def reload(self) -> SecurityConfig:
        """
        Re-read the configuration file and swap in the new snapshot.

        On failure the previous snapshot stays active and the error
        propagates to the caller.

        Returns:
            The new active snapshot

        Raises:
            RuntimeError: If the store was created without a parser
            ValueError: If the new configuration is invalid
        """
        if self._parser is None:
            raise RuntimeError("SecurityConfigStore has no parser to reload from")

        with self._reload_lock:
            snapshot = self._parser.load()
            self._current = snapshot

        logger.info("🔒 Security config reloaded")
        return snapshot
