"""
Unit tests for configuration parser and SecurityConfigStore.

Tests cover YAML and JSON parsing, environment variable expansion,
error cases, and atomic snapshot replacement on reload.
"""

import pytest
import yaml

from clawguard.config.parser import ConfigParser, SecurityConfigStore
from clawguard.config.schema import SecurityConfig


class TestConfigParser:
    """Tests for ConfigParser class."""

    def test_file_not_found(self):
        """Test that missing config file raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            ConfigParser("nonexistent.yaml")

    def test_yaml_config(self, tmp_path):
        """Test parsing a YAML security section."""
        config_yaml = """
security:
  toolProfile: minimal
  commandPolicyTier: allowlist-only
  allowedCommands:
    - git status
    - ls
  blockedCommands:
    - rm -rf /
"""
        config_file = tmp_path / "config.yaml"
        config_file.write_text(config_yaml)

        config = ConfigParser(str(config_file)).load()

        assert isinstance(config, SecurityConfig)
        assert config.tool_profile == "minimal"
        assert config.command_policy_tier == "allowlist-only"
        assert config.allowed_commands == ("git status", "ls")
        assert config.blocked_commands == ("rm -rf /",)

    def test_json_config(self, tmp_path):
        """Test JSON documents load through the YAML parser."""
        config_file = tmp_path / "config.json"
        config_file.write_text(
            '{"security": {"toolPolicy": "allow-all", '
            '"blockedCommands": ["mkfs"]}, "model": "gpt-4o"}'
        )

        config = ConfigParser(config_file).load()

        assert config.command_policy_tier == "allow-all"
        assert config.blocked_commands == ("mkfs",)

    def test_missing_security_section(self, tmp_path):
        """Test a document without a security section yields defaults."""
        config_file = tmp_path / "config.yaml"
        config_file.write_text("model: gpt-4o\n")

        assert ConfigParser(config_file).load() == SecurityConfig()

    def test_empty_file(self, tmp_path):
        """Test an empty file yields defaults."""
        config_file = tmp_path / "config.yaml"
        config_file.write_text("")

        assert ConfigParser(config_file).load() == SecurityConfig()

    def test_not_a_mapping(self, tmp_path):
        """Test a top-level list is rejected."""
        config_file = tmp_path / "config.yaml"
        config_file.write_text("- a\n- b\n")

        with pytest.raises(ValueError, match="expected dict"):
            ConfigParser(config_file).load()

    def test_invalid_yaml(self, tmp_path):
        """Test malformed YAML raises YAMLError."""
        config_file = tmp_path / "config.yaml"
        config_file.write_text("security: [unclosed\n")

        with pytest.raises(yaml.YAMLError):
            ConfigParser(config_file).load()

    def test_invalid_tier(self, tmp_path):
        """Test an unknown tier is rejected at load time."""
        config_file = tmp_path / "config.yaml"
        config_file.write_text("security:\n  commandPolicyTier: yolo\n")

        with pytest.raises(ValueError, match="Invalid command policy tier"):
            ConfigParser(config_file).load()

    def test_env_var_expansion(self, tmp_path, monkeypatch):
        """Test ${VAR} placeholders are expanded."""
        monkeypatch.setenv("CLAWGUARD_TIER", "allow-all")
        config_file = tmp_path / "config.yaml"
        config_file.write_text(
            "security:\n"
            "  commandPolicyTier: ${CLAWGUARD_TIER}\n"
            "  allowedCommands: ['${CLAWGUARD_TOOL:-git status}']\n"
        )
        monkeypatch.delenv("CLAWGUARD_TOOL", raising=False)

        config = ConfigParser(config_file).load()

        assert config.command_policy_tier == "allow-all"
        assert config.allowed_commands == ("git status",)

    def test_env_var_without_default(self, tmp_path, monkeypatch):
        """Test an unset variable without default expands to empty."""
        monkeypatch.delenv("CLAWGUARD_MISSING", raising=False)
        config_file = tmp_path / "config.yaml"
        config_file.write_text(
            "security:\n  blockedCommands: ['${CLAWGUARD_MISSING}', mkfs]\n"
        )

        config = ConfigParser(config_file).load()

        assert config.blocked_commands == ("mkfs",)


class TestSecurityConfigStore:
    """Tests for SecurityConfigStore."""

    def test_defaults(self):
        """Test a new store holds the default snapshot."""
        assert SecurityConfigStore().current == SecurityConfig()

    def test_replace(self):
        """Test replace swaps the active snapshot."""
        store = SecurityConfigStore()
        updated = SecurityConfig(tool_profile="full")

        store.replace(updated)

        assert store.current is updated

    def test_from_file_and_reload(self, tmp_path):
        """Test reload picks up edits to the file."""
        config_file = tmp_path / "config.yaml"
        config_file.write_text("security:\n  toolProfile: minimal\n")
        store = SecurityConfigStore.from_file(config_file)
        assert store.current.tool_profile == "minimal"

        config_file.write_text("security:\n  toolProfile: full\n")
        reloaded = store.reload()

        assert reloaded.tool_profile == "full"
        assert store.current is reloaded

    def test_reload_without_parser(self):
        """Test reload requires a parser."""
        with pytest.raises(RuntimeError, match="no parser"):
            SecurityConfigStore().reload()

    def test_failed_reload_keeps_previous(self, tmp_path):
        """Test an invalid file leaves the previous snapshot active."""
        config_file = tmp_path / "config.yaml"
        config_file.write_text("security:\n  toolProfile: minimal\n")
        store = SecurityConfigStore.from_file(config_file)
        previous = store.current

        config_file.write_text("security:\n  toolProfile: nope\n")
        with pytest.raises(ValueError):
            store.reload()

        assert store.current is previous
