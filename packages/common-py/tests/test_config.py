"""Tests for settings loading."""

import pytest

from monoalign_common import ConfigError, EnvVars, MonoalignSettings, Timeouts, load_settings


@pytest.mark.usefixtures("clean_env")
class TestDefaults:
    """Built-in defaults"""

    def test_defaults_without_file(self, repo_root):
        settings = load_settings(repo_root)
        assert isinstance(settings, MonoalignSettings)
        assert settings.log_level == "WARNING"
        assert settings.install_timeout == Timeouts.INSTALL
        assert settings.registry_timeout == Timeouts.REGISTRY
        assert settings.registry_enabled is True
        assert settings.workspace_dirs == ["apps", "packages"]
        assert settings.default_dry_run is True


@pytest.mark.usefixtures("clean_env")
class TestSources:
    """Precedence between YAML, environment and overrides"""

    def test_yaml_file(self, repo_root, write_settings):
        write_settings("install_timeout: 60\nworkspace_dirs:\n  - apps\n  - libs\n")
        settings = load_settings(repo_root)
        assert settings.install_timeout == 60
        assert settings.workspace_dirs == ["apps", "libs"]

    def test_env_overrides_yaml(self, repo_root, write_settings, monkeypatch):
        write_settings("registry_timeout: 5\n")
        monkeypatch.setenv("MONOALIGN_REGISTRY_TIMEOUT", "20")
        assert load_settings(repo_root).registry_timeout == 20

    def test_env_boolean(self, repo_root, monkeypatch):
        monkeypatch.setenv(EnvVars.REGISTRY_ENABLED, "false")
        assert load_settings(repo_root).registry_enabled is False

    def test_overrides_win(self, repo_root, write_settings, monkeypatch):
        write_settings("log_level: error\n")
        monkeypatch.setenv("MONOALIGN_LOG_LEVEL", "info")
        assert load_settings(repo_root, log_level="debug").log_level == "DEBUG"

    def test_unknown_yaml_keys_ignored(self, repo_root, write_settings):
        write_settings("colour: blue\nlog_json: true\n")
        settings = load_settings(repo_root)
        assert settings.log_json is True
        assert not hasattr(settings, "colour")


@pytest.mark.usefixtures("clean_env")
class TestValidation:
    """Invalid values become ConfigError"""

    def test_warn_alias(self, repo_root):
        assert load_settings(repo_root, log_level="warn").log_level == "WARNING"

    def test_invalid_log_level(self, repo_root):
        with pytest.raises(ConfigError) as exc_info:
            load_settings(repo_root, log_level="loud")
        assert "log_level" in exc_info.value.message

    def test_non_positive_timeout(self, repo_root, write_settings):
        write_settings("install_timeout: 0\n")
        with pytest.raises(ConfigError):
            load_settings(repo_root)

    def test_malformed_yaml(self, repo_root, write_settings):
        write_settings("install_timeout: [unclosed\n")
        with pytest.raises(ConfigError):
            load_settings(repo_root)

    def test_yaml_must_be_mapping(self, repo_root, write_settings):
        write_settings("- apps\n- packages\n")
        with pytest.raises(ConfigError) as exc_info:
            load_settings(repo_root)
        assert "mapping" in exc_info.value.message
