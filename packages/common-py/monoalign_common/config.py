"""
monoalign Settings

Settings are resolved from, highest precedence first:
1. Keyword arguments passed to ``load_settings``
2. Environment variables (``MONOALIGN_INSTALL_TIMEOUT``, ...)
3. ``.monoalign.yaml`` at the repository root
4. Built-in defaults
"""

from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml
from pydantic import ValidationError as PydanticValidationError
from pydantic import field_validator
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource, SettingsConfigDict

from .constants import DEFAULT_WORKSPACE_DIRS, LOG_LEVELS, SETTINGS_FILENAME, EnvVars, Timeouts
from .errors import ConfigError


def _load_yaml(path: Path) -> Dict[str, Any]:
    if not path.exists():
        return {}
    try:
        with path.open(encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        raise ConfigError(f"Failed to read {path}: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"Settings file {path} must contain a mapping")
    return data


class _YamlSource(PydanticBaseSettingsSource):
    """Settings source backed by an already loaded YAML mapping."""

    def __init__(self, settings_cls: type[BaseSettings], yaml_config: Dict[str, Any]):
        super().__init__(settings_cls)
        self._yaml_config = yaml_config

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        value = self._yaml_config.get(field_name)
        return value, field_name, value is not None

    def __call__(self) -> Dict[str, Any]:
        return {k: v for k, v in self._yaml_config.items() if k in self.settings_cls.model_fields}


class MonoalignSettings(BaseSettings):
    """Runtime settings for monoalign."""

    model_config = SettingsConfigDict(env_prefix=EnvVars.PREFIX, case_sensitive=False)

    log_level: str = "WARNING"
    log_json: bool = False
    install_timeout: float = Timeouts.INSTALL
    registry_timeout: float = Timeouts.REGISTRY
    registry_enabled: bool = True
    workspace_dirs: List[str] = list(DEFAULT_WORKSPACE_DIRS)
    default_dry_run: bool = True

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.upper()
        if level == "WARN":
            level = "WARNING"
        if level not in LOG_LEVELS:
            raise ValueError(f"Unsupported log level '{v}'. Use one of: {', '.join(LOG_LEVELS)}")
        return level

    @field_validator("install_timeout", "registry_timeout")
    @classmethod
    def validate_timeout(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("Timeouts must be positive")
        return v


def _settings_class(yaml_config: Dict[str, Any]) -> type[MonoalignSettings]:
    class _FileBackedSettings(MonoalignSettings):
        @classmethod
        def settings_customise_sources(
            cls,
            settings_cls: type[BaseSettings],
            init_settings: PydanticBaseSettingsSource,
            env_settings: PydanticBaseSettingsSource,
            dotenv_settings: PydanticBaseSettingsSource,
            file_secret_settings: PydanticBaseSettingsSource,
        ) -> tuple[PydanticBaseSettingsSource, ...]:
            return (init_settings, env_settings, _YamlSource(settings_cls, yaml_config))

    return _FileBackedSettings


def load_settings(root: Optional[Path] = None, **overrides: Any) -> MonoalignSettings:
    """
    Load settings for a repository.

    Args:
        root: Repository root holding an optional .monoalign.yaml
        **overrides: Values taking precedence over every other source

    Returns:
        Resolved settings

    Raises:
        ConfigError: On unreadable YAML or values failing validation
    """
    root = root or Path.cwd()
    yaml_config = _load_yaml(root / SETTINGS_FILENAME)
    settings_cls = _settings_class(yaml_config)
    try:
        return settings_cls(**overrides)
    except PydanticValidationError as e:
        err = e.errors()[0]
        field = ".".join(str(loc) for loc in err["loc"])
        raise ConfigError(f"Invalid setting '{field}': {err['msg']}") from e
