from __future__ import annotations

from pathlib import Path

import yaml
from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource, SettingsConfigDict

from wgkeys.provisioner import DEFAULT_KEY_DIR, DEFAULT_WG_BINARY, KeyProvisioner
from wgkeys.runner import CommandRunner

_LOG_LEVELS = {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}


class WireGuardToolConfig(BaseModel):
    binary: str = DEFAULT_WG_BINARY

    @field_validator("binary")
    @classmethod
    def _binary_not_empty(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("wg.binary must not be empty")
        return value


class LoggingConfig(BaseModel):
    level: str = "INFO"
    json_output: bool = False

    @field_validator("level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        normalized = value.upper()
        if normalized not in _LOG_LEVELS:
            raise ValueError(f"logging.level must be one of {sorted(_LOG_LEVELS)}")
        return normalized


class WgKeysSettings(BaseSettings):
    """Where keys live, which ``wg`` to run, and how to log.

    ``WGKEYS_*`` environment variables take precedence over values passed in
    (including those read from a YAML file), so a deployment can repoint
    ``key_dir`` or ``wg.binary`` without editing the file. Nested fields use
    ``__``, e.g. ``WGKEYS_WG__BINARY``.
    """

    key_dir: Path = DEFAULT_KEY_DIR
    wg: WireGuardToolConfig = Field(default_factory=WireGuardToolConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    model_config = SettingsConfigDict(
        env_prefix="WGKEYS_",
        env_nested_delimiter="__",
        extra="ignore",
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return env_settings, init_settings, file_secret_settings

    def build_provisioner(self, runner: CommandRunner | None = None) -> KeyProvisioner:
        """Wire a provisioner using ``key_dir`` as its default directory."""
        return KeyProvisioner(
            runner=runner,
            wg_binary=self.wg.binary,
            default_directory=self.key_dir,
        )


def load_config(path: str | Path = "config/wgkeys.yaml") -> WgKeysSettings:
    """Load settings from YAML, either top-level or under a ``wgkeys:`` key.

    The section form lets the file be shared with other tools' settings.
    """
    config_path = Path(path)
    if not config_path.exists():
        raise FileNotFoundError(f"config file not found: {config_path}")

    loaded = yaml.safe_load(config_path.read_text(encoding="utf-8")) or {}
    if not isinstance(loaded, dict):
        raise ValueError("config file must contain a top-level mapping")

    section = loaded.get("wgkeys", loaded)
    if not isinstance(section, dict):
        raise ValueError("wgkeys config section must be a mapping")

    return WgKeysSettings(**section)


__all__ = [
    "LoggingConfig",
    "WgKeysSettings",
    "WireGuardToolConfig",
    "load_config",
]
