from __future__ import annotations

from typing import Any, Literal

import yaml
from annotated_types import Gt, Len
from pyaml_env import parse_config
from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing_extensions import Annotated

from lifxctl.errors import ConfigurationError
from lifxctl.lifx import DEFAULT_API_URL


class LogSettings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="log_", extra="ignore")

    level: Literal["debug", "info", "warning", "error", "critical"] = "warning"
    colors: bool = True

    @field_validator("level", mode="before")
    @classmethod
    def _lower_level(cls, value: Any) -> Any:
        return value.lower() if isinstance(value, str) else value


class LifxSettings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="lifx_", extra="ignore")

    token: Annotated[str, Len(1)]
    api_url: str = DEFAULT_API_URL
    timeout: Annotated[float, Gt(0)] | None = None


class Settings(BaseSettings):
    model_config = SettingsConfigDict(extra="ignore")

    log: LogSettings = Field(default_factory=LogSettings)
    lifx: LifxSettings = Field(default_factory=LifxSettings)  # type: ignore


def load_log_settings(path: str | None = None) -> LogSettings:
    """Logging settings alone, so logging works before the token is checked."""
    try:
        return LogSettings(**(_read_section(path).get("log") or {}))
    except ValidationError as e:
        raise ConfigurationError(f"Invalid log settings: {e}") from e


def load_settings(path: str | None = None) -> Settings:
    """Build settings from the environment, optionally overlaid with a YAML file.

    The file holds a ``settings`` mapping with ``log`` and ``lifx`` sections.
    Values in the file win over environment variables; whatever the file does
    not set is still read from the environment.
    """
    section = _read_section(path)
    try:
        return Settings(
            log=LogSettings(**(section.get("log") or {})),
            lifx=LifxSettings(**(section.get("lifx") or {})),
        )
    except ValidationError as e:
        missing = {".".join(map(str, err["loc"])) for err in e.errors()}
        if "token" in missing:
            raise ConfigurationError("LIFX_TOKEN environment variable is not set or empty") from e
        raise ConfigurationError(f"Invalid settings: {e}") from e


def _read_section(path: str | None) -> dict[str, Any]:
    if path is None:
        return {}
    try:
        config = parse_config(path, raise_if_na=True, tag=None) or {}
    except OSError as e:
        raise ConfigurationError(f"Can't read config file {path!r}: {e}") from e
    except (ValueError, yaml.YAMLError) as e:
        raise ConfigurationError(f"Can't parse config file {path!r}: {e}") from e
    return config.get("settings") or {}
