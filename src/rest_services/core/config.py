"""Configuration management.

Loads from TOML config files + environment variables.
Uses pydantic-settings for validation and env var overriding.
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic_settings import BaseSettings

from .enums import Action
from .errors import ConfigError, UnsupportedActionError

_PLACEHOLDER = re.compile(r"\{([^{}]+)\}")


# ---------------------------------------------------------------------------
# Service definitions
# ---------------------------------------------------------------------------

class ActionDescriptor(BaseModel):
    """Endpoint metadata for one action of a service."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    methods: tuple[str, ...] = Field(default=("GET",), min_length=1)
    parameters: tuple[str, ...] = ()  # Required path placeholders
    uri: str

    @model_validator(mode="after")
    def _parameters_in_uri(self) -> ActionDescriptor:
        placeholders = set(_PLACEHOLDER.findall(self.uri))
        missing = [p for p in self.parameters if p not in placeholders]
        if missing:
            raise ValueError(
                f"Parameters {missing} have no placeholder in uri {self.uri!r}"
            )
        return self

    @property
    def method(self) -> str:
        """Canonical method (first declared)."""
        return self.methods[0]


class ServiceDefinition(BaseModel):
    """The CRUD actions available on one resource collection.

    Unknown keys are rejected so a misspelled action fails at load time.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    index: ActionDescriptor | None = None
    show: ActionDescriptor | None = None
    store: ActionDescriptor | None = None
    update: ActionDescriptor | None = None
    destroy: ActionDescriptor | None = None

    def __getitem__(self, action: Action | str) -> ActionDescriptor:
        try:
            name = Action(action).value
        except ValueError:
            raise KeyError(action) from None
        descriptor = getattr(self, name)
        if descriptor is None:
            raise KeyError(name)
        return descriptor

    def __contains__(self, action: object) -> bool:
        try:
            return getattr(self, Action(action).value) is not None
        except ValueError:
            return False

    @property
    def actions(self) -> tuple[Action, ...]:
        """Declared actions in canonical order."""
        return tuple(a for a in Action if a in self)

    def require(self, service: str, action: Action | str) -> ActionDescriptor:
        """Like ``self[action]`` but raises ``UnsupportedActionError``."""
        if action not in self:
            name = action.value if isinstance(action, Action) else action
            raise UnsupportedActionError(service, name)
        return self[action]


# ---------------------------------------------------------------------------
# Sub-configs
# ---------------------------------------------------------------------------

class HttpConfig(BaseModel):
    url: str = "http://localhost"
    port: int | None = None
    headers: dict[str, str] = Field(
        default_factory=lambda: {"Accept": "application/json"}
    )
    timeout: float = 30.0  # seconds

    @property
    def base_url(self) -> str:
        if self.port is None:
            return self.url
        return f"{self.url}:{self.port}"


class ObservabilityConfig(BaseModel):
    log_level: str = "INFO"
    log_format: str = "json"  # "json" or "console"


# ---------------------------------------------------------------------------
# Top-level settings
# ---------------------------------------------------------------------------

class Settings(BaseSettings):
    """Top-level application settings.

    Loaded from TOML config files, overridden by environment variables.
    """

    http: HttpConfig = Field(default_factory=HttpConfig)
    services: dict[str, ServiceDefinition] = Field(default_factory=dict)
    observability: ObservabilityConfig = Field(default_factory=ObservabilityConfig)

    model_config = {"env_prefix": "REST_SERVICES_", "env_nested_delimiter": "__"}


def load_settings(
    config_path: str | Path | None = None,
    overrides: dict[str, Any] | None = None,
) -> Settings:
    """Load settings from TOML file + env vars.

    Args:
        config_path: Path to TOML config file (optional).
        overrides: Dict of overrides to apply on top.
    """
    data: dict[str, Any] = {}

    if config_path:
        path = Path(config_path)
        if not path.exists():
            raise ConfigError(f"Config file not found: {path}")

        import tomli

        with open(path, "rb") as f:
            data = tomli.load(f)

    if overrides:
        data.update(overrides)

    return Settings(**data)
