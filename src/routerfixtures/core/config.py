"""routerfixtures Configuration.

Two kinds of configuration live here:

1. RouterConfig: the configuration of the router under test. Tests build
   it through routerfixtures.fixtures and hand it to the router; this
   package never interprets it beyond filling in defaults and TLS PEM text.
2. Settings: this package's own settings (logging, fixture host defaults),
   read from ROUTERFIXTURES_* environment variables and an optional .env.

Usage:
    from routerfixtures.core.config import default_config, get_settings

    cfg = default_config()
    print(cfg.status.port)  # 8082

    settings = get_settings()
    print(settings.logging.level)  # "INFO"
"""

from __future__ import annotations

import threading
from datetime import timedelta
from pathlib import Path
from typing import Annotated, Any, Dict, List, Optional

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from routerfixtures.core.exceptions import ConfigurationError

_VALID_LEVELS = frozenset({"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"})

# TCP port as the router reads it (uint16, zero not allowed)
Port = Annotated[int, Field(gt=0, le=65535)]


def _validate_level(v: str) -> str:
    if v.upper() not in _VALID_LEVELS:
        raise ValueError(f"Invalid log level: {v}. Must be one of {sorted(_VALID_LEVELS)}")
    return v.upper()


# =============================================================================
# Router Configuration (the system under test)
# =============================================================================


class StatusConfig(BaseModel):
    """Status/health endpoint configuration."""

    port: Port = 8082
    user: str = ""
    password: str = ""


class NatsConfig(BaseModel):
    """NATS message bus endpoint."""

    host: str = "localhost"
    port: Port = 4222
    user: str = ""
    password: str = ""


class RouterLoggingConfig(BaseModel):
    """Router logging target."""

    level: str = "debug"
    metron_address: str = "localhost:3457"
    job_name: str = "gorouter"

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        """Validate log level, keeping the case the router expects."""
        _validate_level(v)
        return v


class OAuthConfig(BaseModel):
    """OAuth token endpoint used by the router's routing API client."""

    token_endpoint: str = ""
    port: Port = 443
    skip_ssl_validation: bool = False


class TracingConfig(BaseModel):
    """Distributed tracing toggles."""

    enable_zipkin: bool = False


class RouterConfig(BaseModel):
    """Router runtime configuration.

    Durations are timedelta values. Zero disables the corresponding
    periodic task.
    """

    port: Port = 8081
    index: int = 0
    zone: str = ""
    ip: str = ""
    trace_key: str = ""

    status: StatusConfig = Field(default_factory=StatusConfig)
    nats: List[NatsConfig] = Field(default_factory=lambda: [NatsConfig()])
    logging: RouterLoggingConfig = Field(default_factory=RouterLoggingConfig)
    oauth: OAuthConfig = Field(default_factory=OAuthConfig)
    tracing: TracingConfig = Field(default_factory=TracingConfig)

    route_service_secret: str = ""

    enable_ssl: bool = False
    ssl_port: Port = 443
    tls_pem: List[str] = Field(default_factory=list)
    cipher_string: str = ""

    start_response_delay_interval: timedelta = timedelta(seconds=5)
    publish_start_message_interval: timedelta = timedelta(seconds=30)
    prune_stale_droplets_interval: timedelta = timedelta(seconds=30)
    droplet_stale_threshold: timedelta = timedelta(seconds=120)
    publish_active_apps_interval: timedelta = timedelta(0)
    endpoint_timeout: timedelta = timedelta(seconds=60)

    @field_validator(
        "start_response_delay_interval",
        "publish_start_message_interval",
        "prune_stale_droplets_interval",
        "droplet_stale_threshold",
        "publish_active_apps_interval",
        "endpoint_timeout",
    )
    @classmethod
    def validate_non_negative(cls, v: timedelta) -> timedelta:
        """Durations cannot be negative."""
        if v < timedelta(0):
            raise ValueError(f"Duration must not be negative: {v}")
        return v


def default_config() -> RouterConfig:
    """Return a router configuration populated with defaults."""
    return RouterConfig()


# =============================================================================
# Configuration Loading Functions
# =============================================================================


def load_yaml_file(path: Path) -> Dict[str, Any]:
    """Load and parse a YAML file.

    Args:
        path: Path to the YAML file.

    Returns:
        Parsed YAML content as dictionary.

    Raises:
        ConfigurationError: If file cannot be read or parsed.
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            content = yaml.safe_load(f)
    except FileNotFoundError:
        raise ConfigurationError(
            config_path=str(path),
            message=f"Configuration file not found: {path}",
        )
    except yaml.YAMLError as e:
        raise ConfigurationError(
            config_path=str(path),
            message=f"Invalid YAML in {path}: {e}",
        )

    if content is None:
        return {}
    if not isinstance(content, dict):
        raise ConfigurationError(
            config_path=str(path),
            expected_type="mapping",
            message=f"Top level of {path} must be a mapping",
        )
    return content


def merge_configs(*configs: Dict[str, Any]) -> Dict[str, Any]:
    """Deep merge multiple configuration dictionaries.

    Later configs override earlier ones.

    Args:
        *configs: Configuration dictionaries to merge.

    Returns:
        Merged configuration dictionary.
    """
    result: Dict[str, Any] = {}

    for config in configs:
        for key, value in config.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = merge_configs(result[key], value)
            else:
                result[key] = value

    return result


def build_router_config(overrides: Dict[str, Any], source: str = "<overrides>") -> RouterConfig:
    """Validate overrides layered over the default router configuration.

    Args:
        overrides: Values keyed by RouterConfig field name. Nested mappings
            are merged into the defaults, lists replace them.
        source: Where the overrides came from, for error reporting.

    Returns:
        Validated RouterConfig.

    Raises:
        ConfigurationError: If a merged value fails validation.
    """
    merged = merge_configs(default_config().model_dump(), overrides)

    try:
        return RouterConfig.model_validate(merged)
    except ValidationError as e:
        first = e.errors()[0]
        raise ConfigurationError(
            config_path=source,
            key=".".join(str(part) for part in first["loc"]),
            message=f"Configuration validation failed: {e}",
        ) from e


def load_router_config(path: Path) -> RouterConfig:
    """Load a router configuration file layered over the defaults.

    Args:
        path: Path to a YAML file using RouterConfig field names.

    Returns:
        Validated RouterConfig.

    Raises:
        ConfigurationError: If the file is missing, not YAML, or invalid.
    """
    path = Path(path).expanduser()
    return build_router_config(load_yaml_file(path), source=str(path))


# =============================================================================
# Package Settings
# =============================================================================


class LoggingConfig(BaseModel):
    """Logging configuration for this package."""

    level: str = "INFO"
    format: str = "json"

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        """Validate log level is valid."""
        return _validate_level(v)

    @field_validator("format")
    @classmethod
    def validate_format(cls, v: str) -> str:
        """Validate renderer name."""
        if v not in ("json", "console"):
            raise ValueError(f"Invalid log format: {v}. Must be 'json' or 'console'")
        return v


class FixtureConfig(BaseModel):
    """Defaults applied by the router test config builders."""

    bind_ip: str = "127.0.0.1"
    nats_host: str = "localhost"


class Settings(BaseSettings):
    """Package settings.

    Loads configuration from:
    1. Environment variables (ROUTERFIXTURES_ prefix, __ for nesting)
    2. Defaults defined in the Pydantic models
    """

    model_config = SettingsConfigDict(
        env_prefix="ROUTERFIXTURES_",
        env_nested_delimiter="__",
        extra="ignore",
    )

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    fixtures: FixtureConfig = Field(default_factory=FixtureConfig)


def create_settings(env_file: Optional[Path] = None, **overrides: Any) -> Settings:
    """Create a Settings instance.

    Args:
        env_file: Optional .env file to load into the environment first.
        **overrides: Explicit values that win over the environment.

    Returns:
        Configured Settings instance.

    Raises:
        ConfigurationError: If settings fail validation.
    """
    if env_file is not None and Path(env_file).exists():
        load_dotenv(env_file)

    try:
        return Settings(**overrides)
    except ValidationError as e:
        raise ConfigurationError(
            config_path=str(env_file or "environment"),
            message=f"Settings validation failed: {e}",
        ) from e


class _SettingsHolder:
    """Thread-safe singleton holder for Settings instance."""

    _instance: Optional[Settings] = None
    _lock: threading.Lock = threading.Lock()

    @classmethod
    def get(cls, force_reload: bool = False, **kwargs: Any) -> Settings:
        if cls._instance is None or force_reload:
            with cls._lock:
                # Double-check locking
                if cls._instance is None or force_reload:
                    cls._instance = create_settings(**kwargs)
        return cls._instance

    @classmethod
    def reset(cls) -> None:
        with cls._lock:
            cls._instance = None


def get_settings(force_reload: bool = False, env_file: Optional[Path] = None) -> Settings:
    """Get the global Settings singleton.

    Args:
        force_reload: If True, rebuild settings from the environment.
        env_file: Optional .env file to load on (re)build.

    Returns:
        Settings instance.
    """
    return _SettingsHolder.get(force_reload=force_reload, env_file=env_file)


def reset_settings() -> None:
    """Reset the settings singleton (for testing)."""
    _SettingsHolder.reset()
