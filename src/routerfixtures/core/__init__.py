"""Core module for routerfixtures.

Exports the exception hierarchy and configuration.
"""

from routerfixtures.core.exceptions import (
    FixtureError,
    ConfigurationError,
    RandomnessUnavailable,
    KeyGenerationFailed,
    CertificateSigningFailed,
    ParameterEncodingFailed,
    MalformedPEM,
    KeyCertificateMismatch,
)
from routerfixtures.core.config import (
    get_settings,
    reset_settings,
    Settings,
    LoggingConfig,
    FixtureConfig,
    RouterConfig,
    StatusConfig,
    NatsConfig,
    RouterLoggingConfig,
    OAuthConfig,
    TracingConfig,
    default_config,
    build_router_config,
    load_router_config,
)

__all__ = [
    # Exceptions
    "FixtureError",
    "ConfigurationError",
    "RandomnessUnavailable",
    "KeyGenerationFailed",
    "CertificateSigningFailed",
    "ParameterEncodingFailed",
    "MalformedPEM",
    "KeyCertificateMismatch",
    # Package settings
    "get_settings",
    "reset_settings",
    "Settings",
    "LoggingConfig",
    "FixtureConfig",
    # Router configuration
    "RouterConfig",
    "StatusConfig",
    "NatsConfig",
    "RouterLoggingConfig",
    "OAuthConfig",
    "TracingConfig",
    "default_config",
    "build_router_config",
    "load_router_config",
]
