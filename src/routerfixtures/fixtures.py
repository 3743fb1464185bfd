"""Router configurations for tests.

Builds deterministic router configurations around a few caller-supplied
ports. The SSL variant embeds freshly generated self-signed certificates.

Usage:
    from routerfixtures.fixtures import spec_config, spec_ssl_config

    cfg = spec_config(8082, 8081, 4222)
    ssl_cfg = spec_ssl_config(8082, 8081, 8443, 4222, 4223)
"""

from __future__ import annotations

from datetime import timedelta
from typing import Any, Dict

from routerfixtures.certs import generate_rsa_pair
from routerfixtures.core.config import RouterConfig, build_router_config, get_settings

SSL_CIPHER_STRING = (
    "TLS_ECDHE_RSA_WITH_AES_128_GCM_SHA256:TLS_ECDHE_RSA_WITH_AES_256_GCM_SHA384"
)
SSL_COMMON_NAMES = ("potato.com", "potato2.com")
ROUTE_SERVICE_SECRET = "kCvXxNMB0JO2vinxoru9Hg=="


def _test_overrides(status_port: int, proxy_port: int, nats_ports: tuple) -> Dict[str, Any]:
    fixture = get_settings().fixtures
    return {
        "port": proxy_port,
        "index": 2,
        "trace_key": "my_trace_key",
        # Keep traffic on the local machine
        "ip": fixture.bind_ip,
        "start_response_delay_interval": timedelta(seconds=1),
        "publish_start_message_interval": timedelta(seconds=10),
        "prune_stale_droplets_interval": timedelta(0),
        "droplet_stale_threshold": timedelta(seconds=10),
        "publish_active_apps_interval": timedelta(0),
        "zone": "z1",
        "endpoint_timeout": timedelta(milliseconds=500),
        "status": {"port": status_port, "user": "user", "password": "pass"},
        "nats": [
            {"host": fixture.nats_host, "port": port, "user": "nats", "password": "nats"}
            for port in nats_ports
        ],
        "logging": {
            "level": "debug",
            "metron_address": "localhost:3457",
            "job_name": "router_test_z1_0",
        },
        "oauth": {
            "token_endpoint": "uaa.cf.service.internal",
            "port": 8443,
            "skip_ssl_validation": True,
        },
        "route_service_secret": ROUTE_SERVICE_SECRET,
        "tracing": {"enable_zipkin": True},
    }


def spec_config(status_port: int, proxy_port: int, *nats_ports: int) -> RouterConfig:
    """Build the standard router test configuration.

    Args:
        status_port: Port for the status endpoint.
        proxy_port: Port the router proxies on.
        *nats_ports: One NATS endpoint is configured per port.

    Returns:
        RouterConfig bound to localhost with short test intervals.

    Raises:
        ConfigurationError: If a port is outside 1-65535.
    """
    return build_router_config(
        _test_overrides(status_port, proxy_port, nats_ports),
        source="spec_config",
    )


def spec_ssl_config(
    status_port: int,
    proxy_port: int,
    ssl_port: int,
    *nats_ports: int,
) -> RouterConfig:
    """Build the standard configuration with SSL enabled.

    Two RSA certificates (potato.com and potato2.com) are generated and
    stored in tls_pem as "<key>\\n<cert>" strings.

    Raises:
        ConfigurationError: If a port is outside 1-65535.
        FixtureError: If certificate generation fails.
    """
    overrides = _test_overrides(status_port, proxy_port, nats_ports)
    overrides.update(
        enable_ssl=True,
        tls_pem=[generate_rsa_pair(cn).combined_pem() for cn in SSL_COMMON_NAMES],
        ssl_port=ssl_port,
        cipher_string=SSL_CIPHER_STRING,
    )
    return build_router_config(overrides, source="spec_ssl_config")
