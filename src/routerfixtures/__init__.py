"""
routerfixtures - Test fixtures for a reverse-proxy router

Default router configurations and ephemeral self-signed TLS certificates.
"""

from routerfixtures.certs import (
    KeyPair,
    TLSCredential,
    build_ec_tls_credential,
    build_tls_credential,
    generate_ec_pair,
    generate_rsa_pair,
    load_tls_credential,
)
from routerfixtures.fixtures import spec_config, spec_ssl_config

__version__ = "0.1.0"

__all__ = [
    "KeyPair",
    "TLSCredential",
    "generate_rsa_pair",
    "generate_ec_pair",
    "load_tls_credential",
    "build_tls_credential",
    "build_ec_tls_credential",
    "spec_config",
    "spec_ssl_config",
]
