"""Ephemeral self-signed certificates for TLS tests.

Exports the key pair generators, the PEM encoders and the TLS credential
assembler.
"""

from routerfixtures.certs.credential import (
    TLSCredential,
    build_ec_tls_credential,
    build_tls_credential,
    load_tls_credential,
)
from routerfixtures.certs.keypairs import (
    ECDSA_WITH_SHA256_OID,
    KeyPair,
    encode_ec_parameters,
    generate_ec_pair,
    generate_rsa_pair,
)
from routerfixtures.certs.pem import (
    CERTIFICATE_LABEL,
    EC_PARAMETERS_LABEL,
    EC_PRIVATE_KEY_LABEL,
    RSA_PRIVATE_KEY_LABEL,
    encode_certificate,
    encode_pem,
    encode_private_key,
)
from routerfixtures.certs.serial import SERIAL_NUMBER_LIMIT, generate_serial_number
from routerfixtures.certs.template import (
    ORGANIZATION_NAME,
    VALIDITY_PERIOD,
    CertificateTemplate,
    SignatureAlgorithm,
    build_subject,
    build_template,
)

__all__ = [
    # Generators
    "KeyPair",
    "generate_rsa_pair",
    "generate_ec_pair",
    "encode_ec_parameters",
    "ECDSA_WITH_SHA256_OID",
    # TLS credentials
    "TLSCredential",
    "load_tls_credential",
    "build_tls_credential",
    "build_ec_tls_credential",
    # PEM
    "encode_pem",
    "encode_certificate",
    "encode_private_key",
    "CERTIFICATE_LABEL",
    "RSA_PRIVATE_KEY_LABEL",
    "EC_PRIVATE_KEY_LABEL",
    "EC_PARAMETERS_LABEL",
    # Templates
    "CertificateTemplate",
    "SignatureAlgorithm",
    "build_subject",
    "build_template",
    "ORGANIZATION_NAME",
    "VALIDITY_PERIOD",
    # Serial numbers
    "generate_serial_number",
    "SERIAL_NUMBER_LIMIT",
]
