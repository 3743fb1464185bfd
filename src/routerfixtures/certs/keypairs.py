"""Self-signed key pair generators (RSA and EC).

Each call creates a fresh private key, self-signs a one-hour certificate
template with it, and returns the key and certificate as PEM text. Nothing
is cached or persisted between calls, so generators are safe to call
concurrently.

Usage:
    from routerfixtures.certs import generate_rsa_pair, generate_ec_pair

    key_pem, cert_pem = generate_rsa_pair("potato.com")
    key_pem, cert_pem = generate_ec_pair("")
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator

import structlog
from cryptography import x509
from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives.asymmetric import ec, rsa
from cryptography.hazmat.primitives.asymmetric.types import CertificateIssuerPrivateKeyTypes
from pyasn1.codec.der import encoder as der_encoder
from pyasn1.error import PyAsn1Error
from pyasn1.type import univ

from routerfixtures.certs.pem import (
    EC_PARAMETERS_LABEL,
    encode_certificate,
    encode_pem,
    encode_private_key,
)
from routerfixtures.certs.template import (
    CertificateTemplate,
    SignatureAlgorithm,
    build_template,
)
from routerfixtures.core.exceptions import (
    CertificateSigningFailed,
    KeyGenerationFailed,
    ParameterEncodingFailed,
)

log = structlog.get_logger()

RSA_KEY_SIZE = 2048
RSA_PUBLIC_EXPONENT = 65537
EC_CURVE = ec.SECP256R1

# ecdsa-with-SHA256 (RFC 5758)
ECDSA_WITH_SHA256_OID = (1, 2, 840, 10045, 4, 3, 2)


@dataclass(frozen=True)
class KeyPair:
    """PEM-encoded private key and self-signed certificate.

    Unpacks like the (key_pem, cert_pem) tuple it stands for.
    """

    key_pem: bytes
    cert_pem: bytes

    def __iter__(self) -> Iterator[bytes]:
        yield self.key_pem
        yield self.cert_pem

    def combined_pem(self) -> str:
        """Key and certificate joined the way router TLS config expects."""
        return f"{self.key_pem.decode('ascii')}\n{self.cert_pem.decode('ascii')}"


def _self_sign(
    template: CertificateTemplate,
    private_key: CertificateIssuerPrivateKeyTypes,
) -> x509.Certificate:
    """Sign the template with the key it certifies."""
    try:
        certificate = template.builder(private_key.public_key()).sign(
            private_key, template.signature_algorithm.hash_algorithm
        )
    except (ValueError, TypeError, UnsupportedAlgorithm) as e:
        raise CertificateSigningFailed(
            algorithm=str(template.signature_algorithm), reason=str(e)
        ) from e
    return certificate


def _log_generated(template: CertificateTemplate, algorithm: str) -> None:
    log.debug(
        "self_signed_certificate_generated",
        algorithm=algorithm,
        common_name=template.common_name,
        serial=format(template.serial_number, "x"),
        not_after=template.not_after.isoformat(),
    )


def encode_ec_parameters(oid: tuple[int, ...] = ECDSA_WITH_SHA256_OID) -> bytes:
    """DER encode the object identifier carried in the EC PARAMETERS block.

    Args:
        oid: Object identifier arcs.

    Returns:
        DER bytes of the ASN.1 OBJECT IDENTIFIER.

    Raises:
        ParameterEncodingFailed: If the OID cannot be encoded.
    """
    try:
        return der_encoder.encode(univ.ObjectIdentifier(oid))
    except PyAsn1Error as e:
        raise ParameterEncodingFailed(
            oid=".".join(str(arc) for arc in oid), reason=str(e)
        ) from e


def generate_rsa_pair(common_name: str = "") -> KeyPair:
    """Generate an RSA-2048 key and a certificate self-signed with it.

    The key is emitted in legacy PKCS#1 form under the "RSA PRIVATE KEY"
    label rather than as PKCS#8.

    Args:
        common_name: Subject CN. Empty means the certificate has no CN.

    Returns:
        KeyPair of (key_pem, cert_pem).

    Raises:
        RandomnessUnavailable: If no serial number can be drawn.
        KeyGenerationFailed: If RSA key generation fails.
        CertificateSigningFailed: If self-signing fails.
    """
    template = build_template(common_name, SignatureAlgorithm.RSA_SHA256)

    try:
        private_key = rsa.generate_private_key(
            public_exponent=RSA_PUBLIC_EXPONENT,
            key_size=RSA_KEY_SIZE,
        )
    except (ValueError, OSError, UnsupportedAlgorithm) as e:
        raise KeyGenerationFailed(algorithm="RSA", reason=str(e)) from e

    certificate = _self_sign(template, private_key)
    _log_generated(template, "RSA")

    return KeyPair(
        key_pem=encode_private_key(private_key),
        cert_pem=encode_certificate(certificate),
    )


def generate_ec_pair(common_name: str = "") -> KeyPair:
    """Generate a P-256 key and a certificate self-signed with it.

    The returned key text is two PEM blocks: "EC PARAMETERS" followed
    immediately by "EC PRIVATE KEY". Some legacy PEM parsers expect the
    parameters block before the key, so the order must not change.

    Args:
        common_name: Subject CN. Empty means the certificate has no CN.

    Returns:
        KeyPair of (key_pem, cert_pem).

    Raises:
        RandomnessUnavailable: If no serial number can be drawn.
        KeyGenerationFailed: If EC key generation fails.
        CertificateSigningFailed: If self-signing fails.
        ParameterEncodingFailed: If the parameters OID cannot be encoded.
    """
    template = build_template(common_name, SignatureAlgorithm.ECDSA_SHA256)

    try:
        private_key = ec.generate_private_key(EC_CURVE())
    except (ValueError, OSError, UnsupportedAlgorithm) as e:
        raise KeyGenerationFailed(algorithm="EC", reason=str(e)) from e

    certificate = _self_sign(template, private_key)
    params_pem = encode_pem(EC_PARAMETERS_LABEL, encode_ec_parameters())
    _log_generated(template, "EC")

    return KeyPair(
        key_pem=params_pem + encode_private_key(private_key),
        cert_pem=encode_certificate(certificate),
    )
