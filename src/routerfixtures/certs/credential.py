"""TLS Certificate Assembler.

Pairs a PEM certificate with its PEM private key into a TLSCredential that
a server or client under test can load directly.

Usage:
    from routerfixtures.certs import build_tls_credential

    credential = build_tls_credential("potato.com")
    context = credential.create_ssl_context(server_side=True)
"""

from __future__ import annotations

import ssl
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from cryptography import x509
from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric.types import PrivateKeyTypes
from cryptography.x509.oid import NameOID

from routerfixtures.certs.keypairs import generate_ec_pair, generate_rsa_pair
from routerfixtures.certs.pem import CERTIFICATE_LABEL
from routerfixtures.core.exceptions import KeyCertificateMismatch, MalformedPEM


@dataclass(frozen=True)
class TLSCredential:
    """A certificate chain paired with its matching private key.

    Attributes:
        certificate_chain: Certificates, leaf first.
        private_key: Private key matching the leaf certificate.
        cert_pem: Certificate PEM text the credential was parsed from.
        key_pem: Private key PEM text the credential was parsed from.
    """

    certificate_chain: tuple[x509.Certificate, ...]
    private_key: PrivateKeyTypes
    cert_pem: bytes
    key_pem: bytes

    @property
    def leaf(self) -> x509.Certificate:
        """The end-entity certificate."""
        return self.certificate_chain[0]

    @property
    def common_name(self) -> Optional[str]:
        """Leaf subject common name, or None when absent."""
        attrs = self.leaf.subject.get_attributes_for_oid(NameOID.COMMON_NAME)
        return str(attrs[0].value) if attrs else None

    def create_ssl_context(self, server_side: bool = True) -> ssl.SSLContext:
        """Load this credential into a stdlib SSLContext.

        The ssl module only reads certificate chains from files, so the
        chain and key are written to a temporary directory that is removed
        before returning. Peer verification is left to the caller.

        Args:
            server_side: Build a server context if True, else a client one.

        Returns:
            SSLContext with the certificate chain loaded.
        """
        protocol = ssl.PROTOCOL_TLS_SERVER if server_side else ssl.PROTOCOL_TLS_CLIENT
        context = ssl.SSLContext(protocol)

        chain_pem = b"".join(
            cert.public_bytes(serialization.Encoding.PEM) for cert in self.certificate_chain
        )
        key_pem = self.private_key.private_bytes(
            encoding=serialization.Encoding.PEM,
            format=serialization.PrivateFormat.PKCS8,
            encryption_algorithm=serialization.NoEncryption(),
        )

        with tempfile.TemporaryDirectory() as tmpdir:
            cert_path = Path(tmpdir) / "cert.pem"
            key_path = Path(tmpdir) / "key.pem"
            cert_path.write_bytes(chain_pem)
            key_path.write_bytes(key_pem)
            context.load_cert_chain(certfile=str(cert_path), keyfile=str(key_path))

        return context


def _public_key_der(key: PrivateKeyTypes | x509.Certificate) -> bytes:
    return key.public_key().public_bytes(
        encoding=serialization.Encoding.DER,
        format=serialization.PublicFormat.SubjectPublicKeyInfo,
    )


def _load_certificates(cert_pem: bytes) -> tuple[x509.Certificate, ...]:
    try:
        return tuple(x509.load_pem_x509_certificates(cert_pem))
    except ValueError as e:
        raise MalformedPEM(label=CERTIFICATE_LABEL, reason=str(e)) from e


def _load_private_key(key_pem: bytes) -> PrivateKeyTypes:
    # The first private key block wins; EC PARAMETERS is skipped
    try:
        return serialization.load_pem_private_key(key_pem, password=None)
    except (ValueError, TypeError, UnsupportedAlgorithm) as e:
        raise MalformedPEM(label="PRIVATE KEY", reason=str(e)) from e


def load_tls_credential(cert_pem: bytes, key_pem: bytes) -> TLSCredential:
    """Parse and pair a PEM certificate and PEM private key.

    Args:
        cert_pem: One or more CERTIFICATE blocks, leaf first.
        key_pem: Private key text. For EC keys this may start with an
            EC PARAMETERS block.

    Returns:
        TLSCredential ready for use in a TLS handshake.

    Raises:
        MalformedPEM: If either input cannot be parsed.
        KeyCertificateMismatch: If the leaf public key does not belong to
            the private key.
    """
    chain = _load_certificates(cert_pem)
    private_key = _load_private_key(key_pem)

    if _public_key_der(chain[0]) != _public_key_der(private_key):
        attrs = chain[0].subject.get_attributes_for_oid(NameOID.COMMON_NAME)
        raise KeyCertificateMismatch(common_name=str(attrs[0].value) if attrs else None)

    return TLSCredential(
        certificate_chain=chain,
        private_key=private_key,
        cert_pem=cert_pem,
        key_pem=key_pem,
    )


def build_tls_credential(common_name: str = "") -> TLSCredential:
    """Generate an RSA key pair and assemble it into a TLSCredential."""
    key_pem, cert_pem = generate_rsa_pair(common_name)
    return load_tls_credential(cert_pem, key_pem)


def build_ec_tls_credential(common_name: str = "") -> TLSCredential:
    """Generate an EC P-256 key pair and assemble it into a TLSCredential."""
    key_pem, cert_pem = generate_ec_pair(common_name)
    return load_tls_credential(cert_pem, key_pem)
