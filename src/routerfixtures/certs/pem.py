"""PEM encoding for certificates and keys.

Certificates and private keys are rendered by cryptography itself.
encode_pem only frames payloads cryptography has no serializer for, such
as the EC PARAMETERS block.
"""

from __future__ import annotations

import base64

from cryptography import x509
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import ec, rsa

CERTIFICATE_LABEL = "CERTIFICATE"
RSA_PRIVATE_KEY_LABEL = "RSA PRIVATE KEY"
EC_PRIVATE_KEY_LABEL = "EC PRIVATE KEY"
EC_PARAMETERS_LABEL = "EC PARAMETERS"

_LINE_LENGTH = 64


def encode_pem(label: str, payload: bytes) -> bytes:
    """Wrap a DER payload in PEM framing.

    Args:
        label: Block label, e.g. "EC PARAMETERS".
        payload: Raw bytes to encode.

    Returns:
        PEM text as bytes, base64 body wrapped at 64 columns, with a
        trailing newline.
    """
    body = base64.b64encode(payload).decode("ascii")
    lines = [f"-----BEGIN {label}-----"]
    lines.extend(body[i:i + _LINE_LENGTH] for i in range(0, len(body), _LINE_LENGTH))
    lines.append(f"-----END {label}-----")
    return ("\n".join(lines) + "\n").encode("ascii")


def encode_certificate(certificate: x509.Certificate) -> bytes:
    """Encode a certificate as a CERTIFICATE block."""
    return certificate.public_bytes(serialization.Encoding.PEM)


def encode_private_key(private_key: rsa.RSAPrivateKey | ec.EllipticCurvePrivateKey) -> bytes:
    """Encode a private key in its traditional OpenSSL form.

    RSA keys come out as PKCS#1 under "RSA PRIVATE KEY" and EC keys as
    SEC1 under "EC PRIVATE KEY".
    """
    return private_key.private_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PrivateFormat.TraditionalOpenSSL,
        encryption_algorithm=serialization.NoEncryption(),
    )
