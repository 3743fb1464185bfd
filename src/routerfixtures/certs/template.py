"""Certificate Template Builder.

Assembles the logical fields of a self-signed test certificate
independently of the key algorithm. The validity window and organization
are fixed fixture constants, not configuration.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from enum import StrEnum
from typing import Optional

from cryptography import x509
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric.types import CertificatePublicKeyTypes
from cryptography.x509.oid import NameOID

from routerfixtures.certs.serial import SERIAL_NUMBER_LIMIT, generate_serial_number

ORGANIZATION_NAME = "xyz, Inc."
VALIDITY_PERIOD = timedelta(hours=1)


class SignatureAlgorithm(StrEnum):
    """Signature algorithms used to self-sign test certificates."""

    RSA_SHA256 = "RSA-SHA256"
    ECDSA_SHA256 = "ECDSA-SHA256"

    @property
    def hash_algorithm(self) -> hashes.HashAlgorithm:
        """Digest used with this signature algorithm."""
        return hashes.SHA256()


def _get_current_time() -> datetime:
    """Get current UTC time. Extracted for testing purposes."""
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class CertificateTemplate:
    """Unsigned certificate fields.

    Attributes:
        serial_number: Positive integer below 2**128.
        subject: Subject name; also used as the issuer.
        not_before: Start of the validity window (UTC).
        not_after: End of the validity window (UTC).
        signature_algorithm: Algorithm the template will be signed with.
        is_ca: Marks the certificate as CA-eligible so it can sign itself.
    """

    serial_number: int
    subject: x509.Name
    not_before: datetime
    not_after: datetime
    signature_algorithm: SignatureAlgorithm
    is_ca: bool = True

    def __post_init__(self) -> None:
        if self.not_after <= self.not_before:
            raise ValueError("not_after must be later than not_before")
        if not 0 < self.serial_number < SERIAL_NUMBER_LIMIT:
            raise ValueError(f"Serial number out of range: {self.serial_number}")

    @property
    def issuer(self) -> x509.Name:
        """Issuer name. Always the subject: templates are self-signed."""
        return self.subject

    @property
    def common_name(self) -> Optional[str]:
        """Subject common name, or None when the subject has none."""
        attrs = self.subject.get_attributes_for_oid(NameOID.COMMON_NAME)
        return str(attrs[0].value) if attrs else None

    def builder(self, public_key: CertificatePublicKeyTypes) -> x509.CertificateBuilder:
        """Return a certificate builder bound to the given public key."""
        return (
            x509.CertificateBuilder()
            .subject_name(self.subject)
            .issuer_name(self.issuer)
            .public_key(public_key)
            .serial_number(self.serial_number)
            .not_valid_before(self.not_before)
            .not_valid_after(self.not_after)
            .add_extension(
                x509.BasicConstraints(ca=self.is_ca, path_length=None),
                critical=True,
            )
        )


def build_subject(common_name: str = "") -> x509.Name:
    """Build the subject name for a test certificate.

    Args:
        common_name: Hostname to place in the CN. An empty string yields a
            subject with no CN attribute, for tests that need a certificate
            without a hostname.

    Returns:
        x509.Name carrying the fixture organization and optional CN.
    """
    attributes = [x509.NameAttribute(NameOID.ORGANIZATION_NAME, ORGANIZATION_NAME)]
    if common_name:
        attributes.append(x509.NameAttribute(NameOID.COMMON_NAME, common_name))
    return x509.Name(attributes)


def build_template(
    common_name: str,
    signature_algorithm: SignatureAlgorithm,
) -> CertificateTemplate:
    """Build a certificate template valid for one hour from now.

    Args:
        common_name: Subject common name (may be empty).
        signature_algorithm: Algorithm the template will be signed with.

    Returns:
        CertificateTemplate with a fresh random serial number.

    Raises:
        RandomnessUnavailable: If no serial number can be drawn.
    """
    now = _get_current_time()
    return CertificateTemplate(
        serial_number=generate_serial_number(),
        subject=build_subject(common_name),
        not_before=now,
        not_after=now + VALIDITY_PERIOD,
        signature_algorithm=signature_algorithm,
    )
