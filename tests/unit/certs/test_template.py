"""Unit tests for the certificate template builder."""

from datetime import datetime, timedelta, timezone
from unittest.mock import patch

import pytest
from cryptography.hazmat.primitives.asymmetric import ec
from cryptography.x509.oid import NameOID

from routerfixtures.certs.template import (
    ORGANIZATION_NAME,
    VALIDITY_PERIOD,
    CertificateTemplate,
    SignatureAlgorithm,
    build_subject,
    build_template,
)


@pytest.mark.unit
class TestBuildSubject:
    """Tests for build_subject()."""

    def test_subject_has_organization_and_common_name(self):
        subject = build_subject("potato.com")

        org = subject.get_attributes_for_oid(NameOID.ORGANIZATION_NAME)
        cn = subject.get_attributes_for_oid(NameOID.COMMON_NAME)
        assert [a.value for a in org] == ["xyz, Inc."]
        assert [a.value for a in cn] == ["potato.com"]

    def test_empty_common_name_is_omitted(self):
        """An empty CN produces a subject with organization only."""
        subject = build_subject("")

        assert subject.get_attributes_for_oid(NameOID.COMMON_NAME) == []
        assert len(subject) == 1
        assert ORGANIZATION_NAME == "xyz, Inc."


@pytest.mark.unit
class TestBuildTemplate:
    """Tests for build_template()."""

    def test_validity_window_is_exactly_one_hour(self):
        template = build_template("potato.com", SignatureAlgorithm.RSA_SHA256)

        assert template.not_after - template.not_before == timedelta(hours=1)
        assert VALIDITY_PERIOD == timedelta(seconds=3600)

    def test_validity_starts_now(self):
        fixed = datetime(2026, 1, 2, 3, 4, 5, tzinfo=timezone.utc)
        with patch("routerfixtures.certs.template._get_current_time", return_value=fixed):
            template = build_template("", SignatureAlgorithm.ECDSA_SHA256)

        assert template.not_before == fixed
        assert template.not_after == fixed + timedelta(hours=1)

    def test_issuer_equals_subject(self):
        template = build_template("potato.com", SignatureAlgorithm.RSA_SHA256)
        assert template.issuer == template.subject

    def test_template_is_ca_eligible(self):
        template = build_template("potato.com", SignatureAlgorithm.RSA_SHA256)
        assert template.is_ca is True

    def test_common_name_property(self):
        assert build_template("a.example", SignatureAlgorithm.RSA_SHA256).common_name == "a.example"
        assert build_template("", SignatureAlgorithm.RSA_SHA256).common_name is None

    def test_records_signature_algorithm(self):
        template = build_template("x", SignatureAlgorithm.ECDSA_SHA256)
        assert template.signature_algorithm is SignatureAlgorithm.ECDSA_SHA256

    def test_serial_numbers_differ(self):
        first = build_template("x", SignatureAlgorithm.RSA_SHA256)
        second = build_template("x", SignatureAlgorithm.RSA_SHA256)
        assert first.serial_number != second.serial_number


@pytest.mark.unit
class TestCertificateTemplateInvariants:
    """Tests for CertificateTemplate validation."""

    def _now(self):
        return datetime.now(timezone.utc)

    def test_rejects_inverted_validity(self):
        now = self._now()
        with pytest.raises(ValueError, match="not_after"):
            CertificateTemplate(
                serial_number=1,
                subject=build_subject("x"),
                not_before=now,
                not_after=now,
                signature_algorithm=SignatureAlgorithm.RSA_SHA256,
            )

    @pytest.mark.parametrize("serial", [0, -1, 2**128])
    def test_rejects_out_of_range_serial(self, serial):
        now = self._now()
        with pytest.raises(ValueError, match="Serial number"):
            CertificateTemplate(
                serial_number=serial,
                subject=build_subject("x"),
                not_before=now,
                not_after=now + VALIDITY_PERIOD,
                signature_algorithm=SignatureAlgorithm.RSA_SHA256,
            )

    def test_builder_carries_fields(self):
        template = build_template("builder.test", SignatureAlgorithm.ECDSA_SHA256)
        key = ec.generate_private_key(ec.SECP256R1())

        cert = template.builder(key.public_key()).sign(key, template.signature_algorithm.hash_algorithm)

        assert cert.serial_number == template.serial_number
        assert cert.subject == template.subject
        assert cert.issuer == template.subject
