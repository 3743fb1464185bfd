"""Unit tests for the TLS certificate assembler."""

import ssl
from unittest.mock import patch

import pytest
from cryptography import x509
from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import ec, rsa
from cryptography.x509.oid import NameOID

from routerfixtures.certs.credential import (
    TLSCredential,
    build_ec_tls_credential,
    build_tls_credential,
    load_tls_credential,
)
from routerfixtures.certs.keypairs import (
    encode_ec_parameters,
    generate_ec_pair,
    generate_rsa_pair,
)
from routerfixtures.certs.pem import encode_pem
from routerfixtures.core.exceptions import KeyCertificateMismatch, MalformedPEM


@pytest.mark.unit
class TestBuildTlsCredential:
    """Tests for build_tls_credential() and build_ec_tls_credential()."""

    def test_rsa_potato_scenario(self):
        """RSA pair for potato.com assembles and keeps its CN."""
        key_pem, cert_pem = generate_rsa_pair("potato.com")

        credential = load_tls_credential(cert_pem, key_pem)

        assert credential.common_name == "potato.com"
        cn = credential.leaf.subject.get_attributes_for_oid(NameOID.COMMON_NAME)
        assert cn[0].value == "potato.com"
        assert isinstance(credential.private_key, rsa.RSAPrivateKey)

    def test_ec_empty_common_name_scenario(self):
        """EC pair without CN carries the fixture organization and assembles."""
        key_pem, cert_pem = generate_ec_pair("")
        cert = x509.load_pem_x509_certificate(cert_pem)

        org = cert.subject.get_attributes_for_oid(NameOID.ORGANIZATION_NAME)
        assert org[0].value == "xyz, Inc."
        assert cert.subject.get_attributes_for_oid(NameOID.COMMON_NAME) == []

        credential = load_tls_credential(cert_pem, key_pem)
        assert credential.common_name is None
        assert isinstance(credential.private_key, ec.EllipticCurvePrivateKey)

    @pytest.mark.parametrize("common_name", ["potato.com", ""])
    def test_build_tls_credential(self, common_name):
        credential = build_tls_credential(common_name)

        assert isinstance(credential, TLSCredential)
        assert len(credential.certificate_chain) == 1
        assert credential.common_name == (common_name or None)
        assert isinstance(credential.private_key, rsa.RSAPrivateKey)

    @pytest.mark.parametrize("common_name", ["potato.com", ""])
    def test_build_ec_tls_credential(self, common_name):
        credential = build_ec_tls_credential(common_name)

        assert len(credential.certificate_chain) == 1
        assert credential.common_name == (common_name or None)
        assert isinstance(credential.private_key, ec.EllipticCurvePrivateKey)
        assert credential.key_pem.startswith(b"-----BEGIN EC PARAMETERS-----\n")

    def test_credential_keeps_source_pem(self):
        key_pem, cert_pem = generate_rsa_pair("potato.com")

        credential = load_tls_credential(cert_pem, key_pem)

        assert credential.cert_pem == cert_pem
        assert credential.key_pem == key_pem


@pytest.mark.unit
class TestLoadTlsCredentialErrors:
    """Failure modes of load_tls_credential()."""

    def test_mismatched_rsa_key(self):
        _, cert_pem = generate_rsa_pair("potato.com")
        other_key_pem, _ = generate_rsa_pair("potato.com")

        with pytest.raises(KeyCertificateMismatch) as exc_info:
            load_tls_credential(cert_pem, other_key_pem)

        assert exc_info.value.common_name == "potato.com"

    def test_mismatched_algorithms(self):
        _, cert_pem = generate_rsa_pair("")
        ec_key_pem, _ = generate_ec_pair("")

        with pytest.raises(KeyCertificateMismatch) as exc_info:
            load_tls_credential(cert_pem, ec_key_pem)

        assert exc_info.value.common_name is None

    def test_no_certificate_block(self):
        key_pem, _ = generate_rsa_pair("potato.com")

        with pytest.raises(MalformedPEM) as exc_info:
            load_tls_credential(b"", key_pem)

        assert exc_info.value.label == "CERTIFICATE"

    def test_no_private_key_block(self):
        _, cert_pem = generate_ec_pair("potato.com")
        params_only = encode_pem("EC PARAMETERS", encode_ec_parameters())

        with pytest.raises(MalformedPEM) as exc_info:
            load_tls_credential(cert_pem, params_only)

        assert exc_info.value.label == "PRIVATE KEY"

    def test_certificate_payload_not_der(self):
        key_pem, _ = generate_rsa_pair("potato.com")

        with pytest.raises(MalformedPEM) as exc_info:
            load_tls_credential(encode_pem("CERTIFICATE", b"not a certificate"), key_pem)

        assert exc_info.value.label == "CERTIFICATE"

    def test_key_payload_not_der(self):
        _, cert_pem = generate_rsa_pair("potato.com")

        with pytest.raises(MalformedPEM) as exc_info:
            load_tls_credential(cert_pem, encode_pem("RSA PRIVATE KEY", b"garbage"))

        assert exc_info.value.label == "PRIVATE KEY"

    def test_encrypted_key(self):
        key_pem, cert_pem = generate_rsa_pair("potato.com")
        key = serialization.load_pem_private_key(key_pem, password=None)
        encrypted = key.private_bytes(
            serialization.Encoding.PEM,
            serialization.PrivateFormat.PKCS8,
            serialization.BestAvailableEncryption(b"secret"),
        )

        with pytest.raises(MalformedPEM) as exc_info:
            load_tls_credential(cert_pem, encrypted)

        assert isinstance(exc_info.value.__cause__, TypeError)

    def test_unsupported_key_algorithm(self):
        key_pem, cert_pem = generate_rsa_pair("potato.com")

        with patch(
            "routerfixtures.certs.credential.serialization.load_pem_private_key",
            side_effect=UnsupportedAlgorithm("unsupported key type"),
        ):
            with pytest.raises(MalformedPEM) as exc_info:
                load_tls_credential(cert_pem, key_pem)

        assert exc_info.value.label == "PRIVATE KEY"
        assert "unsupported key type" in exc_info.value.reason

    def test_combined_key_and_certificate_text(self):
        pair = generate_ec_pair("potato.com")
        data = pair.combined_pem().encode("ascii")

        credential = load_tls_credential(data, data)

        assert credential.common_name == "potato.com"
        assert isinstance(credential.private_key, ec.EllipticCurvePrivateKey)

    def test_unparseable_text(self):
        with pytest.raises(MalformedPEM):
            load_tls_credential(b"-----BEGIN CERTIFICATE-----\nAQID\n", b"")


@pytest.mark.unit
class TestCreateSslContext:
    """Tests for TLSCredential.create_ssl_context()."""

    @pytest.mark.parametrize("build", [build_tls_credential, build_ec_tls_credential])
    def test_server_context_loads(self, build):
        context = build("potato.com").create_ssl_context(server_side=True)

        assert isinstance(context, ssl.SSLContext)
        assert context.protocol == ssl.PROTOCOL_TLS_SERVER

    def test_client_context_loads(self):
        context = build_ec_tls_credential("client").create_ssl_context(server_side=False)

        assert context.protocol == ssl.PROTOCOL_TLS_CLIENT
