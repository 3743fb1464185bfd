"""routerfixtures Exception Hierarchy.

All custom exceptions inherit from FixtureError so test suites can catch
every fixture failure with a single except clause.

Exception Categories:
- Environmental → RandomnessUnavailable
- Cryptographic construction → KeyGenerationFailed, CertificateSigningFailed
- Encoding/parsing → ParameterEncodingFailed, MalformedPEM,
  KeyCertificateMismatch
- Configuration → ConfigurationError

None of these are recoverable. They abort fixture setup (and the test that
requested it); there is no fallback certificate.

Usage:
    from routerfixtures.core.exceptions import KeyGenerationFailed

    raise KeyGenerationFailed(algorithm="RSA", reason="invalid key size")
"""

from typing import Any, Optional


class FixtureError(Exception):
    """Base exception for all routerfixtures errors.

    Attributes:
        message: Human-readable error description.
    """

    def __init__(self, message: Optional[str] = None) -> None:
        """Initialize FixtureError.

        Args:
            message: Optional custom message. Defaults to a generic message.
        """
        self.message = message or "A fixture error occurred."
        super().__init__(self.message)

    @property
    def context(self) -> dict[str, Any]:
        """Return context dictionary for structured logging.

        Returns:
            dict: Key-value pairs of exception context.
        """
        return {}

    def __repr__(self) -> str:
        """Return debug representation."""
        return f"{self.__class__.__name__}({self.message!r})"


class ConfigurationError(FixtureError):
    """Configuration file or value is invalid.

    Attributes:
        config_path: Path to the configuration file.
        key: The configuration key that caused the error.
        expected_type: The expected type for the value.
    """

    def __init__(
        self,
        config_path: str,
        key: Optional[str] = None,
        expected_type: Optional[str] = None,
        message: Optional[str] = None,
    ) -> None:
        """Initialize ConfigurationError.

        Args:
            config_path: Path to the config file.
            key: Optional key that caused the error.
            expected_type: Optional expected type.
            message: Optional custom message.
        """
        self.config_path = config_path
        self.key = key
        self.expected_type = expected_type

        if message is None:
            key_info = f" key '{key}'" if key else ""
            type_info = f" (expected {expected_type})" if expected_type else ""
            message = f"Configuration error in '{config_path}'{key_info}{type_info}."

        super().__init__(message)

    @property
    def context(self) -> dict[str, Any]:
        """Return context for configuration error."""
        return {
            "config_path": self.config_path,
            "key": self.key,
            "expected_type": self.expected_type,
        }

    def __repr__(self) -> str:
        """Return debug representation with attributes."""
        return (
            f"ConfigurationError(config_path={self.config_path!r}, "
            f"key={self.key!r}, expected_type={self.expected_type!r})"
        )


class RandomnessUnavailable(FixtureError):
    """The operating system entropy source could not supply bytes.

    Fatal to the calling test. Never retried, and weaker randomness is
    never substituted.

    Attributes:
        source: Name of the randomness source that failed.
        reason: Description of the underlying failure.
    """

    def __init__(
        self,
        source: str = "os.urandom",
        reason: str | None = None,
        message: str | None = None,
    ) -> None:
        """Initialize RandomnessUnavailable.

        Args:
            source: Name of the randomness source.
            reason: Description of failure cause.
            message: Optional custom message.
        """
        self.source = source
        self.reason = reason

        if message is None:
            reason_info = f": {reason}" if reason else ""
            message = f"Randomness unavailable from {source}{reason_info}"

        super().__init__(message)

    @property
    def context(self) -> dict[str, Any]:
        """Return context for randomness failure."""
        return {
            "source": self.source,
            "reason": self.reason,
        }

    def __repr__(self) -> str:
        """Return debug representation with attributes."""
        return f"RandomnessUnavailable(source={self.source!r}, reason={self.reason!r})"


class KeyGenerationFailed(FixtureError):
    """Private key generation could not complete.

    Attributes:
        algorithm: Key algorithm being generated ("RSA" or "EC").
        reason: Description of the underlying failure.
    """

    def __init__(
        self,
        algorithm: str,
        reason: str | None = None,
        message: str | None = None,
    ) -> None:
        """Initialize KeyGenerationFailed.

        Args:
            algorithm: Key algorithm being generated.
            reason: Description of failure cause.
            message: Optional custom message.
        """
        self.algorithm = algorithm
        self.reason = reason

        if message is None:
            reason_info = f": {reason}" if reason else ""
            message = f"{algorithm} key generation failed{reason_info}"

        super().__init__(message)

    @property
    def context(self) -> dict[str, Any]:
        """Return context for key generation failure."""
        return {
            "algorithm": self.algorithm,
            "reason": self.reason,
        }

    def __repr__(self) -> str:
        """Return debug representation with attributes."""
        return (
            f"KeyGenerationFailed(algorithm={self.algorithm!r}, "
            f"reason={self.reason!r})"
        )


class CertificateSigningFailed(FixtureError):
    """Self-signing the certificate template failed.

    Attributes:
        algorithm: Signature algorithm in use.
        reason: Description of the underlying failure.
    """

    def __init__(
        self,
        algorithm: str,
        reason: str | None = None,
        message: str | None = None,
    ) -> None:
        """Initialize CertificateSigningFailed.

        Args:
            algorithm: Signature algorithm in use.
            reason: Description of failure cause.
            message: Optional custom message.
        """
        self.algorithm = algorithm
        self.reason = reason

        if message is None:
            reason_info = f": {reason}" if reason else ""
            message = f"Certificate signing with {algorithm} failed{reason_info}"

        super().__init__(message)

    @property
    def context(self) -> dict[str, Any]:
        """Return context for signing failure."""
        return {
            "algorithm": self.algorithm,
            "reason": self.reason,
        }

    def __repr__(self) -> str:
        """Return debug representation with attributes."""
        return (
            f"CertificateSigningFailed(algorithm={self.algorithm!r}, "
            f"reason={self.reason!r})"
        )


class ParameterEncodingFailed(FixtureError):
    """EC parameters OID could not be DER encoded.

    Attributes:
        oid: Dotted string form of the object identifier.
        reason: Description of the underlying failure.
    """

    def __init__(
        self,
        oid: str,
        reason: str | None = None,
        message: str | None = None,
    ) -> None:
        """Initialize ParameterEncodingFailed.

        Args:
            oid: Dotted object identifier.
            reason: Description of failure cause.
            message: Optional custom message.
        """
        self.oid = oid
        self.reason = reason

        if message is None:
            reason_info = f": {reason}" if reason else ""
            message = f"Failed to encode EC parameters OID {oid}{reason_info}"

        super().__init__(message)

    @property
    def context(self) -> dict[str, Any]:
        """Return context for parameter encoding failure."""
        return {
            "oid": self.oid,
            "reason": self.reason,
        }

    def __repr__(self) -> str:
        """Return debug representation with attributes."""
        return f"ParameterEncodingFailed(oid={self.oid!r}, reason={self.reason!r})"


class MalformedPEM(FixtureError):
    """Input could not be parsed as PEM, or its payload as DER.

    Attributes:
        label: PEM label being parsed, if known.
        reason: Description of why parsing failed.
    """

    def __init__(
        self,
        label: str | None = None,
        reason: str | None = None,
        message: str | None = None,
    ) -> None:
        """Initialize MalformedPEM.

        Args:
            label: PEM label being parsed.
            reason: Description of failure cause.
            message: Optional custom message.
        """
        self.label = label
        self.reason = reason

        if message is None:
            label_info = f" ({label})" if label else ""
            reason_info = f": {reason}" if reason else ""
            message = f"Malformed PEM{label_info}{reason_info}"

        super().__init__(message)

    @property
    def context(self) -> dict[str, Any]:
        """Return context for malformed PEM."""
        return {
            "label": self.label,
            "reason": self.reason,
        }

    def __repr__(self) -> str:
        """Return debug representation with attributes."""
        return f"MalformedPEM(label={self.label!r}, reason={self.reason!r})"


class KeyCertificateMismatch(FixtureError):
    """Certificate public key does not correspond to the private key.

    Attributes:
        common_name: Common name of the certificate, if any.
    """

    def __init__(
        self,
        common_name: str | None = None,
        message: str | None = None,
    ) -> None:
        """Initialize KeyCertificateMismatch.

        Args:
            common_name: Certificate common name.
            message: Optional custom message.
        """
        self.common_name = common_name

        if message is None:
            cn_info = f" for '{common_name}'" if common_name else ""
            message = f"Private key does not match certificate public key{cn_info}"

        super().__init__(message)

    @property
    def context(self) -> dict[str, Any]:
        """Return context for key/certificate mismatch."""
        return {"common_name": self.common_name}

    def __repr__(self) -> str:
        """Return debug representation with attributes."""
        return f"KeyCertificateMismatch(common_name={self.common_name!r})"
