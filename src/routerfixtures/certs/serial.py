"""Random certificate serial numbers.

A real certificate authority would have some logic behind serial
allocation. Test fixtures only need serials that are unique with
overwhelming probability, so they are drawn from the OS CSPRNG.
"""

import secrets

from routerfixtures.core.exceptions import RandomnessUnavailable

# Serials are strictly below 2**128
SERIAL_NUMBER_LIMIT = 1 << 128


def generate_serial_number() -> int:
    """Generate a cryptographically random certificate serial number.

    Returns:
        Integer in the range [1, 2**128). Zero is excluded because X.509
        requires a positive serial.

    Raises:
        RandomnessUnavailable: If the OS entropy source cannot supply bytes.
    """
    try:
        return secrets.randbelow(SERIAL_NUMBER_LIMIT - 1) + 1
    except (OSError, NotImplementedError) as e:
        raise RandomnessUnavailable(source="secrets", reason=str(e)) from e
