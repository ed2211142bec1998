"""Exception hierarchy for vrf-sortition.

All exceptions derive from SortitionError, enabling broad catch patterns
at the application boundary while allowing fine-grained handling internally.
"""


class SortitionError(Exception):
    """Base exception for all vrf-sortition errors."""


class InvalidParametersError(SortitionError):
    """Sortition parameters are outside their valid domain.

    Raised when total stake is zero, the derived probability falls outside
    [0, 1], the threshold is negative or non-finite, or a stake does not fit
    in an unsigned 64-bit integer. Always detected before any VRF call.
    """


class VrfProofError(SortitionError):
    """The VRF capability could not derive a key or construct a proof.

    Raised for malformed secret keys or internal failures of the curve
    arithmetic. Retrying with identical inputs gives the same result.
    """


class VrfVerificationError(SortitionError):
    """A VRF proof did not verify, or could not be decoded.

    Raised by VRF capabilities only. SortitionSelector.verify() turns it
    into a plain ``False`` because untrusted proofs fail routinely.
    """


class HashMappingError(SortitionError):
    """A VRF hash could not be mapped into the unit interval.

    Raised when the hash is empty or is not a bytes-like object.
    """


class ConfigValidationError(SortitionError):
    """Configuration field validation failed.

    Raised for unknown VRF suites, unknown log levels, or settings that
    fail pydantic type validation.
    """
