"""Exception types raised inside the verifier.

None of these cross the public ``verify`` boundary; the dispatcher converts
them into a failed ``VerificationResult``.
"""


class SignatureVerifierError(Exception):
    """Base class for verifier errors."""


class UnknownSchemeError(SignatureVerifierError, ValueError):
    """Raised when a scheme name is not one of the supported schemes."""


class IdentityFormatError(SignatureVerifierError, ValueError):
    """Raised when a signer identity is not a usable address or public key."""

