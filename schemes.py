"""Supported signature schemes."""

from enum import Enum

from errors import UnknownSchemeError


class VerificationScheme(str, Enum):
    ECDSA = "ecdsa"
    SCHNORR = "schnorr"
    EDDSA = "eddsa"
    RSA = "rsa"


def parse_scheme(value) -> VerificationScheme:
    """
    Normalize a scheme name or enum member.
    Args:
        value (str | VerificationScheme): e.g. "EdDSA", " ecdsa "
    Returns:
        VerificationScheme
    Raises:
        UnknownSchemeError: if the value names no supported scheme
    """
    if isinstance(value, VerificationScheme):
        return value
    if not isinstance(value, str):
        raise UnknownSchemeError(f"Scheme must be a string, got {type(value).__name__}")
    try:
        return VerificationScheme(value.strip().lower())
    except ValueError:
        raise UnknownSchemeError(f"Unknown signature scheme: {value!r}")
