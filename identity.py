"""Signer identity parsing.

An identity is either a 20-byte address (ECDSA, recovered from the signature)
or a raw public key (Schnorr and EdDSA verify against the key directly).
"""

from dataclasses import dataclass
from enum import Enum

from errors import IdentityFormatError
from signature_decoder import parse_hex

ADDRESS_LENGTH = 20
PUBLIC_KEY_LENGTHS = (32, 33, 65)


class IdentityKind(str, Enum):
    ADDRESS = "address"
    PUBLIC_KEY = "public_key"


@dataclass(frozen=True)
class Identity:
    kind: IdentityKind
    value: bytes

    @property
    def is_address(self) -> bool:
        return self.kind is IdentityKind.ADDRESS


def parse_identity(identity_hex: str) -> Identity:
    """
    Classify a hex identity by its byte length.
    Args:
        identity_hex (str): "0x"-prefixed address or public key
    Returns:
        Identity
    Raises:
        IdentityFormatError: on bad hex or an unrecognized length
    """
    text = identity_hex.lower()
    if text.startswith("0x"):
        text = text[2:]
    try:
        value = parse_hex(text)
    except ValueError as e:
        raise IdentityFormatError(f"Invalid hex identity: {e}")

    if len(value) == ADDRESS_LENGTH:
        return Identity(IdentityKind.ADDRESS, value)
    if len(value) in PUBLIC_KEY_LENGTHS:
        return Identity(IdentityKind.PUBLIC_KEY, value)
    raise IdentityFormatError(f"Identity of {len(value)} bytes is neither an address nor a public key")
