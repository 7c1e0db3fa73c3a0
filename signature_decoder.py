# /sigverify/src/signature_decoder.py

"""
Module: signature_decoder.py
Purpose: Guess the signature scheme from the raw bytes and split them into components.
Consumes:
- Hex-encoded signature, optionally "0x"-prefixed
Provides:
- decode(signature_hex: str) → DecodedSignature
Behavior:
- 65 bytes → ECDSA (r, s, recovery id)
- 64 bytes → Schnorr or EdDSA, picked by the high bit of the first byte
- Anything else (or text that is not hex) → RSA fallback, bytes kept verbatim
- Never raises
"""

import re
from dataclasses import dataclass

from schemes import VerificationScheme

ECDSA_LENGTH = 65
COMPACT_LENGTH = 64
COMPONENT_LENGTH = 32
EDDSA_FIRST_BYTE_MIN = 0x80

_HEX_BODY = re.compile(r"[0-9a-fA-F]*")


@dataclass(frozen=True)
class DecodedSignature:
    scheme: VerificationScheme
    raw: bytes
    r: bytes | None = None
    s: bytes | None = None
    recovery_id: int | None = None
    # The 64-byte Schnorr/EdDSA split is a guess; callers who know the
    # scheme should pass it explicitly.
    ambiguous: bool = False
    well_formed: bool = True

    @property
    def compact(self) -> bytes | None:
        """Return R || s, or None when the components are absent."""
        if self.r is None or self.s is None:
            return None
        return self.r + self.s


def strip_prefix(text: str) -> str:
    if text[:2] in ("0x", "0X"):
        return text[2:]
    return text


def parse_hex(body: str) -> bytes:
    """
    Strict hex to bytes: no whitespace, no separators, even length.
    Raises:
        ValueError: if body is anything else
    """
    if not _HEX_BODY.fullmatch(body) or len(body) % 2:
        raise ValueError(f"Not a strict hex string: {body!r}")
    return bytes.fromhex(body)


def decode(signature_hex: str) -> DecodedSignature:
    """
    Decode a hex signature into its most likely scheme shape.
    Args:
        signature_hex (str): Signature bytes in hex
    Returns:
        DecodedSignature: advisory scheme tag plus components
    """
    body = strip_prefix(signature_hex)
    try:
        raw = parse_hex(body)
    except ValueError:
        return DecodedSignature(
            scheme=VerificationScheme.RSA,
            raw=body.encode("ascii", errors="replace"),
            well_formed=False,
        )

    if len(raw) == ECDSA_LENGTH:
        return DecodedSignature(
            scheme=VerificationScheme.ECDSA,
            raw=raw,
            r=raw[:COMPONENT_LENGTH],
            s=raw[COMPONENT_LENGTH:2 * COMPONENT_LENGTH],
            recovery_id=raw[2 * COMPONENT_LENGTH],
        )

    if len(raw) == COMPACT_LENGTH:
        if raw[0] >= EDDSA_FIRST_BYTE_MIN:
            scheme = VerificationScheme.EDDSA
        else:
            scheme = VerificationScheme.SCHNORR
        return DecodedSignature(
            scheme=scheme,
            raw=raw,
            r=raw[:COMPONENT_LENGTH],
            s=raw[COMPONENT_LENGTH:],
            ambiguous=True,
        )

    # RSA signature length follows the key size, so any other length lands here.
    return DecodedSignature(scheme=VerificationScheme.RSA, raw=raw)
