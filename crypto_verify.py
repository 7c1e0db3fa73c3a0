# /sigverify/src/crypto_verify.py

"""
Module: crypto_verify.py
Purpose: Per-scheme signature checks over external curve libraries.
Consumes:
- DecodedSignature from signature_decoder.py
- Identity from identity.py
- Digest bytes (already hashed by the caller)
Provides:
- verify_ecdsa / verify_schnorr / verify_eddsa / verify_rsa → VerificationResult
Behavior:
- ECDSA recovers the signer address with eth_keys and compares it
- Schnorr checks BIP340 with coincurve against an x-only key
- EdDSA checks Ed25519 with PyNaCl against a raw 32-byte key
- RSA is not supported and always fails
- Library rejections become failed results; anything unexpected propagates
"""

import nacl.encoding
import nacl.exceptions
import nacl.signing
from coincurve import PublicKey, PublicKeyXOnly
from eth_keys import keys
from eth_keys.exceptions import BadSignature, ValidationError
from eth_utils import ValidationError as EthUtilsValidationError

from identity import Identity, IdentityKind
from logger import get_logger
from schemes import VerificationScheme
from signature_decoder import DecodedSignature
from verification_result import FailureReason, VerificationResult

logger = get_logger(__name__)

ED25519_KEY_LENGTH = 32
XONLY_KEY_LENGTH = 32
DIGEST_LENGTH = 32

# eth_keys raises its own ValidationError or the eth_utils one, depending on the check
_ETH_VALIDATION_ERRORS = (ValidationError, EthUtilsValidationError, ValueError)


def normalize_recovery_id(v: int) -> int:
    """
    Map a recovery discriminant onto {0, 1}.
    Args:
        v (int): 0/1, 27/28 (legacy) or >= 35 (EIP-155, chain id folded in)
    Returns:
        int: 0 or 1
    Raises:
        ValueError: if v is none of the above
    """
    if v in (0, 1):
        return v
    if v in (27, 28):
        return v - 27
    if v >= 35:
        return (v - 35) % 2
    raise ValueError(f"Unsupported recovery id: {v}")


def verify_ecdsa(identity: Identity, signature: DecodedSignature, digest: bytes) -> VerificationResult:
    scheme = VerificationScheme.ECDSA
    if identity.kind is not IdentityKind.ADDRESS:
        return VerificationResult.failure(
            FailureReason.IDENTITY_SHAPE, "ECDSA needs an address identity", scheme
        )
    if signature.r is None or signature.s is None or signature.recovery_id is None:
        return VerificationResult.failure(
            FailureReason.MALFORMED_SIGNATURE, "ECDSA needs r, s and a recovery id", scheme
        )

    if len(digest) != DIGEST_LENGTH:
        return VerificationResult.failure(
            FailureReason.MALFORMED_DIGEST, f"ECDSA recovery needs a 32-byte digest, got {len(digest)}", scheme
        )

    try:
        v = normalize_recovery_id(signature.recovery_id)
        sig = keys.Signature(vrs=(
            v,
            int.from_bytes(signature.r, "big"),
            int.from_bytes(signature.s, "big"),
        ))
    except _ETH_VALIDATION_ERRORS as e:
        return VerificationResult.failure(FailureReason.MALFORMED_SIGNATURE, str(e), scheme)

    try:
        recovered = sig.recover_public_key_from_msg_hash(digest)
    except (BadSignature,) + _ETH_VALIDATION_ERRORS as e:
        return VerificationResult.failure(FailureReason.INVALID_SIGNATURE, str(e), scheme)

    if recovered.to_canonical_address() != identity.value:
        logger.debug("Recovered %s, expected 0x%s", recovered.to_address(), identity.value.hex())
        return VerificationResult.failure(FailureReason.SIGNER_MISMATCH, "Recovered address differs", scheme)
    return VerificationResult.success(scheme)


def _xonly_key(identity: Identity) -> PublicKeyXOnly:
    """Reduce a 32, 33 or 65 byte secp256k1 key to its BIP340 x-only form."""
    if len(identity.value) == XONLY_KEY_LENGTH:
        return PublicKeyXOnly(identity.value)
    compressed = PublicKey(identity.value).format(compressed=True)
    return PublicKeyXOnly(compressed[1:])


def verify_schnorr(identity: Identity, signature: DecodedSignature, digest: bytes) -> VerificationResult:
    scheme = VerificationScheme.SCHNORR
    if identity.kind is not IdentityKind.PUBLIC_KEY:
        return VerificationResult.failure(
            FailureReason.IDENTITY_SHAPE, "Schnorr needs a public key identity, not an address", scheme
        )
    compact = signature.compact
    if compact is None or len(compact) != 64:
        return VerificationResult.failure(
            FailureReason.MALFORMED_SIGNATURE, "Schnorr needs a 64-byte R || s", scheme
        )

    try:
        pubkey = _xonly_key(identity)
    except ValueError as e:
        return VerificationResult.failure(FailureReason.IDENTITY_SHAPE, f"Invalid secp256k1 key: {e}", scheme)

    try:
        valid = pubkey.verify(compact, digest)
    except ValueError as e:
        return VerificationResult.failure(FailureReason.MALFORMED_DIGEST, str(e), scheme)

    if not valid:
        return VerificationResult.failure(FailureReason.INVALID_SIGNATURE, "BIP340 check failed", scheme)
    return VerificationResult.success(scheme)


def verify_eddsa(identity: Identity, signature: DecodedSignature, digest: bytes) -> VerificationResult:
    scheme = VerificationScheme.EDDSA
    if identity.kind is not IdentityKind.PUBLIC_KEY or len(identity.value) != ED25519_KEY_LENGTH:
        return VerificationResult.failure(
            FailureReason.IDENTITY_SHAPE, "EdDSA needs a raw 32-byte public key", scheme
        )
    compact = signature.compact
    if compact is None:
        return VerificationResult.failure(
            FailureReason.MALFORMED_SIGNATURE, "EdDSA needs a 64-byte R || s", scheme
        )

    try:
        verify_key = nacl.signing.VerifyKey(identity.value, encoder=nacl.encoding.RawEncoder)
        verify_key.verify(digest, compact)
    except nacl.exceptions.BadSignatureError:
        return VerificationResult.failure(FailureReason.INVALID_SIGNATURE, "Ed25519 check failed", scheme)
    except (nacl.exceptions.ValueError, nacl.exceptions.TypeError, ValueError) as e:
        return VerificationResult.failure(FailureReason.MALFORMED_SIGNATURE, str(e), scheme)
    return VerificationResult.success(scheme)


def verify_rsa(identity: Identity, signature: DecodedSignature, digest: bytes) -> VerificationResult:
    """RSA is recognized but not verified; it must never report success."""
    logger.info("RSA verification is not supported (%d-byte payload)", len(signature.raw))
    return VerificationResult.failure(
        FailureReason.UNSUPPORTED, "RSA verification is not implemented", VerificationScheme.RSA
    )
