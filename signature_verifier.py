# /sigverify/src/signature_verifier.py

"""
Module: signature_verifier.py
Purpose: Verify a signature against a signer identity and digest without being told the scheme.
Consumes:
- signature_decoder.decode for the scheme guess and components
- crypto_verify for the per-scheme checks
- CONFIG for enabled schemes and the ambiguity policy
Provides:
- verify(signer_identity, signature_hex, digest_hex, scheme=None) → bool
- verify_detailed(...) → VerificationResult
Behavior:
- Inputs missing or lacking the "0x" prefix are rejected before any decoding
- An explicit scheme always beats the decoder's guess; a blank one counts as absent
- Hex must be strict: no whitespace, separators or odd length
- Fails closed: every error becomes False plus a log line, nothing is raised
"""

import config_loader
import crypto_verify
from errors import IdentityFormatError, SignatureVerifierError, UnknownSchemeError
from identity import parse_identity
from logger import get_logger
from schemes import VerificationScheme, parse_scheme
from signature_decoder import decode, parse_hex, strip_prefix
from verification_result import FailureReason, VerificationResult

logger = get_logger(__name__)

HEX_PREFIX = "0x"

_ERROR_REASONS = (
    (UnknownSchemeError, FailureReason.UNKNOWN_SCHEME),
    (IdentityFormatError, FailureReason.IDENTITY_SHAPE),
)


def _reason_for(error: SignatureVerifierError) -> FailureReason:
    for exc_type, reason in _ERROR_REASONS:
        if isinstance(error, exc_type):
            return reason
    return FailureReason.INTERNAL_ERROR


def _check_inputs(signer_identity, signature_hex, digest_hex) -> VerificationResult | None:
    """Cheap shape checks; returns a failure or None when the inputs may proceed."""
    for name, value in (
        ("signer_identity", signer_identity),
        ("signature", signature_hex),
        ("digest", digest_hex),
    ):
        if not isinstance(value, str):
            return VerificationResult.failure(FailureReason.MISSING_INPUT, f"{name} is missing")
        if not value.startswith(HEX_PREFIX):
            return VerificationResult.failure(FailureReason.MISSING_PREFIX, f"{name} lacks the 0x prefix")
        if len(value) == len(HEX_PREFIX):
            return VerificationResult.failure(FailureReason.MISSING_INPUT, f"{name} is empty")
    return None


def _verifier_for(scheme: VerificationScheme):
    return {
        VerificationScheme.ECDSA: crypto_verify.verify_ecdsa,
        VerificationScheme.SCHNORR: crypto_verify.verify_schnorr,
        VerificationScheme.EDDSA: crypto_verify.verify_eddsa,
        VerificationScheme.RSA: crypto_verify.verify_rsa,
    }[scheme]


def _parse_digest(digest_hex: str) -> bytes | None:
    try:
        return parse_hex(strip_prefix(digest_hex))
    except ValueError:
        return None


def _dispatch(signer_identity, signature_hex, digest_hex, scheme, config) -> VerificationResult:
    decoded = decode(signature_hex)

    if scheme is not None:
        effective = parse_scheme(scheme)
    elif decoded.ambiguous and not config.allow_ambiguous:
        return VerificationResult.failure(
            FailureReason.AMBIGUOUS_SCHEME,
            "64-byte signature could be Schnorr or EdDSA; pass the scheme explicitly",
            decoded.scheme,
        )
    else:
        effective = decoded.scheme

    if not config.is_enabled(effective):
        return VerificationResult.failure(FailureReason.SCHEME_DISABLED, f"{effective.value} is disabled", effective)

    if not decoded.well_formed:
        return VerificationResult.failure(FailureReason.MALFORMED_SIGNATURE, "signature is not valid hex", effective)

    digest = _parse_digest(digest_hex)
    if digest is None:
        return VerificationResult.failure(FailureReason.MALFORMED_DIGEST, "digest is not valid hex", effective)

    try:
        identity = parse_identity(signer_identity.lower())
    except IdentityFormatError as e:
        return VerificationResult.failure(FailureReason.IDENTITY_SHAPE, str(e), effective)

    try:
        return _verifier_for(effective)(identity, decoded, digest)
    except Exception as e:
        logger.warning("%s verifier failed unexpectedly: %s", effective.value, e, exc_info=True)
        return VerificationResult.failure(FailureReason.INTERNAL_ERROR, repr(e), effective)


def verify_detailed(
    signer_identity,
    signature_hex,
    digest_hex,
    scheme: str | VerificationScheme | None = None,
    config: config_loader.Config | None = None,
) -> VerificationResult:
    """
    Verify a signature and report why it failed, if it did.
    Args:
        signer_identity (str): "0x" address (ECDSA) or public key (Schnorr, EdDSA)
        signature_hex (str): "0x" signature bytes
        digest_hex (str): "0x" message digest, already hashed by the caller
        scheme (str | VerificationScheme | None): overrides the detected scheme
        config (Config | None): defaults to the global CONFIG
    Returns:
        VerificationResult: never raises
    """
    rejected = _check_inputs(signer_identity, signature_hex, digest_hex)
    if rejected is not None:
        return rejected

    config = config or config_loader.CONFIG
    # an empty override means "not given", so the decoder's guess applies
    if isinstance(scheme, str) and not scheme.strip():
        scheme = None
    try:
        result = _dispatch(signer_identity, signature_hex, digest_hex, scheme, config)
    except SignatureVerifierError as e:
        result = VerificationResult.failure(_reason_for(e), str(e))
    except Exception as e:
        logger.warning("Signature verification failed unexpectedly: %s", e, exc_info=True)
        result = VerificationResult.failure(FailureReason.INTERNAL_ERROR, repr(e))

    if not result.ok:
        logger.info(
            "Signature rejected: scheme=%s reason=%s detail=%s",
            result.scheme.value if result.scheme else None,
            result.reason.value,
            result.detail,
        )
    return result


def verify(
    signer_identity,
    signature_hex,
    digest_hex,
    scheme: str | VerificationScheme | None = None,
) -> bool:
    """
    Verifies a digital signature.
    Args:
        signer_identity (str): Expected signer's address or public key
        signature_hex (str): Signature bytes in hex
        digest_hex (str): Message hash in hex
        scheme (str | None): Optional scheme override ("ecdsa", "schnorr", "eddsa", "rsa")
    Returns:
        bool: True only when the signature checks out for that signer
    """
    return verify_detailed(signer_identity, signature_hex, digest_hex, scheme).ok
