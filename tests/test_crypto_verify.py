import pytest

import crypto_verify
from identity import Identity, IdentityKind, parse_identity
from signature_decoder import decode
from tests.mocks.mock_signers import (
    DIGEST,
    OTHER_DIGEST,
    EcdsaSigner,
    EddsaSigner,
    SchnorrSigner,
    flip_byte,
    hexify,
)
from verification_result import FailureReason


@pytest.mark.parametrize("v, expected", [(0, 0), (1, 1), (27, 0), (28, 1), (37, 0), (38, 1)])
def test_normalize_recovery_id(v, expected):
    assert crypto_verify.normalize_recovery_id(v) == expected


def test_normalize_recovery_id_rejects_garbage():
    with pytest.raises(ValueError):
        crypto_verify.normalize_recovery_id(5)


def test_ecdsa_recovers_signer():
    signer = EcdsaSigner()
    result = crypto_verify.verify_ecdsa(parse_identity(signer.address), decode(hexify(signer.sign())), DIGEST)
    assert result.ok


def test_ecdsa_wrong_address():
    signer = EcdsaSigner()
    other = EcdsaSigner()
    result = crypto_verify.verify_ecdsa(parse_identity(other.address), decode(hexify(signer.sign())), DIGEST)
    assert not result.ok
    assert result.reason is FailureReason.SIGNER_MISMATCH


def test_ecdsa_rejects_public_key_identity():
    signer = EcdsaSigner()
    identity = Identity(IdentityKind.PUBLIC_KEY, signer.key.public_key.to_bytes())
    result = crypto_verify.verify_ecdsa(identity, decode(hexify(signer.sign())), DIGEST)
    assert result.reason is FailureReason.IDENTITY_SHAPE


def test_ecdsa_needs_recovery_id():
    signer = EcdsaSigner()
    result = crypto_verify.verify_ecdsa(parse_identity(signer.address), decode(hexify(signer.sign()[:64])), DIGEST)
    assert result.reason is FailureReason.MALFORMED_SIGNATURE


def test_ecdsa_short_digest():
    signer = EcdsaSigner()
    result = crypto_verify.verify_ecdsa(parse_identity(signer.address), decode(hexify(signer.sign())), DIGEST[:20])
    assert result.reason is FailureReason.MALFORMED_DIGEST


def test_ecdsa_zero_signature_fails():
    signer = EcdsaSigner()
    result = crypto_verify.verify_ecdsa(parse_identity(signer.address), decode(hexify(bytes(65))), DIGEST)
    assert not result.ok


def test_schnorr_accepts_xonly_and_compressed_keys():
    signer = SchnorrSigner()
    decoded = decode(hexify(signer.sign()))
    assert crypto_verify.verify_schnorr(parse_identity(hexify(signer.public_key)), decoded, DIGEST).ok
    assert crypto_verify.verify_schnorr(parse_identity(hexify(signer.compressed_key)), decoded, DIGEST).ok


def test_schnorr_rejects_address_identity():
    signer = SchnorrSigner()
    result = crypto_verify.verify_schnorr(parse_identity("0x" + "11" * 20), decode(hexify(signer.sign())), DIGEST)
    assert result.reason is FailureReason.IDENTITY_SHAPE


def test_schnorr_wrong_digest():
    signer = SchnorrSigner()
    identity = parse_identity(hexify(signer.public_key))
    result = crypto_verify.verify_schnorr(identity, decode(hexify(signer.sign())), OTHER_DIGEST)
    assert result.reason is FailureReason.INVALID_SIGNATURE


def test_eddsa_verifies():
    signer = EddsaSigner()
    result = crypto_verify.verify_eddsa(parse_identity(hexify(signer.public_key)), decode(hexify(signer.sign())), DIGEST)
    assert result.ok


def test_eddsa_tampered():
    signer = EddsaSigner()
    sig = flip_byte(signer.sign(), 40)
    result = crypto_verify.verify_eddsa(parse_identity(hexify(signer.public_key)), decode(hexify(sig)), DIGEST)
    assert result.reason is FailureReason.INVALID_SIGNATURE


def test_eddsa_needs_32_byte_key():
    signer = EddsaSigner()
    identity = parse_identity("0x02" + signer.public_key.hex())
    result = crypto_verify.verify_eddsa(identity, decode(hexify(signer.sign())), DIGEST)
    assert result.reason is FailureReason.IDENTITY_SHAPE


def test_rsa_is_never_accepted():
    result = crypto_verify.verify_rsa(parse_identity("0x" + "11" * 20), decode("0x" + "ab" * 256), DIGEST)
    assert not result.ok
    assert result.reason is FailureReason.UNSUPPORTED


def test_address_derivation_has_a_hash_backend():
    # keccak comes from eth-hash; without a backend every ECDSA check would fail closed
    signer = EcdsaSigner()
    assert len(signer.key.public_key.to_canonical_address()) == 20
