import os

import nacl.signing
from coincurve import PrivateKey, PublicKeyXOnly
from eth_keys import keys
from eth_utils import keccak

DIGEST = keccak(b"Hello, World!")
OTHER_DIGEST = keccak(b"Goodbye, World!")


def hexify(data: bytes) -> str:
    return "0x" + data.hex()


class EcdsaSigner:
    def __init__(self):
        self.key = keys.PrivateKey(os.urandom(32))
        self.address = self.key.public_key.to_checksum_address()

    def sign(self, digest=DIGEST, v_offset=0) -> bytes:
        sig = self.key.sign_msg_hash(digest).to_bytes()
        return sig[:64] + bytes([sig[64] + v_offset])


class SchnorrSigner:
    def __init__(self):
        self.key = PrivateKey()
        self.public_key = PublicKeyXOnly.from_secret(self.key.secret).format()
        self.compressed_key = self.key.public_key.format(compressed=True)

    def sign(self, digest=DIGEST, high_bit=None) -> bytes:
        """Sign; with high_bit set, retry until the first byte matches."""
        while True:
            sig = self.key.sign_schnorr(digest, os.urandom(32))
            if high_bit is None or (sig[0] >= 0x80) == high_bit:
                return sig


class EddsaSigner:
    def __init__(self, high_bit=None, digest=DIGEST):
        # Ed25519 is deterministic, so the first byte is steered by picking the key
        while True:
            self.key = nacl.signing.SigningKey.generate()
            first = self.key.sign(digest).signature[0]
            if high_bit is None or (first >= 0x80) == high_bit:
                break
        self.public_key = self.key.verify_key.encode()

    def sign(self, digest=DIGEST) -> bytes:
        return self.key.sign(digest).signature


def flip_byte(sig: bytes, index: int) -> bytes:
    return sig[:index] + bytes([sig[index] ^ 0x01]) + sig[index + 1:]
