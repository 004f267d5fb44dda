"""
Tests for Discord signature verification.
"""

from cryptography.hazmat.primitives.asymmetric.ed25519 import Ed25519PrivateKey
from cryptography.hazmat.primitives.serialization import Encoding, PublicFormat

from translator.services.signature import verify_signature


def _public_hex(key: Ed25519PrivateKey) -> str:
    return key.public_key().public_bytes(Encoding.Raw, PublicFormat.Raw).hex()


class TestVerifySignature:
    def test_valid_signature(self, signing_key):
        body = b'{"type": 1}'
        signature = signing_key.sign(b"1700000000" + body).hex()
        assert verify_signature(_public_hex(signing_key), signature, "1700000000", body)

    def test_accepts_str_body(self, signing_key):
        signature = signing_key.sign(b"1700000000{}").hex()
        assert verify_signature(_public_hex(signing_key), signature, "1700000000", "{}")

    def test_tampered_body(self, signing_key):
        signature = signing_key.sign(b"1700000000{}").hex()
        assert not verify_signature(_public_hex(signing_key), signature, "1700000000", b'{"x": 1}')

    def test_wrong_timestamp(self, signing_key):
        signature = signing_key.sign(b"1700000000{}").hex()
        assert not verify_signature(_public_hex(signing_key), signature, "1700000001", b"{}")

    def test_other_key(self, signing_key):
        signature = Ed25519PrivateKey.generate().sign(b"1700000000{}").hex()
        assert not verify_signature(_public_hex(signing_key), signature, "1700000000", b"{}")

    def test_malformed_hex(self, signing_key):
        assert not verify_signature(_public_hex(signing_key), "not-hex", "1700000000", b"{}")
        assert not verify_signature("zz", "00" * 64, "1700000000", b"{}")
