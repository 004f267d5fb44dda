"""
Discord interaction signature verification (Ed25519).
"""

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives.asymmetric.ed25519 import Ed25519PublicKey


def verify_signature(public_key_hex: str, signature_hex: str, timestamp: str, body: bytes | str) -> bool:
    """
    Check Discord's ``X-Signature-Ed25519`` header over ``timestamp + body``.

    Malformed keys or signatures count as a failed verification.
    """
    if isinstance(body, str):
        body = body.encode("utf-8")

    try:
        public_key = Ed25519PublicKey.from_public_bytes(bytes.fromhex(public_key_hex))
        public_key.verify(bytes.fromhex(signature_hex), timestamp.encode("utf-8") + body)
    except (InvalidSignature, ValueError):
        return False
    return True
