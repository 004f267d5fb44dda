"""
Message fingerprinting for the translation cache.
"""

import hashlib


def normalize_message(text: str) -> str:
    """Collapse case and surrounding whitespace so variants share a cache key."""
    return text.strip().lower()


def fingerprint(text: str) -> str:
    """
    SHA-256 hex digest of the normalized message.

    Always 64 lowercase hex characters; accepts any string, including empty.
    """
    return hashlib.sha256(normalize_message(text).encode("utf-8", "surrogatepass")).hexdigest()


def normalize_language(language: str) -> str:
    """Target languages are free-form and compared by trimmed lowercase form."""
    return language.strip().lower()
