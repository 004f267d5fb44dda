"""Discord message translator with a shared translation cache."""

__version__ = "0.1.0"
