"""
Exception types shared across the translator services.
"""


class TranslatorError(Exception):
    """Base class for translator errors."""


class StoreNotInitializedError(TranslatorError):
    """Raised when the history store is used before ``initialize()``."""

    def __init__(self, message: str = "History store not initialized. Call initialize() first."):
        super().__init__(message)


class TranslationFailedError(TranslatorError):
    """
    Raised when the model call fails or its reply cannot be parsed.

    ``raw_text`` keeps the model output for diagnostics. It is logged,
    never shown to Discord users.
    """

    def __init__(self, message: str, raw_text: str | None = None):
        super().__init__(message)
        self.raw_text = raw_text


class MissingInputError(TranslatorError):
    """Raised when a required request field (message or language) is absent."""

    def __init__(self, field: str):
        super().__init__(f"No {field} provided")
        self.field = field
