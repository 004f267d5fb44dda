"""
Base AI Provider Interface.

Defines the abstract interface that translation model providers implement.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass
class AIGenerateResponse:
    """Response from AI generation."""

    text: str
    model: str
    provider: str
    input_tokens: int | None = None
    output_tokens: int | None = None
    finish_reason: str | None = None


class BaseAIProvider(ABC):
    """
    Abstract base class for AI providers.
    """

    def __init__(
        self, api_key: str | None = None, base_url: str | None = None, timeout: float | None = None, **kwargs
    ):
        """
        Initialize AI provider.

        Args:
            api_key: API key for authentication (if required)
            base_url: Base URL for API (if customizable)
            timeout: Request timeout in seconds, None for no timeout
            **kwargs: Additional provider-specific configuration
        """
        self.api_key = api_key
        self.base_url = base_url
        self.timeout = timeout
        self.extra_config = kwargs

    @property
    @abstractmethod
    def provider_name(self) -> str:
        """Get the provider name (e.g., 'gemini')."""
        pass

    @abstractmethod
    async def generate(
        self,
        model: str,
        prompt: str,
        system: str | None = None,
        temperature: float = 0.7,
        max_tokens: int | None = None,
        **kwargs,
    ) -> AIGenerateResponse:
        """
        Generate text using a model.

        Args:
            model: Model name to use
            prompt: User prompt
            system: Optional system prompt
            temperature: Sampling temperature (0.0-1.0)
            max_tokens: Maximum tokens to generate
            **kwargs: Additional provider-specific parameters

        Returns:
            AIGenerateResponse: Generated response with metadata

        Raises:
            Exception: If generation fails
        """
        pass
