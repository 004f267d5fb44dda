"""
Google Gemini AI Provider Implementation.

Calls the Gemini ``generateContent`` REST endpoint.
"""

import httpx

from translator.core.logging import get_logger
from translator.services.ai_providers.base import (
    AIGenerateResponse,
    BaseAIProvider,
)

logger = get_logger(__name__)


class GeminiProvider(BaseAIProvider):
    """
    Google Gemini provider implementation.
    """

    DEFAULT_BASE_URL = "https://generativelanguage.googleapis.com/v1beta"

    def __init__(
        self, api_key: str | None = None, base_url: str | None = None, timeout: float | None = None, **kwargs
    ):
        super().__init__(
            api_key=api_key, base_url=base_url or self.DEFAULT_BASE_URL, timeout=timeout, **kwargs
        )
        if not self.api_key:
            raise ValueError("Gemini provider requires an API key")

    @property
    def provider_name(self) -> str:
        return "gemini"

    async def generate(
        self,
        model: str,
        prompt: str,
        system: str | None = None,
        temperature: float = 0.7,
        max_tokens: int | None = None,
        **kwargs,
    ) -> AIGenerateResponse:
        """Generate text using Gemini."""
        payload = {
            "contents": [{"role": "user", "parts": [{"text": prompt}]}],
            "generationConfig": {
                "temperature": temperature,
            },
        }

        if system:
            payload["systemInstruction"] = {"parts": [{"text": system}]}

        if max_tokens:
            payload["generationConfig"]["maxOutputTokens"] = max_tokens

        async with httpx.AsyncClient(timeout=self.timeout) as client:
            try:
                response = await client.post(
                    f"{self.base_url}/models/{model}:generateContent",
                    headers={"x-goog-api-key": self.api_key},
                    json=payload,
                )
                response.raise_for_status()
                data = response.json()
            except httpx.HTTPStatusError as e:
                logger.error(f"Gemini generation failed: {e}")
                logger.error(f"Response: {e.response.text}")
                raise
            except httpx.HTTPError as e:
                logger.error(f"Gemini generation failed: {e}")
                raise

        text = ""
        finish_reason = None
        candidates = data.get("candidates") or []
        if candidates:
            candidate = candidates[0]
            finish_reason = candidate.get("finishReason")
            for part in (candidate.get("content") or {}).get("parts", []):
                if "text" in part:
                    text += part["text"]

        usage = data.get("usageMetadata", {})

        return AIGenerateResponse(
            text=text,
            model=model,
            provider=self.provider_name,
            input_tokens=usage.get("promptTokenCount"),
            output_tokens=usage.get("candidatesTokenCount"),
            finish_reason=finish_reason,
        )
