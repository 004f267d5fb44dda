from translator.services.ai_providers.base import AIGenerateResponse, BaseAIProvider
from translator.services.ai_providers.gemini_provider import GeminiProvider

__all__ = ["AIGenerateResponse", "BaseAIProvider", "GeminiProvider"]
