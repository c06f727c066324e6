"""Content-judgment service clients."""

from musive.features.llm.errors import LlmApiError, LlmAuthError, LlmProcessingError
from musive.features.llm.factory import create_llm_client
from musive.features.llm.gemini_client import GeminiApiKeyClient
from musive.features.llm.openai_client import OpenAiChatClient
from musive.features.llm.protocols import LlmClient


__all__ = [
    "GeminiApiKeyClient",
    "LlmApiError",
    "LlmAuthError",
    "LlmClient",
    "LlmProcessingError",
    "OpenAiChatClient",
    "create_llm_client",
]
