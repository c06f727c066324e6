"""Factory for creating the configured LLM client."""

import structlog

from musive.features.llm.errors import LlmAuthError
from musive.features.llm.gemini_client import GeminiApiKeyClient
from musive.features.llm.openai_client import OpenAiChatClient
from musive.features.llm.protocols import LlmClient
from musive.settings import AppSettings


logger = structlog.get_logger()

DEFAULT_MODELS: dict[str, str] = {
    "openai": "gpt-4o-mini",
    "gemini": "gemini-2.5-flash",
}


def create_llm_client(settings: AppSettings) -> LlmClient:
    """Create an LLM client for the configured provider.

    Args:
        settings: Application settings (provider, key, model, temperature).

    Returns:
        An LlmClient implementation ready for use.

    Raises:
        LlmAuthError: If the provider's API key is not configured.
    """
    log = logger.bind(component="llm", subcomponent="factory")
    provider = settings.llm_provider
    model = settings.llm_model or DEFAULT_MODELS[provider]

    if provider == "gemini":
        if not settings.gemini_api_key:
            msg = "LLM_PROVIDER=gemini requires GEMINI_API_KEY"
            raise LlmAuthError(msg)
        log.info("llm_client_created", provider=provider, model=model)
        return GeminiApiKeyClient(
            api_key=settings.gemini_api_key,
            model=model,
            temperature=settings.llm_temperature,
        )

    if not settings.openai_api_key:
        msg = "LLM_PROVIDER=openai requires OPENAI_API_KEY"
        raise LlmAuthError(msg)
    log.info("llm_client_created", provider=provider, model=model)
    return OpenAiChatClient(
        api_key=settings.openai_api_key,
        model=model,
        temperature=settings.llm_temperature,
    )
