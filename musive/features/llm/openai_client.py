"""OpenAI Chat Completions client with JSON-object output."""

from http import HTTPStatus

import httpx
import structlog

from musive.features.llm.errors import LlmApiError


logger = structlog.get_logger()

_CHAT_COMPLETIONS_URL = "https://api.openai.com/v1/chat/completions"
_DEFAULT_TIMEOUT = 60.0


class OpenAiChatClient:
    """Async client for ``/v1/chat/completions``.

    Sends ``response_format={"type": "json_object"}`` so the judge
    answers with a single JSON document.
    """

    def __init__(
        self,
        api_key: str,
        model: str = "gpt-4o-mini",
        temperature: float = 0.3,
        base_url: str = _CHAT_COMPLETIONS_URL,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            api_key: OpenAI API key.
            model: Chat model identifier.
            temperature: Sampling temperature.
            base_url: Chat completions endpoint (overridable for
                OpenAI-compatible gateways).
            http_client: Optional shared client; one is created otherwise.
        """
        self._api_key = api_key
        self.model = model
        self.temperature = temperature
        self._url = base_url
        self._owns_client = http_client is None
        self._http = http_client or httpx.AsyncClient(timeout=_DEFAULT_TIMEOUT)
        self._log = logger.bind(component="llm", subcomponent="openai")

    async def generate_content(
        self,
        prompt: str,
        system_instruction: str | None = None,
    ) -> str:
        """Send a chat completion request.

        Args:
            prompt: User message text.
            system_instruction: Optional system message.

        Returns:
            Content of the first choice's message.

        Raises:
            LlmApiError: On network errors, non-200 responses, or an
                empty answer.
        """
        messages: list[dict[str, str]] = []
        if system_instruction:
            messages.append({"role": "system", "content": system_instruction})
        messages.append({"role": "user", "content": prompt})

        try:
            response = await self._http.post(
                self._url,
                headers={"Authorization": f"Bearer {self._api_key}"},
                json={
                    "model": self.model,
                    "messages": messages,
                    "response_format": {"type": "json_object"},
                    "temperature": self.temperature,
                },
            )
        except httpx.HTTPError as exc:
            msg = f"Chat completion request failed: {exc}"
            raise LlmApiError(msg) from exc

        if response.status_code != HTTPStatus.OK:
            self._log.warning("openai_error_status", status=response.status_code)
            msg = f"Chat completion returned {response.status_code}"
            raise LlmApiError(msg, status_code=response.status_code)

        try:
            data = response.json()
            content = data["choices"][0]["message"]["content"]
        except (ValueError, KeyError, IndexError, TypeError) as exc:
            msg = "Malformed chat completion response"
            raise LlmApiError(msg) from exc

        if not isinstance(content, str) or not content:
            msg = "Empty content in chat completion response"
            raise LlmApiError(msg)

        return content

    async def aclose(self) -> None:
        """Close the HTTP client if this instance created it."""
        if self._owns_client:
            await self._http.aclose()
