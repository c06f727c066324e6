"""Standard Gemini API client using API key authentication."""

from http import HTTPStatus

import httpx
import structlog

from musive.features.llm.errors import LlmApiError


logger = structlog.get_logger()

_BASE_URL = "https://generativelanguage.googleapis.com/v1beta/models"
_DEFAULT_TIMEOUT = 60.0


class GeminiApiKeyClient:
    """Async client for the Gemini ``generateContent`` endpoint.

    Requests JSON output (``responseMimeType``). A failed call raises
    ``LlmApiError`` immediately; callers degrade instead of retrying.
    """

    def __init__(
        self,
        api_key: str,
        model: str = "gemini-2.5-flash",
        temperature: float = 0.3,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            api_key: Gemini API key.
            model: Gemini model identifier.
            temperature: Sampling temperature.
            http_client: Optional shared client; one is created otherwise.
        """
        self._api_key = api_key
        self.model = model
        self.temperature = temperature
        self._owns_client = http_client is None
        self._http = http_client or httpx.AsyncClient(timeout=_DEFAULT_TIMEOUT)
        self._log = logger.bind(component="llm", subcomponent="gemini")

    def _build_request_body(
        self, prompt: str, system_instruction: str | None
    ) -> dict[str, object]:
        body: dict[str, object] = {
            "contents": [{"role": "user", "parts": [{"text": prompt}]}],
            "generationConfig": {
                "responseMimeType": "application/json",
                "temperature": self.temperature,
            },
        }
        if system_instruction:
            body["systemInstruction"] = {"parts": [{"text": system_instruction}]}
        return body

    async def generate_content(
        self,
        prompt: str,
        system_instruction: str | None = None,
    ) -> str:
        """Send a generate content request to the Gemini API.

        Args:
            prompt: User prompt text.
            system_instruction: Optional system instruction.

        Returns:
            Generated text from the model response.

        Raises:
            LlmApiError: On network errors, non-200 responses, or a
                response without text.
        """
        url = f"{_BASE_URL}/{self.model}:generateContent"

        try:
            response = await self._http.post(
                url,
                headers={
                    "x-goog-api-key": self._api_key,
                    "Content-Type": "application/json",
                },
                json=self._build_request_body(prompt, system_instruction),
            )
        except httpx.HTTPError as exc:
            msg = f"Gemini API request failed: {exc}"
            raise LlmApiError(msg) from exc

        if response.status_code != HTTPStatus.OK:
            self._log.warning("gemini_error_status", status=response.status_code)
            msg = f"Gemini API returned {response.status_code}"
            raise LlmApiError(msg, status_code=response.status_code)

        return self._extract_text(response)

    @staticmethod
    def _extract_text(response: httpx.Response) -> str:
        """Extract generated text from the API response.

        Raises:
            LlmApiError: If the response is missing expected fields.
        """
        try:
            data = response.json()
        except ValueError as exc:
            msg = "Gemini API returned a non-JSON body"
            raise LlmApiError(msg) from exc

        candidates = data.get("candidates", []) if isinstance(data, dict) else []
        if not candidates:
            msg = "No candidates in Gemini API response"
            raise LlmApiError(msg)

        parts = candidates[0].get("content", {}).get("parts", [])
        if not parts:
            msg = "No parts in first candidate"
            raise LlmApiError(msg)

        text: str = parts[0].get("text", "")
        if not text:
            msg = "Empty text in response"
            raise LlmApiError(msg)

        return text

    async def aclose(self) -> None:
        """Close the HTTP client if this instance created it."""
        if self._owns_client:
            await self._http.aclose()
