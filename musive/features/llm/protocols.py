"""Protocol interface for LLM clients."""

from typing import Protocol, runtime_checkable


@runtime_checkable
class LlmClient(Protocol):
    """Protocol for structured-output text models.

    The classifier and the deduplicator only depend on this protocol,
    so any provider that can answer with a JSON document can stand
    behind them.
    """

    async def generate_content(
        self,
        prompt: str,
        system_instruction: str | None = None,
    ) -> str:
        """Generate a JSON document from a prompt.

        Args:
            prompt: User prompt text.
            system_instruction: Optional system-level instruction.

        Returns:
            Raw text of the model's answer.

        Raises:
            LlmApiError: If the API call fails.
        """
        ...

    async def aclose(self) -> None:
        """Release the underlying HTTP connection pool."""
        ...
