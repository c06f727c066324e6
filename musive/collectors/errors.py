"""Error types for the collector framework."""

from enum import Enum
from typing import Annotated

from pydantic import Field

from musive.data_model.base import StrictBaseModel


class CollectorErrorClass(str, Enum):
    """Classification of collector errors.

    - FETCH: HTTP/network errors during fetch
    - PARSE: Feed body could not be parsed
    - UNEXPECTED: Anything else escaping a source's collection
    """

    FETCH = "FETCH"
    PARSE = "PARSE"
    UNEXPECTED = "UNEXPECTED"


class SourceUnavailableError(Exception):
    """A feed could not be fetched or parsed.

    Recovered at the source boundary: the source contributes no items.
    """

    def __init__(
        self,
        error_class: CollectorErrorClass,
        message: str,
        source_id: str | None = None,
        status_code: int | None = None,
    ) -> None:
        """Initialize the error.

        Args:
            error_class: Classification of the error.
            message: Human-readable error message.
            source_id: Identifier of the source that failed.
            status_code: HTTP status code, when the server answered.
        """
        super().__init__(message)
        self.error_class = error_class
        self.message = message
        self.source_id = source_id
        self.status_code = status_code


class ErrorRecord(StrictBaseModel):
    """Serializable record of a source failure for run reporting."""

    error_class: CollectorErrorClass = Field(description="Error classification")
    message: Annotated[str, Field(min_length=1, description="Error message")]
    source_id: str | None = Field(default=None, description="Source identifier")
    status_code: int | None = Field(default=None, description="HTTP status code")

    @classmethod
    def from_exception(cls, error: SourceUnavailableError) -> "ErrorRecord":
        """Create an ErrorRecord from a SourceUnavailableError.

        Args:
            error: The exception to convert.

        Returns:
            ErrorRecord instance.
        """
        return cls(
            error_class=error.error_class,
            message=error.message or error.error_class.value,
            source_id=error.source_id,
            status_code=error.status_code,
        )
