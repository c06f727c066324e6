"""Data models for classification results."""

from typing import Annotated, Any

from pydantic import Field, model_validator

from musive.data_model.base import StrictBaseModel


class ClassificationResult(StrictBaseModel):
    """Verdict of the relevance judge for one candidate.

    ``summary`` and ``interest_level`` are only meaningful when
    ``is_valid`` is true; a rejected result always carries an empty
    summary and an interest level of 0.

    Attributes:
        is_valid: Whether the candidate belongs in the digest.
        summary: Short summary written by the judge.
        interest_level: Estimated reader interest, 1-100 when valid.
    """

    is_valid: bool
    summary: str = ""
    interest_level: Annotated[int, Field(ge=0, le=100)] = 0

    @model_validator(mode="before")
    @classmethod
    def clear_rejected_payload(cls, data: Any) -> Any:
        """Drop summary and interest from rejected results."""
        if isinstance(data, dict) and data.get("is_valid") is False:
            return {"is_valid": False}
        return data

    @classmethod
    def rejected(cls) -> "ClassificationResult":
        """Safe default used when the judge rejects or fails."""
        return cls(is_valid=False)
