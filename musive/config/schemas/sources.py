"""Source configuration schema."""

from typing import Annotated

from pydantic import Field, field_validator, model_validator

from musive.config.constants import FORBIDDEN_CONFIG_HEADERS, VALID_URL_SCHEMES
from musive.data_model.base import StrictBaseModel


class SourceConfig(StrictBaseModel):
    """Configuration for a single feed source.

    Attributes:
        id: Unique identifier for the source.
        name: Label shown on digest items (e.g. "Billboard").
        url: Feed URL.
        enabled: Whether the source is collected.
        headers: Optional custom headers for the feed request.
    """

    id: Annotated[str, Field(min_length=1, max_length=100, pattern=r"^[a-z0-9_-]+$")]
    name: Annotated[str, Field(min_length=1, max_length=200)]
    url: Annotated[str, Field(min_length=1)]
    enabled: bool = True
    headers: dict[str, str] = Field(default_factory=dict)

    @field_validator("url")
    @classmethod
    def validate_url(cls, v: str) -> str:
        """Validate URL starts with http:// or https://."""
        if not v.startswith(VALID_URL_SCHEMES):
            msg = "URL must start with http:// or https://"
            raise ValueError(msg)
        return v

    @field_validator("headers")
    @classmethod
    def validate_no_auth_headers(cls, v: dict[str, str]) -> dict[str, str]:
        """Ensure no Authorization headers are stored in config."""
        for key in v:
            if key.lower() in FORBIDDEN_CONFIG_HEADERS:
                msg = f"Header '{key}' must not be stored in config; use environment variables"
                raise ValueError(msg)
        return v


class SourcesConfig(StrictBaseModel):
    """Root configuration for sources.yaml.

    Attributes:
        version: Schema version.
        sources: Registered feed sources, in digest order.
    """

    version: Annotated[str, Field(pattern=r"^\d+\.\d+$")] = "1.0"
    sources: list[SourceConfig] = Field(default_factory=list)

    @model_validator(mode="after")
    def validate_unique_ids(self) -> "SourcesConfig":
        """Reject duplicate source ids."""
        seen: set[str] = set()
        for source in self.sources:
            if source.id in seen:
                msg = f"Duplicate source id: {source.id}"
                raise ValueError(msg)
            seen.add(source.id)
        return self

    @property
    def enabled_sources(self) -> list[SourceConfig]:
        """Sources that should be collected."""
        return [s for s in self.sources if s.enabled]
