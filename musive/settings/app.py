"""Application settings powered by Pydantic BaseSettings."""

from typing import Annotated, Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from musive.data_model.base import StrictBaseModel


class PipelineConfig(StrictBaseModel):
    """Immutable values passed into one digest run.

    Attributes:
        digest_size: Maximum number of items in the digest.
        lookback_hours: Only entries strictly newer than now minus this window qualify.
        max_items_per_source: Cap on candidates classified per source.
        excerpt_max_chars: Character budget for the classifier excerpt.
        max_concurrent_requests: Cap on in-flight judge calls (0 disables the cap).
        fetch_timeout_seconds: Feed request timeout.
        user_agent: User-Agent header for feed requests.
    """

    digest_size: Annotated[int, Field(ge=1, le=100)] = 15
    lookback_hours: Annotated[int, Field(ge=1, le=24 * 30)] = 24
    max_items_per_source: Annotated[int, Field(ge=1, le=200)] = 20
    excerpt_max_chars: Annotated[int, Field(ge=50, le=10_000)] = 600
    max_concurrent_requests: Annotated[int, Field(ge=0, le=256)] = 8
    fetch_timeout_seconds: Annotated[float, Field(ge=1.0, le=300.0)] = 30.0
    user_agent: Annotated[str, Field(min_length=1, max_length=500)] = "musive-digest/0.1"


class AppSettings(BaseSettings):
    """Centralized environment configuration."""

    model_config = SettingsConfigDict(
        env_prefix="",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
        populate_by_name=True,
        extra="ignore",
    )

    llm_provider: Literal["openai", "gemini"] = Field(
        default="openai", validation_alias="LLM_PROVIDER"
    )
    openai_api_key: str | None = Field(default=None, validation_alias="OPENAI_API_KEY")
    gemini_api_key: str | None = Field(default=None, validation_alias="GEMINI_API_KEY")
    llm_model: str | None = Field(default=None, validation_alias="LLM_MODEL")
    llm_temperature: float = Field(default=0.3, validation_alias="LLM_TEMPERATURE")
    llm_max_concurrency: int = Field(default=8, validation_alias="LLM_MAX_CONCURRENCY")
    summary_language: str = Field(default="Korean", validation_alias="SUMMARY_LANGUAGE")
    digest_size: int = Field(default=15, validation_alias="DIGEST_SIZE")
    lookback_hours: int = Field(default=24, validation_alias="LOOKBACK_HOURS")
    max_items_per_source: int = Field(
        default=20, validation_alias="MAX_ITEMS_PER_SOURCE"
    )
    excerpt_max_chars: int = Field(default=600, validation_alias="EXCERPT_MAX_CHARS")
    fetch_timeout_seconds: float = Field(
        default=30.0, validation_alias="FETCH_TIMEOUT_SECONDS"
    )
    user_agent: str = Field(default="musive-digest/0.1", validation_alias="USER_AGENT")

    def pipeline_config(self) -> PipelineConfig:
        """Freeze the run-relevant values into a PipelineConfig."""
        return PipelineConfig(
            digest_size=self.digest_size,
            lookback_hours=self.lookback_hours,
            max_items_per_source=self.max_items_per_source,
            excerpt_max_chars=self.excerpt_max_chars,
            max_concurrent_requests=self.llm_max_concurrency,
            fetch_timeout_seconds=self.fetch_timeout_seconds,
            user_agent=self.user_agent,
        )


def get_settings() -> AppSettings:
    """Get a settings instance."""
    return AppSettings()
