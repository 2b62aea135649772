"""
AI provider configuration settings.

Holds the OpenAI credentials, model selection, chat mode and the polling
deadlines used while waiting on runs and vector store indexing.

Dependencies: pydantic, pydantic_settings
System role: Provider client configuration
"""

from typing import Literal

from pydantic import AliasChoices, Field
from pydantic_settings import SettingsConfigDict

from docchat.configs.base import BaseSettings


class ProviderSettings(BaseSettings):
    """OpenAI provider configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="PROVIDER_",
        case_sensitive=False,
        extra="ignore",
    )

    api_key: str | None = Field(
        default=None,
        validation_alias=AliasChoices("OPENAI_API_KEY", "PROVIDER_API_KEY"),
        description="OpenAI API key",
    )
    base_url: str | None = Field(default=None, description="Optional API base URL override")
    model: str = Field(default="gpt-4o", description="Model used by assistants and responses")
    assistant_name: str = Field(
        default="AI Document Chat",
        description="Name given to every created assistant",
    )
    chat_mode: Literal["thread", "response"] = Field(
        default="thread",
        description="Chat relay mode: 'thread' (assistants + threads) or 'response' (chained responses)",
    )

    poll_interval_seconds: float = Field(default=1.0, description="Run status poll interval")
    run_timeout_seconds: float = Field(
        default=120.0,
        description="Maximum time to wait for a run to reach a terminal status",
    )
    indexing_timeout_seconds: float = Field(
        default=300.0,
        description="Maximum time to wait for a vector store file batch to finish indexing",
    )
