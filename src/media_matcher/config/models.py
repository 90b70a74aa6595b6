"""Configuration data models."""

import os
import re
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class OpenAIConfig(BaseModel):
    """Hosted chat-completion API configuration."""

    api_key: Optional[str] = Field(default=None, description="API key for the provider")
    model: str = Field(default="gpt-4o-mini", description="Model identifier")
    base_url: str = Field(default="https://api.openai.com/v1", description="API base URL")
    timeout: float = Field(default=30.0, gt=0, description="Request timeout in seconds")

    @field_validator("api_key")
    @classmethod
    def validate_api_key(cls, v: Optional[str]) -> Optional[str]:
        """Expand environment variables in API key."""
        if v is None:
            return None
        expanded = os.path.expandvars(v).strip()
        # An unset variable leaves the placeholder behind
        if not expanded or re.fullmatch(r"\$\{?\w+\}?", expanded):
            return None
        return expanded


class OllamaConfig(BaseModel):
    """Self-hosted generation API configuration."""

    url: Optional[str] = Field(default="http://localhost:11434", description="Server base URL")
    model: str = Field(default="llama3.2", description="Model name")
    timeout: float = Field(default=60.0, gt=0, description="Request timeout in seconds")


class LLMConfig(BaseModel):
    """LLM provider configuration."""

    provider: str = Field(default="none", description="Active LLM provider")
    openai: OpenAIConfig = Field(default_factory=OpenAIConfig, description="OpenAI settings")
    ollama: OllamaConfig = Field(default_factory=OllamaConfig, description="Ollama settings")

    @field_validator("provider")
    @classmethod
    def validate_provider(cls, v: str) -> str:
        """Validate LLM provider."""
        allowed = {"openai", "ollama", "none"}
        if v.lower() not in allowed:
            raise ValueError(f"Provider must be one of: {allowed}")
        return v.lower()


class MatchingConfig(BaseModel):
    """Batching limits for identification and channel matching."""

    identification_batch_size: int = Field(
        default=10, gt=0, description="Titles per identification prompt"
    )
    channel_batch_size: int = Field(default=30, gt=0, description="EPG ids per matching prompt")
    max_source_channels: int = Field(
        default=100, gt=0, description="Source channel names shown to the model"
    )


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = Field(default="INFO", description="Logging level")
    format: str = Field(
        default="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        description="Log format string",
    )
    file: Optional[str] = Field(default=None, description="Log file path")
    max_size_mb: int = Field(default=10, gt=0, description="Maximum log file size in MB")
    backup_count: int = Field(default=5, ge=0, description="Number of backup log files")

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        """Validate logging level."""
        allowed = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v.upper() not in allowed:
            raise ValueError(f"Logging level must be one of: {allowed}")
        return v.upper()


class Config(BaseModel):
    """Main configuration model."""

    llm: LLMConfig = Field(default_factory=LLMConfig, description="LLM configuration")
    matching: MatchingConfig = Field(
        default_factory=MatchingConfig, description="Matching configuration"
    )
    logging: LoggingConfig = Field(
        default_factory=LoggingConfig, description="Logging configuration"
    )

    model_config = ConfigDict(
        validate_assignment=True,
        populate_by_name=True,
    )
