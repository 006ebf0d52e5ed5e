"""
Configuration settings for the agent weaver.
"""
from typing import Optional
from pydantic_settings import BaseSettings
from pydantic import Field


class Settings(BaseSettings):
    """Application settings with environment variable support."""

    # Anthropic API settings
    anthropic_api_key: Optional[str] = Field(
        default=None,
        description="Anthropic API key for Claude LLM access"
    )
    anthropic_base_url: str = Field(
        default="https://api.anthropic.com/v1/messages",
        description="Anthropic Messages API endpoint"
    )
    anthropic_version: str = Field(
        default="2023-06-01",
        description="Value of the anthropic-version request header"
    )

    # Completion parameters
    completion_model: str = Field(
        default="claude-3-5-sonnet-20241022",
        description="Model used to synthesize workflows and contracts"
    )
    completion_temperature: float = Field(
        default=0.7,
        description="Sampling temperature for workflow generation"
    )
    contract_temperature: float = Field(
        default=0.3,
        description="Sampling temperature for contract generation"
    )
    completion_max_tokens: int = Field(
        default=4000,
        description="Maximum tokens requested from the completion service"
    )
    request_timeout: float = Field(
        default=60.0,
        description="Timeout in seconds for a single completion request"
    )

    # Retry policy
    retry_max_attempts: int = Field(
        default=3,
        description="Maximum attempts for a rate-limited completion call"
    )
    retry_delay: float = Field(
        default=1.0,
        description="Fixed delay in seconds between completion retries"
    )

    # Generation settings
    generation_mode: Optional[str] = Field(
        default=None,
        description="Force 'online' or 'offline' generation; derived from the API key when unset"
    )
    agent_api_base_url: str = Field(
        default="http://localhost:3000/api/agents",
        description="Base URL under which generated agent APIs are served"
    )
    default_agent_model: str = Field(
        default="gpt-4",
        description="Model name assigned to workflows that do not specify one"
    )
    default_agent_temperature: float = Field(
        default=0.7,
        description="Temperature assigned to workflows that do not specify one"
    )

    # Application settings
    debug: bool = Field(
        default=False,
        description="Enable debug mode"
    )
    log_level: str = Field(
        default="INFO",
        description="Logging level"
    )

    class Config:
        env_file = ".env"
        case_sensitive = False


# Create global settings instance
settings = Settings()
