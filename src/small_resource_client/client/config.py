"""Configuration for the resource client."""

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class ResourceClientConfig(BaseSettings):
    """Configuration for the resource client.

    All settings can be configured via environment variables with the
    SMALL_RESOURCE_ prefix:

        - SMALL_RESOURCE_SERVER_URI: resource server base URI
        - SMALL_RESOURCE_API_KEY: key sent in the x-api-key header
        - SMALL_RESOURCE_TIMEOUT: per-request timeout in seconds
        - SMALL_RESOURCE_TICKET_HEADER: name of the ticket header
    """

    model_config = SettingsConfigDict(
        env_prefix="SMALL_RESOURCE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    server_uri: str = Field(
        default="http://localhost:9501",
        validation_alias=AliasChoices("server_uri", "SMALL_RESOURCE_SERVER_URI", "SMALL_RESOURCE_URL"),
    )
    api_key: str | None = Field(default=None)
    timeout: float = Field(default=10.0, ge=0.1, le=300.0)

    # Sent with this exact name, matched case-insensitively on responses
    ticket_header: str = Field(default="X-Ticket")

    log_level: str = Field(default="INFO")

    @field_validator("server_uri")
    @classmethod
    def validate_url(cls, v: str) -> str:
        """Validate URL format and strip trailing slash."""
        if not v.startswith(("http://", "https://")):
            raise ValueError("URL must start with http:// or https://")
        return v.rstrip("/")

    @field_validator("ticket_header")
    @classmethod
    def validate_ticket_header(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Ticket header name cannot be empty")
        return v.strip()

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level is a valid Python logging level."""
        valid = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v.upper() not in valid:
            raise ValueError(f"Invalid log level: {v}")
        return v.upper()

    def validate_config(self) -> None:
        """Validate that the settings needed to talk to the server are present.

        Raises:
            ValueError: If the API key is missing.
        """
        if not self.api_key:
            raise ValueError(
                "The resource client requires SMALL_RESOURCE_API_KEY to be set. "
                "Example: SMALL_RESOURCE_API_KEY=my-key"
            )
