"""Configuration models for the Zendesk bridge."""

from pydantic import Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional
from zendesk_bridge.errors import ConfigurationError


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""
    
    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
        frozen=True
    )
    
    # Zendesk OAuth 2.0 Configuration
    zendesk_subdomain: str = Field(default="1218globalhelp", min_length=1)
    zendesk_client_id: str = Field(..., min_length=1)
    zendesk_client_secret: str = Field(..., min_length=1)
    zendesk_redirect_uri: str = Field(default="http://localhost:3004/callback")
    zendesk_scope: str = Field(default="users:read read users:write write")
    zendesk_response_type: str = Field(default="code")
    # Registered Zendesk apps expect the redirect target under this name on the consent redirect
    zendesk_redirect_param: str = Field(default="redirectUri")
    
    # Slack Configuration
    slack_webhook_url: Optional[str] = Field(default=None)
    
    # Application Configuration
    http_timeout: float = Field(default=10.0, gt=0)
    log_level: str = Field(default="INFO")
    environment: str = Field(default="development")
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=3004)
    
    @property
    def zendesk_base_url(self) -> str:
        return f"https://{self.zendesk_subdomain}.zendesk.com"
    
    @property
    def authorization_uri(self) -> str:
        """Zendesk OAuth consent screen URL."""
        return f"{self.zendesk_base_url}/oauth/authorizations/new"
    
    @property
    def token_uri(self) -> str:
        """Zendesk OAuth token exchange URL."""
        return f"{self.zendesk_base_url}/oauth/tokens"
    
    @property
    def tickets_url(self) -> str:
        return f"{self.zendesk_base_url}/api/v2/tickets.json"
    
    @property
    def current_user_url(self) -> str:
        return f"{self.zendesk_base_url}/api/v2/users/me.json"


def load_settings(**overrides) -> Settings:
    """
    Load settings, failing fast on missing or invalid configuration.
    
    Args:
        overrides: Explicit values taking precedence over the environment
        
    Returns:
        Validated settings
        
    Raises:
        ConfigurationError: If a required variable is missing or invalid
    """
    try:
        return Settings(**overrides)
    except ValidationError as e:
        # Only field names are reported so secrets never reach the logs
        fields = sorted({
            str(error["loc"][0]).upper() for error in e.errors() if error.get("loc")
        })
        raise ConfigurationError(
            f"Missing or invalid configuration: {', '.join(fields)}"
        ) from None
