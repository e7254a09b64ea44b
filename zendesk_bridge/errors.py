"""Error types raised while bridging Zendesk and Slack."""

from typing import Optional


class BridgeError(Exception):
    """Base class for all bridge errors."""


class ConfigurationError(BridgeError):
    """Required configuration is missing or invalid."""


class NotAuthenticatedError(BridgeError):
    """No Zendesk access token has been obtained yet."""


class UpstreamError(BridgeError):
    """An upstream call failed, optionally with the HTTP status it returned."""
    
    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class ZendeskAuthError(UpstreamError):
    """Token exchange or identity check against Zendesk failed."""


class ZendeskAPIError(UpstreamError):
    """A Zendesk ticket API call failed."""


class UpstreamTimeoutError(UpstreamError):
    """An outbound call did not complete within the configured timeout."""


class NotificationError(UpstreamError):
    """Delivering a chat notification failed."""
