"""Health check utilities for monitoring application status."""

from datetime import datetime, timezone
from typing import Dict, Any, Optional
from zendesk_bridge import __version__
from zendesk_bridge.models.config import Settings


class HealthChecker:
    """Liveness and readiness reporting for the bridge."""
    
    def __init__(self):
        self.started_at = datetime.now(timezone.utc)
    
    @staticmethod
    def _timestamp() -> str:
        return datetime.now(timezone.utc).isoformat()
    
    def basic_health_check(self) -> Dict[str, Any]:
        """Basic health check for application liveness."""
        return {
            "status": "healthy",
            "timestamp": self._timestamp(),
            "uptime_seconds": int((datetime.now(timezone.utc) - self.started_at).total_seconds()),
            "version": __version__
        }
    
    def readiness_check(
        self,
        settings: Optional[Settings],
        zendesk_health: Dict[str, Any]
    ) -> Dict[str, Any]:
        """
        Readiness check for container orchestration.
        
        Zendesk authentication is reported but not required, since the OAuth
        flow can only complete once the service is serving traffic.
        
        Args:
            settings: Loaded settings, or None before startup
            zendesk_health: Result of the Zendesk client health check
        """
        checks = {
            "settings_loaded": settings is not None,
            "credentials_configured": bool(
                settings and settings.zendesk_client_id and settings.zendesk_client_secret
            ),
            "webhook_configured": bool(settings and settings.slack_webhook_url),
            "zendesk_authenticated": zendesk_health.get("status") == "healthy"
        }
        
        return {
            "ready": checks["settings_loaded"] and checks["credentials_configured"],
            "checks": checks,
            "zendesk": zendesk_health,
            "timestamp": self._timestamp()
        }


# Global health checker instance
health_checker = HealthChecker()
