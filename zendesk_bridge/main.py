"""Main FastAPI application for the Zendesk bridge."""

import html
import uvicorn
from contextlib import asynccontextmanager
from fastapi import FastAPI, BackgroundTasks, HTTPException, Depends
from fastapi.responses import HTMLResponse, JSONResponse, RedirectResponse
from typing import Optional
from zendesk_bridge import __version__
from zendesk_bridge.errors import (
    ConfigurationError,
    NotAuthenticatedError,
    UpstreamError,
    UpstreamTimeoutError,
    ZendeskAPIError,
    ZendeskAuthError,
)
from zendesk_bridge.integrations.slack_notifier import SlackNotifier
from zendesk_bridge.integrations.zendesk_client import ZendeskClient
from zendesk_bridge.models.config import Settings, load_settings
from zendesk_bridge.models.ticket import CreateTicketRequest
from zendesk_bridge.utils.health import health_checker
from zendesk_bridge.utils.logger import setup_logging, get_logger
from zendesk_bridge.utils.token_storage import InMemoryTokenStore

logger = get_logger(__name__)

LOGIN_PAGE = """<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>Home</title>
</head>
<body>
    <p>Login Successful. Welcome {name}!</p>
</body>
</html>
"""

TICKETS_FAILED_MESSAGE = "Failed to retrieve Zendesk Tickets."
CREATE_FAILED_MESSAGE = "Failed to create ticket"

# Global variables for dependency injection
settings: Optional[Settings] = None
zendesk_client: Optional[ZendeskClient] = None
slack_notifier: Optional[SlackNotifier] = None


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    global settings, zendesk_client, slack_notifier
    
    # Startup
    logger.info("Starting Zendesk bridge application")
    
    try:
        settings = load_settings()
    except ConfigurationError as e:
        logger.critical(f"Refusing to start: {e}")
        raise
    
    setup_logging(log_level=settings.log_level)
    
    token_store = InMemoryTokenStore()
    zendesk_client = ZendeskClient(settings=settings, token_store=token_store)
    slack_notifier = SlackNotifier(
        webhook_url=settings.slack_webhook_url,
        timeout=settings.http_timeout
    )
    
    if not settings.slack_webhook_url:
        logger.warning("No Slack webhook URL configured, ticket alerts disabled")
    
    logger.info("Application startup complete")
    
    yield
    
    # Shutdown
    logger.info("Shutting down Zendesk bridge application")
    
    await zendesk_client.close()
    await slack_notifier.close()
    
    logger.info("Application shutdown complete")


# Initialize FastAPI app
app = FastAPI(
    title="Zendesk Bridge",
    description="OAuth bridge between the Zendesk ticketing API and Slack notifications",
    version=__version__,
    lifespan=lifespan
)


def get_settings() -> Settings:
    """Dependency to get settings."""
    return settings


def get_zendesk_client() -> ZendeskClient:
    """Dependency to get the Zendesk client."""
    return zendesk_client


def get_slack_notifier() -> SlackNotifier:
    """Dependency to get the Slack notifier."""
    return slack_notifier


def _error_status(error: UpstreamError, default: int) -> int:
    """Upstream status to relay to the caller, or the default when there is none."""
    if isinstance(error, UpstreamTimeoutError):
        return 504
    if error.status_code and error.status_code >= 400:
        return error.status_code
    return default


@app.get("/")
async def zendesk_auth_start(zendesk: ZendeskClient = Depends(get_zendesk_client)):
    """Redirect the user agent to the Zendesk OAuth consent screen."""
    return RedirectResponse(zendesk.get_authorization_url(), status_code=302)


@app.get("/callback", response_class=HTMLResponse)
async def zendesk_auth_callback(
    code: str,
    zendesk: ZendeskClient = Depends(get_zendesk_client)
):
    """
    Handle the Zendesk OAuth 2.0 callback.
    
    Exchanges the authorization code for an access token, then confirms the
    token by fetching the user it belongs to.
    """
    try:
        access_token = await zendesk.exchange_code_for_token(code)
    except UpstreamTimeoutError as e:
        logger.error(f"Zendesk auth callback failed: {e}")
        raise HTTPException(status_code=504, detail=f"Authentication failed: {e.message}")
    except ZendeskAuthError as e:
        logger.error(f"Zendesk auth callback failed: {e}")
        raise HTTPException(status_code=400, detail=f"Authentication failed: {e.message}")
    
    try:
        user = await zendesk.get_current_user(access_token)
    except UpstreamTimeoutError as e:
        logger.error(f"Zendesk token verification failed: {e}")
        raise HTTPException(status_code=504, detail=f"Token verification failed: {e.message}")
    except ZendeskAuthError as e:
        logger.error(f"Zendesk token verification failed: {e}")
        raise HTTPException(status_code=502, detail=f"Token verification failed: {e.message}")
    
    logger.info("Zendesk OAuth authentication successful")
    return HTMLResponse(LOGIN_PAGE.format(name=html.escape(user.get("name") or "")))


@app.get("/tickets")
async def list_tickets(zendesk: ZendeskClient = Depends(get_zendesk_client)):
    """List all tickets in the Zendesk account."""
    try:
        tickets = await zendesk.list_tickets()
    except NotAuthenticatedError:
        return JSONResponse(
            status_code=401,
            content={"success": False, "message": "Not authenticated with Zendesk. Visit / to authorize."}
        )
    except UpstreamError as e:
        logger.error(f"Failed to retrieve Zendesk tickets: {e}")
        return JSONResponse(
            status_code=_error_status(e, 502),
            content={"success": False, "message": TICKETS_FAILED_MESSAGE}
        )
    
    return {"success": True, "tickets": [ticket.model_dump() for ticket in tickets]}


@app.post("/create-ticket", status_code=201)
async def create_ticket(
    request: CreateTicketRequest,
    background_tasks: BackgroundTasks,
    zendesk: ZendeskClient = Depends(get_zendesk_client),
    notifier: SlackNotifier = Depends(get_slack_notifier)
):
    """Create a Zendesk ticket and alert Slack when it is urgent or high priority."""
    try:
        ticket = await zendesk.create_ticket(request)
    except NotAuthenticatedError:
        return JSONResponse(
            status_code=401,
            content={"error": "Not authenticated with Zendesk. Visit / to authorize."}
        )
    except (ZendeskAPIError, UpstreamTimeoutError) as e:
        logger.error(f"Failed creating Zendesk ticket: {e}")
        return JSONResponse(
            status_code=_error_status(e, 500),
            content={"error": CREATE_FAILED_MESSAGE}
        )
    
    # Runs after the response is produced; the notifier logs its own failures
    if notifier.should_notify(ticket.get("priority")):
        background_tasks.add_task(notifier.notify_ticket_created, request, ticket)
    
    return {
        "success": True,
        "message": "Ticket creation successful",
        "ticket": ticket
    }


@app.get("/health")
async def health_check():
    """Basic health check endpoint."""
    return health_checker.basic_health_check()


@app.get("/ready")
async def readiness_check(
    settings: Settings = Depends(get_settings),
    zendesk: ZendeskClient = Depends(get_zendesk_client)
):
    """Readiness check for container orchestration."""
    zendesk_health = await zendesk.health_check()
    return health_checker.readiness_check(settings, zendesk_health)


if __name__ == "__main__":
    # For development - run with uvicorn
    uvicorn.run(
        "zendesk_bridge.main:app",
        host="0.0.0.0",
        port=3004,
        reload=True,
        log_level="info"
    )
