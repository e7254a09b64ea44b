"""Zendesk OAuth 2.0 client for ticket listing and creation."""

import httpx
from pydantic import ValidationError
from typing import Optional, Dict, Any, List, Type
from urllib.parse import urlencode, quote
from zendesk_bridge.errors import (
    NotAuthenticatedError,
    UpstreamError,
    UpstreamTimeoutError,
    ZendeskAPIError,
    ZendeskAuthError,
)
from zendesk_bridge.models.config import Settings
from zendesk_bridge.models.ticket import CreateTicketRequest, TicketSummary, ZendeskTicketPayload
from zendesk_bridge.utils.logger import get_logger
from zendesk_bridge.utils.token_storage import TokenStore

logger = get_logger(__name__)


class ZendeskClient:
    """Client for the Zendesk API with OAuth 2.0 authorization-code authentication."""
    
    def __init__(
        self,
        settings: Settings,
        token_store: TokenStore,
        client: Optional[httpx.AsyncClient] = None
    ):
        self.settings = settings
        self.token_store = token_store
        self.client = client or httpx.AsyncClient(timeout=settings.http_timeout)
    
    async def close(self):
        """Close the HTTP client."""
        await self.client.aclose()
    
    def get_authorization_url(self) -> str:
        """
        Generate the OAuth 2.0 consent URL for the configured Zendesk app.
        
        The result depends only on the settings, so repeated calls return the
        same URL.
        
        Returns:
            Authorization URL for the user agent to visit
        """
        params = {
            "response_type": self.settings.zendesk_response_type,
            self.settings.zendesk_redirect_param: self.settings.zendesk_redirect_uri,
            "client_id": self.settings.zendesk_client_id,
            "scope": self.settings.zendesk_scope
        }
        return f"{self.settings.authorization_uri}?{urlencode(params, quote_via=quote)}"
    
    async def exchange_code_for_token(self, authorization_code: str) -> str:
        """
        Exchange an authorization code for an access token and store it.
        
        Args:
            authorization_code: Code received on the OAuth callback
            
        Returns:
            The access token
            
        Raises:
            ZendeskAuthError: If Zendesk rejects the exchange
            UpstreamTimeoutError: If the token endpoint does not answer in time
        """
        token_data = {
            "grant_type": "authorization_code",
            "code": authorization_code,
            "client_id": self.settings.zendesk_client_id,
            "client_secret": self.settings.zendesk_client_secret,
            "redirect_uri": self.settings.zendesk_redirect_uri,
            "scope": self.settings.zendesk_scope
        }
        
        try:
            response = await self.client.post(
                self.settings.token_uri,
                json=token_data,
                headers={"Content-Type": "application/json"}
            )
        except httpx.TimeoutException:
            raise UpstreamTimeoutError("Zendesk token endpoint timed out") from None
        except httpx.RequestError as e:
            raise ZendeskAuthError(f"Token exchange request failed: {type(e).__name__}") from None
        
        if not response.is_success:
            logger.error(f"Zendesk token exchange failed with status {response.status_code}")
            raise ZendeskAuthError(
                f"Token exchange failed: {response.status_code}",
                status_code=response.status_code
            )
        
        body = self._json_body(response, ZendeskAuthError, "token exchange response")
        access_token = body.get("access_token")
        
        if not access_token or not isinstance(access_token, str):
            raise ZendeskAuthError("Token exchange response did not contain an access token")
        
        self.token_store.set(access_token)
        logger.info("Successfully exchanged authorization code for an access token")
        return access_token
    
    async def get_current_user(self, access_token: str) -> Dict[str, Any]:
        """
        Fetch the user the access token belongs to.
        
        Raises:
            ZendeskAuthError: If Zendesk does not accept the token
            UpstreamTimeoutError: If the identity endpoint does not answer in time
        """
        try:
            response = await self.client.get(
                self.settings.current_user_url,
                headers={"Authorization": f"Bearer {access_token}"}
            )
        except httpx.TimeoutException:
            raise UpstreamTimeoutError("Zendesk identity check timed out") from None
        except httpx.RequestError as e:
            raise ZendeskAuthError(f"Identity check request failed: {type(e).__name__}") from None
        
        if not response.is_success:
            logger.error(f"Zendesk identity check failed with status {response.status_code}")
            raise ZendeskAuthError(
                f"Identity check failed: {response.status_code}",
                status_code=response.status_code
            )
        
        user = self._json_body(response, ZendeskAuthError, "identity check response").get("user") or {}
        if not isinstance(user, dict):
            raise ZendeskAuthError("Zendesk returned an unreadable identity check response")
        return user
    
    @staticmethod
    def _json_body(response: httpx.Response, error_cls: Type[UpstreamError], description: str) -> Dict[str, Any]:
        """
        Decode a JSON object body.
        
        Raises:
            error_cls: If the body is not valid JSON or not an object
        """
        try:
            body = response.json()
        except ValueError:
            body = None
        
        if not isinstance(body, dict):
            logger.error(f"Zendesk returned an unreadable {description} (status {response.status_code})")
            raise error_cls(f"Zendesk returned an unreadable {description}")
        return body
    
    async def _make_authenticated_request(
        self,
        method: str,
        url: str,
        data: Optional[Dict[str, Any]] = None
    ) -> httpx.Response:
        """
        Make an authenticated request to the Zendesk API.
        
        Args:
            method: HTTP method
            url: Absolute API URL
            data: JSON body
            
        Returns:
            HTTP response with a 2xx status
            
        Raises:
            NotAuthenticatedError: If no access token has been obtained
            ZendeskAPIError: If the call fails or returns a non-2xx status
            UpstreamTimeoutError: If the call does not complete in time
        """
        access_token = self.token_store.get()
        if not access_token:
            raise NotAuthenticatedError("No Zendesk access token available. Please authenticate first.")
        
        headers = {
            "Authorization": f"Bearer {access_token}",
            "Content-Type": "application/json"
        }
        
        try:
            response = await self.client.request(
                method=method,
                url=url,
                headers=headers,
                json=data
            )
            response.raise_for_status()
            return response
        
        except httpx.TimeoutException:
            logger.error(f"{method} {url} timed out")
            raise UpstreamTimeoutError(f"Zendesk request timed out: {method} {url}") from None
        except httpx.HTTPStatusError as e:
            status_code = e.response.status_code
            logger.error(f"{method} {url} returned {status_code}: {e.response.text[:200]}")
            raise ZendeskAPIError(
                f"Zendesk returned {status_code} for {method} {url}",
                status_code=status_code
            ) from None
        except httpx.RequestError as e:
            logger.error(f"Request to {url} failed: {e}")
            raise ZendeskAPIError(f"Zendesk request failed: {type(e).__name__}") from None
    
    async def list_tickets(self) -> List[TicketSummary]:
        """
        List tickets in the Zendesk account.
        
        Returns:
            Ticket summaries in the order Zendesk returned them
        """
        response = await self._make_authenticated_request("GET", self.settings.tickets_url)
        tickets = self._json_body(response, ZendeskAPIError, "ticket list").get("tickets") or []
        if not isinstance(tickets, list):
            raise ZendeskAPIError("Zendesk returned an unreadable ticket list")
        
        try:
            summaries = [TicketSummary.from_api(ticket) for ticket in tickets]
        except (KeyError, TypeError, AttributeError, ValidationError) as e:
            logger.error(f"Zendesk returned a malformed ticket: {type(e).__name__}")
            raise ZendeskAPIError("Zendesk returned a malformed ticket") from None
        
        logger.info(f"Retrieved {len(summaries)} Zendesk tickets")
        return summaries
    
    async def create_ticket(self, request: CreateTicketRequest) -> Dict[str, Any]:
        """
        Create a Zendesk ticket.
        
        Args:
            request: Validated create-ticket body
            
        Returns:
            The ticket object Zendesk created
        """
        logger.info(f"Creating Zendesk ticket: {request.subject}")
        
        payload = ZendeskTicketPayload.from_request(request)
        response = await self._make_authenticated_request(
            "POST",
            self.settings.tickets_url,
            data=payload.model_dump()
        )
        
        ticket = self._json_body(response, ZendeskAPIError, "ticket").get("ticket") or {}
        if not isinstance(ticket, dict):
            raise ZendeskAPIError("Zendesk returned an unreadable ticket")
        logger.info(f"Successfully created ticket {ticket.get('id')}")
        return ticket
    
    async def health_check(self) -> Dict[str, Any]:
        """
        Perform health check on the Zendesk API.
        
        Returns:
            Health check result
        """
        access_token = self.token_store.get()
        if not access_token:
            return {
                "status": "authentication_required",
                "error": "No access token available"
            }
        
        try:
            user = await self.get_current_user(access_token)
            return {
                "status": "healthy",
                "user": user.get("name")
            }
        except ZendeskAuthError as e:
            if e.status_code == 401:
                return {
                    "status": "authentication_required",
                    "error": "Authentication required or token revoked"
                }
            return {
                "status": "unhealthy",
                "error": e.message
            }
        except UpstreamTimeoutError as e:
            return {
                "status": "unhealthy",
                "error": e.message
            }
