"""Slack webhook notifications for high-priority Zendesk tickets."""

import httpx
from typing import Optional, Dict, Any
from zendesk_bridge.errors import NotificationError
from zendesk_bridge.models.ticket import CreateTicketRequest, NOTIFY_PRIORITIES, SlackAttachment, SlackMessage
from zendesk_bridge.utils.logger import get_logger

logger = get_logger(__name__)


class SlackNotifier:
    """Posts ticket alerts to a Slack incoming webhook."""
    
    def __init__(
        self,
        webhook_url: Optional[str],
        client: Optional[httpx.AsyncClient] = None,
        timeout: float = 10.0
    ):
        self.webhook_url = webhook_url
        self.client = client or httpx.AsyncClient(timeout=timeout)
    
    async def close(self):
        """Close the HTTP client."""
        await self.client.aclose()
    
    @staticmethod
    def should_notify(priority: Optional[str]) -> bool:
        """Only urgent and high priority tickets are announced."""
        return priority in NOTIFY_PRIORITIES
    
    @staticmethod
    def build_message(request: CreateTicketRequest, ticket: Dict[str, Any]) -> SlackMessage:
        """
        Format the Slack message for a newly created ticket.
        
        Args:
            request: Body the ticket was created from
            ticket: Ticket object returned by Zendesk
            
        Returns:
            Slack message
        """
        return SlackMessage(
            text=f"New Urgent Zendesk Ticket: {request.subject}\nTicket Url: {ticket.get('url')}",
            attachments=[
                SlackAttachment(
                    text=(
                        f"Priority: {request.priority}\n"
                        f"Requester Name: {request.requester.name}\n"
                        f"Requester Email: {request.requester.email}"
                    )
                )
            ]
        )
    
    async def send(self, message: SlackMessage) -> None:
        """
        Post a message to the webhook.
        
        Raises:
            NotificationError: If Slack does not accept the message
        """
        try:
            response = await self.client.post(self.webhook_url, json=message.model_dump())
            response.raise_for_status()
        except httpx.TimeoutException:
            raise NotificationError("Slack webhook timed out") from None
        except httpx.HTTPStatusError as e:
            raise NotificationError(
                f"Slack webhook returned {e.response.status_code}: {e.response.text[:200]}",
                status_code=e.response.status_code
            ) from None
        except httpx.RequestError as e:
            raise NotificationError(f"Slack webhook request failed: {type(e).__name__}") from None
    
    async def notify_ticket_created(self, request: CreateTicketRequest, ticket: Dict[str, Any]) -> bool:
        """
        Announce a created ticket if its priority warrants it.
        
        Never raises; delivery failures are logged.
        
        Returns:
            True if a message was delivered
        """
        if not self.should_notify(ticket.get("priority")):
            return False
        
        if not self.webhook_url:
            logger.info(f"No Slack webhook configured, skipping alert for ticket {ticket.get('id')}")
            return False
        
        try:
            await self.send(self.build_message(request, ticket))
            logger.info(f"Slack alert sent for ticket {ticket.get('id')}")
            return True
        except NotificationError as e:
            logger.warning(f"Slack alert failed for ticket {ticket.get('id')}: {e.message}")
        except Exception as e:
            logger.error(f"Unexpected error sending Slack alert for ticket {ticket.get('id')}: {e}", exc_info=True)
        return False
