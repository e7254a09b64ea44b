"""Ticket data models for the Zendesk integration."""

from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Optional, List, Dict, Any
from enum import Enum


class Priority(str, Enum):
    """Zendesk ticket priority levels."""
    URGENT = "urgent"
    HIGH = "high"
    NORMAL = "normal"
    LOW = "low"


NOTIFY_PRIORITIES = frozenset({Priority.URGENT.value, Priority.HIGH.value})


class Requester(BaseModel):
    """Person the ticket is raised on behalf of."""
    
    name: str = Field(..., description="Requester display name")
    email: str = Field(..., description="Requester email address")


class Comment(BaseModel):
    """Initial ticket comment."""
    
    body: str = Field(..., description="Comment text")


class CreateTicketRequest(BaseModel):
    """Body accepted by the create-ticket endpoint."""
    
    model_config = ConfigDict(use_enum_values=True, validate_default=True)
    
    subject: str = Field(..., description="Ticket subject")
    priority: Priority = Field(default=Priority.NORMAL, description="Ticket priority")
    comment: Comment
    requester: Requester

    @field_validator("priority", mode="before")
    @classmethod
    def default_priority(cls, value):
        # Missing, null or empty priorities fall back to normal
        if not value:
            return Priority.NORMAL.value
        if isinstance(value, str):
            return value.lower()
        return value


class TicketSummary(BaseModel):
    """Minimal view of a Zendesk ticket returned by the listing endpoint."""
    
    id: int
    subject: Optional[str] = None
    status: Optional[str] = None
    priority: Optional[str] = None
    url: Optional[str] = None
    
    @classmethod
    def from_api(cls, ticket: Dict[str, Any]) -> "TicketSummary":
        """Build a summary from a Zendesk API ticket object."""
        return cls(
            id=ticket["id"],
            subject=ticket.get("subject"),
            status=ticket.get("status"),
            priority=ticket.get("priority"),
            url=ticket.get("url")
        )


class ZendeskTicketPayload(BaseModel):
    """Zendesk API payload for ticket creation."""
    
    ticket: Dict[str, Any] = Field(..., description="Zendesk ticket fields")
    
    @classmethod
    def from_request(cls, request: CreateTicketRequest) -> "ZendeskTicketPayload":
        return cls(ticket={
            "subject": request.subject,
            "priority": request.priority,
            "comment": {"body": request.comment.body},
            "requester": {
                "name": request.requester.name,
                "email": request.requester.email
            }
        })


class SlackAttachment(BaseModel):
    text: str
    color: str = "#f31111"


class SlackMessage(BaseModel):
    """Slack incoming webhook message."""
    
    text: str
    attachments: List[SlackAttachment] = Field(default_factory=list)
