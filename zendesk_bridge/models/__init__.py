"""Data models for the Zendesk bridge."""

from .config import Settings, load_settings
from .ticket import CreateTicketRequest, Priority, TicketSummary, ZendeskTicketPayload

__all__ = [
    "Settings",
    "load_settings",
    "CreateTicketRequest",
    "Priority",
    "TicketSummary",
    "ZendeskTicketPayload",
]
