"""Integration modules for external APIs."""

from .slack_notifier import SlackNotifier
from .zendesk_client import ZendeskClient

__all__ = ["SlackNotifier", "ZendeskClient"]
