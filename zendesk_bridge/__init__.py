"""Bridge between the Zendesk ticketing API and Slack notifications."""

__version__ = "1.0.0"
