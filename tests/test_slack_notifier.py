"""Slack alerts for newly created tickets."""

import json
import logging

import httpx
import pytest

from zendesk_bridge.integrations.slack_notifier import SlackNotifier
from zendesk_bridge.models.ticket import CreateTicketRequest

from tests.conftest import WEBHOOK_URL


def make_request(priority="urgent"):
    return CreateTicketRequest(
        subject="Server down",
        priority=priority,
        comment={"body": "help"},
        requester={"name": "A", "email": "a@x.com"},
    )


@pytest.mark.parametrize("priority,expected", [
    ("urgent", True),
    ("high", True),
    ("normal", False),
    ("low", False),
    (None, False),
])
def test_should_notify(priority, expected):
    assert SlackNotifier.should_notify(priority) is expected


def test_build_message():
    message = SlackNotifier.build_message(
        make_request(),
        {"id": 12, "priority": "urgent", "url": "https://x/12.json"},
    )

    assert message.model_dump() == {
        "text": "New Urgent Zendesk Ticket: Server down\nTicket Url: https://x/12.json",
        "attachments": [{
            "text": "Priority: urgent\nRequester Name: A\nRequester Email: a@x.com",
            "color": "#f31111",
        }],
    }


@pytest.mark.asyncio
async def test_notifies_high_priority(notifier, upstream):
    upstream.add("POST", WEBHOOK_URL, json={"ok": True})

    delivered = await notifier.notify_ticket_created(
        make_request("high"), {"id": 3, "priority": "high", "url": "https://x/3.json"}
    )

    assert delivered
    calls = upstream.calls_to(WEBHOOK_URL)
    assert len(calls) == 1
    assert "https://x/3.json" in json.loads(calls[0].content)["text"]


@pytest.mark.asyncio
async def test_skips_normal_priority(notifier, upstream):
    delivered = await notifier.notify_ticket_created(
        make_request("normal"), {"id": 3, "priority": "normal", "url": "https://x/3.json"}
    )

    assert not delivered
    assert upstream.requests == []


@pytest.mark.asyncio
async def test_skips_without_webhook(upstream, http_client):
    notifier = SlackNotifier(webhook_url=None, client=http_client)

    delivered = await notifier.notify_ticket_created(make_request(), {"id": 1, "priority": "urgent"})

    assert not delivered
    assert upstream.requests == []


@pytest.mark.asyncio
async def test_webhook_failure_is_logged_not_raised(notifier, upstream, caplog):
    upstream.add("POST", WEBHOOK_URL, status_code=500, json={"error": "boom"})

    with caplog.at_level(logging.WARNING, logger="zendesk_bridge"):
        delivered = await notifier.notify_ticket_created(
            make_request(), {"id": 12, "priority": "urgent", "url": "https://x/12.json"}
        )

    assert not delivered
    assert "Slack alert failed for ticket 12" in caplog.text


@pytest.mark.asyncio
async def test_webhook_timeout_is_logged_not_raised(notifier, upstream, caplog):
    upstream.add("POST", WEBHOOK_URL, error=httpx.ConnectTimeout)

    with caplog.at_level(logging.WARNING, logger="zendesk_bridge"):
        delivered = await notifier.notify_ticket_created(
            make_request(), {"id": 12, "priority": "urgent", "url": "https://x/12.json"}
        )

    assert not delivered
    assert "timed out" in caplog.text


def test_message_priority_comes_from_request():
    message = SlackNotifier.build_message(
        make_request("high"),
        {"id": 12, "priority": "urgent", "url": "https://x/12.json"},
    )

    assert message.attachments[0].text.startswith("Priority: high\n")
