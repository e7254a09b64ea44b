"""Shared fixtures: settings, a fake upstream and a wired test client."""

import httpx
import pytest
from fastapi.testclient import TestClient

from zendesk_bridge.integrations.slack_notifier import SlackNotifier
from zendesk_bridge.integrations.zendesk_client import ZendeskClient
from zendesk_bridge.main import app, get_settings, get_slack_notifier, get_zendesk_client
from zendesk_bridge.models.config import Settings
from zendesk_bridge.utils.token_storage import InMemoryTokenStore

WEBHOOK_URL = "https://hooks.slack.test/services/T000/B000/XXXX"
BASE_URL = "https://acme.zendesk.com"
TOKEN_URL = f"{BASE_URL}/oauth/tokens"
ME_URL = f"{BASE_URL}/api/v2/users/me.json"
TICKETS_URL = f"{BASE_URL}/api/v2/tickets.json"


class FakeUpstream:
    """Canned responses for Zendesk and Slack, recording every request."""

    def __init__(self):
        self.responses = {}
        self.requests = []

    def add(self, method, url, status_code=200, json=None, error=None):
        self.responses[(method, url)] = (status_code, json, error)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        key = (request.method, str(request.url))
        if key not in self.responses:
            return httpx.Response(404, json={"error": "RecordNotFound"})
        status_code, body, error = self.responses[key]
        if error is not None:
            raise error("simulated failure", request=request)
        return httpx.Response(status_code, json=body)

    def calls_to(self, url):
        return [request for request in self.requests if str(request.url) == url]


@pytest.fixture
def settings():
    return Settings(
        _env_file=None,
        zendesk_subdomain="acme",
        zendesk_client_id="client-id",
        zendesk_client_secret="s3cret-value",
        slack_webhook_url=WEBHOOK_URL,
    )


@pytest.fixture
def upstream():
    return FakeUpstream()


@pytest.fixture
def token_store():
    return InMemoryTokenStore()


@pytest.fixture
def http_client(upstream):
    return httpx.AsyncClient(transport=httpx.MockTransport(upstream.handler))


@pytest.fixture
def zendesk(settings, token_store, http_client):
    return ZendeskClient(settings=settings, token_store=token_store, client=http_client)


@pytest.fixture
def notifier(http_client):
    return SlackNotifier(webhook_url=WEBHOOK_URL, client=http_client)


@pytest.fixture
def client(settings, zendesk, notifier):
    app.dependency_overrides[get_settings] = lambda: settings
    app.dependency_overrides[get_zendesk_client] = lambda: zendesk
    app.dependency_overrides[get_slack_notifier] = lambda: notifier
    yield TestClient(app)
    app.dependency_overrides.clear()
