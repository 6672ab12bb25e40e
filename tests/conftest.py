import json
from types import SimpleNamespace

import pytest

from neuronest.api.auth import issue_token
from neuronest.api.handlers import BotRouteHandler
from neuronest.api.store import JsonFileStore
from neuronest.bots.orchestrator import BotOrchestrator
from neuronest.config import Settings
from neuronest.errors import CompletionFailure

DESCRIPTION_JSON = json.dumps({
    "headline": "H",
    "description_text": "D",
    "key_features": ["a"],
    "seo_keywords": ["b"],
})

EMAIL_JSON = json.dumps({
    "email_body": "Thanks for your interest!",
    "category": "Inspection Times",
    "survey_link": "https://xbt2ggc0jum.typeform.com/to/rM0mzI2I",
})

CASE_STUDY_JSON = json.dumps({
    "buyer_profile_text": "Young family",
    "property_journey_text": "Found it online",
    "what_they_love_text": "The backyard",
    "differences_text": "One bathroom short",
    "agent_brief_text": "Lead with the school zone",
})


class StubCompletionClient:
    """Records prompts and returns canned text, or raises."""

    def __init__(self, reply=None, error=None):
        self.reply = reply
        self.error = error
        self.prompts = []

    @property
    def calls(self):
        return len(self.prompts)

    def complete(self, prompt):
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        return self.reply


class FakeOpenAI:
    """Stands in for openai.OpenAI: exposes chat.completions.create."""

    def __init__(self, content=None, error=None):
        self.content = content
        self.error = error
        self.requests = []
        self.chat = SimpleNamespace(completions=SimpleNamespace(create=self._create))

    def _create(self, **kwargs):
        self.requests.append(kwargs)
        if self.error is not None:
            raise self.error
        message = SimpleNamespace(content=self.content)
        return SimpleNamespace(choices=[SimpleNamespace(message=message)])


@pytest.fixture
def settings(tmp_path):
    return Settings(
        jwt_secret="test-secret",
        openai_api_key="sk-test",
        store_path=tmp_path / "store.json",
    )


@pytest.fixture
def store(settings):
    s = JsonFileStore(settings.store_path)
    s.add_property({
        "address_line_1": "12 Harbour St",
        "suburb": "Manly",
        "state": "NSW",
        "status": "FOR_SALE",
        "property_features_json": json.dumps({"bedrooms": 4, "pool": True}),
    })
    s.add_property({"address_line_1": "3 Plain Rd", "suburb": "Ryde", "state": "NSW"})
    s.add_client({"full_name": "Jane Buyer", "email": "jane@example.com", "client_type": "BUYER"})
    return s


@pytest.fixture
def token(settings):
    return issue_token({"id": 7, "email": "agent@example.com", "role": "AGENT", "team_id": 2}, settings)


@pytest.fixture
def auth_header(token):
    return f"Bearer {token}"


@pytest.fixture
def make_handler(settings, store):
    def _make(reply=None, error=None, settings_override=None):
        client = StubCompletionClient(reply=reply, error=error)
        handler = BotRouteHandler(BotOrchestrator(client), store, settings_override or settings)
        return handler, client
    return _make


@pytest.fixture
def failing_client():
    return StubCompletionClient(error=CompletionFailure("upstream down"))
