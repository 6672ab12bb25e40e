import pytest
from openai import OpenAIError

from neuronest.bots.features.completion_client.completion_client import CompletionClient
from neuronest.config import Settings
from neuronest.errors import CompletionFailure

from conftest import EMAIL_JSON, FakeOpenAI


def test_complete_requests_json_single_system_message():
    fake = FakeOpenAI(content=EMAIL_JSON)
    client = CompletionClient(model="gpt-4-turbo", client=fake)

    assert client.complete("PROMPT") == EMAIL_JSON

    (request,) = fake.requests
    assert request["model"] == "gpt-4-turbo"
    assert request["messages"] == [{"role": "system", "content": "PROMPT"}]
    assert request["response_format"] == {"type": "json_object"}
    assert "stream" not in request
    assert "functions" not in request and "tools" not in request


def test_service_error_becomes_completion_failure():
    client = CompletionClient(client=FakeOpenAI(error=OpenAIError("connection reset")))

    with pytest.raises(CompletionFailure) as exc:
        client.complete("PROMPT")
    assert isinstance(exc.value.__cause__, OpenAIError)
    assert "connection reset" not in exc.value.public_message


@pytest.mark.parametrize("content", [None, ""])
def test_empty_reply_is_completion_failure(content):
    client = CompletionClient(client=FakeOpenAI(content=content))
    with pytest.raises(CompletionFailure):
        client.complete("PROMPT")


def test_missing_api_key_rejected():
    with pytest.raises(ValueError):
        CompletionClient(api_key=None)


def test_from_settings_disables_sdk_retries():
    settings = Settings(jwt_secret="s", openai_api_key="sk-test", openai_model="gpt-4o",
                        completion_timeout=12.5)
    client = CompletionClient.from_settings(settings)

    assert client.model == "gpt-4o"
    assert client.client.max_retries == 0
    assert client.client.timeout == 12.5
