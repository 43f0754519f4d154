import asyncio
import dataclasses
from types import SimpleNamespace

import pytest

from apps.assistant.exceptions import ChatTurnFailed, InvalidRequest, UpstreamIncomplete, UpstreamUnavailable
from apps.assistant.logic import api_services
from apps.assistant.logic.conversation import ChatTurnResult, get_assistant_response, handle_chat_turn, run_to_completion

from .fakes import FakeAssistantClient, connection_error, text_message


@pytest.mark.asyncio
async def test_new_conversation_makes_one_call_of_each_kind(assistant_config):
    client = FakeAssistantClient(statuses=["queued", "in_progress", "completed"])

    result = await handle_chat_turn(assistant_config, None, "When should I irrigate?", client=client)

    assert result.completed
    assert result.thread_id == "thread_new"
    assert result.answer == "Hello from the assistant"
    assert result.error is None
    assert client.count("threads.create") == 1
    assert client.count("messages.create") == 1
    assert client.count("runs.create") == 1
    assert client.count("runs.retrieve") == 3
    assert client.kwargs_of("runs.create")[0]["assistant_id"] == "asst_chat_test"


@pytest.mark.asyncio
async def test_existing_thread_is_reused(assistant_config, fake_client):
    result = await handle_chat_turn(assistant_config, "thread_old", "Follow-up", client=fake_client)

    assert result.thread_id == "thread_old"
    assert fake_client.count("threads.create") == 0
    assert fake_client.kwargs_of("messages.create")[0]["thread_id"] == "thread_old"


@pytest.mark.asyncio
@pytest.mark.parametrize("message", ["", "  \n\t", None])
async def test_empty_message_is_rejected_before_any_remote_call(assistant_config, fake_client, message):
    with pytest.raises(InvalidRequest):
        await handle_chat_turn(assistant_config, None, message, client=fake_client)

    assert fake_client.calls == []


@pytest.mark.asyncio
async def test_failed_run_reports_remote_error(assistant_config):
    client = FakeAssistantClient(
        statuses=["in_progress", "failed"],
        last_error=SimpleNamespace(code="server_error", message="The model crashed"),
    )

    result = await handle_chat_turn(assistant_config, None, "hello", client=client)

    assert not result.completed
    assert result.status == "failed"
    assert result.answer == ""
    assert result.error == "The model crashed"
    assert client.count("messages.list") == 0


@pytest.mark.asyncio
async def test_failed_run_without_detail_uses_fallback(assistant_config):
    client = FakeAssistantClient(statuses=["expired"])

    result = await handle_chat_turn(assistant_config, None, "hello", client=client)

    assert result.status == "expired"
    assert result.error == "Run failed to complete."


@pytest.mark.asyncio
async def test_timeout_is_reported_as_incomplete_turn(assistant_config):
    client = FakeAssistantClient(statuses=["in_progress"])
    config = dataclasses.replace(assistant_config, run_timeout=0)

    result = await handle_chat_turn(config, None, "hello", client=client)

    assert result.status == "timeout"
    assert result.answer == ""
    assert "run_1" in result.error


@pytest.mark.asyncio
async def test_cancel_event_stops_the_wait(assistant_config):
    client = FakeAssistantClient(statuses=["queued"])
    cancel = asyncio.Event()
    cancel.set()

    result = await handle_chat_turn(assistant_config, None, "hello", client=client, cancel_event=cancel)

    assert result.status == "cancelled"
    assert result.thread_id == "thread_new"


@pytest.mark.asyncio
async def test_thread_creation_failure_is_not_wrapped(assistant_config):
    client = FakeAssistantClient(errors={"threads.create": connection_error()})

    with pytest.raises(UpstreamUnavailable):
        await handle_chat_turn(assistant_config, None, "hello", client=client)


@pytest.mark.asyncio
async def test_failure_after_thread_creation_keeps_thread_id(assistant_config):
    client = FakeAssistantClient(errors={"runs.create": connection_error()})

    with pytest.raises(ChatTurnFailed) as excinfo:
        await handle_chat_turn(assistant_config, None, "hello", client=client)

    assert excinfo.value.thread_id == "thread_new"
    assert isinstance(excinfo.value.cause, UpstreamUnavailable)


def test_payload_omits_error_on_success():
    payload = ChatTurnResult(thread_id="t", status="completed", answer="a").as_payload()

    assert payload == {"thread_id": "t", "status": "completed", "answer": "a"}


@pytest.mark.asyncio
async def test_assistant_response_uses_fresh_thread_and_given_assistant(assistant_config):
    client = FakeAssistantClient(history=[text_message("assistant", '[{"text": "a"}]')])

    reply = await get_assistant_response(assistant_config, "Plan it", "asst_goal_test", client=client)

    assert reply == '[{"text": "a"}]'
    assert client.count("threads.create") == 1
    assert client.kwargs_of("runs.create")[0]["assistant_id"] == "asst_goal_test"


@pytest.mark.asyncio
async def test_assistant_response_is_none_when_run_fails(assistant_config):
    client = FakeAssistantClient(statuses=["failed"])

    assert await get_assistant_response(assistant_config, "Plan it", "asst_goal_test", client=client) is None


@pytest.mark.asyncio
async def test_assistant_response_is_none_on_upstream_error(assistant_config):
    client = FakeAssistantClient(errors={"messages.create": connection_error()})

    assert await get_assistant_response(assistant_config, "Plan it", "asst_goal_test", client=client) is None


@pytest.mark.asyncio
async def test_assistant_response_is_none_on_empty_reply(assistant_config):
    client = FakeAssistantClient(history=[])

    assert await get_assistant_response(assistant_config, "Plan it", "asst_goal_test", client=client) is None


@pytest.mark.asyncio
async def test_run_to_completion_raises_for_incomplete_run(assistant_config):
    client = FakeAssistantClient(
        statuses=["failed"], last_error=SimpleNamespace(code="server_error", message="The model crashed")
    )

    with pytest.raises(UpstreamIncomplete) as excinfo:
        await run_to_completion(client, assistant_config, "thread_1", "asst_chat_test")

    assert excinfo.value.status == "failed"
    assert excinfo.value.detail == "The model crashed"


@pytest.mark.asyncio
async def test_run_to_completion_treats_timeout_as_incomplete(assistant_config):
    client = FakeAssistantClient(statuses=["in_progress"])
    config = dataclasses.replace(assistant_config, run_timeout=0)

    with pytest.raises(UpstreamIncomplete) as excinfo:
        await run_to_completion(client, config, "thread_1", "asst_chat_test")

    assert excinfo.value.status == "timeout"


@pytest.mark.asyncio
async def test_handler_closes_the_client_it_builds(assistant_config, monkeypatch):
    built = []

    def build_client(config):
        built.append(FakeAssistantClient())
        return built[-1]

    monkeypatch.setattr(api_services, "build_client", build_client)

    result = await handle_chat_turn(assistant_config, None, "hello")

    assert result.completed
    assert len(built) == 1
    assert built[0].closed


@pytest.mark.asyncio
async def test_handler_leaves_a_passed_client_open(assistant_config, fake_client):
    await handle_chat_turn(assistant_config, None, "hello", client=fake_client)

    assert not fake_client.closed


@pytest.mark.asyncio
async def test_assistant_response_closes_the_client_it_builds(assistant_config, monkeypatch):
    fake = FakeAssistantClient(errors={"runs.create": connection_error()})
    monkeypatch.setattr(api_services, "build_client", lambda config: fake)

    assert await get_assistant_response(assistant_config, "Plan it", "asst_goal_test") is None
    assert fake.closed
