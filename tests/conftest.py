import asyncio

import pytest

from apps.assistant.config import AssistantConfig
from apps.assistant.logic import api_services

from .fakes import FakeAssistantClient


@pytest.fixture
def assistant_config():
    return AssistantConfig(
        api_key="sk-test",
        assistant_id="asst_chat_test",
        goal_assistant_id="asst_goal_test",
        poll_interval=0,
    )


@pytest.fixture
def fake_client():
    return FakeAssistantClient()


@pytest.fixture
def use_fake_client(monkeypatch):
    """Route every client the views build to one fake; returns a setter for swapping it."""
    holder = {"client": FakeAssistantClient()}
    monkeypatch.setattr(api_services, "build_client", lambda config: holder["client"])

    def install(client):
        holder["client"] = client
        return client

    install.current = lambda: holder["client"]
    return install


@pytest.fixture
def sleeps(monkeypatch):
    recorded = []
    real_sleep = asyncio.sleep

    async def fake_sleep(delay, result=None):
        recorded.append(delay)
        return await real_sleep(0, result)

    monkeypatch.setattr(asyncio, "sleep", fake_sleep)
    return recorded
