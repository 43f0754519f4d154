import asyncio
import logging

import openai
from openai import AsyncOpenAI
from pydantic import ValidationError

from ..exceptions import InvalidRequest, RunWaitCancelled, RunWaitTimeout, UpstreamUnavailable
from .schemas import MessagePage, RunRecord, ThreadRef

logger = logging.getLogger(__name__)

REPLY_PAGE_SIZE = 10


def build_client(config) -> AsyncOpenAI:
    return AsyncOpenAI(api_key=config.api_key, base_url=config.base_url)


def _parse(model, payload, what: str):
    if payload is None:
        raise UpstreamUnavailable(f"Assistant service returned no {what}.")
    try:
        return model.model_validate(payload, from_attributes=True)
    except ValidationError as e:
        raise UpstreamUnavailable(f"Assistant service returned a malformed {what}.") from e


async def ensure_thread(client, existing_id=None) -> str:
    if existing_id:
        return existing_id
    try:
        thread = await client.beta.threads.create()
    except openai.OpenAIError as e:
        raise UpstreamUnavailable("Could not create a conversation thread.") from e
    thread_id = _parse(ThreadRef, thread, "thread").id
    logger.info("Created thread %s", thread_id)
    return thread_id


async def post_message(client, thread_id: str, content: str, role: str = "user") -> None:
    if not content or not content.strip():
        raise InvalidRequest("message is required")
    try:
        await client.beta.threads.messages.create(thread_id=thread_id, role=role, content=content)
    except openai.OpenAIError as e:
        raise UpstreamUnavailable(f"Could not post a message to thread {thread_id}.") from e


async def start_run(client, thread_id: str, assistant_id: str) -> str:
    try:
        run = await client.beta.threads.runs.create(thread_id=thread_id, assistant_id=assistant_id)
    except openai.OpenAIError as e:
        raise UpstreamUnavailable(f"Could not start a run on thread {thread_id}.") from e
    run_id = _parse(RunRecord, run, "run").id
    logger.info("Started run %s on thread %s", run_id, thread_id)
    return run_id


async def retrieve_run(client, thread_id: str, run_id: str) -> RunRecord:
    try:
        run = await client.beta.threads.runs.retrieve(run_id=run_id, thread_id=thread_id)
    except openai.OpenAIError as e:
        raise UpstreamUnavailable(f"Could not fetch status of run {run_id}.") from e
    return _parse(RunRecord, run, "run")


async def wait_for_run(client, thread_id: str, run_id: str, *, poll_interval=1.0, timeout=None, cancel_event=None) -> RunRecord:
    """
    Poll a run until it reaches a terminal state and return the final record.

    With no ``timeout`` and no ``cancel_event`` this waits for as long as the
    service keeps the run open. ``timeout`` is in seconds of wall-clock time;
    ``cancel_event`` is an ``asyncio.Event`` that stops the wait once set.
    Both are checked between status queries. A failed status query is not
    retried.
    """
    loop = asyncio.get_running_loop()
    deadline = None if timeout is None else loop.time() + timeout

    while True:
        run = await retrieve_run(client, thread_id, run_id)
        if run.is_terminal:
            logger.info("Run %s finished with status %s", run_id, run.status)
            return run

        if cancel_event is not None and cancel_event.is_set():
            raise RunWaitCancelled(run_id, run.status)
        if deadline is not None and loop.time() >= deadline:
            raise RunWaitTimeout(run_id, run.status)

        logger.debug("Waiting for run %s, status: %s", run_id, run.status)
        await asyncio.sleep(poll_interval)


async def latest_assistant_message_text(client, thread_id: str) -> str:
    """
    Return the text of the newest assistant message among the last few in
    the thread. Only the first content block is read, and only when it is
    text; anything else yields ''.
    """
    try:
        page = await client.beta.threads.messages.list(thread_id=thread_id, order="desc", limit=REPLY_PAGE_SIZE)
    except openai.OpenAIError as e:
        raise UpstreamUnavailable(f"Could not list messages of thread {thread_id}.") from e

    messages = _parse(MessagePage, page, "message list").data
    assistant_message = next((m for m in messages if m.role == "assistant"), None)
    if assistant_message is None:
        return ""
    return assistant_message.first_text()
