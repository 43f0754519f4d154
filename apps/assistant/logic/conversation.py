import logging
from dataclasses import asdict, dataclass
from typing import Optional

from ..exceptions import (
    AssistantError,
    ChatTurnFailed,
    InvalidRequest,
    RunWaitCancelled,
    RunWaitTimeout,
    UpstreamIncomplete,
)
from . import api_services

logger = logging.getLogger(__name__)

RUN_FAILED_FALLBACK = "Run failed to complete."


@dataclass
class ChatTurnResult:
    thread_id: str
    status: str
    answer: str
    error: Optional[str] = None

    @property
    def completed(self) -> bool:
        return self.status == "completed"

    def as_payload(self) -> dict:
        payload = asdict(self)
        if payload["error"] is None:
            del payload["error"]
        return payload


async def run_to_completion(client, config, thread_id, assistant_id, *, cancel_event=None):
    """
    Start a run and wait for it. Raises :class:`UpstreamIncomplete` unless it
    ends ``completed``; a timeout or cancelled wait counts as incomplete too.
    """
    run_id = await api_services.start_run(client, thread_id, assistant_id)
    try:
        run = await api_services.wait_for_run(
            client,
            thread_id,
            run_id,
            poll_interval=config.poll_interval,
            timeout=config.run_timeout,
            cancel_event=cancel_event,
        )
    except RunWaitTimeout as e:
        logger.warning("Gave up on run %s: %s", run_id, e)
        raise UpstreamIncomplete("timeout", str(e)) from e
    except RunWaitCancelled as e:
        logger.info("Stopped waiting on run %s: %s", run_id, e)
        raise UpstreamIncomplete("cancelled", str(e)) from e

    if run.status != "completed":
        detail = run.last_error.message if run.last_error and run.last_error.message else None
        logger.error("Run %s on thread %s ended with status %s: %s", run_id, thread_id, run.status, detail)
        raise UpstreamIncomplete(run.status, detail)
    return run


async def handle_chat_turn(config, thread_id, message, *, client=None, cancel_event=None) -> ChatTurnResult:
    """
    Run one conversation turn: make sure a thread exists, post the user's
    message, run the configured assistant on it and read back the reply.

    A run that ends in any state other than ``completed`` is reported in the
    result, not raised. Anything else that breaks once the thread is known is
    raised as :class:`ChatTurnFailed` carrying that thread id.

    A client passed in stays open; one built here is closed before returning.
    """
    if not isinstance(message, str) or not message.strip():
        raise InvalidRequest("message is required")

    if client is None:
        async with api_services.build_client(config) as owned:
            return await handle_chat_turn(config, thread_id, message, client=owned, cancel_event=cancel_event)

    thread_id = await api_services.ensure_thread(client, thread_id)

    try:
        await api_services.post_message(client, thread_id, message)
        try:
            run = await run_to_completion(client, config, thread_id, config.assistant_id, cancel_event=cancel_event)
        except UpstreamIncomplete as e:
            return ChatTurnResult(thread_id=thread_id, status=e.status, answer="", error=e.detail or RUN_FAILED_FALLBACK)

        answer = await api_services.latest_assistant_message_text(client, thread_id)
        return ChatTurnResult(thread_id=thread_id, status=run.status, answer=answer)
    except Exception as e:
        raise ChatTurnFailed(thread_id, e) from e


async def get_assistant_response(config, prompt, assistant_id, *, client=None) -> Optional[str]:
    """One-shot prompt on a fresh thread. Returns None when no usable reply came back."""
    if client is None:
        async with api_services.build_client(config) as owned:
            return await get_assistant_response(config, prompt, assistant_id, client=owned)

    try:
        thread_id = await api_services.ensure_thread(client)
        await api_services.post_message(client, thread_id, prompt)
        await run_to_completion(client, config, thread_id, assistant_id)
        reply = await api_services.latest_assistant_message_text(client, thread_id)
    except AssistantError as e:
        logger.error("Error getting assistant response: %s", e)
        return None

    return reply or None
