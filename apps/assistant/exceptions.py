class AssistantError(Exception):
    """Base class for failures of the assistant run protocol."""


class InvalidRequest(AssistantError):
    """The caller supplied an unusable payload (e.g. an empty message)."""


class UpstreamUnavailable(AssistantError):
    """The assistant service errored, rejected us, or answered with an unexpected shape."""


class UpstreamIncomplete(AssistantError):
    """A run stopped short of ``completed``: a failed, cancelled or expired run, or a wait that was given up."""

    def __init__(self, status, detail=None):
        self.status = status
        self.detail = detail
        super().__init__(detail or f"Run finished with status {status}")


class RunWaitTimeout(AssistantError):
    def __init__(self, run_id, last_status):
        self.run_id = run_id
        self.last_status = last_status
        super().__init__(f"Timed out waiting for run {run_id} (last status: {last_status})")


class RunWaitCancelled(AssistantError):
    def __init__(self, run_id, last_status):
        self.run_id = run_id
        self.last_status = last_status
        super().__init__(f"Stopped waiting for run {run_id} (last status: {last_status})")


class ChatTurnFailed(AssistantError):
    """
    Raised when a chat turn breaks after its thread was resolved.
    Carries the thread id so a freshly created thread is never orphaned.
    """

    def __init__(self, thread_id, cause):
        self.thread_id = thread_id
        self.cause = cause
        super().__init__(f"Chat turn on thread {thread_id} failed: {cause!r}")
