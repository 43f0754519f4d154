from dataclasses import dataclass
from typing import Optional

from django.conf import settings
from django.core.exceptions import ImproperlyConfigured


@dataclass(frozen=True)
class AssistantConfig:
    """Credentials and polling policy for the OpenAI Assistants API, built once at startup."""

    api_key: str
    assistant_id: str
    goal_assistant_id: str
    base_url: Optional[str] = None
    poll_interval: float = 1.0
    run_timeout: Optional[float] = None

    @classmethod
    def from_settings(cls) -> "AssistantConfig":
        api_key = getattr(settings, "OPENAI_API_KEY", "")
        assistant_id = getattr(settings, "OPENAI_ASSISTANT_ID", "")
        missing = [name for name, value in (("OPENAI_API_KEY", api_key), ("OPENAI_ASSISTANT_ID", assistant_id)) if not value]
        if missing:
            raise ImproperlyConfigured(f"Missing assistant configuration: {', '.join(missing)}")

        return cls(
            api_key=api_key,
            assistant_id=assistant_id,
            goal_assistant_id=getattr(settings, "OPENAI_GOAL_ASSISTANT_ID", "") or assistant_id,
            base_url=getattr(settings, "OPENAI_BASE_URL", "") or None,
            poll_interval=float(getattr(settings, "ASSISTANT_POLL_INTERVAL", 1.0)),
            run_timeout=getattr(settings, "ASSISTANT_RUN_TIMEOUT", None),
        )
