import json
import logging
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, TypeAdapter, ValidationError, field_validator

logger = logging.getLogger(__name__)


def checklist_prompt(title: str) -> str:
    return f'Generate a checklist for the goal: "{title}" .'


class ChecklistEntry(BaseModel):
    model_config = ConfigDict(strict=True)

    text: str
    priority: Literal["low", "medium", "high"]
    completed: bool

    @field_validator("priority", mode="before")
    @classmethod
    def _lower_priority(cls, value):
        return value.strip().lower() if isinstance(value, str) else value


_checklist_adapter = TypeAdapter(List[ChecklistEntry])


def extract_json_from_raw(raw: str):
    """Parse the outermost ``[...]`` in an assistant reply. Returns None if there is none."""
    start = raw.find("[")
    end = raw.rfind("]")
    if start == -1 or end < start:
        return None
    try:
        return json.loads(raw[start:end + 1])
    except ValueError as e:
        logger.warning("Failed to parse JSON from assistant reply: %s", e)
        return None


def parse_checklist(raw: str) -> Optional[List[ChecklistEntry]]:
    data = extract_json_from_raw(raw)
    if not isinstance(data, list):
        return None
    try:
        return _checklist_adapter.validate_python(data)
    except ValidationError as e:
        logger.warning("Invalid checklist format: %s", e.errors(include_url=False))
        return None
