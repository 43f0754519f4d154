from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

TERMINAL_RUN_STATUSES = frozenset({"completed", "failed", "cancelled", "expired"})


class _RemoteModel(BaseModel):
    # SDK responses are objects, not dicts.
    model_config = ConfigDict(from_attributes=True)


class ThreadRef(_RemoteModel):
    id: str = Field(min_length=1)


class RunError(_RemoteModel):
    code: Optional[str] = None
    message: Optional[str] = None


class RunRecord(_RemoteModel):
    id: str = Field(min_length=1)
    thread_id: str = Field(min_length=1)
    status: str = Field(min_length=1)
    last_error: Optional[RunError] = None

    @property
    def is_terminal(self) -> bool:
        return self.status in TERMINAL_RUN_STATUSES


class TextPayload(_RemoteModel):
    value: str


class ContentBlock(_RemoteModel):
    type: str
    text: Optional[TextPayload] = None


class MessageRecord(_RemoteModel):
    id: Optional[str] = None
    role: str
    content: List[ContentBlock] = Field(default_factory=list)

    def first_text(self) -> str:
        """Text of the first content block, or '' if that block is not text."""
        if not self.content:
            return ""
        block = self.content[0]
        if block.type != "text" or block.text is None:
            return ""
        return block.text.value


class MessagePage(_RemoteModel):
    data: List[MessageRecord] = Field(default_factory=list)
