from dataclasses import dataclass, field
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel

Role = Literal["user", "assistant"]


class ChatMessage(BaseModel):
    role: Role
    content: str


class SearchRequest(BaseModel):
    """Provider-facing request; exactly one of prompt/messages is set."""
    prompt: Optional[str] = None
    messages: Optional[List[ChatMessage]] = None
    include_data_sources: Optional[bool] = None

    def to_payload(self) -> Dict[str, Any]:
        return self.model_dump(exclude_none=True)

    def mode(self) -> str:
        return "prompt" if self.prompt is not None else "messages"


@dataclass
class SearchResponse:
    response: Optional[str] = None
    is_additional_data_required: Optional[str] = None
    data_sources: Optional[List[Any]] = None
    raw: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_payload(cls, data: Dict[str, Any]) -> "SearchResponse":
        return cls(
            response=data.get("response"),
            is_additional_data_required=data.get("isAdditionalDataRequired"),
            data_sources=data.get("data_sources"),
            raw=data,
        )


@dataclass
class ToolResult:
    content: List[Dict[str, Any]] = field(default_factory=list)

    @classmethod
    def text(cls, text: str) -> "ToolResult":
        return cls(content=[{"type": "text", "text": text}])

    def to_dict(self) -> Dict[str, Any]:
        return {"content": self.content}
