"""Core kbchat data models."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Literal, Union

Role = Literal["user", "assistant"]


@dataclass(frozen=True, slots=True)
class Section:
    """Knowledge base subdivision delimited by a level-2 heading."""

    heading: str
    body: str

    @property
    def full_text(self) -> str:
        return f"## {self.heading}\n{self.body}"


@dataclass(frozen=True, slots=True)
class ScoredSection:
    """Section paired with its relevance score for a single query."""

    section: Section
    score: float

    @property
    def heading(self) -> str:
        return self.section.heading

    @property
    def full_text(self) -> str:
        return self.section.full_text


@dataclass(frozen=True, slots=True)
class KnowledgeBase:
    """Static corpus text, loaded once and never mutated."""

    text: str = ""
    source: Path | None = None

    @property
    def is_empty(self) -> bool:
        return not self.text.strip()


@dataclass(frozen=True, slots=True)
class ChatMessage:
    """Single role-tagged conversation turn."""

    role: Role
    content: Union[str, List[Dict[str, Any]]]

    @property
    def text(self) -> str:
        """Plain text of the message, joining text blocks when content is structured."""
        if isinstance(self.content, str):
            return self.content
        parts = [
            block.get("text", "")
            for block in self.content
            if block.get("type") == "text" and isinstance(block.get("text"), str)
        ]
        return "\n".join(parts)

    def to_payload(self) -> Dict[str, Any]:
        return {"role": self.role, "content": self.content}


def latest_user_message(messages: List[ChatMessage]) -> str:
    """Return the text of the most recent user message, or an empty string."""
    for message in reversed(messages):
        if message.role == "user":
            return message.text
    return ""
