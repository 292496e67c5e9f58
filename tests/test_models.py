"""Tests for core data models."""

from __future__ import annotations

import dataclasses
from pathlib import Path

import pytest

from kbchat.models import ChatMessage, KnowledgeBase, ScoredSection, Section, latest_user_message


class TestSection:
    """Test Section dataclass."""

    def test_full_text(self) -> None:
        """Should serialize heading and body."""
        section = Section(heading="Prayer", body="Daily prayer practice.")

        assert section.full_text == "## Prayer\nDaily prayer practice."

    def test_immutable(self) -> None:
        """Should reject mutation."""
        section = Section(heading="Prayer", body="")

        with pytest.raises(dataclasses.FrozenInstanceError):
            section.heading = "Fasting"  # type: ignore[misc]

    def test_scored_section_delegates(self) -> None:
        """Should expose the wrapped section's heading and text."""
        section = Section(heading="Prayer", body="Daily.")
        scored = ScoredSection(section=section, score=1.5)

        assert scored.heading == "Prayer"
        assert scored.full_text == section.full_text
        assert scored.score == 1.5


class TestKnowledgeBase:
    """Test KnowledgeBase dataclass."""

    def test_defaults_to_empty(self) -> None:
        """Should default to an empty corpus without a source."""
        knowledge_base = KnowledgeBase()

        assert knowledge_base.text == ""
        assert knowledge_base.source is None
        assert knowledge_base.is_empty

    def test_whitespace_is_empty(self) -> None:
        """Should treat whitespace-only text as empty."""
        assert KnowledgeBase(text="  \n").is_empty
        assert not KnowledgeBase(text="## Prayer", source=Path("kb.txt")).is_empty


class TestChatMessage:
    """Test ChatMessage and latest_user_message."""

    def test_text_from_string(self) -> None:
        """Should return string content as-is."""
        assert ChatMessage(role="user", content="Hello").text == "Hello"

    def test_text_from_blocks(self) -> None:
        """Should join text blocks and skip other block types."""
        message = ChatMessage(
            role="user",
            content=[
                {"type": "text", "text": "First"},
                {"type": "image", "source": {}},
                {"type": "text", "text": "Second"},
            ],
        )

        assert message.text == "First\nSecond"

    def test_to_payload(self) -> None:
        """Should serialize to the wire shape."""
        message = ChatMessage(role="assistant", content="Peace.")

        assert message.to_payload() == {"role": "assistant", "content": "Peace."}

    def test_latest_user_message(self) -> None:
        """Should pick the last user turn."""
        messages = [
            ChatMessage(role="user", content="first"),
            ChatMessage(role="assistant", content="reply"),
            ChatMessage(role="user", content="second"),
            ChatMessage(role="assistant", content="another reply"),
        ]

        assert latest_user_message(messages) == "second"

    def test_latest_user_message_missing(self) -> None:
        """Should return an empty string without user turns."""
        assert latest_user_message([]) == ""
        assert latest_user_message([ChatMessage(role="assistant", content="hi")]) == ""
