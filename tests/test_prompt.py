"""Tests for system prompt assembly."""

from __future__ import annotations

from kbchat.prompt import KNOWLEDGE_PREAMBLE, SYSTEM_PROMPT, build_system_prompt


class TestBuildSystemPrompt:
    """Test build_system_prompt function."""

    def test_without_knowledge(self) -> None:
        """Should return the base prompt unchanged."""
        assert build_system_prompt("") == SYSTEM_PROMPT
        assert build_system_prompt("  \n ") == SYSTEM_PROMPT

    def test_with_knowledge(self) -> None:
        """Should append trimmed knowledge between separators."""
        prompt = build_system_prompt("\n## Prayer\nDaily.\n\n")

        assert prompt.startswith(SYSTEM_PROMPT)
        assert prompt.endswith(f"{KNOWLEDGE_PREAMBLE}\n\n## Prayer\nDaily.\n\n---")
        assert "\n\n---\n\n" in prompt

    def test_custom_base_prompt(self) -> None:
        """Should allow overriding the persona prompt."""
        prompt = build_system_prompt("## Prayer\nDaily.", base_prompt="Be brief.")

        assert prompt == f"Be brief.\n\n---\n\n{KNOWLEDGE_PREAMBLE}\n\n## Prayer\nDaily.\n\n---"
