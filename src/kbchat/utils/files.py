"""Utility helpers for working with files."""

from __future__ import annotations

import logging
from pathlib import Path

from kbchat.models import KnowledgeBase

LOGGER = logging.getLogger(__name__)


def load_knowledge_base(path: Path) -> KnowledgeBase:
    """Read the corpus file, falling back to an empty knowledge base when unreadable."""
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        LOGGER.warning("%s not found - running without knowledge base.", path)
        return KnowledgeBase(text="", source=None)
    except (OSError, UnicodeDecodeError) as exc:
        LOGGER.warning("Unable to read knowledge base %s: %s", path, exc)
        return KnowledgeBase(text="", source=None)
    return KnowledgeBase(text=text, source=path)
