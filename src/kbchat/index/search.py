"""Keyword relevance selection over knowledge base sections."""

from __future__ import annotations

import logging
from typing import List, Sequence

from kbchat.index.sections import segment
from kbchat.models import KnowledgeBase, ScoredSection, Section
from kbchat.utils.text import tokenize

LOGGER = logging.getLogger(__name__)

DEFAULT_THRESHOLD = 0.15
DEFAULT_MIN_SECTIONS = 2
SECTION_SEPARATOR = "\n\n"


def score_section(section: Section, query_tokens: Sequence[str]) -> float:
    """Score a section by keyword overlap, normalized by query length.

    Each query token earns 2 for an exact hit and 1 when it and some section
    token are prefixes of one another.
    """
    if not query_tokens:
        return 0.0

    section_tokens = set(tokenize(section.heading + " " + section.body))
    total = 0
    for query_token in query_tokens:
        if query_token in section_tokens:
            total += 2
            continue
        if any(
            token.startswith(query_token) or query_token.startswith(token)
            for token in section_tokens
        ):
            total += 1
    return total / len(query_tokens)


def rank_sections(sections: Sequence[Section], query_tokens: Sequence[str]) -> List[ScoredSection]:
    """Score every section and sort by descending score, keeping corpus order on ties."""
    scored = [ScoredSection(section, score_section(section, query_tokens)) for section in sections]
    return sorted(scored, key=lambda item: item.score, reverse=True)


def apply_threshold(
    ranked: Sequence[ScoredSection],
    *,
    threshold: float = DEFAULT_THRESHOLD,
    min_sections: int = DEFAULT_MIN_SECTIONS,
) -> List[ScoredSection]:
    above = [item for item in ranked if item.score >= threshold]
    if len(above) >= min_sections:
        return above
    return list(ranked[:min_sections])


class SectionSelector:
    """Select the knowledge base sections relevant to a query."""

    def __init__(
        self,
        knowledge_base: KnowledgeBase,
        *,
        threshold: float = DEFAULT_THRESHOLD,
        min_sections: int = DEFAULT_MIN_SECTIONS,
    ) -> None:
        self.knowledge_base = knowledge_base
        self.threshold = threshold
        self.min_sections = min_sections
        self.sections: tuple[Section, ...] = tuple(segment(knowledge_base.text))

    def rank(self, query: str) -> List[ScoredSection]:
        return rank_sections(self.sections, tokenize(query))

    def select(self, query: str) -> str:
        """Return the relevant sections joined by blank lines.

        Falls back to the whole corpus when it has no headings or the query
        carries no keywords, and to an empty string for an empty corpus.
        """
        corpus = self.knowledge_base.text
        if not corpus.strip():
            return ""
        if not self.sections:
            return corpus

        query_tokens = tokenize(query)
        if not query_tokens:
            return corpus

        ranked = rank_sections(self.sections, query_tokens)
        selected = apply_threshold(
            ranked, threshold=self.threshold, min_sections=self.min_sections
        )

        LOGGER.info(
            "%d/%d sections selected for query: %r",
            len(selected),
            len(self.sections),
            query[:60],
        )
        for item in selected:
            LOGGER.debug("  [%.2f] %s", item.score, item.heading)

        return SECTION_SEPARATOR.join(item.full_text for item in selected)


def select(corpus: str, query: str) -> str:
    """Select the sections of ``corpus`` relevant to ``query``."""
    return SectionSelector(KnowledgeBase(text=corpus)).select(query)
