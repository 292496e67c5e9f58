"""Text helpers for keyword tokenization."""

from __future__ import annotations

import re
from typing import List

STOPWORDS = frozenset(
    {
        "a", "an", "the", "and", "or", "but", "in", "on", "at", "to", "for", "of", "with",
        "is", "are", "was", "were", "be", "been", "being", "have", "has", "had", "do", "does",
        "did", "will", "would", "could", "should", "may", "might", "i", "you", "we", "they",
        "he", "she", "it", "this", "that", "these", "those", "what", "how", "why", "when",
        "where", "who", "which", "my", "your", "our", "their", "its", "about", "from", "as",
        "by", "not", "no", "so", "if", "then", "than", "also", "just", "me", "him", "her", "us",
    }
)

MIN_TOKEN_LENGTH = 3

_NON_WORD = re.compile(r"[^a-z0-9\s]")


def tokenize(text: str) -> List[str]:
    """Split text into normalized keywords.

    Lowercases, turns anything outside ``[a-z0-9]`` into a separator and drops
    short tokens and stopwords. Order and duplicates are preserved.
    """
    cleaned = _NON_WORD.sub(" ", text.lower())
    return [
        word
        for word in cleaned.split()
        if len(word) >= MIN_TOKEN_LENGTH and word not in STOPWORDS
    ]
