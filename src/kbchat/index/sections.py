"""Split a knowledge base into sections at level-2 headings."""

from __future__ import annotations

import re
from typing import List

from kbchat.models import Section

# line starts also follow bare \r and unicode line or paragraph separators
HEADING_MARKER = re.compile(r"(?:^|(?<=[\r\u2028\u2029]))## ", re.MULTILINE)


def segment(corpus: str) -> List[Section]:
    """Return the corpus sections in their original order.

    A corpus without any ``## `` line yields no sections at all, which callers
    treat as an unstructured blob.
    """
    if not HEADING_MARKER.search(corpus):
        return []

    sections: List[Section] = []
    for chunk in HEADING_MARKER.split(corpus):
        if not chunk.strip():
            continue
        lines = chunk.strip().split("\n")
        heading = lines[0].strip()
        body = "\n".join(lines[1:]).strip()
        sections.append(Section(heading=heading, body=body))
    return sections
