"""
Keyword tokenizer.

Turns free text into an ordered list of unique lowercase keywords.
Characters outside ``a-z``, ``0-9``, ``+``, ``.`` and ``#`` act as
separators so that terms like ``c++``, ``node.js`` and ``c#`` survive
intact.  Single characters and common English function words are
dropped and the result is capped to keep heuristic scoring cheap.
"""

from __future__ import annotations

import re
from typing import List, Optional

MAX_TOKENS = 200

STOP_WORDS = frozenset(
    {
        "and", "or", "the", "a", "an", "to", "of", "in", "for", "on", "with",
        "as", "at", "by", "is", "are", "be", "this", "that", "it", "you",
        "your", "we", "our", "they", "their", "i", "me",
    }
)

_SEPARATOR_RE = re.compile(r"[^a-z0-9+.#]")


def tokenize(text: Optional[str]) -> List[str]:
    """Return the unique keywords of ``text`` in first-seen order.

    The cap applies to the stream of surviving tokens before duplicates
    are folded, so the result never holds more than ``MAX_TOKENS``
    entries.

    Args:
        text: Arbitrary text.  ``None`` is treated as an empty string.

    Returns:
        A list of distinct lowercase tokens.
    """
    raw_tokens = _SEPARATOR_RE.sub(" ", (text or "").lower()).split()
    kept = [t for t in raw_tokens if len(t) > 1 and t not in STOP_WORDS]
    return list(dict.fromkeys(kept[:MAX_TOKENS]))
