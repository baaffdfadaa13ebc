# wordset.py
# SPDX-License-Identifier: MIT
"""Reduce license text to a set of lowercase words with first positions."""

from __future__ import annotations

import re

from .interfaces import WordSet

__all__ = ["normalize", "clean_license_text", "ordered_words"]

WORD_RE = re.compile(r"[\w']+")
# Copyright lines carry years and authors that differ between otherwise
# identical licenses; drop them up to the end of the line.
COPYRIGHT_RE = re.compile(
    r"\s*copyright (?:©|\(c\))?\s*(?:\d{4}|\[year\]).*",
    re.IGNORECASE,
)


def _as_text(raw: bytes | str) -> str:
    if isinstance(raw, bytes):
        return raw.decode("utf-8", errors="replace")
    return raw


def clean_license_text(raw: bytes | str) -> str:
    """Lowercase ``raw`` and strip copyright notices."""
    text = _as_text(raw).lower()
    return COPYRIGHT_RE.sub("", text)


def normalize(raw: bytes | str) -> WordSet:
    """Build the word set of a license text.

    Each distinct token maps to the index of its first occurrence among all
    tokens, so callers can list differing words in reading order.

    Args:
        raw (bytes | str): License text; bytes are decoded as UTF-8.

    Returns:
        WordSet: Mapping of token to first position. Empty for empty input.
    """
    words: WordSet = {}
    for index, match in enumerate(WORD_RE.finditer(clean_license_text(raw))):
        words.setdefault(match.group(0), index)
    return words


def ordered_words(words: WordSet, keep) -> tuple[str, ...]:
    """Return the words of ``words`` accepted by ``keep``, by first position."""
    selected = [(pos, word) for word, pos in words.items() if keep(word)]
    selected.sort()
    return tuple(word for _, word in selected)
