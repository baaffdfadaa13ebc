# matcher.py
# SPDX-License-Identifier: MIT
"""Score license text against the template catalog.

Similarity is the Dice coefficient over word sets,
``2 * |A & B| / (|A| + |B|)``.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping

from .interfaces import MatchResult, Template, WordSet
from .wordset import normalize, ordered_words

__all__ = ["dice_score", "match_templates"]


def dice_score(words: Mapping[str, int], other: Mapping[str, int]) -> float:
    """Return the Dice coefficient of two word sets."""
    total = len(words) + len(other)
    if total == 0:
        return 0.0
    common = sum(1 for word in words if word in other)
    return 2.0 * common / total


def match_templates(license_data: bytes | str, templates: Iterable[Template]) -> MatchResult:
    """Return the template best matching ``license_data``.

    The first template wins ties. Extra words (in the file but not the
    template) and missing words (in the template but not the file) are given
    for the best template only, in order of first appearance in their own
    text.

    Args:
        license_data (bytes | str): Raw license file content.
        templates (Iterable[Template]): Candidate templates.

    Returns:
        MatchResult: Best template and score. ``template`` is None and the
        score 0.0 when ``templates`` is empty.
    """
    words: WordSet = normalize(license_data)
    best: Template | None = None
    best_score = -1.0
    for template in templates:
        score = dice_score(words, template.words)
        if score > best_score:
            best_score = score
            best = template

    if isinstance(license_data, str):
        license_data = license_data.encode("utf-8")
    if best is None:
        return MatchResult(template=None, score=0.0, file_content=license_data)

    return MatchResult(
        template=best,
        score=best_score,
        extra_words=ordered_words(words, lambda w: w not in best.words),
        missing_words=ordered_words(best.words, lambda w: w not in words),
        file_content=license_data,
    )
