"""
Text classifier: decides whether a raw string is editor-facing copy.

A best-effort filter over string literals pulled out of UI source. It is not a
parser; the operator curates the resulting manifest afterwards, so false
positives and negatives are acceptable.
"""

from __future__ import annotations

import re

from forsaj.config import TEXT_MAX_LENGTH, TEXT_MIN_LENGTH
from forsaj.content.classifier_data import (
    CODE_PUNCTUATION,
    SUBSTRING_DENYLIST,
    WORD_DENYLIST,
)

_BALANCED_PARENS = re.compile(r"\([^()]*\)")
_METHOD_CHAIN = re.compile(r"^\s*\.\w|\w\.\w+\s*\(|\?\.\w|\)\.\w")
_WORD = re.compile(r"[^\W\d]\w*")


def _has_letter(raw: str) -> bool:
    return any(ch.isalpha() for ch in raw)


def _has_denylisted_token(raw: str) -> bool:
    if any(token in raw for token in SUBSTRING_DENYLIST):
        return True
    return any(word in WORD_DENYLIST for word in _WORD.findall(raw))


def is_candidate_text(raw: str) -> bool:
    """Return True when ``raw`` looks like human-readable content."""
    if not TEXT_MIN_LENGTH <= len(raw) <= TEXT_MAX_LENGTH:
        return False
    if not _has_letter(raw):
        return False
    if any(ch in CODE_PUNCTUATION for ch in raw):
        return False
    # covers both assignment and arrow functions
    if "=" in raw:
        return False
    if _BALANCED_PARENS.search(raw):
        return False
    if _METHOD_CHAIN.search(raw):
        return False
    if raw.count("/") >= 2:
        return False
    return not _has_denylisted_token(raw)


__all__ = ["is_candidate_text"]
