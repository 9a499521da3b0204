"""
Module: types
Purpose: Candidate records passed from the scanner to the assembler.
Dependencies: none

Kept in a leaf module so scanner implementations and the assembler can both
import it without depending on each other.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Protocol


class ExtractionPass(str, Enum):
    """Scanner pass that produced a candidate, in run order."""

    FREE_TEXT = "free_text"
    ATTRIBUTE = "attribute"
    KEYED_LOOKUP = "keyed_lookup"
    QUOTED_LITERAL = "quoted_literal"
    IMAGE_SOURCE = "image_source"


class CandidateKind(str, Enum):
    TEXT = "text"
    IMAGE = "image"


# Id prefixes for synthesized (non-keyed) ids
ID_PREFIXES: dict[ExtractionPass, str] = {
    ExtractionPass.FREE_TEXT: "txt",
    ExtractionPass.ATTRIBUTE: "attr",
    ExtractionPass.QUOTED_LITERAL: "lbl",
    ExtractionPass.IMAGE_SOURCE: "img",
}


@dataclass(frozen=True)
class Candidate:
    """A raw content item found in one source file."""

    kind: CandidateKind
    source: ExtractionPass
    value: str
    position: int  # offset in the original source, used for ordering only
    key: str | None = None  # explicit id from a keyed lookup call
    attribute: str | None = None  # attribute name for the attribute pass

    @property
    def is_keyed(self) -> bool:
        return self.key is not None


class Scanner(Protocol):
    """Anything that turns one file's source text into candidates."""

    def scan(self, file_contents: str) -> list[Candidate]: ...
