"""
Source scanner: pulls candidate content out of UI component files.

Stage 1 of content extraction. The regex rule set below is a heuristic, not a
parser. It sits behind the ``Scanner`` protocol (``scan(file_contents)``) so a
real lexer can replace it without touching page assembly.

Passes, in run order (a value captured by an earlier pass wins):
1. free text between ``>`` and ``<``
2. human-facing attributes (placeholder, title, alt, label)
3. keyed lookups ``getText(key, default)`` / ``getImage(key, default)``
4. quoted literals starting with an uppercase letter
5. image sources (``src=``-like attributes and data properties)
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from pathlib import Path

from forsaj.config import IMAGE_EXTENSIONS, SOURCE_EXTENSIONS
from forsaj.content.classifier import is_candidate_text
from forsaj.content.types import Candidate, CandidateKind, ExtractionPass, Scanner
from forsaj.observability.logging import get_logger

logger = get_logger(__name__)

# ---------------------------------------------------------------------------
# Noise stripping
# ---------------------------------------------------------------------------

_NOISE_PATTERNS: tuple[re.Pattern[str], ...] = (
    # import X from 'y'; import { a, b } from "y"; import 'side-effect';
    re.compile(r"^[ \t]*import\s+[\s\S]*?from\s*['\"][^'\"\n]+['\"];?", re.MULTILINE),
    re.compile(r"^[ \t]*import\s+['\"][^'\"\n]+['\"];?", re.MULTILINE),
    # {/* jsx comment */} and /* block comment */
    re.compile(r"\{\s*/\*[\s\S]*?\*/\s*\}"),
    re.compile(r"/\*[\s\S]*?\*/"),
    # // line comment (not the // of a URL or a quoted protocol-relative path)
    re.compile(r"(?<![:'\"`\w])//[^\n]*"),
    # style={{ ... }}
    re.compile(r"style=\{\{[\s\S]*?\}\}"),
)


def _blank(match: re.Match[str]) -> str:
    return re.sub(r"[^\n]", " ", match.group(0))


def strip_noise(source: str) -> str:
    """
    Blank out imports, comments and inline style objects.

    Removed regions are replaced by spaces (newlines kept) so every offset in
    the returned text is also an offset in ``source``.
    """
    cleaned = source
    for pattern in _NOISE_PATTERNS:
        cleaned = pattern.sub(_blank, cleaned)
    return cleaned


# ---------------------------------------------------------------------------
# Pass patterns
# ---------------------------------------------------------------------------

_FREE_TEXT = re.compile(r">([^<>{}]+)<")
_ATTRIBUTE = re.compile(r"\s(placeholder|title|alt|label)=(['\"])(.*?)\2")
_QUOTED = r"(['\"`])((?:\\.|(?!\{q}).)*?)\{q}"
_KEYED_LOOKUP = re.compile(
    r"\b(getText|getImage)\(\s*"
    + _QUOTED.format(q=2)
    + r"\s*,\s*"
    + _QUOTED.format(q=4)
    + r"\s*(?:,\s*"
    + _QUOTED.format(q=6)
    + r"\s*)?\)"
)
_UPPER_LITERAL = re.compile(r"(['\"`])([A-ZÇƏĞİÖŞÜ][^'\"`\n]*)\1")
_IMAGE_SOURCE = re.compile(
    r"\b(src|poster|img|image|thumbnail)\s*[=:]\s*\{?\s*(['\"`])([^'\"`\n]+?)\2"
)

_IDENTIFIER_HINT = re.compile(r"[_$]|[a-zəçğıöşü][A-ZƏÇĞİÖŞÜ]|\w\.\w")
_FILE_SUFFIX = re.compile(r"\.[A-Za-z0-9]{2,4}$")
_IMAGE_SUFFIX = re.compile(
    r"\.(" + "|".join(ext.lstrip(".") for ext in IMAGE_EXTENSIONS) + r")(\?|#|$)",
    re.IGNORECASE,
)
_WHITESPACE = re.compile(r"\s+")


def _normalize(text: str) -> str:
    return _WHITESPACE.sub(" ", text).strip()


def looks_like_identifier(text: str) -> bool:
    """Single-token strings with underscores, camel humps or dotted access."""
    return not any(ch.isspace() for ch in text) and bool(_IDENTIFIER_HINT.search(text))


def looks_like_path(text: str) -> bool:
    return (
        "/" in text
        or "\\" in text
        or text.lower().startswith(("http:", "https:", "www."))
        or bool(_FILE_SUFFIX.search(text))
    )


def looks_like_image(path: str) -> bool:
    if "{" in path or "}" in path:
        return False
    return bool(_IMAGE_SUFFIX.search(path)) or path.startswith(("http://", "https://", "//"))


def _unescape(text: str) -> str:
    return re.sub(r"\\(.)", r"\1", text)


# ---------------------------------------------------------------------------
# Scanner
# ---------------------------------------------------------------------------


class RegexSourceScanner:
    """Regex implementation of the ``Scanner`` protocol."""

    def scan(self, file_contents: str) -> list[Candidate]:
        """Return candidates in pass order, each value at most once."""
        clean = strip_noise(file_contents)
        seen_text: set[str] = set()
        seen_images: set[str] = set()
        seen_keys: set[str] = set()
        candidates: list[Candidate] = []

        def add_text(
            value: str,
            position: int,
            source: ExtractionPass,
            key: str | None = None,
            attribute: str | None = None,
        ) -> None:
            if value in seen_text:
                return
            seen_text.add(value)
            candidates.append(
                Candidate(CandidateKind.TEXT, source, value, position, key=key, attribute=attribute)
            )

        def add_image(
            path: str, position: int, source: ExtractionPass, key: str | None = None
        ) -> None:
            if path in seen_images:
                return
            seen_images.add(path)
            candidates.append(Candidate(CandidateKind.IMAGE, source, path, position, key=key))

        # 1. free text
        for match in _FREE_TEXT.finditer(clean):
            raw = match.group(1)
            text = _normalize(raw)
            if is_candidate_text(text):
                offset = match.start(1) + (len(raw) - len(raw.lstrip()))
                add_text(text, offset, ExtractionPass.FREE_TEXT)

        # 2. attributes
        for match in _ATTRIBUTE.finditer(clean):
            text = _normalize(match.group(3))
            if is_candidate_text(text):
                add_text(
                    text, match.start(3), ExtractionPass.ATTRIBUTE, attribute=match.group(1)
                )

        # 3. keyed lookups; ids come from the call site, not from the text
        for match in _KEYED_LOOKUP.finditer(clean):
            func = match.group(1)
            if match.group(7) is not None:
                # getText(pageId, key, default)
                key, default, position = match.group(5), match.group(7), match.start(7)
            else:
                key, default, position = match.group(3), match.group(5), match.start(5)
            key = key.strip()
            default = _normalize(_unescape(default))
            if not key or not default:
                continue
            if key in seen_keys:
                # a repeated key keeps its first default; later ones are not labels either
                (seen_images if func == "getImage" else seen_text).add(default)
                continue
            seen_keys.add(key)
            if func == "getImage":
                add_image(default, position, ExtractionPass.KEYED_LOOKUP, key=key)
            else:
                add_text(default, position, ExtractionPass.KEYED_LOOKUP, key=key)

        # 4. quoted literals that read like labels
        for match in _UPPER_LITERAL.finditer(clean):
            text = _normalize(match.group(2))
            if looks_like_identifier(text) or looks_like_path(text):
                continue
            if is_candidate_text(text):
                add_text(text, match.start(2), ExtractionPass.QUOTED_LITERAL)

        # 5. image sources
        for match in _IMAGE_SOURCE.finditer(clean):
            path = match.group(3).strip()
            if looks_like_image(path):
                add_image(path, match.start(3), ExtractionPass.IMAGE_SOURCE)

        return candidates


@dataclass
class ScannedFile:
    """Candidates found in one source file."""

    path: Path
    candidates: list[Candidate] = field(default_factory=list)

    @property
    def stem(self) -> str:
        return self.path.stem


def discover_sources(components_dir: Path, entry_file: Path | None = None) -> list[Path]:
    """List component files (sorted by name), plus the entry file when present."""
    sources: list[Path] = []
    if components_dir.is_dir():
        sources.extend(
            sorted(
                p
                for p in components_dir.iterdir()
                if p.is_file() and p.suffix in SOURCE_EXTENSIONS
            )
        )
    else:
        logger.warning("Components directory not found: %s", components_dir)

    if entry_file is not None and entry_file.is_file() and entry_file not in sources:
        sources.append(entry_file)
    return sources


def scan_directory(
    components_dir: Path,
    entry_file: Path | None = None,
    scanner: Scanner | None = None,
) -> list[ScannedFile]:
    """
    Scan every source file; unreadable files are logged and skipped.

    Args:
        components_dir: directory of UI component files (not recursive)
        entry_file: root entry file scanned after the components
        scanner: rule set to apply, defaults to RegexSourceScanner
    """
    scanner = scanner or RegexSourceScanner()
    results: list[ScannedFile] = []
    for path in discover_sources(components_dir, entry_file):
        try:
            contents = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            logger.warning("Skipping unreadable source %s: %s", path, e)
            continue
        results.append(ScannedFile(path=path, candidates=scanner.scan(contents)))
    return results


__all__ = [
    "RegexSourceScanner",
    "ScannedFile",
    "discover_sources",
    "looks_like_identifier",
    "looks_like_image",
    "looks_like_path",
    "scan_directory",
    "strip_noise",
]
