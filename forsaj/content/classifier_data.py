"""
Static rule data for the text classifier.

Kept apart from the predicate so the lists can be reviewed (and extended)
without reading the matching logic.
"""

from __future__ import annotations

# Matched anywhere in the string (case-sensitive). Trailing spaces keep
# ordinary words such as "important" or "constant" out of the net.
SUBSTRING_DENYLIST: tuple[str, ...] = (
    "function",
    "void",
    "import ",
    "export ",
    "return ",
    "const ",
    "async ",
    "await ",
    "=>",
)

# Matched as whole words (case-sensitive).
WORD_DENYLIST: frozenset[str] = frozenset(
    {
        # declarations
        "import",
        "export",
        "const",
        "let",
        "var",
        "return",
        "async",
        "await",
        # common call names
        "replace",
        "map",
        "filter",
        "join",
        "split",
        # literal tokens
        "true",
        "false",
        "null",
        "undefined",
        "NaN",
        # primitive type names
        "string",
        "number",
        "boolean",
        "any",
    }
)

# Characters that only appear in markup or code
CODE_PUNCTUATION: frozenset[str] = frozenset("{}<>;")

# Azerbaijani letters outside ASCII, for documentation of the accepted alphabet
EXTENDED_LATIN: str = "əƏüÜöÖğĞıIİçÇşŞ"
