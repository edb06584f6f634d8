"""SQL placeholder normalization.

SQL templates use JDBC-style ``?`` positional placeholders. They are
rewritten to the driver's DB-API paramstyle. String literals, quoted
identifiers and comments are left untouched.
"""

from __future__ import annotations

import re
from functools import lru_cache

# Regions where a "?" is not a placeholder
_OPAQUE_PATTERN = re.compile(
    r"'(?:[^'\\]|\\.|'')*'"  # string literal
    r'|"(?:[^"]|"")*"'  # quoted identifier
    r"|--[^\n]*"  # line comment
    r"|/\*.*?\*/",  # block comment
    re.DOTALL,
)

_PLACEHOLDER = "?"


def _split_opaque(sql: str) -> list[tuple[bool, str]]:
    """Split *sql* into ``(is_opaque, text)`` segments."""
    parts: list[tuple[bool, str]] = []
    last_end = 0

    for match in _OPAQUE_PATTERN.finditer(sql):
        start, end = match.span()
        if start > last_end:
            parts.append((False, sql[last_end:start]))
        parts.append((True, match.group()))
        last_end = end

    if last_end < len(sql):
        parts.append((False, sql[last_end:]))

    return parts


@lru_cache(maxsize=256)
def count_placeholders(sql: str) -> int:
    """Return the number of ``?`` placeholders outside literals and comments."""
    return sum(text.count(_PLACEHOLDER) for is_opaque, text in _split_opaque(sql) if not is_opaque)


@lru_cache(maxsize=256)
def normalize_params(sql: str, paramstyle: str) -> str:
    """Convert ``?`` placeholders to the target param style.

    Args:
        sql: SQL string with ``?`` placeholders.
        paramstyle: Target style - 'qmark' (no conversion), 'format' (%s)
            or 'numeric' (:1, :2, ...).

    Returns:
        SQL with placeholders converted to the target style.

    Raises:
        ValueError: If *paramstyle* is not supported.
    """
    if paramstyle == "qmark":
        return sql
    if paramstyle not in ("format", "numeric"):
        raise ValueError(f"Unsupported paramstyle: {paramstyle}")

    parts: list[str] = []
    position = 0
    for is_opaque, text in _split_opaque(sql):
        if paramstyle == "format":
            # format-style drivers parse '%' everywhere, literals and comments included
            text = text.replace("%", "%%")
        if is_opaque:
            parts.append(text)
            continue
        pieces = text.split(_PLACEHOLDER)
        segment = pieces[0]
        for piece in pieces[1:]:
            position += 1
            segment += ("%s" if paramstyle == "format" else f":{position}") + piece
        parts.append(segment)

    return "".join(parts)
