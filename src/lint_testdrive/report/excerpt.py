"""Source excerpt helpers for renderers."""

import os
from typing import List, Sequence, Tuple


def _leading_whitespace(line: str) -> str:
    return line[: len(line) - len(line.lstrip(" \t"))]


def dedent_excerpt(lines: Sequence[str], column: int = 0) -> Tuple[List[str], int]:
    """Strip the whitespace prefix shared by every line of an excerpt.

    Blank lines do not take part in computing the prefix. The column is
    shifted left by the stripped width and never drops below 1; an unknown
    column (0) stays 0.

    Args:
        lines: Excerpt lines without trailing newlines
        column: 1-based column of the finding on the first line, 0 if unknown

    Returns:
        Tuple of (dedented lines, adjusted column)
    """
    indents = [_leading_whitespace(line) for line in lines if line.strip()]
    if not indents:
        return list(lines), column

    prefix = os.path.commonprefix(indents)
    if not prefix:
        return list(lines), column

    width = len(prefix)
    dedented = [line[width:] if line.strip() else "" for line in lines]
    if column > 0:
        column = max(1, column - width)
    return dedented, column


def pinpoint_column(excerpt: str, column: int) -> str:
    """Append a caret line pointing at ``column`` below a one-line excerpt.

    Tabs before the column are kept in the caret line so it lines up under
    the same terminal tab stops. Multi-line excerpts and unknown columns
    (0 or negative) are returned unchanged.
    """
    line = excerpt.rstrip("\n")
    if column <= 0 or "\n" in line:
        return excerpt

    before = line[: column - 1].ljust(column - 1)
    marker = "".join("\t" if ch == "\t" else " " for ch in before)
    return f"{line}\n{marker}^"
