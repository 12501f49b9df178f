"""
Text processing utilities shared by the renderers, the template parser and the
roundtrip validator.
"""

import difflib
import re
from typing import List, Tuple


def normalize_nls(text: str) -> str:
    """
    Prepare text for parsing by dropping carriage returns.

    Args:
        text: Raw text, possibly with Windows line endings

    Returns:
        Text using only '\\n' line endings

    Example:
        >>> normalize_nls("Seller\\r\\nBuyer")
        'Seller\\nBuyer'
    """
    return re.sub(r"\r", "", text)


def unquote_string(value: str, quote: str = '"') -> str:
    """
    Strip one pair of matching outer quote characters.

    Values that are not wrapped in the quote character are returned unchanged,
    so unquoting is safe to apply to already-unquoted text.

    Example:
        >>> unquote_string('"Party A"')
        'Party A'
        >>> unquote_string('42')
        '42'
    """
    if len(value) >= 2 and value.startswith(quote) and value.endswith(quote):
        return value[1:-1]
    return value


def quote_string(value: str, quote: str = '"') -> str:
    """Wrap value in the quote character."""
    return f"{quote}{value}{quote}"


def prefix_lines(text: str, prefix: str) -> str:
    """
    Prefix every line of text, leaving empty lines with a trimmed prefix.

    Example:
        >>> prefix_lines("a\\n\\nb", "> ")
        '> a\\n>\\n> b'
    """
    return "\n".join(prefix + line if line else prefix.rstrip() for line in text.split("\n"))


def line_and_column(text: str, position: int) -> Tuple[int, int]:
    """
    Convert an offset into 1-based (line, column) coordinates.

    Example:
        >>> line_and_column("ab\\ncd", 4)
        (2, 2)
    """
    before = text[:position]
    line = before.count("\n") + 1
    column = position - (before.rfind("\n") + 1) + 1
    return line, column


def get_text_diff(
    text1: str,
    text2: str,
    fromfile: str = "original",
    tofile: str = "roundtrip",
    context_lines: int = 3,
) -> Tuple[List[str], int]:
    """
    Compare two texts line by line.

    Unlike file comparisons that tolerate blank line drift, roundtrip text must
    match exactly, so blank lines count as content here.

    Args:
        text1: Original text
        text2: Text to compare against the original
        fromfile: Label for the original in the diff header
        tofile: Label for the comparison text in the diff header
        context_lines: Number of context lines around differences

    Returns:
        Tuple of (diff_lines, num_differences) where num_differences counts
        added and removed lines, excluding the diff headers
    """
    if text1 == text2:
        return [], 0

    diff = list(
        difflib.unified_diff(
            text1.split("\n"),
            text2.split("\n"),
            fromfile=fromfile,
            tofile=tofile,
            lineterm="",
            n=context_lines,
        )
    )

    num_diffs = sum(1 for line in diff if line.startswith(("+", "-")))
    num_diffs -= sum(1 for line in diff if line.startswith(("---", "+++")))

    # Texts that differ only in a trailing newline produce an empty line diff
    return diff, max(num_diffs, 1)
