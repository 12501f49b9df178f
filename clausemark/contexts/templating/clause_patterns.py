"""
Clause Boundary Patterns

Fixed delimiter text wrapping a clause's span inside a contract. The markdown
renderer emits these markers and the compiled contract parser requires them,
so both sides must import them from here.

In a CommonMark tree the same clause is a CodeBlock whose info string is the
marker's tag, e.g. ' <clause src="ap://x" clauseid="c1">'.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class ClauseMarkers:
    """
    Clause boundary markers.

    Opening marker: OPEN_PREFIX + "<src>" + CLAUSEID_SEPARATOR + "<clauseid>" + OPEN_SUFFIX
    Closing marker: CLOSE
    """
    FENCE_OPEN: str = "\n```"
    INFO_PREFIX: str = " <clause src="
    INFO_SUFFIX: str = ">"
    OPEN_PREFIX: str = FENCE_OPEN + INFO_PREFIX
    CLAUSEID_SEPARATOR: str = " clauseid="
    OPEN_SUFFIX: str = INFO_SUFFIX + "\n"
    CLOSE: str = "\n```\n"
    QUOTE: str = '"'


def clause_info(src: str, clauseid: str) -> str:
    """
    Build the code block info string carrying a clause's identifiers.

    Example:
        >>> clause_info("ap://payment@0.1.0", "c1")
        ' <clause src="ap://payment@0.1.0" clauseid="c1">'
    """
    q = ClauseMarkers.QUOTE
    return (
        f"{ClauseMarkers.INFO_PREFIX}{q}{src}{q}"
        f"{ClauseMarkers.CLAUSEID_SEPARATOR}{q}{clauseid}{q}"
        f"{ClauseMarkers.INFO_SUFFIX}"
    )


def is_clause_info(info) -> bool:
    """True if a code block info string is a clause tag."""
    return (
        isinstance(info, str)
        and info.startswith(ClauseMarkers.INFO_PREFIX)
        and info.endswith(ClauseMarkers.INFO_SUFFIX)
    )


def clause_open_marker(src: str, clauseid: str) -> str:
    """
    Build the opening marker for a clause.

    Example:
        >>> clause_open_marker("ap://payment@0.1.0", "c1")
        '\\n``` <clause src="ap://payment@0.1.0" clauseid="c1">\\n'
    """
    return f"{ClauseMarkers.FENCE_OPEN}{clause_info(src, clauseid)}\n"


def clause_close_marker() -> str:
    """Build the closing marker for a clause."""
    return ClauseMarkers.CLOSE


def wrap_clause(body: str, src: str, clauseid: str) -> str:
    """Bracket a rendered clause body with its boundary markers."""
    return clause_open_marker(src, clauseid) + body + clause_close_marker()
