"""
Parser Combinators

Small, pure parser runtime used by the template compiler. A Parser wraps a
function (text, index) -> Result and never holds mutable state, so one compiled
parser can be reused for any number of independent parses, including from
several threads at once.

Alternation is ordered: alternatives are tried in declaration order and the
first success wins. Failures remember the furthest offset reached and what was
expected there, so error messages point at the real problem rather than at
the last alternative tried.
"""

import re
from dataclasses import dataclass, replace
from typing import Any, Callable, FrozenSet, Optional

from clausemark.contexts.templating.exceptions import ParseError
from clausemark.utils.text_processing import line_and_column


@dataclass(frozen=True)
class Result:
    """
    Outcome of running a parser at an offset.

    Attributes:
        success: Whether the parser matched
        index: Offset after the match (success only)
        value: Parsed value (success only)
        furthest: Furthest offset where some parser failed, -1 if none
        expected: Descriptions of what was expected at `furthest`
    """

    success: bool
    index: int
    value: Any
    furthest: int
    expected: FrozenSet[str]


def _success(index: int, value: Any) -> Result:
    return Result(True, index, value, -1, frozenset())


def _failure(index: int, expected: str) -> Result:
    return Result(False, -1, None, index, frozenset([expected]))


def _merge(result: Result, last: Optional[Result]) -> Result:
    """Carry the furthest failure information of `last` into `result`."""
    if last is None or result.furthest > last.furthest:
        return result
    if result.furthest == last.furthest:
        expected = result.expected | last.expected
    else:
        expected = last.expected
    return replace(result, furthest=last.furthest, expected=expected)


@dataclass(frozen=True)
class Parser:
    """
    Immutable parser value.

    Attributes:
        fn: Function (text, index) -> Result doing the actual matching
        description: Human readable summary, used in logs and reprs
    """

    fn: Callable[[str, int], Result]
    description: str = "parser"

    def run(self, text: str, index: int = 0) -> Result:
        return self.fn(text, index)

    def map(self, f: Callable[[Any], Any]) -> "Parser":
        return map_result(self, f)

    def parse(self, text: str) -> Any:
        """
        Parse the whole text.

        Args:
            text: Input text; every character must be consumed

        Returns:
            The parsed value

        Raises:
            ParseError: With the furthest offset reached and what was expected there
        """
        result = seq(self, eof()).run(text, 0)
        if result.success:
            return result.value[0]

        line, column = line_and_column(text, result.furthest)
        raise ParseError(
            position=result.furthest,
            expected=result.expected,
            line=line,
            column=column,
            snippet=text[result.furthest:],
        )

    def __repr__(self) -> str:
        return f"Parser({self.description})"


def literal(text: str) -> Parser:
    """Match exactly `text`; the value is the matched text."""
    expected = repr(text)

    def fn(source: str, index: int) -> Result:
        if source.startswith(text, index):
            return _success(index + len(text), text)
        return _failure(index, expected)

    return Parser(fn, f"literal {expected}")


def regex(pattern: str, description: Optional[str] = None) -> Parser:
    """Match `pattern` anchored at the current offset; the value is the matched text."""
    compiled = re.compile(pattern)
    expected = description or f"/{pattern}/"

    def fn(source: str, index: int) -> Result:
        match = compiled.match(source, index)
        if match:
            return _success(match.end(), match.group(0))
        return _failure(index, expected)

    return Parser(fn, expected)


def eof() -> Parser:
    """Match the end of input."""

    def fn(source: str, index: int) -> Result:
        if index >= len(source):
            return _success(index, None)
        return _failure(index, "EOF")

    return Parser(fn, "EOF")


def seq(*parsers: Parser) -> Parser:
    """
    Match every parser contiguously, in order.

    The value is the list of component values.
    """

    def fn(source: str, index: int) -> Result:
        values = []
        accum = None
        for parser in parsers:
            result = _merge(parser.run(source, index), accum)
            if not result.success:
                return result
            accum = result
            values.append(result.value)
            index = result.index
        return _merge(_success(index, values), accum)

    return Parser(fn, "seq(" + ", ".join(p.description for p in parsers) + ")")


def alt(*parsers: Parser) -> Parser:
    """
    Try parsers in declaration order; the first success wins.

    There is no backtracking into an alternative once it has succeeded.
    """

    def fn(source: str, index: int) -> Result:
        accum = None
        for parser in parsers:
            result = _merge(parser.run(source, index), accum)
            if result.success:
                return result
            accum = result
        if accum is None:
            return _failure(index, "one of no alternatives")
        return accum

    return Parser(fn, "alt(" + " | ".join(p.description for p in parsers) + ")")


def wrap(before: Parser, inner: Parser, after: Parser) -> Parser:
    """Match `before`, `inner`, `after`; the value is `inner`'s value only."""
    return map_result(seq(before, inner, after), lambda values: values[1])


def map_result(parser: Parser, f: Callable[[Any], Any]) -> Parser:
    """Transform the value of a successful match."""

    def fn(source: str, index: int) -> Result:
        result = parser.run(source, index)
        if not result.success:
            return result
        return replace(result, value=f(result.value))

    return Parser(fn, parser.description)


def check(parser: Parser, predicate: Callable[[Any], bool], expected: str) -> Parser:
    """
    Match `parser`, then reject values failing `predicate`.

    A rejected value fails at the offset where `parser` started, reporting
    `expected`.
    """

    def fn(source: str, index: int) -> Result:
        result = parser.run(source, index)
        if result.success and not predicate(result.value):
            return _merge(_failure(index, expected), result)
        return result

    return Parser(fn, expected)


# Lexical matchers

DIGITS_PATTERN = r"[0-9]+"
DECIMAL_PATTERN = r"[0-9]+(\.[0-9]+)?(e(\+|-)?[0-9]+)?"
QUOTED_STRING_PATTERN = r'"[^"]*"'


def digits() -> Parser:
    """One or more decimal digits."""
    return regex(DIGITS_PATTERN, "digits")


def decimal() -> Parser:
    """Digits with an optional fractional part and an optional signed exponent."""
    return regex(DECIMAL_PATTERN, "decimal number")


def quoted_string() -> Parser:
    """A double-quoted literal; the value keeps its quotes."""
    return regex(QUOTED_STRING_PATTERN, "double-quoted string")
