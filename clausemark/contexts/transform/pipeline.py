"""
Transformation Pipeline

Runs an explicit, caller-specified chain of conversions:

    transform(doc, "ciceromark", ["ciceromark_unquoted", "pdfmake"])

runs ciceromark -> ciceromark_unquoted, then ciceromark_unquoted -> pdfmake,
feeding each hop's output into the next. A hop without a registered converter
aborts the whole chain; no partial result is returned.
"""

import json
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from clausemark.contexts.templating.drafter import draft
from clausemark.contexts.templating.exceptions import DraftError, ParseError, TemplateCompileError
from clausemark.contexts.templating.template_compiler import parse_with_template
from clausemark.contexts.transform.converters import CONVERTERS, converters_from, get_converter
from clausemark.contexts.transform.exceptions import UnsupportedConversion
from clausemark.contexts.transform.formats import format_descriptor
from clausemark.contexts.transform.logger import _log_debug, _log_info
from clausemark.utils.text_processing import get_text_diff, normalize_nls


def _preview(value: Any, limit: int = 500) -> str:
    text = value if isinstance(value, str) else json.dumps(value, indent=2, default=str)
    return text if len(text) <= limit else text[:limit] + "..."


def transform(
    source: Any,
    source_format: str,
    destination_formats: List[str],
    parameters: Optional[Dict[str, Any]] = None,
    options: Optional[Dict[str, Any]] = None,
) -> Any:
    """
    Convert a value through an explicit chain of formats.

    Args:
        source: Input value (tree, text or bytes depending on source_format)
        source_format: Format of the input value
        destination_formats: Ordered list of formats to convert through; the
                             last one is the result format
        parameters: Converter parameters (e.g. {"template": grammar})
        options: {"verbose": True} logs every intermediate result at DEBUG

    Returns:
        Value in the last destination format (the input itself for an empty chain)

    Raises:
        UnknownFormatError: If any format in the chain is not declared
        UnsupportedConversion: If a hop has no registered converter
        MissingParameterError: If a converter needs a parameter that was not passed
    """
    parameters = parameters or {}
    options = options or {}
    verbose = bool(options.get("verbose"))

    # Validate the whole chain before converting anything
    chain = [source_format] + list(destination_formats)
    for name in chain:
        format_descriptor(name)
    hops = []
    for current, target in zip(chain, chain[1:]):
        hop = get_converter(current, target)
        if hop is None:
            raise UnsupportedConversion(current, target, converters_from(current))
        hops.append(hop)

    _log_info(f"Transforming {' -> '.join(chain)}")

    result = source
    for hop in hops:
        result = hop(result, parameters)
        if verbose:
            _log_debug(f"{hop.name}:\n{_preview(result)}")

    return result


def list_converters() -> List[Tuple[str, str, str]]:
    """Return (source, target, docs) for every registered converter, sorted."""
    return sorted((c.source, c.target, c.docs) for c in CONVERTERS.values())


@dataclass
class RoundtripResult:
    """Result from validate_roundtrip()."""

    success: bool
    num_diffs: Optional[int] = None
    diff_lines: List[str] = field(default_factory=list)
    data: Any = None
    error: Optional[str] = None


def validate_roundtrip(text: str, template: Any) -> RoundtripResult:
    """
    Validate text -> data -> text fidelity for a template.

    Steps:
    1. Parse text against the template
    2. Draft the bound data back through the same template
    3. Compare drafted text against the (newline-normalized) input

    Args:
        text: Contract text
        template: Grammar (nodes or JSON)

    Returns:
        RoundtripResult; parse and draft failures are reported in `error`
    """
    original = normalize_nls(text)
    result = RoundtripResult(success=False)

    try:
        result.data = parse_with_template(template, original)
    except (ParseError, TemplateCompileError) as e:
        result.error = f"Parse error: {e}"
        return result

    try:
        drafted = draft(template, result.data)
    except DraftError as e:
        result.error = f"Draft error: {e}"
        return result

    result.diff_lines, result.num_diffs = get_text_diff(original, drafted)
    result.success = result.num_diffs == 0
    _log_debug(f"Roundtrip finished with {result.num_diffs} differences")
    return result
