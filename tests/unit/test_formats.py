"""Unit tests for the format registry."""

from pathlib import Path

import pytest

from clausemark.contexts.transform.exceptions import UnknownFormatError
from clausemark.contexts.transform.formats import FormatRegistry, format_descriptor, format_names


@pytest.mark.unit
def test_commonmark_is_json():
    assert format_descriptor("commonmark").file_format == "json"
    assert format_descriptor("commonmark").kind == "tree"


@pytest.mark.unit
def test_text_and_binary_formats():
    assert format_descriptor("markdown").file_format == "utf8"
    assert format_descriptor("pdf").kind == "binary"


@pytest.mark.unit
def test_unknown_format():
    with pytest.raises(UnknownFormatError) as exc_info:
        format_descriptor("foobar")

    assert str(exc_info.value) == "Unknown format foobar"


@pytest.mark.unit
def test_all_formats_declared():
    expected = {
        "markdown",
        "commonmark",
        "ciceromark",
        "ciceromark_unquoted",
        "ciceromark_untyped",
        "templatemark",
        "data",
        "pdfmake",
        "plaintext",
        "html",
        "pdf",
        "docx",
    }
    assert set(format_names()) == expected


@pytest.mark.unit
def test_registry_caches_descriptors(tmp_path: Path):
    formats_file = tmp_path / "formats.yaml"
    formats_file.write_text("notes:\n  docs: Notes\n  file_format: utf8\n  kind: text\n")

    registry = FormatRegistry(formats_file)
    first = registry.get("notes")
    formats_file.write_text("other:\n  docs: Other\n  file_format: json\n  kind: tree\n")

    assert registry.get("notes") is first
    registry.clear_cache()
    assert registry.names() == ["other"]


@pytest.mark.unit
def test_invalid_file_format_rejected(tmp_path: Path):
    formats_file = tmp_path / "formats.yaml"
    formats_file.write_text("notes:\n  docs: Notes\n  file_format: xml\n  kind: text\n")

    with pytest.raises(ValueError):
        FormatRegistry(formats_file).get("notes")


@pytest.mark.unit
def test_missing_registry_file(tmp_path: Path):
    with pytest.raises(FileNotFoundError):
        FormatRegistry(tmp_path / "missing.yaml").names()
