"""Unit tests for per-context logger setup."""

import sys

import pytest
from loguru import logger

from clausemark.contexts.markup.logger import _log_info as markup_info
from clausemark.contexts.markup.logger import _log_success as markup_success
from clausemark.contexts.markup.logger import setup_markup_logger
from clausemark.contexts.templating.logger import _log_debug as template_debug
from clausemark.contexts.templating.logger import setup_templating_logger
from clausemark.contexts.transform.logger import _log_warning as transform_warning
from clausemark.contexts.transform.logger import setup_transform_logger


@pytest.fixture(autouse=True)
def restore_logger():
    yield
    logger.remove()
    logger.add(sys.stderr)


@pytest.mark.unit
def test_markup_logger_writes_prefixed_messages(tmp_path):
    log_file = setup_markup_logger(tmp_path / "markup", visitor="markdown")
    markup_info("rendered 3 blocks")
    markup_success("converted to markdown")

    content = log_file.read_text()
    assert log_file.name == "markup.log"
    assert "Visitor: markdown" in content
    assert "[markup] rendered 3 blocks" in content
    assert "SUCCESS | [markup] converted to markdown" in content


@pytest.mark.unit
def test_templating_logger_captures_debug(tmp_path):
    log_file = setup_templating_logger(tmp_path / "template", phase="compile")
    template_debug("compiling ClauseBlock grammar")

    content = log_file.read_text()
    assert "Phase: compile" in content
    assert "[template] compiling ClauseBlock grammar" in content


@pytest.mark.unit
def test_transform_logger_records_chain(tmp_path):
    log_file = setup_transform_logger(tmp_path / "transform", "ciceromark", ["ciceromark_unquoted", "pdfmake"])
    transform_warning("slow hop")

    content = log_file.read_text()
    assert "Chain: ciceromark -> ciceromark_unquoted -> pdfmake" in content
    assert "[transform] slow hop" in content
