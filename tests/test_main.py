"""Tests for main.py — command registration and trace file routing."""
import logging

from typer.testing import CliRunner

from topcoder_api.client import trace_logger
from topcoder_api.main import app, configure_trace_file

runner = CliRunner()


def test_help_lists_groups():
    result = runner.invoke(app, ["--help"])
    assert result.exit_code == 0
    for group in ("auth", "projects", "challenges", "resources", "members"):
        assert group in result.stdout


def test_trace_file_receives_traces(tmp_path):
    path = tmp_path / "trace.log"
    handler = configure_trace_file(path)
    try:
        trace_logger.info("EndPoint: GET /challenges/1, Status Code: 200")
        handler.flush()
        assert "EndPoint: GET /challenges/1" in path.read_text()
    finally:
        trace_logger.removeHandler(handler)
        handler.close()
        trace_logger.setLevel(logging.NOTSET)


def test_trace_file_configured_once_per_path(tmp_path):
    path = tmp_path / "trace.log"
    first = configure_trace_file(path)
    try:
        second = configure_trace_file(path)
        assert second is first
        assert trace_logger.handlers.count(first) == 1
    finally:
        trace_logger.removeHandler(first)
        first.close()
        trace_logger.setLevel(logging.NOTSET)
