"""
Unit tests for structured logging utilities.
"""

import json
import logging
from io import StringIO

import pytest

from commit_tracker.utils.logging import (
    setup_logging,
    get_logger,
    JSONFormatter,
    log_api_call,
    log_refresh_cycle,
)


def capture(logger, level=logging.INFO):
    """Attach a JSON handler to the adapter's logger and return its stream."""
    stream = StringIO()
    handler = logging.StreamHandler(stream)
    handler.setFormatter(JSONFormatter())
    logger.logger.handlers.clear()
    logger.logger.addHandler(handler)
    logger.logger.setLevel(level)
    logger.logger.propagate = False
    return stream


def test_json_formatter():
    """Test JSON formatter produces valid JSON output."""
    logger = logging.getLogger("test_json_formatter")
    logger.setLevel(logging.INFO)
    logger.propagate = False
    
    stream = StringIO()
    handler = logging.StreamHandler(stream)
    handler.setFormatter(JSONFormatter())
    logger.addHandler(handler)
    
    logger.info("Test message", extra={"account": "apple", "repository": "swift", "attempt": 1})
    
    log_data = json.loads(stream.getvalue())
    
    assert "timestamp" in log_data
    assert log_data["level"] == "INFO"
    assert log_data["logger"] == "test_json_formatter"
    assert log_data["message"] == "Test message"
    assert log_data["account"] == "apple"
    assert log_data["repository"] == "swift"
    assert log_data["context"] == {"attempt": 1}
    assert "source" in log_data


def test_json_formatter_includes_exception():
    logger = get_logger("test_exception")
    stream = capture(logger)
    
    try:
        raise ValueError("bad branch")
    except ValueError:
        logger.error("Failed", exc_info=True)
    
    log_data = json.loads(stream.getvalue())
    
    assert log_data["error"]["type"] == "ValueError"
    assert log_data["error"]["message"] == "bad branch"


def test_get_logger_with_context():
    """Test getting logger with context."""
    logger = get_logger("test_module", account="apple", branch="master")
    
    assert logger.extra["account"] == "apple"
    assert logger.extra["branch"] == "master"


def test_with_context_merges_fields():
    logger = get_logger("test_with_context", account="apple").with_context(cycle_id="abc123")
    stream = capture(logger)
    
    logger.info("Cycle started")
    
    log_data = json.loads(stream.getvalue())
    assert log_data["account"] == "apple"
    assert log_data["cycle_id"] == "abc123"


def test_log_api_call():
    """Test API call logging."""
    logger = get_logger("test_api_call")
    stream = capture(logger)
    
    log_api_call(
        logger,
        service="github",
        endpoint="https://api.github.com/repos/apple/swift/branches/master",
        method="GET",
        status_code=200,
        duration_ms=150.456
    )
    
    log_data = json.loads(stream.getvalue())
    
    assert log_data["level"] == "INFO"
    assert log_data["context"]["service"] == "github"
    assert log_data["context"]["method"] == "GET"
    assert log_data["context"]["status_code"] == 200
    assert log_data["context"]["duration_ms"] == 150.46


def test_log_api_call_with_error():
    """Test API call logging with error."""
    logger = get_logger("test_api_call_error")
    stream = capture(logger, logging.ERROR)
    
    log_api_call(
        logger,
        service="github",
        endpoint="https://api.github.com/repos/apple/swift/branches/master",
        method="GET",
        error="Connection refused"
    )
    
    log_data = json.loads(stream.getvalue())
    
    assert log_data["level"] == "ERROR"
    assert log_data["context"]["error"] == "Connection refused"


def test_log_refresh_cycle_loaded():
    logger = get_logger("test_refresh_loaded")
    stream = capture(logger)
    
    log_refresh_cycle(logger, account="apple", repository="swift", branch="master", outcome="loaded")
    
    log_data = json.loads(stream.getvalue())
    assert log_data["level"] == "INFO"
    assert log_data["branch"] == "master"
    assert log_data["context"]["outcome"] == "loaded"


def test_log_refresh_cycle_fallback():
    logger = get_logger("test_refresh_fallback")
    stream = capture(logger)
    
    log_refresh_cycle(
        logger,
        account="???",
        repository="???",
        branch="???",
        outcome="fallback",
        failure="missing_configuration"
    )
    
    log_data = json.loads(stream.getvalue())
    assert log_data["level"] == "WARNING"
    assert log_data["context"]["failure"] == "missing_configuration"


def test_log_refresh_cycle_fallback_with_error():
    logger = get_logger("test_refresh_fallback_error")
    stream = capture(logger)
    
    log_refresh_cycle(
        logger,
        account="apple",
        repository="swift",
        branch="master",
        outcome="fallback",
        failure="parse",
        error="Missing field in branch response: commit.commit.author.name"
    )
    
    log_data = json.loads(stream.getvalue())
    assert log_data["level"] == "WARNING"
    assert log_data["context"]["failure"] == "parse"
    assert "commit.commit.author.name" in log_data["context"]["error"]


def test_setup_logging_configures_root():
    setup_logging("DEBUG")
    
    root_logger = logging.getLogger()
    
    assert root_logger.level == logging.DEBUG
    assert len(root_logger.handlers) == 1
    assert isinstance(root_logger.handlers[0].formatter, JSONFormatter)
    assert logging.getLogger("httpx").level == logging.WARNING


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
