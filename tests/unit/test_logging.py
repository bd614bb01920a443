"""
Unit tests for logging setup.
"""
import logging
import pytest

from app.core import logging as app_logging
from app.core.logging import InterceptHandler, logger


@pytest.mark.unit
class TestLogging:

    def test_stdlib_records_reach_loguru(self):
        messages = []
        sink_id = logger.add(lambda m: messages.append(m.record), level="DEBUG")
        try:
            std_logger = logging.getLogger("rsvp.tests.intercept")
            std_logger.handlers = [InterceptHandler()]
            std_logger.propagate = False
            std_logger.warning("pool exhausted")
        finally:
            logger.remove(sink_id)

        assert [(r["level"].name, r["message"]) for r in messages] == [("WARNING", "pool exhausted")]

    def test_uvicorn_is_forwarded(self):
        handlers = logging.getLogger("uvicorn.access").handlers
        assert any(isinstance(h, InterceptHandler) for h in handlers)

    def test_explicit_level_wins(self, monkeypatch):
        monkeypatch.setattr(app_logging.settings, "LOG_LEVEL", "warning")
        assert app_logging.log_level() == "WARNING"

    def test_level_follows_environment(self, monkeypatch):
        monkeypatch.setattr(app_logging.settings, "LOG_LEVEL", None)
        monkeypatch.setattr(app_logging.settings, "ENVIRONMENT", "development")
        assert app_logging.log_level() == "DEBUG"
        monkeypatch.setattr(app_logging.settings, "ENVIRONMENT", "production")
        assert app_logging.log_level() == "INFO"
