"""Tests for logging setup and the request-id helper."""

import logging
import uuid

import pytest

from softcrud.api.middleware.request_id import resolve_request_id
from softcrud.core.logging import QUIET_LOGGERS, setup_logging


class TestSetupLogging:
    def test_level_from_env(self, monkeypatch):
        monkeypatch.setenv("SOFTCRUD_LOG_LEVEL", "warning")
        setup_logging()
        assert logging.getLogger("softcrud").level == logging.WARNING

    def test_json_format(self, monkeypatch, capsys):
        monkeypatch.setenv("SOFTCRUD_LOG_LEVEL", "INFO")
        monkeypatch.setenv("SOFTCRUD_LOG_FORMAT", "json")
        setup_logging()
        logging.getLogger("softcrud.test").info("hello")
        out = capsys.readouterr().out
        assert '"event": "hello"' in out

    def test_arguments_override_env(self, monkeypatch, capsys):
        monkeypatch.setenv("SOFTCRUD_LOG_LEVEL", "WARNING")
        monkeypatch.setenv("SOFTCRUD_LOG_FORMAT", "console")
        setup_logging(level="debug", fmt="json")
        assert logging.getLogger("softcrud").level == logging.DEBUG
        logging.getLogger("softcrud.test").debug("verbose")
        assert '"event": "verbose"' in capsys.readouterr().out

    def test_quiet_loggers(self, monkeypatch):
        monkeypatch.setenv("SOFTCRUD_LOG_LEVEL", "DEBUG")
        setup_logging()
        for name in QUIET_LOGGERS:
            assert logging.getLogger(name).level == logging.WARNING

    def test_unknown_format_falls_back_to_console(self, monkeypatch, capsys):
        monkeypatch.setenv("SOFTCRUD_LOG_LEVEL", "INFO")
        setup_logging(fmt="yaml")
        logging.getLogger("softcrud.test").info("plain")
        out = capsys.readouterr().out
        assert "plain" in out
        assert '"event"' not in out


class TestResolveRequestId:
    def test_valid_uuid_echoed(self):
        rid = str(uuid.uuid4())
        assert resolve_request_id(rid) == rid

    @pytest.mark.parametrize("raw", ["", "abc", "1234"])
    def test_invalid_replaced(self, raw):
        rid = resolve_request_id(raw)
        assert rid != raw
        uuid.UUID(rid)
