"""Application construction and logging setup."""

import logging

import structlog

from missioncontrol.app import App
from missioncontrol.config import Config
from missioncontrol.logging import setup_logging
from missioncontrol.main import create_app


def test_create_app_configures_logging(config):
    app = create_app(config)

    assert isinstance(app, App)
    assert logging.getLogger("pymongo").level == logging.WARNING
    assert logging.getLogger("missioncontrol").level == logging.DEBUG
    assert isinstance(structlog.get_config()["processors"][-1], structlog.dev.ConsoleRenderer)


def test_production_logging():
    setup_logging(debug=False)

    assert logging.getLogger("missioncontrol").level == logging.INFO
    assert logging.getLogger("pymongo.command").level == logging.WARNING
    processors = structlog.get_config()["processors"]
    assert processors[0] is structlog.contextvars.merge_contextvars
    assert isinstance(processors[-1], structlog.processors.JSONRenderer)


def test_config_from_environment(monkeypatch):
    monkeypatch.setenv("MISSIONCONTROL_SESSION_TTL_HOURS", "5")
    monkeypatch.setenv("MISSIONCONTROL_DEBUG", "true")

    config = Config()

    assert config.session_ttl_hours == 5
    assert config.debug is True
    assert config.database_url is None
