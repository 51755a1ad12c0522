"""Settings, logging setup and the injector container."""

import logging

import pytest
import structlog

from drivenui.core import LogContext, configure_logging, get_logger, get_settings
from drivenui.core.config import Settings
from drivenui.engine import ContextStore
from drivenui.parser import SDUIParser


@pytest.mark.unit
def test_settings_from_environment(settings):
    assert settings.log_level == "DEBUG"
    assert settings.enable_cache is False
    assert settings.default_theme == "light"


@pytest.mark.unit
def test_settings_prefix(monkeypatch):
    monkeypatch.setenv("DRIVENUI_MAX_COMPONENT_DEPTH", "5")
    monkeypatch.setenv("DRIVENUI_CACHE_SIZE", "3")

    settings = Settings()

    assert settings.max_component_depth == 5
    assert settings.cache_size == 3


@pytest.mark.unit
def test_get_settings_is_cached(settings):
    assert get_settings() is settings


@pytest.mark.unit
def test_parser_from_settings():
    settings = Settings(enable_cache=True, cache_size=2, max_markup_size=100)

    parser = SDUIParser.from_settings(settings)

    assert parser.cache is not None
    assert parser.max_markup_size == 100
    assert SDUIParser.from_settings(Settings(enable_cache=False)).cache is None


@pytest.mark.unit
def test_container_singletons(di_container, settings):
    assert di_container.get(Settings) is settings
    assert di_container.get(SDUIParser) is di_container.get(SDUIParser)
    assert di_container.get(ContextStore) is di_container.get(ContextStore)
    assert di_container.get(SDUIParser).cache is None


@pytest.mark.unit
def test_configure_logging_scopes_engine_logger():
    configure_logging("WARNING", json_logs=True)

    engine_logger = logging.getLogger("drivenui")
    assert engine_logger.level == logging.WARNING
    assert len(engine_logger.handlers) == 1
    assert not engine_logger.propagate
    assert structlog.is_configured()

    get_logger("drivenui.test").warning("logging_configured", component="test")
    configure_logging("DEBUG")
    assert engine_logger.level == logging.DEBUG


@pytest.mark.unit
def test_log_context_restores_outer_binding():
    with LogContext(session_id="outer"):
        with LogContext(session_id="inner", screen="main"):
            assert structlog.contextvars.get_contextvars() == {"session_id": "inner", "screen": "main"}
        assert structlog.contextvars.get_contextvars() == {"session_id": "outer"}
    assert structlog.contextvars.get_contextvars() == {}
