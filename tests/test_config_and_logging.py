"""Test module for settings loading and logging helpers."""
import json
import logging

from search_spellcheck.core.config import environment
from search_spellcheck.core.config.settings import Settings, _env_flag
from search_spellcheck.core.logging_config import (
    JSONFormatter,
    bind_request_context,
    request_id_ctx,
    reset_request_context,
    setup_logging,
    view_id_ctx,
)


def test_env_flag_parsing(monkeypatch):
    """Test case for boolean-like env values."""
    monkeypatch.setenv("FLAG_ON", "Yes")
    monkeypatch.setenv("FLAG_OFF", "0")
    monkeypatch.delenv("FLAG_MISSING", raising=False)
    assert _env_flag("FLAG_ON") is True
    assert _env_flag("FLAG_OFF") is False
    assert _env_flag("FLAG_MISSING", default=None) is None


def test_settings_read_solr_and_spellcheck_env(monkeypatch):
    """Test case for env-driven settings."""
    monkeypatch.setenv("SOLR_ENABLED", "true")
    monkeypatch.setenv("SOLR_URL", "http://solr:8983/solr/")
    monkeypatch.setenv("SOLR_CORE", "content")
    monkeypatch.setenv("SPELLCHECK_CACHE_BIN", "spellcheck")
    refreshed = Settings()
    assert refreshed.solr_enabled is True
    assert refreshed.solr_select_url == "http://solr:8983/solr/content/select"
    assert refreshed.spellcheck_cache_bin == "spellcheck"
    assert refreshed.environment == "test"


def test_get_settings_selects_environment_class(monkeypatch):
    """Test case for APP_ENV driven settings classes."""
    environment.get_settings.cache_clear()
    monkeypatch.setenv("APP_ENV", "dev")
    try:
        assert isinstance(environment.get_settings(), environment.DevelopmentSettings)
    finally:
        environment.get_settings.cache_clear()
    monkeypatch.setenv("APP_ENV", "test")
    assert isinstance(environment.get_settings(), environment.TestSettings)
    environment.get_settings.cache_clear()


def test_json_formatter_includes_context_fields():
    """Test case for structured log output."""
    record = logging.LogRecord(
        "search_spellcheck.test", logging.INFO, __file__, 10, "cached %s", ("k",), None
    )
    record.cache_key = "views_data:x:spellcheck"
    record.view_id = "content"
    data = json.loads(JSONFormatter().format(record))
    assert data["message"] == "cached k"
    assert data["level"] == "INFO"
    assert data["cache_key"] == "views_data:x:spellcheck"
    assert data["view_id"] == "content"


def test_request_context_binding():
    """Test case for binding and resetting contextvars."""
    tokens = bind_request_context(request_id="req-1", view_id="content")
    assert request_id_ctx.get() == "req-1"
    assert view_id_ctx.get() == "content"
    reset_request_context(tokens)
    assert request_id_ctx.get() is None
    assert view_id_ctx.get() is None


def test_setup_logging_writes_json_file(tmp_path):
    """Test case for the rotating JSON file handler."""
    root = logging.getLogger()
    saved_handlers, saved_level = list(root.handlers), root.level
    try:
        setup_logging(log_level="DEBUG", log_dir=str(tmp_path), use_json=True, use_colors=False)
        logging.getLogger("search_spellcheck.test").info("hello")
        for handler in root.handlers:
            handler.flush()
        lines = (tmp_path / "search_spellcheck.log").read_text(encoding="utf-8").splitlines()
        assert json.loads(lines[-1])["message"] == "hello"
    finally:
        for handler in list(root.handlers):
            handler.close()
            root.removeHandler(handler)
        for handler in saved_handlers:
            root.addHandler(handler)
        root.setLevel(saved_level)
