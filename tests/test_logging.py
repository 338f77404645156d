from __future__ import annotations

from app.config import Settings
from app.core.logging import build_logging_config


def _settings(**env) -> Settings:
    return Settings.model_validate(env)


def test_development_logs_text_at_debug():
    config = build_logging_config(_settings(APP_ENV="development"))

    assert config["handlers"]["default"]["formatter"] == "text"
    assert config["root"]["level"] == "DEBUG"


def test_production_logs_json_at_info():
    config = build_logging_config(_settings(APP_ENV="production"))

    assert config["handlers"]["default"]["formatter"] == "json"
    assert config["root"]["level"] == "INFO"


def test_log_level_override():
    config = build_logging_config(_settings(APP_ENV="production", LOG_LEVEL="warning"))

    assert config["root"]["level"] == "WARNING"
