"""Test Settings loading and logging setup."""

import json
import logging

import pytest
import structlog

from valueset import ValueSet
from valueset.core.config import ObservabilityConfig, Settings, load_settings
from valueset.core.errors import ConfigError
from valueset.observability import logger as logger_module
from valueset.observability.logger import HANDLER_NAME, get_logger, setup_logging


@pytest.fixture
def reset_logging():
    root = logging.getLogger()
    root_level = root.level
    yield
    structlog.reset_defaults()
    for handler in list(root.handlers):
        if handler.get_name() == HANDLER_NAME:
            root.removeHandler(handler)
    root.setLevel(root_level)
    logging.getLogger("valueset").setLevel(logging.NOTSET)


class TestSettings:
    def test_default_settings(self):
        settings = Settings()
        assert settings.observability.log_level == "INFO"
        assert settings.observability.log_format == "json"

    def test_env_override(self, monkeypatch):
        monkeypatch.setenv("VALUESET_OBSERVABILITY__LOG_LEVEL", "debug")
        settings = Settings()
        assert settings.observability.log_level == "DEBUG"

    def test_unknown_level_rejected(self):
        with pytest.raises(ValueError, match="unknown log level"):
            ObservabilityConfig(log_level="chatty")

    def test_unknown_format_rejected(self):
        with pytest.raises(ValueError, match="log_format must be one of"):
            ObservabilityConfig(log_format="xml")

    def test_apply_logging_uses_observability(self, monkeypatch):
        seen = {}

        def fake_setup(level, format):
            seen.update(level=level, format=format)

        monkeypatch.setattr(logger_module, "setup_logging", fake_setup)
        Settings(observability={"log_level": "WARNING", "log_format": "console"}).apply_logging()
        assert seen == {"level": "WARNING", "format": "console"}


class TestLoadSettings:
    def test_without_file(self):
        settings = load_settings()
        assert settings.observability.log_format == "json"

    def test_missing_file_ignored(self, tmp_path):
        settings = load_settings(tmp_path / "absent.toml")
        assert settings.observability.log_level == "INFO"

    def test_reads_toml(self, tmp_path):
        path = tmp_path / "valueset.toml"
        path.write_text('[observability]\nlog_level = "debug"\nlog_format = "console"\n')
        settings = load_settings(path)
        assert settings.observability.log_level == "DEBUG"
        assert settings.observability.log_format == "console"

    def test_overrides_win(self, tmp_path):
        path = tmp_path / "valueset.toml"
        path.write_text('[observability]\nlog_level = "debug"\n')
        settings = load_settings(path, overrides={"observability": {"log_level": "ERROR"}})
        assert settings.observability.log_level == "ERROR"

    def test_invalid_toml_raises_config_error(self, tmp_path):
        path = tmp_path / "broken.toml"
        path.write_text("[observability\n")
        with pytest.raises(ConfigError, match="Invalid TOML"):
            load_settings(path)

    def test_invalid_value_raises_config_error(self):
        with pytest.raises(ConfigError, match="Invalid settings"):
            load_settings(overrides={"observability": {"log_format": "xml"}})


class TestSetupLogging:
    def test_sets_package_level(self, reset_logging):
        setup_logging(level="DEBUG", format="console")
        assert logging.getLogger("valueset").level == logging.DEBUG

    def test_unknown_level_falls_back_to_info(self, reset_logging):
        setup_logging(level="nonsense", format="json")
        assert logging.getLogger("valueset").level == logging.INFO

    def test_get_logger_logs(self, reset_logging):
        setup_logging(level="INFO", format="json")
        log = get_logger("valueset.test")
        log.info("value set ready", fields=3)

    def test_get_logger_renders_json(self, reset_logging, capsys):
        setup_logging(level="INFO", format="json")
        get_logger("valueset.test").info("value set ready", fields=3)

        payload = json.loads(capsys.readouterr().err.strip().splitlines()[-1])
        assert payload["event"] == "value set ready"
        assert payload["fields"] == 3
        assert payload["level"] == "info"

    def test_listener_failure_rendered_as_json(self, reset_logging, capsys):
        setup_logging(level="INFO", format="json")

        def bad_listener(field, value, vs):
            raise ValueError("boom")

        vs = ValueSet(on_change=bad_listener)
        vs.set_change("x", 1)

        lines = capsys.readouterr().err.strip().splitlines()
        records = [json.loads(line) for line in lines]
        failure = next(r for r in records if r["event"].startswith("Listener error"))
        assert failure["level"] == "error"
        assert failure["logger"] == "valueset.value_set"
        assert "field=x" in failure["event"]
        assert "ValueError: boom" in failure["exception"]
        assert "timestamp" in failure

    def test_repeated_setup_keeps_one_handler(self, reset_logging):
        first = setup_logging(format="console")
        second = setup_logging(format="json")

        handlers = [h for h in logging.getLogger().handlers if h.get_name() == HANDLER_NAME]
        assert handlers == [second]
        assert first is not second
