"""Unit tests for settings, logging setup and service wiring."""

import json
import logging
from pathlib import Path

import pytest
from pydantic import ValidationError

from partguard.config import Settings, get_settings
from partguard.domain.exceptions import ConfigurationError
from partguard.infrastructure.permission.structure_loader import load_default_permission_structure
from partguard.logging_config import ConsoleLogFormatter, configure_logging
from partguard.main import create_permission_services

from tests.conftest import ALLOW, make_user, structure_config


class TestSettings:
    """Tests for environment driven settings."""

    def test_defaults(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("PARTGUARD_DEFAULT_PERMISSION", raising=False)
        settings = Settings(_env_file=None)
        assert settings.permissions_file is None
        assert settings.default_permission == "disallow"
        assert settings.also_set_max_depth == 32
        assert settings.masked_text == "???"

    def test_from_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("PARTGUARD_DEFAULT_PERMISSION", "allow")
        monkeypatch.setenv("PARTGUARD_MASKED_TEXT", "***")
        settings = Settings(_env_file=None)
        assert settings.default_permission == "allow"
        assert settings.masked_text == "***"

    def test_invalid_default_permission(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("PARTGUARD_DEFAULT_PERMISSION", "inherit")
        with pytest.raises(ValidationError):
            Settings(_env_file=None)

    def test_depth_must_be_positive(self) -> None:
        with pytest.raises(ValidationError):
            Settings(_env_file=None, also_set_max_depth=0)

    def test_get_settings_is_cached(self) -> None:
        get_settings.cache_clear()
        try:
            assert get_settings() is get_settings()
        finally:
            get_settings.cache_clear()


class TestLogging:
    """Tests for the console formatter and logger setup."""

    def test_formatter_appends_extras(self) -> None:
        record = logging.LogRecord(
            "partguard.test", logging.INFO, __file__, 1, "permissions.check.implied", None, None
        )
        record.permission = "parts"
        record.implied_by = "parts edit"
        line = ConsoleLogFormatter().format(record)
        assert "INFO" in line
        assert line.endswith("permissions.check.implied permission=parts implied_by='parts edit'")

    def test_configure_logging_installs_one_handler(self) -> None:
        logger = logging.getLogger("partguard")
        handlers = list(logger.handlers)
        try:
            configure_logging(Settings(_env_file=None, debug=True))
            configure_logging(Settings(_env_file=None, debug=True))
            added = [h for h in logger.handlers if h not in handlers]
            assert len(added) == 1
            assert isinstance(added[0].formatter, ConsoleLogFormatter)
            assert logger.level == logging.DEBUG
        finally:
            for handler in logger.handlers[:]:
                if handler not in handlers:
                    logger.removeHandler(handler)
            logger.propagate = True
            logger.setLevel(logging.NOTSET)
            if hasattr(logger, "_partguard_configured"):
                delattr(logger, "_partguard_configured")


class TestCreatePermissionServices:
    """Tests for the composition root."""

    @pytest.fixture(autouse=True)
    def _no_console_handler(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr("partguard.main.configure_logging", lambda settings: None)

    def test_bundled_structure(self) -> None:
        services = create_permission_services(Settings(_env_file=None))
        assert services.structure.has_operation("parts", "read")
        assert len(services.column_registry) > 0
        assert not services.resolver.is_allowed(make_user(), "parts", "read")

    def test_structure_file_and_default(self, tmp_path: Path) -> None:
        path = tmp_path / "permissions.json"
        path.write_text(
            json.dumps(load_default_permission_structure().to_dict()), encoding="utf-8"
        )
        settings = Settings(_env_file=None, permissions_file=path, default_permission="allow")
        services = create_permission_services(settings)
        assert services.resolver.is_allowed(make_user(), "parts", "read")

    def test_structure_without_part_fields(self, tmp_path: Path) -> None:
        path = tmp_path / "permissions.json"
        path.write_text(json.dumps(structure_config()), encoding="utf-8")
        with pytest.raises(ConfigurationError, match="unknown operation"):
            create_permission_services(Settings(_env_file=None, permissions_file=path))

    def test_anonymous_user(self) -> None:
        """Checks without an actor go to the anonymous user."""
        anonymous = make_user(values={"parts": {"read": ALLOW}})
        services = create_permission_services(Settings(_env_file=None), anonymous_user=anonymous)
        assert services.resolver.is_allowed(None, "parts", "read")
        assert not services.resolver.is_allowed(None, "parts", "edit")
