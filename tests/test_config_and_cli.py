"""Tests for settings, identity, logging setup and the CLI."""
import io
import logging

import pytest
from pydantic import ValidationError
from rich.console import Console
from typer.testing import CliRunner

from serviceai.cli import app
from serviceai.config import Settings
from serviceai.identity import DEMO_USERS, User, UserDirectory
from serviceai.logging_config import setup_logging

runner = CliRunner()

ENV_VARS = [
    "GEMINI_API_KEY",
    "API_KEY",
    "SERVICEAI_MODEL",
    "SERVICEAI_LIVE_MODEL",
    "SERVICEAI_VOICE",
    "SERVICEAI_MAX_TOOL_ROUNDS",
    "SERVICEAI_REQUEST_TIMEOUT",
    "SERVICEAI_LOG_LEVEL",
]


@pytest.fixture
def clean_env(monkeypatch):
    """Remove every service setting from the environment."""
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


@pytest.fixture
def restore_root_logger():
    """Put the root logger back the way it was."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


class TestSettings:
    """Tests for Settings."""

    def test_defaults(self, clean_env):
        """Test settings with nothing configured."""
        settings = Settings.from_env()

        assert settings.api_key is None
        assert settings.model == "gemini-2.5-flash"
        assert settings.voice_name == "Zephyr"
        assert settings.max_tool_rounds == 8
        assert settings.request_timeout == 45.0

    def test_from_env(self, clean_env):
        """Test reading overrides from the environment."""
        clean_env.setenv("GEMINI_API_KEY", "key-1")
        clean_env.setenv("SERVICEAI_MAX_TOOL_ROUNDS", "3")
        clean_env.setenv("SERVICEAI_REQUEST_TIMEOUT", "2.5")
        clean_env.setenv("SERVICEAI_VOICE", "Puck")

        settings = Settings.from_env()

        assert settings.api_key == "key-1"
        assert settings.max_tool_rounds == 3
        assert settings.request_timeout == 2.5
        assert settings.voice_name == "Puck"

    def test_api_key_fallback(self, clean_env):
        """Test the API_KEY fallback."""
        clean_env.setenv("API_KEY", "key-2")

        assert Settings.from_env().api_key == "key-2"

    @pytest.mark.parametrize("field,value", [("max_tool_rounds", 0), ("request_timeout", 0)])
    def test_invalid_limits(self, field, value):
        """Test that limits must be positive."""
        with pytest.raises(ValidationError):
            Settings(**{field: value})


class TestIdentity:
    """Tests for users and the demo directory."""

    def test_first_name(self):
        """Test the first-name derivation used in greetings."""
        assert User(id=9, full_name="Asha Kumar", email="a@example.com").first_name == "Asha"

    def test_login_case_insensitive(self):
        """Test logging in by email."""
        user = UserDirectory().login("  Rahul.Singh@Example.com ")

        assert user is not None
        assert user.id == 2

    def test_login_unknown(self):
        """Test an unknown email."""
        assert UserDirectory().login("nobody@example.com") is None

    def test_demo_users(self):
        """Test that demo user ids are unique."""
        assert len({u.id for u in DEMO_USERS}) == len(DEMO_USERS)


class TestLogging:
    """Tests for setup_logging."""

    def test_level_and_output(self, restore_root_logger):
        """Test that records reach the given console at the given level."""
        buffer = io.StringIO()
        setup_logging("info", console=Console(file=buffer, width=120))

        logging.getLogger("serviceai.test").info("hello from the core")
        logging.getLogger("serviceai.test").debug("hidden")

        assert logging.getLogger().level == logging.INFO
        assert "hello from the core" in buffer.getvalue()
        assert "hidden" not in buffer.getvalue()


class TestCLI:
    """Tests for the command line."""

    def test_users(self):
        """Test listing demo users."""
        result = runner.invoke(app, ["users"])

        assert result.exit_code == 0
        assert "Rahul Singh" in result.output
        assert "asha.kumar@example.com" in result.output

    def test_health_without_key(self, clean_env):
        """Test that health fails without an api key."""
        result = runner.invoke(app, ["health"])

        assert result.exit_code == 1
        assert "NOT SET" in result.output

    def test_health_with_key(self, clean_env):
        """Test a healthy configuration."""
        clean_env.setenv("GEMINI_API_KEY", "key-1")

        result = runner.invoke(app, ["health"])

        assert result.exit_code == 0
        assert "gemini-2.5-flash" in result.output
