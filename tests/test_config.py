"""Tests for environment-driven configuration and logging setup."""

import logging

import pytest

from krakenapi.config import API_URL, DEFAULT_TIMEOUT, ClientConfig, load_config, load_credentials
from krakenapi.logging_config import LOGGER_NAME, reset_logging, setup_logging

_ENV_VARS = (
    "KRAKEN_API_URL",
    "KRAKEN_API_VERSION",
    "KRAKEN_USER_AGENT",
    "KRAKEN_TIMEOUT",
    "KRAKEN_API_KEY",
    "KRAKEN_API_SECRET",
)


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    # setenv first so teardown also undoes values written by load_dotenv
    for name in _ENV_VARS:
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)
    return tmp_path


class TestConfig:
    def test_defaults(self, clean_env):
        config = load_config(str(clean_env / "none.env"))

        assert config == ClientConfig()
        assert config.url == API_URL
        assert config.timeout == DEFAULT_TIMEOUT
        assert config.base_path("private", "Balance") == "/0/private/Balance"

    def test_env_file(self, clean_env):
        env_file = clean_env / ".env"
        env_file.write_text(
            "KRAKEN_API_URL=http://localhost:8080/\n"
            "KRAKEN_API_VERSION=1\n"
            "KRAKEN_TIMEOUT=2.5\n"
            "KRAKEN_API_KEY=abc\n"
            "KRAKEN_API_SECRET=c2VjcmV0\n",
            encoding="utf-8",
        )

        config = load_config(str(env_file))

        assert config.url == "http://localhost:8080"
        assert config.api_version == "1"
        assert config.timeout == 2.5
        assert load_credentials(str(env_file)) == ("abc", "c2VjcmV0")

    @pytest.mark.parametrize("value", ["soon", "0", "-3"])
    def test_invalid_timeout(self, clean_env, monkeypatch, value):
        monkeypatch.setenv("KRAKEN_TIMEOUT", value)
        with pytest.raises(ValueError, match="KRAKEN_TIMEOUT"):
            load_config(str(clean_env / "none.env"))

    def test_missing_credentials_are_empty(self, clean_env):
        assert load_credentials(str(clean_env / "none.env")) == ("", "")


class TestLogging:
    @pytest.fixture(autouse=True)
    def restore_logger(self):
        logger = logging.getLogger(LOGGER_NAME)
        level = logger.level
        yield
        reset_logging()
        logger.setLevel(level)

    def test_package_logger_has_null_handler(self):
        import krakenapi  # noqa: F401

        handlers = logging.getLogger(LOGGER_NAME).handlers
        assert any(isinstance(h, logging.NullHandler) for h in handlers)

    def test_default_writes_no_file(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)

        logger = setup_logging()

        owned = [h for h in logger.handlers if not isinstance(h, logging.NullHandler)]
        assert len(owned) == 1
        assert not any(isinstance(h, logging.FileHandler) for h in logger.handlers)
        assert list(tmp_path.iterdir()) == []

    def test_relative_log_file_resolves_against_cwd(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)

        setup_logging(logging.DEBUG, log_file="logs/kraken.log", console=False)

        assert (tmp_path / "logs" / "kraken.log").exists()

    def test_repeated_setup_replaces_handlers(self, tmp_path):
        first = setup_logging(log_file=tmp_path / "a.log")
        second = setup_logging(log_file=tmp_path / "a.log")

        owned = [h for h in second.handlers if not isinstance(h, logging.NullHandler)]
        assert first is second
        assert len(owned) == 2

    def test_reset_removes_only_installed_handlers(self):
        logger = setup_logging()
        reset_logging()

        assert all(isinstance(h, logging.NullHandler) for h in logger.handlers)
