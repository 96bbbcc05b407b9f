"""Tests for polyglot_chat.config loading and environment overrides."""

import configparser

import pytest

from polyglot_chat.config import (
    ServerConfig,
    _apply_env_overrides,
    _load_from_ini,
    _parse_bool,
    _parse_list,
    get_config_status,
    load_config,
    print_config_summary,
)

_ENV_VARS = (
    "POLYGLOT_HOST",
    "POLYGLOT_PORT",
    "POLYGLOT_PRODUCTION",
    "POLYGLOT_CORS_ORIGINS",
    "GEMINI_API_KEY",
    "API_KEY",
    "POLYGLOT_GEMINI_MODEL",
    "POLYGLOT_GEMINI_TIMEOUT",
    "POLYGLOT_MAX_ATTACHMENT_BYTES",
    "POLYGLOT_LOG_LEVEL",
    "POLYGLOT_LOG_FORMAT",
    "POLYGLOT_SPEECH_PROVIDER",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Start every test without any configuration in the environment."""
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.mark.unit
def test_defaults():
    cfg = ServerConfig()

    assert cfg.server.port == 8000
    assert cfg.security.cors_origins == ["*"]
    assert cfg.gemini.model == "gemini-3-flash-preview"
    assert cfg.gemini.has_api_key is False
    assert cfg.attachments.max_bytes == 10 * 1024 * 1024
    assert cfg.features.speech_provider == "browser"
    assert cfg.docs_should_be_enabled is True


@pytest.mark.unit
def test_server_env_overrides(monkeypatch):
    monkeypatch.setenv("POLYGLOT_HOST", "127.0.0.1")
    monkeypatch.setenv("POLYGLOT_PORT", "9001")
    monkeypatch.setenv("POLYGLOT_PRODUCTION", "true")
    monkeypatch.setenv("POLYGLOT_CORS_ORIGINS", "https://a.example, https://b.example")

    cfg = load_config()

    assert cfg.server.host == "127.0.0.1"
    assert cfg.server.port == 9001
    assert cfg.is_production is True
    assert cfg.docs_should_be_enabled is False
    assert cfg.security.cors_origins == ["https://a.example", "https://b.example"]


@pytest.mark.unit
def test_gemini_env_overrides(monkeypatch):
    monkeypatch.setenv("GEMINI_API_KEY", " secret ")
    monkeypatch.setenv("POLYGLOT_GEMINI_MODEL", "gemini-2.5-flash")
    monkeypatch.setenv("POLYGLOT_GEMINI_TIMEOUT", "12.5")

    cfg = load_config()

    assert cfg.gemini.api_key == "secret"
    assert cfg.gemini.model == "gemini-2.5-flash"
    assert cfg.gemini.timeout_seconds == 12.5


@pytest.mark.unit
def test_legacy_api_key_variable(monkeypatch):
    monkeypatch.setenv("API_KEY", "legacy")

    assert load_config().gemini.api_key == "legacy"


@pytest.mark.unit
def test_gemini_api_key_wins_over_legacy(monkeypatch):
    monkeypatch.setenv("API_KEY", "legacy")
    monkeypatch.setenv("GEMINI_API_KEY", "preferred")

    assert load_config().gemini.api_key == "preferred"


@pytest.mark.unit
def test_feature_and_logging_env_overrides(monkeypatch):
    monkeypatch.setenv("POLYGLOT_MAX_ATTACHMENT_BYTES", "2048")
    monkeypatch.setenv("POLYGLOT_LOG_LEVEL", "debug")
    monkeypatch.setenv("POLYGLOT_LOG_FORMAT", "JSON")
    monkeypatch.setenv("POLYGLOT_SPEECH_PROVIDER", "unsupported")

    cfg = load_config()

    assert cfg.attachments.max_bytes == 2048
    assert cfg.logging.level == "DEBUG"
    assert cfg.logging.format == "json"
    assert cfg.features.speech_provider == "unsupported"


@pytest.mark.unit
def test_invalid_enum_env_values_ignored(monkeypatch):
    monkeypatch.setenv("POLYGLOT_LOG_FORMAT", "xml")
    monkeypatch.setenv("POLYGLOT_SPEECH_PROVIDER", "azure")

    cfg = ServerConfig()
    _apply_env_overrides(cfg)

    assert cfg.logging.format == "detailed"
    assert cfg.features.speech_provider == "browser"


@pytest.mark.unit
def test_ini_overrides():
    """Every section should load from the INI file."""
    parser = configparser.ConfigParser()
    parser.read_dict(
        {
            "server": {"host": "localhost", "port": "8123"},
            "security": {"production": "yes", "cors_origins": "https://x.example"},
            "gemini": {"api_key": "k", "model": "gemini-pro", "timeout_seconds": "30"},
            "attachments": {"max_bytes": "4096"},
            "logging": {"level": "warning", "format": "simple"},
            "features": {"speech_provider": "unsupported"},
        }
    )

    cfg = ServerConfig()
    _load_from_ini(parser, cfg)

    assert cfg.server.host == "localhost"
    assert cfg.server.port == 8123
    assert cfg.security.production is True
    assert cfg.security.cors_origins == ["https://x.example"]
    assert cfg.gemini.api_key == "k"
    assert cfg.gemini.model == "gemini-pro"
    assert cfg.gemini.timeout_seconds == 30.0
    assert cfg.attachments.max_bytes == 4096
    assert cfg.logging.level == "WARNING"
    assert cfg.logging.format == "simple"
    assert cfg.features.speech_provider == "unsupported"


@pytest.mark.unit
def test_env_beats_ini(monkeypatch):
    parser = configparser.ConfigParser()
    parser.read_dict({"gemini": {"model": "from-ini"}})
    monkeypatch.setenv("POLYGLOT_GEMINI_MODEL", "from-env")

    cfg = ServerConfig()
    _load_from_ini(parser, cfg)
    _apply_env_overrides(cfg)

    assert cfg.gemini.model == "from-env"


@pytest.mark.unit
@pytest.mark.parametrize("docs_enabled,production,expected", [
    ("enabled", True, True),
    ("disabled", False, False),
    ("auto", False, True),
    ("auto", True, False),
])
def test_docs_should_be_enabled(docs_enabled, production, expected):
    cfg = ServerConfig()
    cfg.security.docs_enabled = docs_enabled
    cfg.security.production = production

    assert cfg.docs_should_be_enabled is expected


@pytest.mark.unit
def test_parse_helpers():
    assert _parse_bool("On") is True
    assert _parse_bool("nope") is False
    assert _parse_list(" a, ,b ") == ["a", "b"]
    assert _parse_list("") == []


@pytest.mark.unit
def test_config_status_never_exposes_key():
    status = get_config_status()

    assert "gemini_api_key_set" in status
    assert not any("secret" in str(value) for value in status.values())
    assert "api_key" not in status


@pytest.mark.unit
def test_print_config_summary_includes_model_line(capsys):
    """Config summary should include the model diagnostics lines."""
    print_config_summary()
    output = capsys.readouterr().out
    assert "Model:" in output
    assert "API key set:" in output
