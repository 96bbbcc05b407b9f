"""
Server configuration management.

This module handles loading and accessing server configuration from multiple sources
with a clear priority order:

    1. Environment variables (highest priority) - for containerized deployments
    2. Config file (config/server.ini) - for static deployments
    3. Built-in defaults (lowest priority) - sensible fallbacks

Configuration is loaded once at module import time and cached. The ServerConfig
dataclass provides typed access to all settings.

Usage:
    from polyglot_chat.config import config

    # Access settings
    print(config.server.host)
    print(config.gemini.model)
    print(config.is_production)

Environment Variable Mapping:
    POLYGLOT_HOST                 -> server.host
    POLYGLOT_PORT                 -> server.port
    POLYGLOT_PRODUCTION           -> security.production
    POLYGLOT_CORS_ORIGINS         -> security.cors_origins
    GEMINI_API_KEY (or API_KEY)   -> gemini.api_key
    POLYGLOT_GEMINI_MODEL         -> gemini.model
    POLYGLOT_GEMINI_TIMEOUT       -> gemini.timeout_seconds
    POLYGLOT_MAX_ATTACHMENT_BYTES -> attachments.max_bytes
    POLYGLOT_LOG_LEVEL            -> logging.level
    POLYGLOT_LOG_FORMAT           -> logging.format
    POLYGLOT_SPEECH_PROVIDER      -> features.speech_provider
"""

import configparser
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Literal

# =============================================================================
# PATH CONFIGURATION
# =============================================================================

# Project root directory (contains src/, config/)
PROJECT_ROOT = Path(__file__).parent.parent.parent

# Config file paths
CONFIG_DIR = PROJECT_ROOT / "config"
CONFIG_FILE = CONFIG_DIR / "server.ini"
CONFIG_EXAMPLE = CONFIG_DIR / "server.example.ini"


# =============================================================================
# CONFIGURATION DATACLASSES
# =============================================================================


@dataclass
class ServerSettings:
    """Network server configuration."""

    host: str = "0.0.0.0"  # nosec B104 - intentional for server binding
    port: int = 8000


@dataclass
class SecuritySettings:
    """Security-related configuration."""

    production: bool = False
    cors_origins: list[str] = field(default_factory=lambda: ["*"])
    cors_allow_credentials: bool = True
    cors_allow_methods: list[str] = field(default_factory=lambda: ["*"])
    cors_allow_headers: list[str] = field(default_factory=lambda: ["*"])
    docs_enabled: Literal["auto", "enabled", "disabled"] = "auto"


@dataclass
class GeminiSettings:
    """Remote model configuration."""

    api_key: str = ""
    model: str = "gemini-3-flash-preview"
    timeout_seconds: float = 60.0

    @property
    def has_api_key(self) -> bool:
        """True when an API key has been configured from any source."""
        return bool(self.api_key.strip())


@dataclass
class AttachmentSettings:
    """Limits applied when ingesting user-selected files."""

    max_bytes: int = 10 * 1024 * 1024


@dataclass
class FeatureSettings:
    """Feature flags."""

    speech_provider: Literal["browser", "unsupported"] = "browser"


@dataclass
class LoggingSettings:
    """Logging configuration."""

    level: str = "INFO"
    format: Literal["simple", "detailed", "json"] = "detailed"


@dataclass
class ServerConfig:
    """
    Complete server configuration.

    This is the main configuration object that aggregates all settings sections.
    Access via the module-level `config` singleton.
    """

    server: ServerSettings = field(default_factory=ServerSettings)
    security: SecuritySettings = field(default_factory=SecuritySettings)
    gemini: GeminiSettings = field(default_factory=GeminiSettings)
    attachments: AttachmentSettings = field(default_factory=AttachmentSettings)
    logging: LoggingSettings = field(default_factory=LoggingSettings)
    features: FeatureSettings = field(default_factory=FeatureSettings)

    @property
    def is_production(self) -> bool:
        """Convenience property for production mode check."""
        return self.security.production

    @property
    def docs_should_be_enabled(self) -> bool:
        """Determine if API docs should be enabled based on settings."""
        if self.security.docs_enabled == "enabled":
            return True
        if self.security.docs_enabled == "disabled":
            return False
        # "auto" - follow production setting
        return not self.is_production


# =============================================================================
# CONFIGURATION LOADING
# =============================================================================


def _parse_bool(value: str) -> bool:
    """Parse a string value to boolean."""
    return value.lower() in ("true", "yes", "1", "on", "enabled")


def _parse_list(value: str) -> list[str]:
    """Parse a comma-separated string to list, stripping whitespace."""
    if not value or value.strip() == "":
        return []
    return [item.strip() for item in value.split(",") if item.strip()]


def _load_from_ini(parser: configparser.ConfigParser, cfg: ServerConfig) -> None:
    """Load configuration from parsed INI file into ServerConfig."""
    # Server section
    if parser.has_section("server"):
        if parser.has_option("server", "host"):
            cfg.server.host = parser.get("server", "host")
        if parser.has_option("server", "port"):
            cfg.server.port = parser.getint("server", "port")

    # Security section
    if parser.has_section("security"):
        if parser.has_option("security", "production"):
            cfg.security.production = _parse_bool(parser.get("security", "production"))
        if parser.has_option("security", "cors_origins"):
            cfg.security.cors_origins = _parse_list(parser.get("security", "cors_origins"))
        if parser.has_option("security", "cors_allow_credentials"):
            cfg.security.cors_allow_credentials = _parse_bool(
                parser.get("security", "cors_allow_credentials")
            )
        if parser.has_option("security", "cors_allow_methods"):
            cfg.security.cors_allow_methods = _parse_list(
                parser.get("security", "cors_allow_methods")
            )
        if parser.has_option("security", "cors_allow_headers"):
            cfg.security.cors_allow_headers = _parse_list(
                parser.get("security", "cors_allow_headers")
            )
        if parser.has_option("security", "docs_enabled"):
            val = parser.get("security", "docs_enabled").lower()
            if val in ("auto", "enabled", "disabled"):
                cfg.security.docs_enabled = val  # type: ignore[assignment]

    # Gemini section
    if parser.has_section("gemini"):
        if parser.has_option("gemini", "api_key"):
            cfg.gemini.api_key = parser.get("gemini", "api_key").strip()
        if parser.has_option("gemini", "model"):
            cfg.gemini.model = parser.get("gemini", "model").strip()
        if parser.has_option("gemini", "timeout_seconds"):
            cfg.gemini.timeout_seconds = parser.getfloat("gemini", "timeout_seconds")

    # Attachments section
    if parser.has_section("attachments"):
        if parser.has_option("attachments", "max_bytes"):
            cfg.attachments.max_bytes = parser.getint("attachments", "max_bytes")

    # Logging section
    if parser.has_section("logging"):
        if parser.has_option("logging", "level"):
            cfg.logging.level = parser.get("logging", "level").upper()
        if parser.has_option("logging", "format"):
            val = parser.get("logging", "format").lower()
            if val in ("simple", "detailed", "json"):
                cfg.logging.format = val  # type: ignore[assignment]

    # Features section
    if parser.has_section("features"):
        if parser.has_option("features", "speech_provider"):
            val = parser.get("features", "speech_provider").lower()
            if val in ("browser", "unsupported"):
                cfg.features.speech_provider = val  # type: ignore[assignment]


def _apply_env_overrides(cfg: ServerConfig) -> None:
    """Apply environment variable overrides to configuration."""
    # Server settings
    if env_host := os.getenv("POLYGLOT_HOST"):
        cfg.server.host = env_host
    if env_port := os.getenv("POLYGLOT_PORT"):
        cfg.server.port = int(env_port)

    # Security settings
    if env_production := os.getenv("POLYGLOT_PRODUCTION"):
        cfg.security.production = _parse_bool(env_production)
    if env_cors := os.getenv("POLYGLOT_CORS_ORIGINS"):
        cfg.security.cors_origins = _parse_list(env_cors)

    # Gemini settings.  GEMINI_API_KEY wins; API_KEY is the name the
    # browser build of the app used, so it is still honoured.
    if env_key := (os.getenv("GEMINI_API_KEY") or os.getenv("API_KEY")):
        cfg.gemini.api_key = env_key.strip()
    if env_model := os.getenv("POLYGLOT_GEMINI_MODEL"):
        cfg.gemini.model = env_model
    if env_timeout := os.getenv("POLYGLOT_GEMINI_TIMEOUT"):
        cfg.gemini.timeout_seconds = float(env_timeout)

    # Attachment settings
    if env_max_bytes := os.getenv("POLYGLOT_MAX_ATTACHMENT_BYTES"):
        cfg.attachments.max_bytes = int(env_max_bytes)

    # Logging settings
    if env_log := os.getenv("POLYGLOT_LOG_LEVEL"):
        cfg.logging.level = env_log.upper()
    if env_log_format := os.getenv("POLYGLOT_LOG_FORMAT"):
        if env_log_format.lower() in ("simple", "detailed", "json"):
            cfg.logging.format = env_log_format.lower()  # type: ignore[assignment]

    # Feature settings
    if env_speech := os.getenv("POLYGLOT_SPEECH_PROVIDER"):
        if env_speech.lower() in ("browser", "unsupported"):
            cfg.features.speech_provider = env_speech.lower()  # type: ignore[assignment]


def load_config() -> ServerConfig:
    """
    Load configuration from all sources with proper priority.

    Priority (highest wins):
        1. Environment variables
        2. config/server.ini
        3. config/server.example.ini (fallback for development)
        4. Built-in defaults

    Returns:
        ServerConfig: Fully populated configuration object.
    """
    cfg = ServerConfig()

    # Determine which config file to use
    config_file = None
    if CONFIG_FILE.exists():
        config_file = CONFIG_FILE
    elif CONFIG_EXAMPLE.exists():
        # Use example as fallback for development
        config_file = CONFIG_EXAMPLE

    # Load from INI file if available
    if config_file:
        parser = configparser.ConfigParser()
        parser.read(config_file)
        _load_from_ini(parser, cfg)

    # Apply environment variable overrides (highest priority)
    _apply_env_overrides(cfg)

    return cfg


def reload_config() -> "ServerConfig":
    """
    Reload configuration from disk and environment.

    This updates the module-level `config` singleton. Use sparingly as it
    doesn't update an already-built application or its translation service.

    Returns:
        ServerConfig: The newly loaded configuration.
    """
    global config
    config = load_config()
    return config


# =============================================================================
# MODULE-LEVEL SINGLETON
# =============================================================================

# Load configuration once at module import time
config = load_config()


# =============================================================================
# UTILITY FUNCTIONS
# =============================================================================


def get_config_status() -> dict:
    """
    Get configuration status for diagnostics.

    Returns a dictionary with configuration source information. The API key
    itself is never included, only whether one is present.
    """
    return {
        "config_file_exists": CONFIG_FILE.exists(),
        "config_file_path": str(CONFIG_FILE),
        "using_example": not CONFIG_FILE.exists() and CONFIG_EXAMPLE.exists(),
        "production_mode": config.is_production,
        "cors_origins_count": len(config.security.cors_origins),
        "docs_enabled": config.docs_should_be_enabled,
        "gemini_model": config.gemini.model,
        "gemini_api_key_set": config.gemini.has_api_key,
    }


def print_config_summary() -> None:
    """Print a summary of current configuration to stdout."""
    status = get_config_status()
    print("\n" + "=" * 60)
    print("SERVER CONFIGURATION")
    print("=" * 60)
    print(f"Config file: {status['config_file_path']}")
    print(f"File exists: {status['config_file_exists']}")
    if status["using_example"]:
        print("WARNING: Using example config (copy to server.ini for production)")
    print("-" * 60)
    print(f"Server:       {config.server.host}:{config.server.port}")
    print(f"Production:   {config.is_production}")
    print(f"CORS origins: {config.security.cors_origins}")
    print(f"Docs enabled: {config.docs_should_be_enabled}")
    print(f"Model:        {config.gemini.model}")
    print(f"API key set:  {status['gemini_api_key_set']}")
    print(f"Timeout:      {config.gemini.timeout_seconds:.1f}s")
    print(f"Max upload:   {config.attachments.max_bytes} bytes")
    print(f"Log level:    {config.logging.level}")
    print("=" * 60 + "\n")
