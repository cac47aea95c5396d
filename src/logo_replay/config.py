"""
Logo Replay Configuration
=========================

This module handles configuration loading for the logo history viewer.

Configuration Sources (in order of precedence):
    1. Environment variables (highest priority)
    2. config.yaml file
    3. Default values (lowest priority)

Environment Variable Mapping:
    LOGO_REPLAY_HISTORY_URL               -> history.base_url
    LOGO_REPLAY_HISTORY_TIMEOUT           -> history.timeout_seconds
    LOGO_REPLAY_ADVANCE_INTERVAL_MS       -> playback.advance_interval_ms
    LOGO_REPLAY_REFRESH_INTERVAL_SECONDS  -> playback.refresh_interval_seconds
    LOGO_REPLAY_START_URL                 -> viewer.start_url
    LOGO_REPLAY_IMAGE_WIDTH               -> viewer.image_width
    LOGO_REPLAY_PORT                      -> server.port
    LOGO_REPLAY_LOG_LEVEL                 -> logging.level
    PORT                                  -> server.port (container platforms)

Example:
    from logo_replay.config import settings

    print(settings.history.url)
    print(settings.playback.advance_interval_ms)
"""

import os
import logging
from pathlib import Path
from typing import Optional

import yaml
from pydantic import BaseModel, Field


logger = logging.getLogger(__name__)


# =============================================================================
# Configuration Models
# =============================================================================

class AppConfig(BaseModel):
    """Application identification configuration."""

    name: str = Field(default="logo-replay", description="Service name")
    version: str = Field(default="v0.1.0", description="Service version")


class HistoryApiConfig(BaseModel):
    """Remote history service configuration."""

    base_url: str = Field(
        default="http://localhost:3000",
        description="Base URL of the history service",
    )
    path: str = Field(
        default="/api/v1/history",
        description="Fixed path of the history endpoint",
    )
    timeout_seconds: float = Field(
        default=10.0,
        gt=0,
        description="Per-request timeout for history fetches",
    )

    @property
    def url(self) -> str:
        """Full URL of the history endpoint."""
        return self.base_url.rstrip("/") + self.path


class PlaybackConfig(BaseModel):
    """Playback timer configuration."""

    advance_interval_ms: int = Field(
        default=50,
        ge=1,
        description="Cursor advance period while playing (milliseconds)",
    )
    refresh_interval_seconds: float = Field(
        default=300.0,
        gt=0,
        description="History re-fetch period, independent of play state",
    )


class ViewerConfig(BaseModel):
    """Rendered surface configuration."""

    start_url: str = Field(
        default="",
        description="Viewer URL whose query string holds the startup flags",
    )
    image_width: int = Field(
        default=500,
        ge=1,
        description="Fixed display width of the logo image in pixels",
    )


class ServerConfig(BaseModel):
    """Server configuration."""

    host: str = Field(default="0.0.0.0", description="Bind host")
    port: int = Field(default=8080, ge=1, le=65535, description="Bind port")


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = Field(default="INFO", description="Log level")
    format: str = Field(default="text", description="Log format: json or text")


class Settings(BaseModel):
    """
    Main settings class for the logo history viewer.

    Loads configuration from YAML file and environment variables.
    Environment variables take precedence over file values.
    """

    app: AppConfig = Field(default_factory=AppConfig)
    history: HistoryApiConfig = Field(default_factory=HistoryApiConfig)
    playback: PlaybackConfig = Field(default_factory=PlaybackConfig)
    viewer: ViewerConfig = Field(default_factory=ViewerConfig)
    server: ServerConfig = Field(default_factory=ServerConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


# =============================================================================
# Configuration Loading
# =============================================================================

def load_config(config_path: Optional[str] = None) -> Settings:
    """
    Load configuration from YAML file and environment variables.

    Priority (highest to lowest):
        1. Environment variables
        2. YAML config file
        3. Default values

    Args:
        config_path: Path to config.yaml. If None, searches common locations.

    Returns:
        Settings: Loaded configuration
    """
    if config_path is None:
        search_paths = [
            Path("config.yaml"),
            Path("config.yml"),
            Path(__file__).parent.parent.parent / "config.yaml",
        ]
        for path in search_paths:
            if path.exists():
                config_path = str(path)
                break

    config_data = {}
    if config_path and Path(config_path).exists():
        logger.info(f"Loading config from: {config_path}")
        with open(config_path, "r") as f:
            config_data = yaml.safe_load(f) or {}
    else:
        logger.debug("No config file found, using defaults and environment variables")

    _apply_env_overrides(config_data)

    return Settings.model_validate(config_data)


def _apply_env_overrides(config_data: dict) -> None:
    """Apply environment variable overrides to config data."""

    # History service
    if env_url := os.environ.get("LOGO_REPLAY_HISTORY_URL"):
        config_data.setdefault("history", {})["base_url"] = env_url
    if env_timeout := os.environ.get("LOGO_REPLAY_HISTORY_TIMEOUT"):
        config_data.setdefault("history", {})["timeout_seconds"] = float(env_timeout)

    # Playback timers
    if env_advance := os.environ.get("LOGO_REPLAY_ADVANCE_INTERVAL_MS"):
        config_data.setdefault("playback", {})["advance_interval_ms"] = int(env_advance)
    if env_refresh := os.environ.get("LOGO_REPLAY_REFRESH_INTERVAL_SECONDS"):
        config_data.setdefault("playback", {})["refresh_interval_seconds"] = float(env_refresh)

    # Viewer
    if env_start := os.environ.get("LOGO_REPLAY_START_URL"):
        config_data.setdefault("viewer", {})["start_url"] = env_start
    if env_width := os.environ.get("LOGO_REPLAY_IMAGE_WIDTH"):
        config_data.setdefault("viewer", {})["image_width"] = int(env_width)

    # Server settings (container platforms use PORT)
    if env_port := os.environ.get("PORT"):
        config_data.setdefault("server", {})["port"] = int(env_port)
    elif env_port := os.environ.get("LOGO_REPLAY_PORT"):
        config_data.setdefault("server", {})["port"] = int(env_port)

    # Logging settings
    if env_log := os.environ.get("LOGO_REPLAY_LOG_LEVEL"):
        config_data.setdefault("logging", {})["level"] = env_log


def setup_logging(settings: Settings) -> None:
    """Configure logging based on settings."""
    log_level = getattr(logging, settings.logging.level.upper(), logging.INFO)

    if settings.logging.format == "json":
        log_format = '{"time": "%(asctime)s", "level": "%(levelname)s", "module": "%(name)s", "message": "%(message)s"}'
    else:
        log_format = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    logging.basicConfig(
        level=log_level,
        format=log_format,
        datefmt="%Y-%m-%dT%H:%M:%S",
    )


# =============================================================================
# Global Settings Instance
# =============================================================================

# Global settings instance - loaded on import
settings = load_config()
setup_logging(settings)
