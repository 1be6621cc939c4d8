"""
PRT-7 Decoder Configuration
===========================

This module handles configuration loading for the decoder.

Configuration Sources (in order of precedence):
    1. Environment variables (highest priority)
    2. config.yaml file
    3. Default values (lowest priority)

Environment Variable Mapping:
    PRT7_SERIAL_PORT   -> serial.port
    PRT7_BAUDRATE      -> serial.baudrate
    PRT7_READ_TIMEOUT  -> serial.read_timeout_sec
    PRT7_STRICT_LOAD   -> decoder.strict_load
    PRT7_EOF_POLICY    -> decoder.eof_policy
    PRT7_LOG_LEVEL     -> logging.level

Example:
    from prt7_decoder.config import settings
    
    print(settings.serial.port)
    print(settings.decoder.eof_policy)
"""

import os
import logging
from pathlib import Path
from typing import Literal, Optional

import yaml
from pydantic import BaseModel, Field

from prt7_decoder.stream.line_source import MIN_LINE_BUFFER


logger = logging.getLogger(__name__)


# =============================================================================
# Configuration Models
# =============================================================================

class SerialConfig(BaseModel):
    """Serial link configuration."""
    
    port: str = Field(
        default="/dev/ttyUSB0",
        description="Serial device path (also shown as the prompt hint)",
    )
    baudrate: int = Field(default=9600, gt=0, description="Line speed in baud")
    read_timeout_sec: Optional[float] = Field(
        default=None,
        gt=0,
        description="Per-read timeout; a timed-out read ends the stream (None = block)",
    )
    settle_delay_sec: float = Field(
        default=0.1,
        ge=0,
        description="Delay after opening the port before reading",
    )
    flush_on_open: bool = Field(
        default=False,
        description="Discard bytes buffered before the session starts",
    )
    max_line_length: int = Field(
        default=100,
        ge=MIN_LINE_BUFFER,
        description="Line buffer size in bytes",
    )
    encoding: str = Field(default="latin-1", description="Line text encoding")


class DecoderConfig(BaseModel):
    """Frame interpreter configuration."""
    
    strict_load: bool = Field(
        default=True,
        description="Reject trailing characters after a load character",
    )
    eof_policy: Literal["flush", "error"] = Field(
        default="flush",
        description="End of stream before FIN: emit partial message or fail",
    )


class LoggingConfig(BaseModel):
    """Logging configuration."""
    
    level: str = Field(default="WARNING", description="Log level")
    format: str = Field(default="text", description="Log format: json or text")


class Settings(BaseModel):
    """
    Main settings class for the PRT-7 decoder.
    
    Loads configuration from YAML file and environment variables.
    Environment variables take precedence over file values.
    """
    
    serial: SerialConfig = Field(default_factory=SerialConfig)
    decoder: DecoderConfig = Field(default_factory=DecoderConfig)
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
    # Find config file
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
    
    # Load from YAML if exists
    config_data = {}
    if config_path and Path(config_path).exists():
        logger.info(f"Loading config from: {config_path}")
        with open(config_path, "r") as f:
            config_data = yaml.safe_load(f) or {}
    else:
        logger.debug("No config file found, using defaults and environment variables")
    
    _apply_env_overrides(config_data)
    
    return Settings.model_validate(config_data)


def _parse_bool(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes", "on")


def _apply_env_overrides(config_data: dict) -> None:
    """Apply environment variable overrides to config data."""
    
    # Serial settings
    if env_port := os.environ.get("PRT7_SERIAL_PORT"):
        config_data.setdefault("serial", {})["port"] = env_port
    if env_baud := os.environ.get("PRT7_BAUDRATE"):
        config_data.setdefault("serial", {})["baudrate"] = int(env_baud)
    if env_timeout := os.environ.get("PRT7_READ_TIMEOUT"):
        config_data.setdefault("serial", {})["read_timeout_sec"] = float(env_timeout)
    
    # Decoder settings
    if env_strict := os.environ.get("PRT7_STRICT_LOAD"):
        config_data.setdefault("decoder", {})["strict_load"] = _parse_bool(env_strict)
    if env_eof := os.environ.get("PRT7_EOF_POLICY"):
        config_data.setdefault("decoder", {})["eof_policy"] = env_eof
    
    # Logging settings
    if env_log := os.environ.get("PRT7_LOG_LEVEL"):
        config_data.setdefault("logging", {})["level"] = env_log


def setup_logging(settings: Settings) -> None:
    """Configure logging based on settings."""
    log_level = getattr(logging, settings.logging.level.upper(), logging.WARNING)
    
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
