"""
inverse-telecine Configuration
==============================

This module handles configuration loading for the cadence pipeline.

Configuration Sources (in order of precedence):
    1. Environment variables (highest priority)
    2. config.yaml file
    3. Default values (lowest priority)

Environment Variable Mapping:
    IVTC_CONFIG_PATH     -> path of the YAML file to load
    IVTC_DETECTOR_MODE   -> detector.mode
    IVTC_MAX_FRAME_RATE  -> pipeline.max_frame_rate
    IVTC_LOG_LEVEL       -> logging.level
    IVTC_LOG_FORMAT      -> logging.format

Example:
    from inverse_telecine.config import load_config, setup_logging

    settings = load_config("config.yaml")
    setup_logging(settings)
    print(settings.detector.mode)
    print(settings.pipeline.max_frame_rate)
"""

import os
import logging
from pathlib import Path
from typing import Optional

import yaml
from pydantic import BaseModel, Field

from inverse_telecine.models.decision import CadenceMode


logger = logging.getLogger(__name__)


# =============================================================================
# Configuration Models
# =============================================================================

class DetectorConfig(BaseModel):
    """Cadence detector selection and lock-on windows."""

    mode: CadenceMode = Field(
        default=CadenceMode.PULLDOWN_60P,
        description="Expected source cadence: '60p' or '30p'",
    )
    lock_on_sequences_60p: int = Field(
        default=2,
        ge=0,
        description="Runs the 60p detector completes before dropping frames",
    )
    lock_on_sequences_30p: int = Field(
        default=4,
        ge=0,
        description="Sequences the 30p detector completes before dropping frames",
    )

    @property
    def lock_on_sequences(self) -> int:
        """Lock-on window for the selected mode."""
        if self.mode is CadenceMode.PULLDOWN_30P:
            return self.lock_on_sequences_30p
        return self.lock_on_sequences_60p


class PipelineConfig(BaseModel):
    """Pipeline driver configuration."""

    max_frame_rate: int = Field(
        default=120,
        ge=0,
        description="Maximum delivered frames per second (0 = unlimited)",
    )
    row_alignment: int = Field(
        default=64,
        ge=1,
        description="Row stride alignment in bytes for converted NV12 frames",
    )


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = Field(default="INFO", description="Log level")
    format: str = Field(default="json", description="Log format: json or text")


class Settings(BaseModel):
    """
    Main settings class for inverse-telecine.

    Loads configuration from YAML file and environment variables.
    Environment variables take precedence over file values.
    """

    detector: DetectorConfig = Field(default_factory=DetectorConfig)
    pipeline: PipelineConfig = Field(default_factory=PipelineConfig)
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
        config_path: Path to config.yaml. If None, uses IVTC_CONFIG_PATH
            or searches common locations.

    Returns:
        Settings: Loaded configuration
    """
    if config_path is None:
        config_path = os.environ.get("IVTC_CONFIG_PATH")

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

    # Apply environment variable overrides
    _apply_env_overrides(config_data)

    return Settings.model_validate(config_data)


def _apply_env_overrides(config_data: dict) -> None:
    """Apply environment variable overrides to config data."""

    # Detector settings
    if env_mode := os.environ.get("IVTC_DETECTOR_MODE"):
        config_data.setdefault("detector", {})["mode"] = env_mode

    # Pipeline settings
    if env_rate := os.environ.get("IVTC_MAX_FRAME_RATE"):
        config_data.setdefault("pipeline", {})["max_frame_rate"] = int(env_rate)

    # Logging settings
    if env_log := os.environ.get("IVTC_LOG_LEVEL"):
        config_data.setdefault("logging", {})["level"] = env_log
    if env_format := os.environ.get("IVTC_LOG_FORMAT"):
        config_data.setdefault("logging", {})["format"] = env_format


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

