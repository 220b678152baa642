"""Configuration loader for the chunk reassembler."""

import os
from pathlib import Path
from typing import Literal

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, field_validator


class AppInfo(BaseModel):
    """Application metadata."""

    name: str = "Unity Chunk Reassembler"
    version: str = "1.0.0"


class ReassemblyConfig(BaseModel):
    """Chunk discovery and reassembly configuration."""

    extensions: list[str] = Field(default_factory=lambda: [".data", ".wasm"])
    match_scope: Literal["path", "name"] = "path"
    temp_suffix: str = ".tmp"
    verify_checksum: bool = False


class VerificationConfig(BaseModel):
    """Advisory structure check configuration."""

    enabled: bool = True
    min_categories: int = 3
    entry_point: str = "index.html"
    patterns: dict[str, str] = Field(
        default_factory=lambda: {
            "data": "*.data",
            "wasm": "*.wasm",
            "framework": "*.framework.js",
            "loader": "*.loader.js",
        }
    )


LOG_LEVELS: tuple[str, ...] = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class LoggingConfig(BaseModel):
    """Logging configuration."""

    model_config = ConfigDict(validate_assignment=True)

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    format: str = "%(asctime)s %(levelname)s %(name)s: %(message)s"

    @field_validator("level", mode="before")
    @classmethod
    def normalize_level(cls, value: object) -> object:
        return value.upper() if isinstance(value, str) else value


class AppConfig(BaseModel):
    """Root application configuration."""

    app: AppInfo = Field(default_factory=AppInfo)
    reassembly: ReassemblyConfig = Field(default_factory=ReassemblyConfig)
    verification: VerificationConfig = Field(default_factory=VerificationConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    # CI step-output file, loaded from environment
    github_output: str | None = None


def load_config(config_path: str | Path = "config.yaml") -> AppConfig:
    """Load configuration from YAML file and environment variables.

    Args:
        config_path: Path to the YAML configuration file.

    Returns:
        Fully populated AppConfig instance.

    Raises:
        pydantic.ValidationError: If the YAML or environment holds invalid values.
    """
    load_dotenv()

    yaml_data: dict = {}
    config_file = Path(config_path)
    if config_file.exists():
        with open(config_file) as f:
            yaml_data = yaml.safe_load(f) or {}

    config = AppConfig(**yaml_data)

    config.github_output = os.getenv("GITHUB_OUTPUT") or None
    log_level = os.getenv("REASSEMBLER_LOG_LEVEL")
    if log_level:
        config.logging.level = log_level

    return config
