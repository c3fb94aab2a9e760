"""Configuration management for umlviz using Pydantic models."""

import json
from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator

CONFIG_FILE_NAME = ".umlviz.json"


class ImageFormat(str, Enum):
    """Image formats accepted by the Graphviz renderer."""
    PNG = "png"
    SVG = "svg"
    PDF = "pdf"
    JPG = "jpg"


class LogLevel(str, Enum):
    """Logging levels."""
    ERROR = "error"
    WARN = "warn"
    INFO = "info"
    DEBUG = "debug"


class OutputConfig(BaseModel):
    """Output configuration section."""
    dir: str = "output"
    format: ImageFormat = ImageFormat.PNG
    write_source: bool = Field(alias="writeSource", default=False)
    all_name: str = Field(alias="allName", default="all")

    @field_validator("all_name")
    @classmethod
    def validate_all_name(cls, v):
        if not v.strip():
            raise ValueError("all_name must not be empty")
        return v

    model_config = ConfigDict(use_enum_values=True, populate_by_name=True)

    @property
    def extension(self) -> str:
        """File extension for rendered images, including the dot."""
        return f".{ImageFormat(self.format).value}"


class RendererConfig(BaseModel):
    """Graphviz renderer configuration section."""
    command: str = "dot"
    timeout: float | None = None  # No timeout unless configured
    enabled: bool = True

    @field_validator("timeout")
    @classmethod
    def validate_timeout(cls, v):
        if v is not None and v <= 0:
            raise ValueError(f"timeout must be > 0 seconds, got: {v}")
        return v

    model_config = ConfigDict(populate_by_name=True)


class TemplateConfig(BaseModel):
    """Header/footer template overrides."""
    header: str | None = None
    footer: str | None = None


class LoggingConfig(BaseModel):
    """Logging configuration section."""
    level: LogLevel = LogLevel.INFO

    model_config = ConfigDict(use_enum_values=True)


class UmlvizConfig(BaseModel):
    """Complete umlviz configuration model."""
    output: OutputConfig = Field(default_factory=OutputConfig)
    renderer: RendererConfig = Field(default_factory=RendererConfig)
    templates: TemplateConfig = Field(default_factory=TemplateConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    model_config = ConfigDict(extra="forbid")


def load_config(config_path: str | Path | None = None) -> UmlvizConfig:
    """Load configuration from file with fallback to defaults.

    Args:
        config_path: Optional path to configuration file. If None, searches
                    current directory and parents for .umlviz.json

    Returns:
        UmlvizConfig: Loaded and validated configuration

    Raises:
        ValueError: If configuration is invalid
    """
    if config_path is None:
        config_path = find_config_file()
    else:
        config_path = Path(config_path)

    if config_path and config_path.exists():
        try:
            with open(config_path, encoding="utf-8") as f:
                config_data = json.load(f)
            return UmlvizConfig(**config_data)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON in config file {config_path}: {e}") from e
        except Exception as e:
            raise ValueError(f"Failed to load config from {config_path}: {e}") from e
    else:
        return create_default_config()


def find_config_file(start_dir: Path | None = None) -> Path | None:
    """Find .umlviz.json by searching up the directory tree.

    Args:
        start_dir: Directory to start search from (default: current directory)

    Returns:
        Path to config file if found, None otherwise
    """
    if start_dir is None:
        start_dir = Path.cwd()

    current = Path(start_dir).resolve()

    while True:
        config_file = current / CONFIG_FILE_NAME
        if config_file.exists():
            return config_file

        parent = current.parent
        if parent == current:  # Reached root directory
            break
        current = parent

    return None


def create_default_config() -> UmlvizConfig:
    """Create default configuration."""
    return UmlvizConfig()
