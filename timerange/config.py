"""
Configuration management using Pydantic models loaded from YAML.
"""

from pathlib import Path
from typing import Optional

import yaml
from pydantic import BaseModel, Field, field_validator

from .domain.exceptions import TimerangeError
from .domain.timezones import TimezoneGuesser, guess_timezone, validate_timezone
from .domain.units import normalize_unit

CONFIG_FILE_NAME = "timerange.yaml"


class SplitDefaults(BaseModel):
    """Default settings for splitting a range."""
    step_size: int = 30
    step_unit: str = "minute"
    stride_size: Optional[int] = None
    stride_unit: Optional[str] = None
    drop_short_tail: bool = False

    @field_validator("step_size", "stride_size")
    @classmethod
    def validate_size(cls, value: Optional[int]) -> Optional[int]:
        """Ensure sizes are positive."""
        if value is not None and value <= 0:
            raise ValueError(f"Size must be greater than zero, got {value}")
        return value

    @field_validator("step_unit", "stride_unit")
    @classmethod
    def validate_unit(cls, value: Optional[str]) -> Optional[str]:
        """Ensure units are understood by the splitter."""
        if value is None:
            return value
        try:
            normalize_unit(value)
        except TimerangeError as exc:
            raise ValueError(str(exc)) from exc
        return value


class TimerangeConfig(BaseModel):
    """Application configuration."""
    timezone: Optional[str] = None  # None: guess the host timezone
    split: SplitDefaults = Field(default_factory=SplitDefaults)

    @field_validator("timezone")
    @classmethod
    def validate_timezone_name(cls, value: Optional[str]) -> Optional[str]:
        """Ensure the timezone is known to pendulum."""
        if value is None:
            return value
        try:
            return validate_timezone(value)
        except TimerangeError as exc:
            raise ValueError(str(exc)) from exc

    def resolve_timezone(self, guesser: TimezoneGuesser = guess_timezone) -> str:
        """Return the configured timezone, or the guessed one if none is set."""
        return self.timezone or guesser()

    @classmethod
    def load_from_yaml(cls, config_path: Path) -> "TimerangeConfig":
        """
        Load configuration from YAML file.

        Args:
            config_path: Path to the YAML config file

        Returns:
            TimerangeConfig instance

        Raises:
            FileNotFoundError: If config file doesn't exist
            ValueError: If config is invalid
        """
        if not config_path.exists():
            raise FileNotFoundError(
                f"Config file not found: {config_path}\n"
                f"Please create a {CONFIG_FILE_NAME} file or drop the --config option."
            )

        try:
            with open(config_path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as exc:
            raise ValueError(f"Invalid YAML in {config_path}: {exc}") from exc

        if not isinstance(data, dict):
            raise ValueError("Config file must contain a mapping at the root level.")

        return cls(**data)


def get_default_config_path() -> Path:
    """Get the default configuration file path."""
    # Look for the config in the current directory
    config_path = Path.cwd() / CONFIG_FILE_NAME

    if not config_path.exists():
        # Try in the project root (parent of the package)
        project_root = Path(__file__).parent.parent
        config_path = project_root / CONFIG_FILE_NAME

    return config_path


def load_config(config_path: Optional[Path] = None) -> TimerangeConfig:
    """
    Load an explicit config file, or the default one if it exists.

    Without an explicit path and without a default file, built-in defaults
    are used.
    """
    if config_path is not None:
        return TimerangeConfig.load_from_yaml(config_path)

    default_path = get_default_config_path()
    if default_path.exists():
        return TimerangeConfig.load_from_yaml(default_path)

    return TimerangeConfig()
