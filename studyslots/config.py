"""
Configuration management using Pydantic models loaded from YAML.
"""

from pathlib import Path
from typing import Any, Optional

import yaml
from pydantic import BaseModel, Field, field_validator, model_validator

from .domain.clock import parse_clock_time, to_minutes, to_time
from .domain.models import DayWindow, SlotMode
from .domain.slot_calculator import MIN_GAP_MINUTES, SlotCalculator


class DayDefaults(BaseModel):
    """Default day window and gap threshold."""
    day_start: str = "06:00"
    day_end: str = "23:00"
    min_gap_minutes: int = MIN_GAP_MINUTES

    @field_validator("day_start", "day_end", mode="before")
    @classmethod
    def validate_clock_time(cls, value: Any) -> str:
        """Accept HH:MM strings (and YAML's base-60 integers for unquoted times)."""
        if isinstance(value, int) and not isinstance(value, bool):
            value = to_time(value)
        return parse_clock_time(value)

    @field_validator("min_gap_minutes")
    @classmethod
    def validate_min_gap(cls, value: int) -> int:
        """Ensure the gap threshold is positive."""
        if value <= 0:
            raise ValueError("min_gap_minutes must be greater than zero")
        return value

    @model_validator(mode="after")
    def validate_window_order(self) -> "DayDefaults":
        """Ensure the configured day opens before it closes."""
        if to_minutes(self.day_end) <= to_minutes(self.day_start):
            raise ValueError("day_end must be later than day_start")
        return self

    def get_window(self) -> DayWindow:
        return DayWindow(day_start=self.day_start, day_end=self.day_end)


class AppConfig(BaseModel):
    """Application configuration."""
    defaults: DayDefaults = Field(default_factory=DayDefaults)
    timezone: str = "Europe/Berlin"
    strict: bool = False
    timetable_path: Optional[Path] = None
    tasks_path: Optional[Path] = None

    @property
    def mode(self) -> SlotMode:
        return SlotMode.STRICT if self.strict else SlotMode.LENIENT

    def build_calculator(self) -> SlotCalculator:
        """Create a slot calculator for the configured window, threshold and mode."""
        return SlotCalculator(
            window=self.defaults.get_window(),
            min_gap_minutes=self.defaults.min_gap_minutes,
            mode=self.mode,
        )

    def with_overrides(
        self,
        *,
        day_start: Optional[str] = None,
        day_end: Optional[str] = None,
        min_gap_minutes: Optional[int] = None,
        strict: bool = False,
    ) -> "AppConfig":
        """
        Return a copy with command-line overrides applied on top of the file values.

        The merged defaults are validated like a config file, so an inverted window
        or an out-of-range time is rejected.

        Raises:
            pydantic.ValidationError: If the merged defaults are invalid
        """
        defaults = DayDefaults(
            day_start=day_start if day_start is not None else self.defaults.day_start,
            day_end=day_end if day_end is not None else self.defaults.day_end,
            min_gap_minutes=min_gap_minutes if min_gap_minutes is not None else self.defaults.min_gap_minutes,
        )
        return self.model_copy(update={"defaults": defaults, "strict": self.strict or strict})

    @classmethod
    def load_from_yaml(cls, config_path: Path) -> "AppConfig":
        """
        Load configuration from YAML file.

        Args:
            config_path: Path to the YAML config file

        Returns:
            AppConfig instance

        Raises:
            FileNotFoundError: If config file doesn't exist
            ValueError: If config is invalid
        """
        if not config_path.exists():
            raise FileNotFoundError(
                f"Config file not found: {config_path}\n"
                f"Please create a config.yaml file. See config.example.yaml for reference."
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
    # Look for config.yaml in current directory
    current_dir = Path.cwd()
    config_path = current_dir / "config.yaml"

    if not config_path.exists():
        # Try in the project root (parent of the package)
        project_root = Path(__file__).parent.parent
        config_path = project_root / "config.yaml"

    return config_path
