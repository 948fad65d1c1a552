"""12-factor configuration adapter using environment variables and TOML config."""

from pathlib import Path
from typing import Any

try:
    import tomllib  # Python 3.11+
except ImportError:
    import tomli as tomllib  # type: ignore[no-redef]  # Fallback for older Python

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# TOML section -> fields it may override
_TOML_SECTIONS: dict[str, tuple[str, ...]] = {
    "registry": ("bus_api_base_url", "bus_api_min_delay_ms", "api_timeout_seconds"),
    "planner": ("tmap_transit_url", "planner_result_count", "accepted_path_types"),
    "watchers": ("poll_interval_seconds", "boarding_delay_seconds"),
}


class AppConfig(BaseSettings):
    """Application configuration following 12-factor principles."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        validate_assignment=True,
    )

    # Bus registry (Seoul bus information service)
    bus_api_keys: str = Field(
        default="",
        description="Comma separated service keys for the bus registry; requests rotate through them",
    )
    bus_api_base_url: str = Field(
        default="http://ws.bus.go.kr/api/rest", description="Base URL of the bus registry API"
    )
    bus_api_min_delay_ms: int = Field(
        default=0,
        description="Minimum delay in milliseconds between two bus registry requests",
    )

    # Itinerary planner (TMap transit)
    tmap_app_key: str = Field(default="", description="App key for the TMap transit API")
    tmap_transit_url: str = Field(
        default="https://apis.openapi.sk.com/transit/routes",
        description="TMap transit route search endpoint",
    )
    planner_result_count: int = Field(
        default=10, description="Maximum number of itineraries requested from the planner"
    )
    accepted_path_types: list[int] = Field(
        default_factory=lambda: [2],
        description="Planner path types kept for tracking (2 = bus only)",
    )

    api_timeout_seconds: int = Field(
        default=10, description="Timeout for upstream API requests in seconds"
    )

    # Watchers
    poll_interval_seconds: float = Field(
        default=15, description="Interval between live arrival/position polls in seconds"
    )
    boarding_delay_seconds: float = Field(
        default=8, description="Pause after boarding is detected before asking for the alighting stop"
    )

    log_level: str = Field(default="INFO", description="Root log level")

    config_file: str | None = Field(
        default=None,
        description="Optional TOML file with [registry], [planner] and [watchers] overrides",
    )

    @classmethod
    def for_testing(cls, **overrides: Any) -> "AppConfig":
        """Build a config that ignores any local .env file."""
        return cls(_env_file=None, **overrides)

    @field_validator("poll_interval_seconds", "api_timeout_seconds", "planner_result_count")
    @classmethod
    def validate_positive(cls, v: float) -> float:
        """Validate that intervals and counts are positive."""
        if v <= 0:
            raise ValueError("value must be positive")
        return v

    @field_validator("boarding_delay_seconds", "bus_api_min_delay_ms")
    @classmethod
    def validate_not_negative(cls, v: float) -> float:
        """Validate that delays are not negative."""
        if v < 0:
            raise ValueError("value must not be negative")
        return v

    @field_validator("accepted_path_types")
    @classmethod
    def validate_path_types(cls, v: list[int]) -> list[int]:
        """Validate that at least one planner path type is accepted."""
        if not v:
            raise ValueError("accepted_path_types must not be empty")
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate the log level name."""
        level = v.upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError("log_level must be one of DEBUG, INFO, WARNING, ERROR, CRITICAL")
        return level

    def get_bus_api_keys(self) -> list[str]:
        """Return the configured bus registry keys, blanks removed."""
        return [key.strip() for key in self.bus_api_keys.split(",") if key.strip()]

    def load_toml_overrides(self) -> dict[str, Any]:
        """Apply overrides from ``config_file`` and return the parsed TOML data.

        Raises:
            FileNotFoundError: If ``config_file`` is set but does not exist.
            ValueError: If a section is not a table.
        """
        if not self.config_file:
            return {}

        config_path = Path(self.config_file)
        if not config_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {config_path}")

        with open(config_path, "rb") as f:
            toml_data = tomllib.load(f)

        for section, fields in _TOML_SECTIONS.items():
            values = toml_data.get(section, {})
            if not isinstance(values, dict):
                raise ValueError(f"TOML config '{section}' must be a table")
            for name in fields:
                if name in values:
                    setattr(self, name, values[name])

        return toml_data
