"""
Centralized Configuration Module

Provides configuration classes and environment variable loading for all components.

Usage:
    from canhousing.config import get_config

    config = get_config()
    csv_path = config.dataset.path
    api_port = config.api.port
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Tuple

from dotenv import load_dotenv

from canhousing.exceptions import ConfigurationError

# Load .env file if present
load_dotenv()


def _get_project_root() -> Path:
    """Get the project root directory."""
    # config.py -> canhousing -> src -> project_root
    current = Path(__file__).resolve()
    return current.parent.parent.parent


def _split_list(value: str) -> List[str]:
    return [item.strip() for item in value.split(",") if item.strip()]


def _env_number(name: str, default: str, kind=int):
    """Read a numeric environment variable.

    Raises:
        ConfigurationError: If the value is not a valid number.
    """
    raw = os.getenv(name, default)
    try:
        return kind(raw)
    except ValueError:
        raise ConfigurationError(f"{name} must be a number, got {raw!r}")


@dataclass
class DatasetConfig:
    """Listings file configuration."""

    path: str = field(default_factory=lambda: os.getenv(
        "CANHOUSING_DATA_PATH",
        str(_get_project_root() / "data" / "HouseListings.csv")
    ))
    encoding: str = field(default_factory=lambda: os.getenv(
        "CANHOUSING_DATA_ENCODING", "latin1"
    ))
    income_seed: int = field(default_factory=lambda: _env_number("CANHOUSING_INCOME_SEED", "42"))
    income_low: float = 40_000.0
    income_high: float = 120_000.0

    def __post_init__(self):
        # Resolve relative paths
        if not os.path.isabs(self.path):
            self.path = str(_get_project_root() / self.path)


@dataclass
class DashboardConfig:
    """Initial filter state for new dashboard sessions."""

    provinces: List[str] = field(default_factory=lambda: _split_list(os.getenv(
        "CANHOUSING_DEFAULT_PROVINCES", "Ontario"
    )))
    price_min: float = field(default_factory=lambda: _env_number(
        "CANHOUSING_DEFAULT_PRICE_MIN", "200000", float
    ))
    price_max: float = field(default_factory=lambda: _env_number(
        "CANHOUSING_DEFAULT_PRICE_MAX", "1000000", float
    ))
    min_beds: int = field(default_factory=lambda: _env_number("CANHOUSING_DEFAULT_MIN_BEDS", "3"))
    min_baths: int = field(default_factory=lambda: _env_number("CANHOUSING_DEFAULT_MIN_BATHS", "2"))
    comparison_cities: List[str] = field(default_factory=lambda: _split_list(os.getenv(
        "CANHOUSING_DEFAULT_COMPARISON", "Toronto,Vancouver"
    )))
    histogram_bin_width: float = 50_000.0

    def __post_init__(self):
        if self.price_min > self.price_max:
            self.price_min, self.price_max = self.price_max, self.price_min

    @property
    def price_range(self) -> Tuple[float, float]:
        return self.price_min, self.price_max


@dataclass
class APIConfig:
    """API server configuration."""

    host: str = field(default_factory=lambda: os.getenv(
        "CANHOUSING_API_HOST", "127.0.0.1"
    ))
    port: int = field(default_factory=lambda: _env_number("CANHOUSING_API_PORT", "5000"))
    debug: bool = field(default_factory=lambda: os.getenv(
        "CANHOUSING_DEBUG", "false"
    ).lower() in ("true", "1", "yes"))


@dataclass
class LoggingConfig:
    """Logging configuration."""

    level: str = field(default_factory=lambda: os.getenv(
        "CANHOUSING_LOG_LEVEL", "INFO"
    ).upper())
    log_file: Optional[str] = field(default_factory=lambda: os.getenv(
        "CANHOUSING_LOG_FILE"
    ))

    def __post_init__(self):
        # Validate log level
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if self.level not in valid_levels:
            self.level = "INFO"


@dataclass
class Config:
    """Main configuration container."""

    dataset: DatasetConfig = field(default_factory=DatasetConfig)
    dashboard: DashboardConfig = field(default_factory=DashboardConfig)
    api: APIConfig = field(default_factory=APIConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


# Singleton instance
_config: Optional[Config] = None


def get_config() -> Config:
    """Get the global configuration instance.

    Returns:
        Config: The application configuration.
    """
    global _config
    if _config is None:
        _config = Config()
    return _config


def reset_config() -> None:
    """Reset the configuration (useful for testing)."""
    global _config
    _config = None
