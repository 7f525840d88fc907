"""
Configuration loader for the trade analytics engine.

Loads settings from config.yaml and provides access throughout the application.
"""
import logging
from dataclasses import dataclass, field
from pathlib import Path

import yaml

from tradebook.core.models import Granularity


logger = logging.getLogger(__name__)

DEFAULT_LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
DEFAULT_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


@dataclass
class LoggingConfig:
    """Configuration for logging."""
    level: str = "INFO"
    format: str = DEFAULT_LOG_FORMAT
    date_format: str = DEFAULT_DATE_FORMAT


@dataclass
class ImportConfig:
    """Layout of the realized gains CSV export."""
    csv_column_count: int = 25
    csv_summary_rows: int = 2


@dataclass
class AnalysisConfig:
    """Settings for reconciliation and aggregation."""
    default_granularity: Granularity = Granularity.MONTHLY
    quantity_tolerance: float = 0.001


@dataclass
class Config:
    """Main configuration container."""
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    imports: ImportConfig = field(default_factory=ImportConfig)
    analysis: AnalysisConfig = field(default_factory=AnalysisConfig)

    @classmethod
    def default(cls) -> "Config":
        """Configuration with every setting at its default."""
        return cls()

    @classmethod
    def from_dict(cls, raw: dict) -> "Config":
        """Build a Config from parsed YAML. Missing sections keep their defaults."""
        raw = raw or {}
        analysis = dict(raw.get("analysis") or {})
        if "default_granularity" in analysis:
            analysis["default_granularity"] = Granularity(analysis["default_granularity"])

        return cls(
            logging=LoggingConfig(**(raw.get("logging") or {})),
            imports=ImportConfig(**(raw.get("imports") or {})),
            analysis=AnalysisConfig(**analysis),
        )

    @classmethod
    def from_yaml(cls, path: str | Path) -> "Config":
        """Load configuration from a YAML file."""
        path = Path(path)
        logger.debug(f"Loading configuration from {path}")

        with open(path, "r") as f:
            raw = yaml.safe_load(f)

        return cls.from_dict(raw)


def setup_logging(config: LoggingConfig) -> None:
    """Configure logging based on configuration."""
    logging.basicConfig(
        level=getattr(logging, config.level.upper()),
        format=config.format,
        datefmt=config.date_format,
    )
    logger.info("Logging configured successfully")


def load_config(path: str | Path = "config.yaml") -> Config:
    """
    Load configuration and set up logging.

    Falls back to defaults when the file does not exist.

    Args:
        path: Path to the YAML configuration file.

    Returns:
        Loaded Config object.
    """
    path = Path(path)
    if path.exists():
        config = Config.from_yaml(path)
    else:
        logger.warning(f"Config file not found: {path}, using defaults")
        config = Config.default()
    setup_logging(config.logging)
    return config
