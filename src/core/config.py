"""
Engine Configuration Module for the PT Floor System Optimizer.

Handles runtime settings for the candidate searches: worker processes,
optional search budgets, the reference spans of the comparison table,
the project store location and the log level.

Usage:
    config = EngineConfig.from_env()
    results = compute_optimization(30, 30, costs, config=config)
"""

from dataclasses import dataclass, field
from typing import Optional, Tuple
import os
import logging

from dotenv import load_dotenv

from .constants import REFERENCE_SPANS

logger = logging.getLogger(__name__)

_LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


@dataclass
class EngineConfig:
    """Optimizer runtime configuration.

    Attributes:
        workers: Worker processes per search (1 = serial)
        max_evaluations: Optional cap on evaluated grid points per search
        time_limit: Optional wall-clock limit per search in seconds
        reference_spans: Spans (ft) of the comparison table
        store_dir: Directory of the JSON project store
        log_level: Logging level name for the entry points
    """

    workers: int = 1
    max_evaluations: Optional[int] = None
    time_limit: Optional[float] = None
    reference_spans: Tuple[float, ...] = field(default_factory=lambda: tuple(float(s) for s in REFERENCE_SPANS))
    store_dir: str = "projects"
    log_level: str = "INFO"

    def __post_init__(self):
        """Validate configuration after initialization."""
        if self.workers < 1:
            raise ValueError("Workers must be at least 1")

        if self.max_evaluations is not None and self.max_evaluations < 1:
            raise ValueError("Max evaluations must be positive")

        if self.time_limit is not None and self.time_limit <= 0:
            raise ValueError("Time limit must be positive")

        if not self.reference_spans:
            raise ValueError("At least one reference span is required")

        if any(span <= 0 for span in self.reference_spans):
            raise ValueError("Reference spans must be positive")

        self.log_level = self.log_level.upper()
        if self.log_level not in _LOG_LEVELS:
            raise ValueError(
                f"Invalid log level: {self.log_level}. Must be one of: {', '.join(_LOG_LEVELS)}"
            )

    @classmethod
    def from_env(cls, env_file: Optional[str] = None) -> "EngineConfig":
        """Load configuration from environment variables.

        Args:
            env_file: Optional path to a .env file

        Raises:
            ValueError: If a variable cannot be parsed
            FileNotFoundError: If env_file is specified but doesn't exist

        Environment Variables:
            PTOPT_WORKERS: Worker processes per search
            PTOPT_MAX_EVALUATIONS: Evaluation cap per search
            PTOPT_TIME_LIMIT: Wall-clock limit per search (seconds)
            PTOPT_REFERENCE_SPANS: Comma-separated spans in feet
            PTOPT_STORE_DIR: Project store directory
            PTOPT_LOG_LEVEL: Logging level
        """
        if env_file:
            if not load_dotenv(env_file):
                raise FileNotFoundError(f".env file not found: {env_file}")

        max_evaluations = os.getenv("PTOPT_MAX_EVALUATIONS") or None
        time_limit = os.getenv("PTOPT_TIME_LIMIT") or None
        spans = os.getenv("PTOPT_REFERENCE_SPANS")

        try:
            config = cls(
                workers=int(os.getenv("PTOPT_WORKERS", "1")),
                max_evaluations=int(max_evaluations) if max_evaluations else None,
                time_limit=float(time_limit) if time_limit else None,
                reference_spans=(
                    tuple(float(s) for s in spans.split(",") if s.strip())
                    if spans else tuple(float(s) for s in REFERENCE_SPANS)
                ),
                store_dir=os.getenv("PTOPT_STORE_DIR", "projects"),
                log_level=os.getenv("PTOPT_LOG_LEVEL", "INFO"),
            )
        except ValueError as e:
            raise ValueError(f"Invalid optimizer configuration: {e}") from e

        logger.debug(f"Loaded engine config: workers={config.workers}, spans={config.reference_spans}")
        return config
