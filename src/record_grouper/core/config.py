"""Configuration management for record-grouper."""

from pathlib import Path
from typing import Literal
import json

from pydantic import BaseModel, Field

from record_grouper.analysis.grouping_constants import FormatDefaults, ParallelConfig


class GroupingConfig(BaseModel):
    """Configuration for the grouping engine."""

    max_workers: int = Field(
        default=ParallelConfig.DEFAULT_MAX_WORKERS, ge=1, description="Fixed worker pool size"
    )
    backend: Literal["process", "thread"] = Field(
        default=ParallelConfig.DEFAULT_BACKEND, description="Executor backend"
    )
    chunks_per_worker: int = Field(
        default=ParallelConfig.CHUNKS_PER_WORKER, ge=1, description="Row ranges per worker"
    )
    sort_by_arity: bool = Field(default=True, description="Order records by arity before indexing")
    distinct_content: bool = Field(
        default=False, description="Collapse members with identical fields within a group"
    )


class InputConfig(BaseModel):
    """Configuration for reading input records."""

    delimiter: str = Field(
        default=FormatDefaults.DELIMITER, min_length=1, description="Field separator"
    )
    strip_quotes: bool = Field(default=True, description="Remove quote characters from lines")
    encoding: str = Field(default="utf-8", description="Input text encoding")
    staging: Literal["memory", "sqlite"] = Field(default="memory", description="Staging store kind")
    staging_path: Path | None = Field(default=None, description="SQLite file for staging")


class OutputConfig(BaseModel):
    """Configuration for writing groups."""

    output_path: Path = Field(
        default=Path(FormatDefaults.OUTPUT_PATH), description="Text report path"
    )
    csv_path: Path | None = Field(default=None, description="Optional CSV membership export")


class Config(BaseModel):
    """Main configuration for record-grouper."""

    grouping: GroupingConfig = Field(default_factory=GroupingConfig)
    input: InputConfig = Field(default_factory=InputConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)

    @classmethod
    def load_from_file(cls, config_path: Path) -> "Config":
        """Load configuration from a JSON file."""
        if not config_path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")

        with open(config_path, "r") as f:
            data = json.load(f)

        return cls(**data)

    def save_to_file(self, config_path: Path) -> None:
        """Save configuration to a JSON file."""
        config_path.parent.mkdir(parents=True, exist_ok=True)

        with open(config_path, "w") as f:
            json.dump(self.model_dump(), f, indent=2, default=str)

    @classmethod
    def get_default(cls) -> "Config":
        """Get default configuration."""
        return cls()


def load_config(config_path: Path | None = None) -> Config:
    """Load configuration from file or return default.

    Args:
        config_path: Path to configuration file. If None, returns default config.

    Returns:
        Config object
    """
    if config_path is None:
        # Try to load from default locations
        default_locations = [
            Path.home() / ".config" / "record-grouper" / "config.json",
            Path.cwd() / "record-grouper.json",
        ]

        for location in default_locations:
            if location.exists():
                return Config.load_from_file(location)

        return Config.get_default()

    return Config.load_from_file(config_path)
