"""Constants for grouping configuration.

This module defines default values used by the grouping engine, the
pipeline and the command line so they stay in one place.
"""


class ParallelConfig:
    """Configuration for parallel pair evaluation."""

    # Fixed size of the comparison worker pool
    DEFAULT_MAX_WORKERS = 32

    # Row ranges submitted per worker; more chunks smooth out uneven rows
    CHUNKS_PER_WORKER = 4

    # Executor backend: "process" or "thread"
    DEFAULT_BACKEND = "process"


class FormatDefaults:
    """Default values for reading and writing records."""

    DELIMITER = ";"

    # Characters removed from every input line before tokenizing
    QUOTE_CHARS = "\"'"

    GROUP_LABEL = "Group"

    OUTPUT_PATH = "output.txt"
