"""Error types and command error handling."""

from record_grouper.error.exceptions import (
    GroupingError,
    InputError,
    OutputError,
    RecordGrouperError,
)

__all__ = ["RecordGrouperError", "InputError", "GroupingError", "OutputError"]
