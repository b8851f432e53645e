"""Exception hierarchy for record grouping."""


class RecordGrouperError(Exception):
    """Base class for all record-grouper failures."""


class InputError(RecordGrouperError):
    """Input could not be read, decompressed or decoded."""


class GroupingError(RecordGrouperError):
    """A comparison worker failed while evaluating its share of pairs."""

    def __init__(self, message: str, start: int | None = None, stop: int | None = None) -> None:
        super().__init__(message)
        self.start = start
        self.stop = stop


class OutputError(RecordGrouperError):
    """Grouped output could not be written to its destination."""
