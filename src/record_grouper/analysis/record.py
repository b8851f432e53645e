"""Record model for tokenized input lines."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class Record:
    """An immutable, ordered sequence of text fields from one input line.

    Equality and hashing are structural over ``fields``. ``position`` is the
    record's index in the loaded dataset and is excluded from comparison, so
    two lines with identical content are equal records at distinct positions.
    """

    fields: tuple[str, ...]
    position: int = field(default=-1, compare=False)

    @property
    def arity(self) -> int:
        """Number of fields."""
        return len(self.fields)

    @property
    def is_blank(self) -> bool:
        """True if every field is empty after trimming."""
        return all(not value.strip() for value in self.fields)

    def join(self, delimiter: str = ";") -> str:
        """Rejoin fields with the delimiter they were split on."""
        return delimiter.join(self.fields)

    def __len__(self) -> int:
        return len(self.fields)

    def __getitem__(self, index: int) -> str:
        return self.fields[index]

    def __iter__(self):
        return iter(self.fields)


def parse_record(line: str, position: int = -1, delimiter: str = ";") -> Record:
    """Split a line into a Record.

    Empty fields, including trailing ones, are kept: ``"A;;"`` has arity 3.

    Args:
        line: Raw input line without its line terminator
        position: Index of the line in the loaded dataset
        delimiter: Field separator

    Returns:
        Record with the split fields

    Raises:
        ValueError: If delimiter is empty
    """
    if not delimiter:
        raise ValueError("Delimiter must be a non-empty string")
    return Record(fields=tuple(line.split(delimiter)), position=position)


def order_by_arity(records: list[Record]) -> list[Record]:
    """Stable-sort records by ascending arity.

    Changes only how comparison work is distributed, never which records
    can relate.
    """
    return sorted(records, key=lambda record: record.arity)
