"""Input loading: raw lines to tokenized records.

The input file may be plain text or gzip-compressed; compression is detected
from the file's magic bytes rather than its suffix.
"""

from collections.abc import Iterator
import gzip
import logging
from pathlib import Path
import zlib

from record_grouper.analysis.grouping_constants import FormatDefaults
from record_grouper.analysis.record import Record, parse_record
from record_grouper.error.exceptions import InputError
from record_grouper.io.staging import InMemoryRecordStore, RecordStore

logger = logging.getLogger(__name__)

GZIP_MAGIC = b"\x1f\x8b"

_QUOTE_TABLE = str.maketrans("", "", FormatDefaults.QUOTE_CHARS)


def is_gzip(path: Path) -> bool:
    """Check whether the file starts with the gzip magic bytes."""
    with open(path, "rb") as f:
        return f.read(2) == GZIP_MAGIC


def read_lines(
    path: Path, strip_quotes: bool = True, encoding: str = "utf-8"
) -> Iterator[str]:
    """Yield non-blank lines from a plain or gzip-compressed file.

    Args:
        path: Input file
        strip_quotes: Remove every double and single quote character
        encoding: Text encoding of the (decompressed) content

    Yields:
        Lines without terminators; lines blank after trimming are skipped

    Raises:
        InputError: If the file is missing, unreadable, corrupt or undecodable
    """
    path = Path(path)
    if not path.is_file():
        raise InputError(f"Input file not found: {path}")

    try:
        if is_gzip(path):
            stream = gzip.open(path, "rt", encoding=encoding, newline=None)
        else:
            stream = open(path, "r", encoding=encoding, newline=None)
        with stream:
            for line in stream:
                line = line.rstrip("\r\n")
                if strip_quotes:
                    line = line.translate(_QUOTE_TABLE)
                if line.strip():
                    yield line
    except (OSError, EOFError, zlib.error) as e:
        raise InputError(f"Failed to read {path}: {e}") from e
    except UnicodeDecodeError as e:
        raise InputError(f"Failed to decode {path} as {encoding}: {e}") from e


def load_records(
    path: Path,
    delimiter: str = FormatDefaults.DELIMITER,
    strip_quotes: bool = True,
    encoding: str = "utf-8",
    store: RecordStore | None = None,
) -> list[Record]:
    """Stage the lines of a file and tokenize them into records.

    The whole file is staged before any record is returned, so a read
    failure leaves no partial result.

    Args:
        path: Input file
        delimiter: Field separator
        strip_quotes: Remove quote characters from every line
        encoding: Text encoding
        store: Staging store; a fresh in-memory store if None

    Returns:
        Records with positions 0..n-1 in input order
    """
    if store is None:
        store = InMemoryRecordStore()

    loaded = store.insert_many(read_lines(path, strip_quotes=strip_quotes, encoding=encoding))
    logger.info(f"Total lines processed and loaded: {loaded}")

    return [
        parse_record(line, position=position, delimiter=delimiter)
        for position, line in enumerate(store.scan())
    ]
