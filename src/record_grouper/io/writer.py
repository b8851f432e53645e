"""Rendering and export of assembled groups."""

from collections.abc import Sequence
import logging
from pathlib import Path

import pandas as pd

from record_grouper.analysis.group_assembler import RecordGroup
from record_grouper.analysis.grouping_constants import FormatDefaults
from record_grouper.error.exceptions import OutputError

logger = logging.getLogger(__name__)


def render_groups(
    groups: Sequence[RecordGroup],
    delimiter: str = FormatDefaults.DELIMITER,
    label: str = FormatDefaults.GROUP_LABEL,
) -> str:
    """Render groups as labeled text blocks.

    Each group becomes a "Group N" line followed by one line per member and a
    blank line. Members whose fields are all empty after trimming are skipped.
    """
    lines: list[str] = []
    for number, group in enumerate(groups, start=1):
        lines.append(f"{label} {number}")
        for record in group.members:
            if record.is_blank:
                logger.warning(f"Skipping empty record at position {record.position}")
                continue
            lines.append(record.join(delimiter))
        lines.append("")
    return "".join(f"{line}\n" for line in lines)


def write_groups(
    groups: Sequence[RecordGroup],
    destination: Path,
    delimiter: str = FormatDefaults.DELIMITER,
    encoding: str = "utf-8",
) -> Path:
    """Write groups to a text file.

    The groups are only read, so a failed write can be retried with another
    destination without regrouping.

    Args:
        groups: Size-ordered groups
        destination: Output file path; parent directories are created
        delimiter: Field separator used to rejoin members
        encoding: Output encoding

    Returns:
        The destination path

    Raises:
        OutputError: If the destination is not writable
    """
    destination = Path(destination)
    text = render_groups(groups, delimiter=delimiter)
    try:
        destination.parent.mkdir(parents=True, exist_ok=True)
        destination.write_text(text, encoding=encoding)
    except OSError as e:
        raise OutputError(f"Cannot write groups to {destination}: {e}") from e

    logger.info(f"Number of groups with more than one element: {len(groups)}")
    return destination


def groups_to_dataframe(
    groups: Sequence[RecordGroup], delimiter: str = FormatDefaults.DELIMITER
) -> pd.DataFrame:
    """Flatten groups into one row per member.

    Returns:
        DataFrame with columns group_id, group_size, position, record
    """
    rows = [
        {
            "group_id": group.group_id,
            "group_size": group.size,
            "position": record.position,
            "record": record.join(delimiter),
        }
        for group in groups
        for record in group.members
    ]
    return pd.DataFrame(rows, columns=["group_id", "group_size", "position", "record"])


def export_groups_csv(
    groups: Sequence[RecordGroup],
    destination: Path,
    delimiter: str = FormatDefaults.DELIMITER,
) -> Path:
    """Write group membership as CSV.

    Raises:
        OutputError: If the destination is not writable
    """
    destination = Path(destination)
    df = groups_to_dataframe(groups, delimiter=delimiter)
    try:
        destination.parent.mkdir(parents=True, exist_ok=True)
        df.to_csv(destination, index=False)
    except OSError as e:
        raise OutputError(f"Cannot write CSV to {destination}: {e}") from e
    return destination
