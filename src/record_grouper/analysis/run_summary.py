"""Structured status of a grouping run."""

from dataclasses import dataclass, field
from pathlib import Path

from record_grouper.analysis.group_assembler import AssemblyStats
from record_grouper.analysis.grouping_engine import GroupingStats


@dataclass
class RunSummary:
    """Per-stage counters and timings of one pipeline run."""

    input_path: Path | None = None
    records_loaded: int = 0
    load_seconds: float = 0.0
    grouping: GroupingStats = field(default_factory=GroupingStats)
    assembly: AssemblyStats = field(default_factory=AssemblyStats)
    assemble_seconds: float = 0.0

    @property
    def total_seconds(self) -> float:
        return self.load_seconds + self.grouping.elapsed_seconds + self.assemble_seconds
