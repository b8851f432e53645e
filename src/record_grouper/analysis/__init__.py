"""Analysis modules for record grouping.

This package provides the core grouping functionality:
- Record model and tokenization
- Pairwise relation between records
- Union-Find data structure for component tracking
- Parallel grouping engine and group assembly
- Run summary counters and timings
"""

from record_grouper.analysis.group_assembler import AssemblyStats, RecordGroup, assemble
from record_grouper.analysis.grouping_engine import GroupingStats, ParallelGroupingEngine
from record_grouper.analysis.record import Record, order_by_arity, parse_record
from record_grouper.analysis.relation import related
from record_grouper.analysis.run_summary import RunSummary
from record_grouper.analysis.union_find import DisjointSetForest

__all__ = [
    "AssemblyStats",
    "DisjointSetForest",
    "GroupingStats",
    "ParallelGroupingEngine",
    "Record",
    "RecordGroup",
    "RunSummary",
    "assemble",
    "order_by_arity",
    "parse_record",
    "related",
]
