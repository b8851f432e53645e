"""Parallel pairwise grouping of records.

Every pair (i, j) with i < j is evaluated exactly once by a fixed-size pool
of workers. Rows are split into contiguous ranges of roughly equal pair
count; row i owns the pairs (i, j) for all j > i.

Workers never touch the shared forest. Each one keeps a private forest and
returns only the pairs that joined two of its own components, which is a
spanning forest of everything it found related (at most n - 1 pairs). After
all workers are joined, the buffered pairs are unioned into the result forest
in a single sequential pass.
"""

from collections.abc import Callable, Sequence
from concurrent.futures import Executor, ProcessPoolExecutor, ThreadPoolExecutor, wait
from dataclasses import dataclass, field
import logging
import time

from record_grouper.analysis.grouping_constants import ParallelConfig
from record_grouper.analysis.record import Record
from record_grouper.analysis.relation import related
from record_grouper.analysis.union_find import DisjointSetForest
from record_grouper.error.exceptions import GroupingError

logger = logging.getLogger(__name__)

Relation = Callable[[Record, Record], bool]

BACKENDS = ("process", "thread")


@dataclass
class GroupingStats:
    """Counters for one grouping run."""

    records: int = 0
    comparisons: int = 0
    related_pairs: int = 0
    emitted_pairs: int = 0
    unions_applied: int = 0
    tasks: int = 0
    workers: int = 0
    elapsed_seconds: float = 0.0


@dataclass
class RowRangeResult:
    """Outcome of scanning one contiguous range of rows."""

    start: int
    stop: int
    comparisons: int = 0
    related_pairs: int = 0
    pairs: list[tuple[int, int]] = field(default_factory=list)


def partition_rows(n: int, num_tasks: int) -> list[tuple[int, int]]:
    """Split rows 0..n-1 into contiguous ranges of roughly equal pair count.

    Row i owns n - 1 - i pairs, so early ranges are shorter than late ones.
    The last row owns no pairs and is never part of a range.

    Args:
        n: Number of records
        num_tasks: Desired number of ranges (upper bound)

    Returns:
        List of (start, stop) half-open row ranges covering 0..n-2
    """
    if n < 2 or num_tasks < 1:
        return []

    total_pairs = n * (n - 1) // 2
    target = -(-total_pairs // num_tasks)

    ranges: list[tuple[int, int]] = []
    start = 0
    accumulated = 0
    for row in range(n - 1):
        accumulated += n - 1 - row
        if accumulated >= target:
            ranges.append((start, row + 1))
            start = row + 1
            accumulated = 0
    if start < n - 1:
        ranges.append((start, n - 1))
    return ranges


def scan_rows(
    records: Sequence[Record], relation: Relation, start: int, stop: int
) -> RowRangeResult:
    """Evaluate every pair (i, j) with start <= i < stop and j > i.

    Args:
        records: Full record sequence, read only
        relation: Pairwise predicate
        start: First owned row
        stop: One past the last owned row

    Returns:
        RowRangeResult with the spanning pairs found in this range
    """
    n = len(records)
    local = DisjointSetForest(n)
    result = RowRangeResult(start=start, stop=stop)

    for i in range(start, stop):
        record_i = records[i]
        for j in range(i + 1, n):
            result.comparisons += 1
            if relation(record_i, records[j]):
                result.related_pairs += 1
                if local.union(i, j):
                    result.pairs.append((i, j))
    return result


# Per-process state for the process backend, set once by the pool initializer.
_worker_records: Sequence[Record] = ()
_worker_relation: Relation = related


def _init_worker(records: Sequence[Record], relation: Relation) -> None:
    global _worker_records, _worker_relation
    _worker_records = records
    _worker_relation = relation


def _scan_rows_in_worker(start: int, stop: int) -> RowRangeResult:
    return scan_rows(_worker_records, _worker_relation, start, stop)


class ParallelGroupingEngine:
    """Groups records into connected components using a bounded worker pool."""

    def __init__(
        self,
        max_workers: int = ParallelConfig.DEFAULT_MAX_WORKERS,
        backend: str = ParallelConfig.DEFAULT_BACKEND,
        chunks_per_worker: int = ParallelConfig.CHUNKS_PER_WORKER,
        relation: Relation = related,
    ) -> None:
        """
        Initialize the engine.

        Args:
            max_workers: Fixed pool size (>= 1)
            backend: "process" for ProcessPoolExecutor, "thread" for ThreadPoolExecutor
            chunks_per_worker: Row ranges submitted per worker (>= 1)
            relation: Pairwise predicate; must be picklable for the process backend
        """
        if max_workers < 1:
            raise ValueError(f"max_workers must be at least 1, got {max_workers}")
        if chunks_per_worker < 1:
            raise ValueError(f"chunks_per_worker must be at least 1, got {chunks_per_worker}")
        if backend not in BACKENDS:
            raise ValueError(f"Unknown backend '{backend}', expected one of {BACKENDS}")

        self.max_workers = max_workers
        self.backend = backend
        self.chunks_per_worker = chunks_per_worker
        self.relation = relation
        self.last_stats = GroupingStats()

    def group(self, records: Sequence[Record]) -> DisjointSetForest:
        """
        Build a forest reflecting the transitive closure of the relation.

        Blocks until every worker has finished and all discovered pairs have
        been applied.

        Args:
            records: Records indexed by position in this sequence

        Returns:
            DisjointSetForest of size len(records)

        Raises:
            GroupingError: If any worker failed; raised after all workers are joined
        """
        started = time.perf_counter()
        n = len(records)
        forest = DisjointSetForest(n)
        stats = GroupingStats(records=n)

        ranges = partition_rows(n, self.max_workers * self.chunks_per_worker)
        stats.tasks = len(ranges)
        stats.workers = min(self.max_workers, len(ranges))
        logger.debug(
            f"Partitioned {n * (n - 1) // 2} pairs into {len(ranges)} row ranges "
            f"for {stats.workers} {self.backend} workers"
        )

        if ranges:
            results = self._run(records, ranges)
            for result in results:
                stats.comparisons += result.comparisons
                stats.related_pairs += result.related_pairs
                stats.emitted_pairs += len(result.pairs)
                for i, j in result.pairs:
                    if forest.union(i, j):
                        stats.unions_applied += 1

        stats.elapsed_seconds = time.perf_counter() - started
        self.last_stats = stats
        logger.info(
            f"Grouped {n} records: {stats.comparisons} comparisons, "
            f"{stats.related_pairs} related pairs, {forest.num_components} components"
        )
        return forest

    def _run(
        self, records: Sequence[Record], ranges: list[tuple[int, int]]
    ) -> list[RowRangeResult]:
        """Submit all row ranges, join every future and surface the first failure."""
        with self._make_executor(records, min(self.max_workers, len(ranges))) as executor:
            if self.backend == "process":
                futures = [
                    executor.submit(_scan_rows_in_worker, start, stop) for start, stop in ranges
                ]
            else:
                futures = [
                    executor.submit(scan_rows, records, self.relation, start, stop)
                    for start, stop in ranges
                ]
            wait(futures)

        failures = [
            (span, future.exception())
            for span, future in zip(ranges, futures)
            if future.exception() is not None
        ]
        if failures:
            (start, stop), error = failures[0]
            logger.error(f"{len(failures)} of {len(ranges)} comparison tasks failed")
            raise GroupingError(
                f"Comparison of rows {start}..{stop - 1} failed: {error}", start=start, stop=stop
            ) from error

        return [future.result() for future in futures]

    def _make_executor(self, records: Sequence[Record], workers: int) -> Executor:
        if self.backend == "process":
            return ProcessPoolExecutor(
                max_workers=workers,
                initializer=_init_worker,
                initargs=(tuple(records), self.relation),
            )
        return ThreadPoolExecutor(max_workers=workers)
