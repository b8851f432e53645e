"""Group assembly from a finished disjoint-set forest."""

from collections.abc import Sequence
from dataclasses import dataclass
import logging

from record_grouper.analysis.record import Record
from record_grouper.analysis.union_find import DisjointSetForest

logger = logging.getLogger(__name__)


@dataclass
class RecordGroup:
    """A connected component of related records."""

    group_id: int  # 1-based rank after sorting by size
    root: int  # Forest root index
    members: list[Record]

    @property
    def size(self) -> int:
        """Number of members in the group."""
        return len(self.members)

    @property
    def positions(self) -> list[int]:
        """Dataset positions of the members."""
        return [record.position for record in self.members]

    @property
    def arity(self) -> int:
        """Arity shared by all members (only same-arity records relate)."""
        return self.members[0].arity


@dataclass
class AssemblyStats:
    """Counters for one assembly pass."""

    groups_formed: int = 0
    records_grouped: int = 0
    singletons_dropped: int = 0
    collapsed_groups: int = 0  # Components reduced to one member by distinct_content
    largest_group: int = 0


def _distinct(members: list[Record]) -> list[Record]:
    seen: set[Record] = set()
    unique = []
    for record in members:
        if record not in seen:
            seen.add(record)
            unique.append(record)
    return unique


def assemble(
    records: Sequence[Record],
    forest: DisjointSetForest,
    distinct_content: bool = False,
    stats: AssemblyStats | None = None,
) -> list[RecordGroup]:
    """
    Collect records by forest root into size-ordered groups.

    Components with a single member are dropped. Groups are sorted by
    descending size; groups of equal size keep the order in which their root
    was first seen while walking records by index.

    Args:
        records: Records in the order they were indexed into the forest
        forest: Forest produced by the grouping engine, no longer mutated
        distinct_content: If True, members with identical fields collapse to
                          their first occurrence. By default every input line
                          stays a separate member.
        stats: Optional AssemblyStats to fill in

    Returns:
        Ordered list of RecordGroup with group_id 1..len
    """
    if len(records) != len(forest):
        raise ValueError(
            f"Forest size {len(forest)} does not match record count {len(records)}"
        )

    buckets: dict[int, list[Record]] = {}
    for index, record in enumerate(records):
        buckets.setdefault(forest.find(index), []).append(record)

    candidates = []
    singletons = 0
    collapsed = 0
    for root, members in buckets.items():
        if len(members) == 1:
            singletons += 1
            continue
        if distinct_content:
            members = _distinct(members)
            if len(members) == 1:
                collapsed += 1
                continue
        candidates.append((root, members))

    candidates.sort(key=lambda item: len(item[1]), reverse=True)
    groups = [
        RecordGroup(group_id=rank, root=root, members=members)
        for rank, (root, members) in enumerate(candidates, start=1)
    ]

    if stats is not None:
        stats.groups_formed = len(groups)
        stats.records_grouped = sum(group.size for group in groups)
        stats.singletons_dropped = singletons
        stats.collapsed_groups = collapsed
        stats.largest_group = groups[0].size if groups else 0

    logger.info(
        f"Total groups formed: {len(groups)} "
        f"({singletons} singletons dropped, {collapsed} collapsed to one record)"
    )
    return groups
