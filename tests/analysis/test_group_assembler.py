"""Tests for group assembly."""

import random

import pytest

from record_grouper.analysis.group_assembler import AssemblyStats, RecordGroup, assemble
from record_grouper.analysis.grouping_engine import ParallelGroupingEngine
from record_grouper.analysis.record import Record, order_by_arity
from record_grouper.analysis.relation import related
from record_grouper.analysis.union_find import DisjointSetForest


def make_records(*rows: tuple[str, ...]) -> list[Record]:
    return [Record(tuple(fields), position=i) for i, fields in enumerate(rows)]


def group_contents(groups: list[RecordGroup]) -> list[frozenset]:
    return sorted(
        (frozenset(record.fields for record in group.members) for group in groups),
        key=lambda s: sorted(s),
    )


class TestRecordGroup:
    """Test RecordGroup dataclass and properties."""

    def test_properties(self):
        members = [Record(("A", "B"), position=4), Record(("A", "C"), position=9)]
        group = RecordGroup(group_id=1, root=0, members=members)
        assert group.size == 2
        assert group.positions == [4, 9]
        assert group.arity == 2


class TestAssemble:
    """Test assemble."""

    def test_end_to_end_example(self):
        """Test the four-record example yields one group of three."""
        records = make_records(
            ("A", "B", "", "D"),
            ("A", "C", "", "E"),
            ("X", "C", "", "E"),
            ("Q", "Q", "Q", "Q"),
        )
        forest = ParallelGroupingEngine(max_workers=2, backend="thread").group(records)
        groups = assemble(records, forest)

        assert len(groups) == 1
        assert groups[0].group_id == 1
        assert groups[0].positions == [0, 1, 2]
        assert 3 not in groups[0].positions

    def test_singletons_dropped(self):
        forest = DisjointSetForest(4)
        forest.union(0, 1)
        records = make_records(("a",), ("a",), ("b",), ("c",))

        stats = AssemblyStats()
        groups = assemble(records, forest, stats=stats)

        assert [g.positions for g in groups] == [[0, 1]]
        assert stats.groups_formed == 1
        assert stats.records_grouped == 2
        assert stats.singletons_dropped == 2
        assert stats.largest_group == 2

    def test_descending_size_with_first_seen_tie_break(self):
        forest = DisjointSetForest(9)
        forest.union(0, 5)  # size 2, first seen at 0
        forest.union(1, 2)
        forest.union(2, 3)  # size 3
        forest.union(4, 6)  # size 2, first seen at 4
        forest.union(7, 8)  # size 2, first seen at 7
        records = make_records(*[(str(i),) for i in range(9)])

        groups = assemble(records, forest)

        assert [g.size for g in groups] == [3, 2, 2, 2]
        assert [g.positions for g in groups] == [[1, 2, 3], [0, 5], [4, 6], [7, 8]]
        assert [g.group_id for g in groups] == [1, 2, 3, 4]

    def test_duplicates_preserved_by_default(self):
        """Test identical input lines stay separate members."""
        records = make_records(("A", "B"), ("A", "B"), ("A", "C"))
        forest = ParallelGroupingEngine(max_workers=1, backend="thread").group(records)

        groups = assemble(records, forest)
        assert groups[0].size == 3
        assert groups[0].positions == [0, 1, 2]

    def test_distinct_content_collapses_duplicates(self):
        records = make_records(("A", "B"), ("A", "B"), ("A", "C"))
        forest = ParallelGroupingEngine(max_workers=1, backend="thread").group(records)

        groups = assemble(records, forest, distinct_content=True)
        assert groups[0].size == 2
        assert groups[0].positions == [0, 2]

    def test_distinct_content_drops_collapsed_group(self):
        """Test a group of identical lines disappears when content is deduplicated."""
        records = make_records(("A", "B"), ("A", "B"), ("Z", "Y"))
        forest = ParallelGroupingEngine(max_workers=1, backend="thread").group(records)

        assert len(assemble(records, forest)) == 1
        assert assemble(records, forest, distinct_content=True) == []

    def test_collapsed_groups_counted_apart_from_singletons(self):
        records = make_records(("A", "B"), ("A", "B"), ("Z", "Y"), ("Q", "R"), ("Q", "S"))
        forest = ParallelGroupingEngine(max_workers=1, backend="thread").group(records)

        stats = AssemblyStats()
        groups = assemble(records, forest, distinct_content=True, stats=stats)

        assert [g.positions for g in groups] == [[3, 4]]
        assert stats.singletons_dropped == 1
        assert stats.collapsed_groups == 1
        assert stats.records_grouped == 2

    def test_size_mismatch_rejected(self):
        with pytest.raises(ValueError, match="does not match"):
            assemble(make_records(("a",)), DisjointSetForest(2))

    def test_empty(self):
        stats = AssemblyStats()
        assert assemble([], DisjointSetForest(0), stats=stats) == []
        assert stats.largest_group == 0


class TestGroupingProperties:
    """Properties of the full group/assemble flow."""

    @pytest.fixture
    def records(self):
        rng = random.Random(3)
        rows = []
        for _ in range(80):
            arity = rng.choice([2, 3, 4])
            values = ["", "", "k", "l", "m", "n", "o", "p"]
            rows.append(tuple(rng.choice(values) for _ in range(arity)))
        return make_records(*rows)

    def _groups(self, records, workers=3, sort=True):
        ordered = order_by_arity(records) if sort else list(records)
        forest = ParallelGroupingEngine(max_workers=workers, backend="thread").group(ordered)
        return assemble(ordered, forest)

    def test_partition_completeness(self, records):
        """Test every related record is in exactly one group."""
        groups = self._groups(records)
        seen = [p for group in groups for p in group.positions]
        assert len(seen) == len(set(seen))

        connected = {
            r.position
            for r in records
            for other in records
            if r.position != other.position and related(r, other)
        }
        assert set(seen) == connected

    def test_descending_size_order(self, records):
        sizes = [group.size for group in self._groups(records)]
        assert sizes == sorted(sizes, reverse=True)

    def test_invariant_to_input_order_and_workers(self, records):
        expected = group_contents(self._groups(records, workers=1, sort=False))

        shuffled = list(records)
        random.Random(5).shuffle(shuffled)
        assert group_contents(self._groups(shuffled, workers=4)) == expected
        assert group_contents(self._groups(shuffled, workers=2, sort=False)) == expected

    def test_members_share_arity(self, records):
        for group in self._groups(records):
            assert {record.arity for record in group.members} == {group.arity}
