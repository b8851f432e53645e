"""Tests for DisjointSetForest data structure."""

import pytest

from record_grouper.analysis.union_find import DisjointSetForest


class TestDisjointSetForest:
    """Test DisjointSetForest data structure."""

    def test_initialization(self):
        """Test every index starts as its own root."""
        forest = DisjointSetForest(5)
        assert len(forest) == 5
        assert forest.num_components == 5
        assert [forest.find(i) for i in range(5)] == [0, 1, 2, 3, 4]

    def test_empty_forest(self):
        """Test a forest of size zero."""
        forest = DisjointSetForest(0)
        assert len(forest) == 0
        assert forest.num_components == 0
        assert forest.groups() == {}

    def test_negative_size_rejected(self):
        """Test negative size raises ValueError."""
        with pytest.raises(ValueError, match="non-negative"):
            DisjointSetForest(-1)

    def test_out_of_range_index(self):
        """Test find outside the forest raises IndexError."""
        forest = DisjointSetForest(3)
        with pytest.raises(IndexError):
            forest.find(3)
        with pytest.raises(IndexError):
            forest.find(-1)

    def test_union_two_elements(self):
        """Test union of two elements."""
        forest = DisjointSetForest(2)
        assert forest.union(0, 1) is True
        assert forest.connected(0, 1)
        assert forest.num_components == 1

    def test_multiple_groups(self):
        """Test formation of multiple groups."""
        forest = DisjointSetForest(6)
        forest.union(0, 1)
        forest.union(2, 3)
        forest.union(4, 5)

        assert forest.connected(0, 1)
        assert forest.connected(2, 3)
        assert forest.connected(4, 5)
        assert not forest.connected(0, 2)
        assert forest.num_components == 3

    def test_transitive_union(self):
        """Test transitive property: union(0,1), union(1,2) -> 0~2."""
        forest = DisjointSetForest(3)
        forest.union(0, 1)
        forest.union(1, 2)
        assert forest.connected(0, 2)

    def test_union_idempotent(self):
        """Test that repeated union operations are idempotent."""
        forest = DisjointSetForest(2)
        assert forest.union(0, 1) is True
        assert forest.union(0, 1) is False
        assert forest.union(1, 0) is False
        assert forest.num_components == 1
        assert forest.component_size(0) == 2

    def test_union_by_size(self):
        """Test the smaller component is attached under the larger one."""
        forest = DisjointSetForest(4)
        forest.union(1, 2)
        forest.union(1, 3)
        big_root = forest.find(1)

        forest.union(0, 1)
        assert forest.find(0) == big_root
        assert forest.component_size(0) == 4

    def test_tie_break_lower_index_wins(self):
        """Test equal-size unions make the lower root the parent."""
        forest = DisjointSetForest(2)
        forest.union(1, 0)
        assert forest.find(1) == 0

    def test_path_compression(self):
        """Test find flattens the path without changing the partition."""
        forest = DisjointSetForest(4)
        forest.parent = [0, 0, 1, 2]  # Chain 3 -> 2 -> 1 -> 0
        forest.size = [4, 1, 1, 1]
        forest._components = 1

        assert forest.find(3) == 0
        assert forest.parent == [0, 0, 0, 0]
        assert forest.num_components == 1

    def test_groups(self):
        """Test groups returns members per root in index order."""
        forest = DisjointSetForest(5)
        forest.union(0, 1)
        forest.union(2, 3)
        forest.union(1, 4)

        groups = forest.groups()
        assert len(groups) == 2
        assert groups[forest.find(0)] == [0, 1, 4]
        assert groups[forest.find(2)] == [2, 3]
        assert list(groups) == [forest.find(0), forest.find(2)]

    def test_large_group(self):
        """Test with larger number of elements."""
        forest = DisjointSetForest(100)
        for i in range(1, 100):
            forest.union(i - 1, i)

        assert forest.num_components == 1
        assert forest.component_size(50) == 100
        groups = forest.groups()
        assert len(groups) == 1
        assert list(groups.values())[0] == list(range(100))

    def test_connected_same_element(self):
        """Test that an element is connected to itself."""
        forest = DisjointSetForest(1)
        assert forest.connected(0, 0)
