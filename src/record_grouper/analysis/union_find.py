"""Disjoint-set forest (Union-Find) over record indices.

This module provides an array-backed Union-Find with path compression and
union by size, used to consolidate related record pairs into components.
"""


class DisjointSetForest:
    """Union-Find over the indices ``0..n-1`` with path compression.

    Each index starts as its own root. ``union`` attaches the root of the
    smaller component under the root of the larger one; on equal sizes the
    lower root index becomes the parent, so the resulting forest is fully
    determined by the order of ``union`` calls.

    The structure is not safe for concurrent mutation: ``find`` and ``union``
    both rewrite parent links. Callers must funnel all unions through a
    single writer.

    Attributes:
        parent: Parent link for every index; roots point to themselves.
        size: Component size, meaningful only at root indices.
    """

    def __init__(self, n: int) -> None:
        """Initialize n singleton components.

        Args:
            n: Number of elements.

        Raises:
            ValueError: If n is negative.
        """
        if n < 0:
            raise ValueError(f"Forest size must be non-negative, got {n}")
        self.parent: list[int] = list(range(n))
        self.size: list[int] = [1] * n
        self._components = n

    def _check(self, x: int) -> None:
        if not 0 <= x < len(self.parent):
            raise IndexError(f"Index {x} out of range for forest of size {len(self.parent)}")

    def find(self, x: int) -> int:
        """Find root of element x with path compression.

        Path compression optimization: All nodes along the path to the root
        are made direct children of the root, flattening the tree structure.

        Args:
            x: Element to find the root of.

        Returns:
            The root element of the set containing x.

        Raises:
            IndexError: If x is outside the forest.
        """
        self._check(x)
        parent = self.parent
        root = x
        while parent[root] != root:
            root = parent[root]
        while parent[x] != root:
            parent[x], x = root, parent[x]
        return root

    def union(self, x: int, y: int) -> bool:
        """Union the sets containing x and y.

        Args:
            x: Element from first set.
            y: Element from second set.

        Returns:
            True if two distinct sets were merged, False if x and y were
            already connected.
        """
        root_x = self.find(x)
        root_y = self.find(y)
        if root_x == root_y:
            return False

        if self.size[root_x] < self.size[root_y] or (
            self.size[root_x] == self.size[root_y] and root_y < root_x
        ):
            root_x, root_y = root_y, root_x

        self.parent[root_y] = root_x
        self.size[root_x] += self.size[root_y]
        self._components -= 1
        return True

    def connected(self, x: int, y: int) -> bool:
        """Check if x and y are in the same set."""
        return self.find(x) == self.find(y)

    def component_size(self, x: int) -> int:
        """Number of elements in the component containing x."""
        return self.size[self.find(x)]

    @property
    def num_components(self) -> int:
        """Number of distinct components, singletons included."""
        return self._components

    def groups(self) -> dict[int, list[int]]:
        """Get all components as {root: [members]}.

        Returns:
            Dictionary mapping each root to its member indices in ascending
            order. Roots appear in the order their first member is seen.
        """
        groups: dict[int, list[int]] = {}
        for index in range(len(self.parent)):
            groups.setdefault(self.find(index), []).append(index)
        return groups

    def __len__(self) -> int:
        return len(self.parent)
