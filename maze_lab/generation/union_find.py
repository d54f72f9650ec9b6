"""
Disjoint-set forest used by Kruskal's generator.

Union by rank with path compression, stored in numpy arrays so a state can
take a cheap independent copy before each modification.
"""

from __future__ import annotations

import numpy as np


class UnionFind:
    """Disjoint sets over the integers ``0 .. size - 1``."""

    __slots__ = ("_parent", "_rank", "_set_count")

    def __init__(self, size: int):
        if size < 0:
            raise ValueError(f"size must be non-negative, got {size}")
        self._parent = np.arange(size, dtype=np.int64)
        self._rank = np.zeros(size, dtype=np.int16)
        self._set_count = size

    def __len__(self) -> int:
        return len(self._parent)

    @property
    def set_count(self) -> int:
        """Number of disjoint sets."""
        return self._set_count

    def find(self, item: int) -> int:
        """Representative of ``item``'s set, compressing the path on the way."""
        parent = self._parent
        root = int(item)
        while parent[root] != root:
            root = int(parent[root])
        node = int(item)
        while node != root:
            next_node = int(parent[node])
            parent[node] = root
            node = next_node
        return root

    def union(self, a: int, b: int) -> bool:
        """
        Merge the sets containing ``a`` and ``b``.

        Returns:
            True if the sets were distinct and have been merged
        """
        root_a = self.find(a)
        root_b = self.find(b)
        if root_a == root_b:
            return False

        if self._rank[root_a] < self._rank[root_b]:
            root_a, root_b = root_b, root_a
        self._parent[root_b] = root_a
        if self._rank[root_a] == self._rank[root_b]:
            self._rank[root_a] += 1
        self._set_count -= 1
        return True

    def connected(self, a: int, b: int) -> bool:
        return self.find(a) == self.find(b)

    def copy(self) -> UnionFind:
        clone = object.__new__(UnionFind)
        clone._parent = self._parent.copy()
        clone._rank = self._rank.copy()
        clone._set_count = self._set_count
        return clone

    def __repr__(self) -> str:
        return f"UnionFind(size={len(self)}, sets={self._set_count})"
