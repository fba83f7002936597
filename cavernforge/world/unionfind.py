"""Disjoint-set union over dense integer indices.

Union by size plus iterative path compression. Instances are cheap and meant
to be thrown away after a single connectivity question.
"""

from __future__ import annotations

from typing import List


class DisjointSet:
    def __init__(self, n: int) -> None:
        self._parent: List[int] = list(range(n))
        self._size: List[int] = [1] * n
        self._components = n

    def __len__(self) -> int:
        return len(self._parent)

    @property
    def components(self) -> int:
        return self._components

    def find(self, item: int) -> int:
        parent = self._parent
        root = item
        while parent[root] != root:
            root = parent[root]
        # Second walk points every node on the path directly at the root.
        while parent[item] != root:
            parent[item], item = root, parent[item]
        return root

    def union(self, a: int, b: int) -> bool:
        """Merge the sets holding ``a`` and ``b``; False if already merged."""
        root_a = self.find(a)
        root_b = self.find(b)
        if root_a == root_b:
            return False
        if self._size[root_a] < self._size[root_b]:
            root_a, root_b = root_b, root_a
        self._parent[root_b] = root_a
        self._size[root_a] += self._size[root_b]
        self._components -= 1
        return True

    def connected(self, a: int, b: int) -> bool:
        return self.find(a) == self.find(b)

    def size_of(self, item: int) -> int:
        return self._size[self.find(item)]


__all__ = ["DisjointSet"]
