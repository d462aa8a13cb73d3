"""Disjoint-set forest with path compression and union by rank."""

from typing import Dict, Hashable


class DisjointSet:
    """Union-find over arbitrary hashable keys (bin ids need not be dense)."""

    def __init__(self):
        self.parent: Dict[Hashable, Hashable] = {}
        self.rank: Dict[Hashable, int] = {}

    def __contains__(self, x: Hashable) -> bool:
        return x in self.parent

    def __len__(self) -> int:
        return len(self.parent)

    def make_set(self, x: Hashable) -> None:
        self.parent[x] = x
        self.rank[x] = 0

    def find(self, x: Hashable) -> Hashable:
        """Return the representative of ``x``, compressing the path walked."""
        root = x
        while self.parent[root] != root:
            root = self.parent[root]
        while self.parent[x] != root:
            self.parent[x], x = root, self.parent[x]
        return root

    def union(self, x: Hashable, y: Hashable) -> None:
        root_x = self.find(x)
        root_y = self.find(y)
        if root_x == root_y:
            return

        if self.rank[root_x] < self.rank[root_y]:
            self.parent[root_x] = root_y
        elif self.rank[root_x] > self.rank[root_y]:
            self.parent[root_y] = root_x
        else:
            self.parent[root_y] = root_x
            self.rank[root_x] += 1

    def connected(self, x: Hashable, y: Hashable) -> bool:
        return self.find(x) == self.find(y)
