"""
bplus_tree.py

Ordered point index for bin records keyed by integer id.

A B+ tree of order ``t``: every node holds at most ``2t - 1`` keys, internal
nodes route lookups through separator keys and leaves carry the values plus a
link to the next leaf, so a full ascending scan never revisits internal nodes.
Nodes live in a flat arena and refer to each other by list index.

The index is a snapshot of the bin collection. It is rebuilt with
``rebuild`` (clear, then insert every bin) whenever the collection changes
instead of being patched record by record.
"""

from bisect import bisect_left, bisect_right
from dataclasses import dataclass, field
from typing import Any, Generic, Iterable, Iterator, List, Optional, Tuple, TypeVar

from binroute.core_types import Bin
from binroute.utils.logging import BinrouteLogger

logger = BinrouteLogger.get_logger(__name__)

V = TypeVar("V")

DEFAULT_ORDER = 5


@dataclass
class _Node:
    is_leaf: bool
    keys: List[int] = field(default_factory=list)
    children: List[int] = field(default_factory=list)  # arena indices, internal only
    values: List[Any] = field(default_factory=list)  # leaf only
    next: Optional[int] = None  # next leaf, leaf only


class BPlusTree(Generic[V]):
    """B+ tree over integer keys with an index-addressed node arena."""

    def __init__(self, order: int = DEFAULT_ORDER):
        if order < 2:
            raise ValueError(f"B+ tree order must be at least 2. Got: {order}")
        self.order = order
        self.max_keys = 2 * order - 1
        self._nodes: List[_Node] = []
        self._root = 0
        self._size = 0
        self.clear()

    def __len__(self) -> int:
        return self._size

    def __contains__(self, key: int) -> bool:
        return self._locate(key)[1] is not None

    def __iter__(self) -> Iterator[int]:
        for key, _ in self.items():
            yield key

    @property
    def height(self) -> int:
        """Number of levels, 1 for a lone leaf."""
        levels = 1
        node = self._nodes[self._root]
        while not node.is_leaf:
            node = self._nodes[node.children[0]]
            levels += 1
        return levels

    def clear(self) -> None:
        """Reset to a single empty leaf."""
        self._nodes = [_Node(is_leaf=True)]
        self._root = 0
        self._size = 0

    def insert(self, key: int, value: V) -> None:
        """Insert ``key``; an existing key has its value replaced."""
        root = self._nodes[self._root]
        if len(root.keys) == self.max_keys:
            new_root = self._new_node(is_leaf=False)
            self._nodes[new_root].children.append(self._root)
            self._split_child(new_root, 0)
            self._root = new_root
        self._insert_non_full(self._root, key, value)

    def search(self, key: int) -> Optional[V]:
        """Value stored under ``key``, or None when absent."""
        leaf_index, position = self._locate(key)
        if position is None:
            return None
        return self._nodes[leaf_index].values[position]

    def get_all(self) -> List[V]:
        """All values in ascending key order."""
        return [value for _, value in self.items()]

    def items(self) -> Iterator[Tuple[int, V]]:
        current: Optional[int] = self._leftmost_leaf()
        while current is not None:
            leaf = self._nodes[current]
            yield from zip(leaf.keys, leaf.values)
            current = leaf.next

    def rebuild(self, bins: Iterable[Bin]) -> None:
        """Replace the whole index with ``bins`` keyed by bin id."""
        self.clear()
        for b in bins:
            self.insert(b.bin_id, b)
        logger.debug(
            f"Rebuilt bin index: {self._size} entries, height {self.height}"
        )

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _new_node(self, is_leaf: bool) -> int:
        self._nodes.append(_Node(is_leaf=is_leaf))
        return len(self._nodes) - 1

    def _split_child(self, parent_index: int, child_pos: int) -> None:
        """Split the full child at ``child_pos`` of a non-full parent."""
        parent = self._nodes[parent_index]
        child_index = parent.children[child_pos]
        child = self._nodes[child_index]
        sibling_index = self._new_node(is_leaf=child.is_leaf)
        sibling = self._nodes[sibling_index]
        mid = self.order - 1

        if child.is_leaf:
            # Leaves keep every key; the right half's first key is copied up.
            sibling.keys = child.keys[mid:]
            sibling.values = child.values[mid:]
            child.keys = child.keys[:mid]
            child.values = child.values[:mid]
            separator = sibling.keys[0]
            sibling.next = child.next
            child.next = sibling_index
        else:
            separator = child.keys[mid]
            sibling.keys = child.keys[mid + 1:]
            sibling.children = child.children[mid + 1:]
            child.keys = child.keys[:mid]
            child.children = child.children[:mid + 1]

        parent.keys.insert(child_pos, separator)
        parent.children.insert(child_pos + 1, sibling_index)

    def _insert_non_full(self, node_index: int, key: int, value: V) -> None:
        while True:
            node = self._nodes[node_index]
            if node.is_leaf:
                position = bisect_left(node.keys, key)
                if position < len(node.keys) and node.keys[position] == key:
                    node.values[position] = value
                    return
                node.keys.insert(position, key)
                node.values.insert(position, value)
                self._size += 1
                return

            child_pos = bisect_right(node.keys, key)
            child = self._nodes[node.children[child_pos]]
            if len(child.keys) == self.max_keys:
                self._split_child(node_index, child_pos)
                if key >= node.keys[child_pos]:
                    child_pos += 1
            node_index = node.children[child_pos]

    def _locate(self, key: int) -> Tuple[int, Optional[int]]:
        """Leaf index reached for ``key`` and the key's slot in it, if present."""
        node_index = self._root
        node = self._nodes[node_index]
        while not node.is_leaf:
            node_index = node.children[bisect_right(node.keys, key)]
            node = self._nodes[node_index]
        position = bisect_left(node.keys, key)
        if position < len(node.keys) and node.keys[position] == key:
            return node_index, position
        return node_index, None

    def _leftmost_leaf(self) -> int:
        node_index = self._root
        node = self._nodes[node_index]
        while not node.is_leaf:
            node_index = node.children[0]
            node = self._nodes[node_index]
        return node_index
