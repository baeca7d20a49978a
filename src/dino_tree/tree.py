"""
Flat tree storage.

The tree is a single ordered sequence of DinoNode plus a user_id -> index map.
All relationships are integer indices into that sequence. Instances are never
mutated after construction.
"""

from collections.abc import Iterator, Mapping, Sequence
from types import MappingProxyType

from .models import DinoNode


class FlatTree:
    """Immutable arena of DinoNodes in breadth-first order."""

    def __init__(self, nodes: Sequence[DinoNode] = (), id_to_index: Mapping[str, int] | None = None):
        """
        Initialize a FlatTree.

        Args:
            nodes: Nodes in breadth-first order, roots first
            id_to_index: user_id -> position in nodes. Derived from nodes when omitted.

        Raises:
            ValueError: If a children block points outside nodes
        """
        self._nodes: tuple[DinoNode, ...] = tuple(nodes)
        if id_to_index is None:
            id_to_index = {node.dino.user_id: i for i, node in enumerate(self._nodes)}
        for index, node in enumerate(self._nodes):
            if node.num_children < 0:
                raise ValueError(f"Node {index} has a negative child count")
            if node.num_children and (
                node.first_child is None
                or node.first_child < 0
                or node.first_child + node.num_children > len(self._nodes)
            ):
                raise ValueError(
                    f"Node {index} children block {node.first_child}+{node.num_children} "
                    f"outside tree of {len(self._nodes)} nodes"
                )
        self._id_to_index = MappingProxyType(dict(id_to_index))

        root_count = 0
        for node in self._nodes:
            if not node.is_root:
                break
            root_count += 1
        self._root_count = root_count

    def __repr__(self) -> str:
        return f"FlatTree(nodes={len(self._nodes)}, roots={self._root_count})"

    def __len__(self) -> int:
        return len(self._nodes)

    def __iter__(self) -> Iterator[DinoNode]:
        return iter(self._nodes)

    @property
    def nodes(self) -> tuple[DinoNode, ...]:
        """The ordered node sequence."""
        return self._nodes

    @property
    def id_to_index(self) -> Mapping[str, int]:
        """Read-only user_id -> index mapping."""
        return self._id_to_index

    @property
    def root_count(self) -> int:
        """Number of leading root nodes."""
        return self._root_count

    def index_of(self, user_id: str) -> int | None:
        """Get the index of a user, or None if unknown."""
        return self._id_to_index.get(user_id)

    def bad_index(self, index: int | None) -> bool:
        """Check whether index is absent, negative, or past the end."""
        return index is None or index < 0 or index >= len(self._nodes)

    def node_at(self, index: int) -> DinoNode:
        """
        Get the node at index.

        Raises:
            IndexError: If index is a bad index
        """
        if self.bad_index(index):
            raise IndexError(f"Index {index} out of range for tree of {len(self._nodes)} nodes")
        return self._nodes[index]

    def sibling_range(self, index: int) -> range:
        """
        Indices of the contiguous block holding the node at index and its siblings.

        For roots this is the root row; otherwise the parent's children block.
        """
        node = self.node_at(index)
        if self.bad_index(node.parent):
            return range(0, self._root_count)
        return self._nodes[node.parent].children_range
