"""
Main DinoTree query class.

DinoTree builds the flat tree once from a roster and answers hierarchy queries
by index arithmetic over it. Query results are plain dicts and lists that can
be embedded directly in an API response. Lookup failures are returned as
``{"error": ...}`` values, never raised.
"""

import logging
from collections.abc import Iterable
from typing import Any

from .builder import BuildStrategy, build_flat_tree
from .exceptions import TreeCycleError
from .models import Dino, DinoNode
from .tree import FlatTree

logger = logging.getLogger(__name__)

TRACE_SEPARATOR = "-"


class DinoTree:
    """
    Read-only organization chart over a flat tree.

    This class handles:
    - Building the flat tree from a roster
    - Chart export and manager/direct lookups
    - Breadcrumb (expanded) views
    - Positional traces and their decoding
    """

    def __init__(
        self,
        dinos: Iterable[Dino] = (),
        *,
        strategy: BuildStrategy | str = BuildStrategy.INDEXED,
        legacy_child_check: bool = False,
        logger: logging.Logger | None = None,
    ):
        """
        Initialize a DinoTree.

        Args:
            dinos: Complete roster of normalized records
            strategy: Build strategy, "indexed" (default) or "scan"
            legacy_child_check: Decide "has children" in full_orgchart by the
                truthiness of first_child instead of num_children, so a children
                block starting at index 0 reads as empty
            logger: Logger for build and query diagnostics (default: module logger)

        Raises:
            ValueError: If strategy is unknown
        """
        self._logger = logger or logging.getLogger(__name__)
        self.legacy_child_check = legacy_child_check
        self._tree = build_flat_tree(dinos, strategy=strategy, log=self._logger)

    @classmethod
    def from_flat_tree(
        cls,
        flat_tree: FlatTree,
        *,
        legacy_child_check: bool = False,
        logger: logging.Logger | None = None,
    ) -> "DinoTree":
        """
        Wrap an already built FlatTree without rebuilding it.

        Args:
            flat_tree: Arena to query
            legacy_child_check: See __init__
            logger: See __init__

        Returns:
            DinoTree instance
        """
        instance = cls.__new__(cls)
        instance._logger = logger or logging.getLogger(__name__)
        instance.legacy_child_check = legacy_child_check
        instance._tree = flat_tree
        return instance

    def __repr__(self) -> str:
        return f"DinoTree(nodes={self.node_count}, roots={self.root_count})"

    def __len__(self) -> int:
        return len(self._tree)

    def __contains__(self, user_id: object) -> bool:
        return isinstance(user_id, str) and not self._tree.bad_index(self._tree.index_of(user_id))

    # ==================== Properties ====================

    @property
    def flat_tree(self) -> FlatTree:
        """The underlying arena."""
        return self._tree

    @property
    def node_count(self) -> int:
        """Number of records placed in the tree."""
        return len(self._tree)

    @property
    def root_count(self) -> int:
        """Number of roots."""
        return self._tree.root_count

    # ==================== Internal walks ====================

    def _has_children(self, node: DinoNode) -> bool:
        if self.legacy_child_check:
            return bool(node.first_child)
        return node.num_children > 0

    def _find_herd(self, index: int, seen: set[int]) -> dict[str, Any]:
        """Expand the subtree at index into nested {data, children}."""
        herd: dict[str, Any] = {}
        # (index, list the rendered node is appended to); pushed in reverse to pop in order
        stack: list[tuple[int, list[dict[str, Any]] | None]] = [(index, None)]
        while stack:
            current, siblings = stack.pop()
            if current in seen:
                raise TreeCycleError(current)
            seen.add(current)
            node = self._tree.nodes[current]
            entry: dict[str, Any] = {"data": node.dino.data.to_dict(), "children": []}
            if siblings is None:
                herd = entry
            else:
                siblings.append(entry)
            if self._has_children(node):
                for child in reversed(node.children_range):
                    stack.append((child, entry["children"]))
        return herd

    def _with_siblings(self, index: int, children: list[dict[str, Any]]) -> list[dict[str, Any]]:
        """Render the sibling row of index, giving only index its children."""
        row = []
        for sibling in self._tree.sibling_range(index):
            data = self._tree.nodes[sibling].dino.data.to_dict()
            row.append({"data": data, "children": children if sibling == index else []})
        return row

    def _walk_up(self, index: int) -> list[dict[str, Any]]:
        """Build the breadcrumb from index up to its root."""
        seen: set[int] = set()
        node = self._tree.nodes[index]
        children = [
            {"data": self._tree.nodes[child].dino.data.to_dict(), "children": []}
            for child in node.children_range
        ]
        while True:
            if index in seen:
                raise TreeCycleError(index)
            seen.add(index)
            children = self._with_siblings(index, children)
            parent = self._tree.nodes[index].parent
            if self._tree.bad_index(parent):
                return children
            index = parent

    def _trace_index(self, index: int) -> list[int]:
        """Sibling offsets from index up to the root, deepest first."""
        seen: set[int] = set()
        trace: list[int] = []
        while True:
            if index in seen:
                raise TreeCycleError(index)
            seen.add(index)
            parent = self._tree.nodes[index].parent
            if self._tree.bad_index(parent):
                trace.append(index)
                return trace
            trace.append(index - self._tree.nodes[parent].children_range.start)
            index = parent

    def _directs_data(self, node: DinoNode) -> list[dict[str, Any]]:
        return [self._tree.nodes[i].dino.data.to_dict() for i in node.children_range]

    def _resolve(self, user_id: str) -> int | None:
        index = self._tree.index_of(user_id)
        if self._tree.bad_index(index):
            self._logger.debug(f"Lookup of unknown userid '{user_id}'")
            return None
        return index

    @staticmethod
    def _unknown(user_id: str) -> dict[str, str]:
        return {"error": f"unknown userid: {user_id}"}

    def _cycle(self, user_id: str, e: TreeCycleError) -> dict[str, str]:
        self._logger.error(f"Cycle in flat tree while serving '{user_id}': {e}")
        return {"error": f"cycle detected at userid: {user_id}"}

    # ==================== Queries ====================

    def full_orgchart(self) -> list[dict[str, Any]] | dict[str, str]:
        """
        Export the whole chart as one nested tree per root.

        Returns:
            List of {"data", "children"} trees in root order
        """
        full = []
        seen: set[int] = set()
        try:
            for index, node in enumerate(self._tree.nodes):
                if not node.is_root:
                    break
                full.append(self._find_herd(index, seen))
        except TreeCycleError as e:
            self._logger.error(f"Cycle in flat tree while exporting chart: {e}")
            return {"error": f"cycle detected at index: {e.index}"}
        return full

    def related(self, user_id: str) -> dict[str, Any]:
        """
        Get the manager and direct reports of a user.

        Args:
            user_id: User to look up

        Returns:
            {"manager": data or None, "directs": [data, ...]} or an error dict
        """
        index = self._resolve(user_id)
        if index is None:
            return self._unknown(user_id)
        node = self._tree.nodes[index]
        manager = None
        if not self._tree.bad_index(node.parent):
            manager = self._tree.nodes[node.parent].dino.data.to_dict()
        return {"manager": manager, "directs": self._directs_data(node)}

    def directs(self, user_id: str) -> list[dict[str, Any]] | dict[str, str]:
        """
        Get the direct reports of a user in name order.

        Args:
            user_id: User to look up

        Returns:
            List of display payloads, or an error dict
        """
        index = self._resolve(user_id)
        if index is None:
            return self._unknown(user_id)
        return self._directs_data(self._tree.nodes[index])

    def expanded(self, user_id: str) -> list[dict[str, Any]] | dict[str, str]:
        """
        Get the breadcrumb view of a user.

        The user carries its real children; every ancestor level lists all
        siblings of the path member, and only the path member is expanded.

        Args:
            user_id: User to look up

        Returns:
            Root-level sibling row, or an error dict
        """
        index = self._resolve(user_id)
        if index is None:
            return self._unknown(user_id)
        try:
            return self._walk_up(index)
        except TreeCycleError as e:
            return self._cycle(user_id, e)

    def trace(self, user_id: str) -> dict[str, str]:
        """
        Get the positional path of a user.

        Args:
            user_id: User to look up

        Returns:
            {"trace": "a-b-c"} with the root-level offset first, or an error dict
        """
        index = self._resolve(user_id)
        if index is None:
            return self._unknown(user_id)
        try:
            trace = self._trace_index(index)
        except TreeCycleError as e:
            return self._cycle(user_id, e)
        trace.reverse()
        return {"trace": TRACE_SEPARATOR.join(str(offset) for offset in trace)}

    def locate(self, trace: str) -> dict[str, Any]:
        """
        Decode a trace back to the display payload of its node.

        Args:
            trace: Offset string as returned by trace()

        Returns:
            Display payload, or {"error": "unknown trace: <trace>"}
        """
        error = {"error": f"unknown trace: {trace}"}
        if not isinstance(trace, str):
            return error
        parts = trace.split(TRACE_SEPARATOR)
        if not all(part.isascii() and part.isdigit() for part in parts):
            return error
        offsets = [int(part) for part in parts]

        block = range(0, self._tree.root_count)
        index = None
        for offset in offsets:
            if offset < 0 or offset >= len(block):
                return error
            index = block[offset]
            block = self._tree.nodes[index].children_range
        if index is None:
            return error
        return self._tree.nodes[index].dino.data.to_dict()
