"""
Breadth-first construction of the flat tree.

Roots come first, sorted by name. A cursor then walks the growing sequence and
appends each node's sorted reports as one contiguous block at the end. Records
whose manager chain never reaches a root are never appended.
"""

import logging
from collections import defaultdict
from collections.abc import Iterable, Sequence
from dataclasses import replace
from enum import Enum

from .models import Dino, DinoNode
from .tree import FlatTree

logger = logging.getLogger(__name__)


class BuildStrategy(str, Enum):
    """How reports of a node are located during construction."""

    SCAN = "scan"
    INDEXED = "indexed"


def resolve_strategy(strategy: BuildStrategy | str) -> BuildStrategy:
    """
    Normalize a strategy name.

    Raises:
        ValueError: If strategy is not a known BuildStrategy
    """
    if isinstance(strategy, BuildStrategy):
        return strategy
    try:
        return BuildStrategy(str(strategy).lower())
    except ValueError:
        valid = ", ".join(s.value for s in BuildStrategy)
        raise ValueError(f"Invalid build strategy: '{strategy}'. Valid options: {valid}") from None


def sort_dinos(dinos: Iterable[Dino]) -> list[Dino]:
    """Sort by (first name, last name), keeping input order on ties."""
    return sorted(dinos, key=Dino.sort_key)


def find_roots(dinos: Sequence[Dino]) -> list[Dino]:
    """
    Find records with no manager, or a manager outside the roster.

    Args:
        dinos: Full roster

    Returns:
        Root records in roster order
    """
    current_ids = {d.employee_id for d in dinos}
    return [d for d in dinos if not d.manager_id or d.manager_id not in current_ids]


def find_directs(dinos: Sequence[Dino], manager_id: str) -> list[Dino]:
    """Records reporting to manager_id, in roster order."""
    return [d for d in dinos if d.manager_id == manager_id]


def index_directs(dinos: Sequence[Dino]) -> dict[str, list[Dino]]:
    """
    Group records by manager_id in one pass.

    Each list keeps roster order, so lookups match find_directs exactly.
    """
    directs: dict[str, list[Dino]] = defaultdict(list)
    for dino in dinos:
        if dino.manager_id:
            directs[dino.manager_id].append(dino)
    return dict(directs)


def build_flat_tree(
    dinos: Iterable[Dino],
    strategy: BuildStrategy | str = BuildStrategy.INDEXED,
    log: logging.Logger | None = None,
) -> FlatTree:
    """
    Build the flat tree from a complete roster.

    Args:
        dinos: Full roster of normalized records
        strategy: "indexed" groups reports once up front; "scan" rescans the
            roster for every node. Both yield the same sequence.
        log: Logger for build progress (default: module logger)

    Returns:
        Immutable FlatTree

    Raises:
        ValueError: If strategy is unknown
    """
    log = log or logger
    strategy = resolve_strategy(strategy)
    roster = list(dinos)

    nodes: list[DinoNode] = []
    id_to_index: dict[str, int] = {}

    for dino in sort_dinos(find_roots(roster)):
        id_to_index[dino.user_id] = len(nodes)
        nodes.append(DinoNode(parent=-1, first_child=None, num_children=0, dino=dino))
    log.info(f"got {len(nodes)} roots in tree")

    if strategy is BuildStrategy.INDEXED:
        by_manager = index_directs(roster)

        def lookup(manager_id: str) -> list[Dino]:
            return by_manager.get(manager_id, [])

    else:

        def lookup(manager_id: str) -> list[Dino]:
            return find_directs(roster, manager_id)

    cursor = 0
    while cursor < len(nodes):
        node = nodes[cursor]
        directs = []
        for direct in sort_dinos(lookup(node.dino.employee_id)):
            # Only reachable through a duplicated employee_id; placing it again would never terminate
            if direct.user_id in id_to_index:
                log.warning(f"Record '{direct.user_id}' reached twice, keeping first placement")
                continue
            directs.append(direct)
        if directs:
            first_child = len(nodes)
            for direct in directs:
                id_to_index[direct.user_id] = len(nodes)
                nodes.append(DinoNode(parent=cursor, first_child=None, num_children=0, dino=direct))
            nodes[cursor] = replace(node, first_child=first_child, num_children=len(directs))
        cursor += 1

    excluded = len(roster) - len(nodes)
    if excluded > 0:
        log.debug(f"{excluded} records not reachable from any root")
    log.info(f"Built tree with {len(nodes)} nodes from {len(roster)} records ({strategy.value})")
    return FlatTree(nodes, id_to_index)
