"""
Roster health checks.

The tree builder drops records whose manager chain never reaches a root
without saying so. These helpers rebuild the reporting graph with NetworkX so
callers can see which records were dropped and why.
"""

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field as dataclass_field
from typing import Any

import networkx as nx

from .builder import find_roots
from .models import Dino

logger = logging.getLogger(__name__)


def reporting_graph(dinos: Sequence[Dino]) -> nx.DiGraph:
    """
    Build the manager -> report graph keyed by employee_id.

    Edges only exist for managers present in the roster.

    Args:
        dinos: Full roster

    Returns:
        NetworkX DiGraph with one node per employee_id
    """
    graph = nx.DiGraph()
    for dino in dinos:
        graph.add_node(dino.employee_id)
    for dino in dinos:
        if dino.manager_id and dino.manager_id in graph:
            graph.add_edge(dino.manager_id, dino.employee_id)
    return graph


def find_unreachable(dinos: Sequence[Dino]) -> list[Dino]:
    """
    Find records the tree builder leaves out.

    A record is placed when it is a root or its manager is an employee_id
    reachable from a root.

    Args:
        dinos: Full roster

    Returns:
        Excluded records in roster order
    """
    graph = reporting_graph(dinos)
    roots = find_roots(dinos)
    reachable: set[str] = set()
    for root in roots:
        if root.employee_id in reachable:
            continue
        reachable.add(root.employee_id)
        reachable |= nx.descendants(graph, root.employee_id)

    root_ids = {id(root) for root in roots}
    return [d for d in dinos if id(d) not in root_ids and d.manager_id not in reachable]


def find_reporting_cycles(dinos: Sequence[Dino]) -> list[list[str]]:
    """
    Find manager chains that loop back on themselves.

    Args:
        dinos: Full roster

    Returns:
        Each cycle as a list of employee_ids
    """
    return [list(cycle) for cycle in nx.simple_cycles(reporting_graph(dinos))]


def has_reporting_cycles(dinos: Sequence[Dino]) -> bool:
    """Check if any manager chain loops back on itself."""
    return not nx.is_directed_acyclic_graph(reporting_graph(dinos))


@dataclass
class RosterReport:
    """Summary of how a roster maps onto the tree."""

    record_count: int = 0
    root_count: int = 0
    placed_count: int = 0
    unreachable: list[str] = dataclass_field(default_factory=list)
    """user_ids of records left out of the tree."""

    cycles: list[list[str]] = dataclass_field(default_factory=list)
    """Reporting cycles as employee_id lists."""

    def to_dict(self) -> dict[str, Any]:
        """Convert the report to dictionary format."""
        return {
            "record_count": self.record_count,
            "root_count": self.root_count,
            "placed_count": self.placed_count,
            "unreachable": list(self.unreachable),
            "cycles": [list(cycle) for cycle in self.cycles],
        }


def roster_report(
    dinos: Sequence[Dino],
    log: logging.Logger | None = None,
) -> RosterReport:
    """
    Summarize roots, placed records, and dropped records of a roster.

    Args:
        dinos: Full roster
        log: Logger for the unreachable-records warning (default: module logger)

    Returns:
        RosterReport
    """
    dinos = list(dinos)
    unreachable = find_unreachable(dinos)
    report = RosterReport(
        record_count=len(dinos),
        root_count=len(find_roots(dinos)),
        placed_count=len(dinos) - len(unreachable),
        unreachable=[d.user_id for d in unreachable],
        cycles=find_reporting_cycles(dinos),
    )
    if report.unreachable:
        (log or logger).warning(
            f"{len(report.unreachable)} of {report.record_count} records unreachable "
            f"({len(report.cycles)} reporting cycles)"
        )
    return report
