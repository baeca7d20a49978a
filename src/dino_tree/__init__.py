"""
dino-tree: an organization chart over a flattened, index-addressed tree.

A roster of employee records is laid out once in breadth-first order, with
parent and children stored as index ranges, and then queried for chart
exports, manager/direct lookups, breadcrumb views, and positional traces.
"""

from dino_tree.builder import BuildStrategy, build_flat_tree
from dino_tree.diagnostics import (
    RosterReport,
    find_reporting_cycles,
    find_unreachable,
    roster_report,
)
from dino_tree.exceptions import DinoTreeError, ProfileError, TreeCycleError
from dino_tree.models import Dino, DinoData, DinoNode
from dino_tree.profile import dino_from_profile, dinos_from_profiles
from dino_tree.queries import DinoTree
from dino_tree.tree import FlatTree
from dino_tree.visualization import VisualizationError, export_graphviz, export_json

__version__ = "0.1.0"

__all__ = [
    "__version__",
    # Core classes
    "DinoTree",
    "FlatTree",
    "BuildStrategy",
    "build_flat_tree",
    # Data models
    "Dino",
    "DinoData",
    "DinoNode",
    # Profile normalization
    "dino_from_profile",
    "dinos_from_profiles",
    # Diagnostics
    "RosterReport",
    "find_unreachable",
    "find_reporting_cycles",
    "roster_report",
    # Visualization
    "export_graphviz",
    "export_json",
    "VisualizationError",
    # Exceptions
    "DinoTreeError",
    "ProfileError",
    "TreeCycleError",
]
