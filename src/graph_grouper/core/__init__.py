from .dominance import DominanceInformation, InvalidEntryError, InvalidQueryError
from .grouping import EmptyLabelError, EmptyRegionError, Group, GroupingError, GroupProvider, NoSelectionError
from .ir import ControlFlowGraph, NodeId
from .region import BoundaryPredicate, Region, RegionCollector, collect

__all__ = [
    "BoundaryPredicate",
    "ControlFlowGraph",
    "DominanceInformation",
    "EmptyLabelError",
    "EmptyRegionError",
    "Group",
    "GroupProvider",
    "GroupingError",
    "InvalidEntryError",
    "InvalidQueryError",
    "NoSelectionError",
    "NodeId",
    "Region",
    "RegionCollector",
    "collect",
]
