"""Group the nodes of a control-flow graph that are dominated by a chosen start node."""

__version__ = "0.1.0"
