"""
targetgraph: export build target dependency graphs.

Walks the configured targets of a project and writes their link graph as a
deterministic JSON document for visualization and analysis tools.
"""

__version__ = "0.1.0"
