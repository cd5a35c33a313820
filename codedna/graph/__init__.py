"""
Graph module for building file dependency graphs from extracted file records.
"""

from .graph_builder import GraphBuilder, build_graph

__all__ = [
    'GraphBuilder',
    'build_graph',
]
