"""Dependency graph construction and cycle detection."""

from graph.algos import build_class_graph, detect_cycles, find_cycles, format_cycle

__all__ = ["build_class_graph", "detect_cycles", "find_cycles", "format_cycle"]
