"""Syntax tree nodes, JSON previews, type names and backtracking stacks for jq-style queries."""

__version__ = "0.1.0"

__all__ = ["preview", "query", "stack", "term_type", "types"]