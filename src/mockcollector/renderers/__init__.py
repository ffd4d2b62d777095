"""Trace renderers."""

from .console import render_span_tree

__all__ = ["render_span_tree"]
