# amalgo/core/discovery/__init__.py
"""
Path discovery and filtering module for amalgo.

This package walks the scan root, applies the filter chain (hidden entries,
directory denylist, gitignore rules, extensions) and returns the accepted
files in a deterministic order.
"""
from .filters import FilterChain, build_filter_chain
from .walker import TreeWalker, VisitAction, scan_paths, sort_scan_results

__all__ = [
    "FilterChain",
    "TreeWalker",
    "VisitAction",
    "build_filter_chain",
    "scan_paths",
    "sort_scan_results",
]
