# amalgo/__init__.py
"""amalgo: concatenate a project's source files into a single document."""

__version__ = "0.3.0"
