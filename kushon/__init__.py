"""Catalog and volume-progress tracker for serialized titles."""

__version__ = "0.1.0"
