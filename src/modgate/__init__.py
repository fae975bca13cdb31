"""Admission gate for dynamically discovered Python modules."""

__version__ = "0.1.0"
