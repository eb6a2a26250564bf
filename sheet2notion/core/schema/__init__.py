"""
Column mapping schema management.
"""

from .registry import NOT_FOUND, SchemaRegistry

__all__ = ["SchemaRegistry", "NOT_FOUND"]
