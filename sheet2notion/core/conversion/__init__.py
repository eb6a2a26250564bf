"""
Conversion of cell values into Notion property payloads.
"""

from .property_converter import PropertyConverter, split_options

__all__ = ["PropertyConverter", "split_options"]
