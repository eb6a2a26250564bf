"""
Row validation and column mapping configuration management.
"""

from .mapping_config import MappingConfigBuilder, MappingConfigLoader
from .type_validator import TypeValidator

__all__ = [
    "TypeValidator",
    "MappingConfigLoader",
    "MappingConfigBuilder",
]
