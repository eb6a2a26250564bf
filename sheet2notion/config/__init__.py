"""
Configuration sources.
"""

from .settings import EnvConfigProvider, validate_api_token, validate_database_id

__all__ = ["EnvConfigProvider", "validate_api_token", "validate_database_id"]
