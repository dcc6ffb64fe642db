# s3apt/services/__init__.py
"""Service layer for s3apt"""

from .config_service import ConfigService
from .publish_service import PublishService

__all__ = [
    "ConfigService",
    "PublishService",
]
