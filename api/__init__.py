"""
API Package.

HTTP surface of the task service.

Modules:
- main: application factory
- routers/: task, health and metrics endpoints
- schemas: request and response models
"""

from .main import SERVICE_VERSION, create_app

__all__ = ["SERVICE_VERSION", "create_app"]
