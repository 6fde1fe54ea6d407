"""
Task Service API Routers.
"""
from . import health, metrics, tasks

__all__ = ["health", "metrics", "tasks"]
