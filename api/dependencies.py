"""
FastAPI dependency providers.

The app factory stores one instance of each collaborator on
app.state; handlers receive them through Depends().
"""
from fastapi import Request

from core.config import AppConfig
from monitoring.health_checks import HealthChecker
from monitoring.metrics import MetricsAggregator
from task_registry.registry import TaskRegistry


def get_task_registry(request: Request) -> TaskRegistry:
    return request.app.state.task_registry


def get_metrics(request: Request) -> MetricsAggregator:
    return request.app.state.metrics


def get_health_checker(request: Request) -> HealthChecker:
    return request.app.state.health_checker


def get_app_config(request: Request) -> AppConfig:
    return request.app.state.config
