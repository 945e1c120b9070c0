"""Services module for timeblock-cli - Business logic layer."""

from .config_service import ConfigService, get_config_service
from .task_service import TaskService, get_task_service

__all__ = [
    "TaskService",
    "get_task_service",
    "ConfigService",
    "get_config_service",
]
