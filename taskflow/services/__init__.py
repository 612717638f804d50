"""
Service layer: async Auth and Task services.
"""

from .auth_service import AuthService
from .task_service import TaskService

__all__ = ["AuthService", "TaskService"]
