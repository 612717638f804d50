from .auth_service_interface import IAuthService
from .task_service_interface import ITaskService

__all__ = ["IAuthService", "ITaskService"]
