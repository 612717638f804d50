"""
Error taxonomy for the service layer.

Every error is terminal for the operation that raised it; callers are
expected to catch TaskflowError and present the message.
"""


class TaskflowError(Exception):
    """Base exception for TaskFlow service errors"""

    code = "ERROR"

    def __init__(self, message: str = ""):
        super().__init__(message or self.__class__.__doc__ or self.code)
        self.message = str(self.args[0])


class ConflictError(TaskflowError):
    """Resource already exists"""

    code = "CONFLICT"


class NotFoundError(TaskflowError):
    """No matching user or task"""

    code = "NOT_FOUND"


class InvalidCredentialError(TaskflowError):
    """Invalid email or password"""

    code = "INVALID_CREDENTIAL"


class UnauthorizedError(TaskflowError):
    """No active session"""

    code = "UNAUTHORIZED"


class InvalidInputError(TaskflowError, ValueError):
    """Request data failed validation"""

    code = "INVALID_INPUT"
