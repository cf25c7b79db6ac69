from fastapi import status

class BaseAppException(Exception):
    """Base class for all app-specific exceptions."""
    def __init__(self, message: str, status_code: int = status.HTTP_400_BAD_REQUEST):
        self.message = message
        self.status_code = status_code
        super().__init__(message)

class ValidationException(BaseAppException):
    """Missing, blank or unresolvable user input."""
    def __init__(self, message: str = "Invalid request"):
        super().__init__(message, status.HTTP_400_BAD_REQUEST)

class StorageException(BaseAppException):
    """Storage read/write failed."""
    def __init__(self, message: str = "Error communicating with storage"):
        super().__init__(message, status.HTTP_500_INTERNAL_SERVER_ERROR)
