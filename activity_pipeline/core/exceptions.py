"""
Custom exceptions for the activity pipeline service.
Provides consistent error handling across the application.
"""
from fastapi import HTTPException, status


class PipelineException(Exception):
    """Base exception for the activity pipeline service"""
    def __init__(self, message: str = "An error occurred"):
        self.message = message
        super().__init__(self.message)


class NotFoundError(PipelineException):
    """Resource not found"""
    def __init__(self, resource: str = "Resource", resource_id: str = None):
        message = f"{resource} not found"
        if resource_id:
            message = f"{resource} with id '{resource_id}' not found"
        super().__init__(message)


class StoreUnavailableError(PipelineException):
    """Record store read or write failed"""
    def __init__(self, store: str = "Record store", message: str = None):
        msg = f"{store} unavailable"
        if message:
            msg = f"{msg}: {message}"
        super().__init__(msg)


class AnnotationError(PipelineException):
    """Follow-up annotation failed; the pipeline itself is still usable"""
    def __init__(self, message: str = None):
        msg = "Failed to load follow-ups"
        if message:
            msg = f"{msg}: {message}"
        super().__init__(msg)


class ValidationError(PipelineException):
    """Validation failed"""
    def __init__(self, message: str = "Validation failed", field: str = None):
        if field:
            message = f"Validation failed for field '{field}': {message}"
        super().__init__(message)


# HTTP Exception helpers
def raise_not_found(resource: str = "Resource", resource_id: str = None):
    """Raise 404 HTTPException"""
    err = NotFoundError(resource, resource_id)
    raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=err.message)


def raise_service_unavailable(message: str = "Record store unavailable"):
    """Raise 503 HTTPException"""
    raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=message)

