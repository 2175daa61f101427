# utils/errors.py
from fastapi import status


class ServiceError(Exception):
    """Base class for business errors raised by the service layer."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    title = "Internal Server Error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


# Malformed or out-of-range input
class BadRequestError(ServiceError):
    status_code = status.HTTP_400_BAD_REQUEST
    title = "Validation Error"


# A referenced entity does not exist
class NotFoundError(ServiceError):
    status_code = status.HTTP_404_NOT_FOUND
    title = "Not Found"


# Business rule violation (duplicates, inactive warehouse, stock or capacity)
class ConflictError(ServiceError):
    status_code = status.HTTP_409_CONFLICT
    title = "Conflict Error"
