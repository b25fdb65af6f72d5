from fastapi import status
from typing import Optional


class PortfolioError(Exception):
    """Base error carrying the HTTP status and the message shown to the client."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    message: str = "Internal server error"

    def __init__(self, message: Optional[str] = None):
        if message is not None:
            self.message = message
        super().__init__(self.message)


class ValidationError(PortfolioError):
    status_code = status.HTTP_400_BAD_REQUEST
    message = "All fields are required"


class DeliveryError(PortfolioError):
    message = "Failed to send message. Please try again later."


class PersistenceError(PortfolioError):
    message = "Failed to send message. Please try again later."


class PersistenceUnavailable(PortfolioError):
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    message = "Database not connected"


class NotFound(PortfolioError):
    status_code = status.HTTP_404_NOT_FOUND
    message = "Route not found"


class InternalError(PortfolioError):
    pass
