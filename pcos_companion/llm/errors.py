"""
Error taxonomy for calls to the inference endpoint.
"""

from typing import Optional


class AIClientError(Exception):
    """Base exception for expected failures of the AI clients."""

    user_message = "Something went wrong. Please try again."

    def __init__(
        self,
        message: str,
        error_code: str = "AI_CLIENT_ERROR",
        details: Optional[dict] = None,
        user_message: Optional[str] = None,
    ):
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        if user_message is not None:
            self.user_message = user_message
        super().__init__(self.message)

    def to_dict(self) -> dict:
        return {
            "error": self.message,
            "error_code": self.error_code,
            "user_message": self.user_message,
            **({"details": self.details} if self.details else {}),
        }


class ConfigurationError(AIClientError):
    """Raised before any network attempt when no API credential is configured."""

    user_message = "This feature is unavailable right now. Please contact support."

    def __init__(self, message: str = "Inference API key is not configured", **kwargs):
        super().__init__(message, error_code="CONFIGURATION_ERROR", **kwargs)


class ServiceError(AIClientError):
    """The inference endpoint answered with a non-success status or could not be reached."""

    user_message = "The analysis service is temporarily unavailable. Please try again in a moment."

    def __init__(self, message: str, status_code: Optional[int] = None, **kwargs):
        self.status_code = status_code
        super().__init__(message, error_code="SERVICE_ERROR", **kwargs)


class EmptyResponseError(AIClientError):
    """The endpoint succeeded but returned no text payload."""

    user_message = "We couldn't read a result. Please try again with a clearer photo."

    def __init__(self, message: str = "Inference response contained no content", **kwargs):
        super().__init__(message, error_code="EMPTY_RESPONSE", **kwargs)


class MalformedResponseError(AIClientError):
    """The endpoint succeeded but the payload did not have the required structure."""

    user_message = "We couldn't read a result. Please try again with a clearer photo."

    def __init__(self, message: str = "Inference response was not valid", **kwargs):
        super().__init__(message, error_code="MALFORMED_RESPONSE", **kwargs)


class RequestInProgressError(AIClientError):
    """A call for the same capability is still outstanding."""

    user_message = "Still working on your previous request. Please wait a moment."

    def __init__(self, message: str = "A request is already in progress", **kwargs):
        super().__init__(message, error_code="REQUEST_IN_PROGRESS", **kwargs)


class FoodNotIdentifiedError(AIClientError):
    """The analysis succeeded but the food in the photo could not be identified."""

    user_message = "We could not identify the food. Please try another photo."

    def __init__(self, message: str = "Food could not be identified", **kwargs):
        super().__init__(message, error_code="FOOD_NOT_IDENTIFIED", **kwargs)
