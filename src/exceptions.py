from typing import Optional, Dict, Any


class NewsFeedError(Exception):
    def __init__(self, message: str, error_code: Optional[str] = None, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "error_code": self.error_code,
            "message": self.message,
            "details": self.details
        }


class ValidationError(NewsFeedError):
    pass


class DatabaseError(NewsFeedError):
    pass


class UserAlreadyExistsError(NewsFeedError):
    def __init__(self, email: str):
        super().__init__(
            message="User already exists",
            error_code="USER_ALREADY_EXISTS",
            details={"email": email}
        )


class UserNotFoundError(NewsFeedError):
    def __init__(self, user_id: str):
        super().__init__(
            message="User not found",
            error_code="USER_NOT_FOUND",
            details={"user_id": user_id}
        )


class InvalidCredentialsError(NewsFeedError):
    def __init__(self):
        super().__init__(message="Invalid email or password", error_code="INVALID_CREDENTIALS")


class InvalidTokenError(NewsFeedError):
    pass


class ExternalServiceError(NewsFeedError):
    pass


class NewsFetchError(ExternalServiceError):
    """Uniform error for any failed call to the news provider."""
    pass


class ProviderHTTPError(NewsFetchError):
    def __init__(self, message: str, status_code: int):
        super().__init__(
            message=message,
            error_code="PROVIDER_HTTP_ERROR",
            details={"status_code": status_code}
        )
        self.status_code = status_code


class ProviderPayloadError(NewsFetchError):
    pass


class ProviderUnreachableError(NewsFetchError):
    pass
