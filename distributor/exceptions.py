"""Custom exception classes for the content service."""


class ContentServiceError(Exception):
    """
    Base exception class for all content service errors.

    Carries the HTTP status and the client-facing message used when the
    error reaches a request handler.
    """
    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: str = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ArchiveNotFoundError(ContentServiceError):
    """
    Raised when the source archive does not exist.
    """
    default_message = "Content archive not found"


class ArchiveCorruptError(ContentServiceError):
    """
    Raised when the source archive cannot be parsed or contains unsafe entries.
    """
    default_message = "Content archive is corrupt"


class CacheNotLoadedError(ContentServiceError):
    """
    Raised when the content listing is requested before it was loaded.
    """
    default_message = "Cache not loaded. Call load_cache() first."


class AuthError(ContentServiceError):
    """
    Base class for authentication gate rejections.
    """
    status_code = 401
    default_message = "Authentication failed."


class AuthRequiredError(AuthError):
    """
    Raised when no token is present on the request.
    """
    default_message = "Authentication required. Please login to access content."


class TokenExpiredError(AuthError):
    """
    Raised when the token's expiry has passed.
    """
    default_message = "Token expired. Please login again."


class InvalidTokenError(AuthError):
    """
    Raised when the token is malformed or its signature does not verify.
    """
    default_message = "Invalid token. Please login again."


class AuthFailedError(AuthError):
    """
    Raised for any other token verification failure.
    """
    default_message = "Authentication failed."


class AccountInactiveError(AuthError):
    """
    Raised when a valid token belongs to an account that is not active.
    """
    status_code = 403
    default_message = "Account is not activated. Please check your email and activate your account."


class AccessDeniedError(ContentServiceError):
    """
    Raised when a requested path resolves outside the content root.
    """
    status_code = 403
    default_message = "Access denied"


class ContentNotFoundError(ContentServiceError):
    """
    Raised when nothing exists at the requested content path.
    """
    status_code = 404
    default_message = "File not found"


class PathIsDirectoryError(ContentServiceError):
    """
    Raised when the requested content path is a directory.
    """
    status_code = 400
    default_message = "Cannot serve directory"
