"""
Authentication module exceptions.

Callback errors carry the short code that ends up in the login page's
``?error=`` parameter. The other exceptions are raised by the identity
provider and translated to HTTP responses by the auth routes.
"""

from shared.exceptions import AuthenticationError, ExternalServiceError, ValidationError


class CallbackError(AuthenticationError):
    """Base for failures that end the callback flow at the login page."""

    login_error = "auth_callback_failed"

    def __init__(self, message: str):
        super().__init__(message, code=self.login_error)


class NoRecognizableParamsError(CallbackError):
    """Raised when the callback has neither OTP nor code parameters."""

    login_error = "auth_callback_failed"

    def __init__(self, message: str = "Callback reached without auth parameters"):
        super().__init__(message)


class InvalidOrExpiredLinkError(CallbackError):
    """Raised when the provider rejects a token hash (expired or already used)."""

    login_error = "invalid_link"

    def __init__(self, message: str = "Link is invalid or has expired"):
        super().__init__(message)


class ExchangeFailedError(CallbackError):
    """Raised when the provider rejects a PKCE code exchange."""

    login_error = "auth_callback_failed"

    def __init__(self, message: str = "Code exchange failed"):
        super().__init__(message)


class InvalidCredentialsError(AuthenticationError):
    """Raised when email/password sign-in fails."""

    def __init__(self, message: str = "Invalid email or password. Please try again."):
        super().__init__(message, code="INVALID_CREDENTIALS")


class MissingSessionError(AuthenticationError):
    """Raised when an operation needs a session and there is none."""

    def __init__(self, message: str = "Authentication required"):
        super().__init__(message, code="MISSING_SESSION")


class PasswordUpdateError(ValidationError):
    """Raised when the provider refuses a new password."""

    def __init__(self, message: str):
        super().__init__(message, code="PASSWORD_UPDATE_FAILED")



class IdentityProviderUnavailableError(ExternalServiceError):
    """Raised when the identity provider cannot be reached."""

    def __init__(self, message: str = "Authentication service is unavailable. Please try again."):
        super().__init__(message, service="supabase_auth", code="IDENTITY_PROVIDER_UNAVAILABLE")
