# storefront/domain/errors.py
GENERIC_ERROR_MESSAGE = "Something went wrong. Please try again."


class StorefrontError(Exception):
    """Baza dla bledow domenowych. status_code i code ida do ciala odpowiedzi."""

    status_code = 500
    code = "server_error"
    default_message = GENERIC_ERROR_MESSAGE

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class AuthenticationError(StorefrontError):
    status_code = 401
    code = "authentication_failed"
    default_message = "Incorrect email or password."


class ValidationError(StorefrontError):
    status_code = 400
    code = "validation_error"
    default_message = "Invalid data"


class InvalidTokenError(StorefrontError):
    status_code = 400
    code = "invalid_token"
    default_message = "Password reset link is invalid or has expired."


class EmptyCartError(StorefrontError):
    status_code = 400
    code = "empty_cart"
    default_message = "Your cart is empty."


class NotFoundError(StorefrontError):
    status_code = 404
    code = "not_found"
    default_message = "Not found"


class PermissionDeniedError(StorefrontError):
    status_code = 403
    code = "forbidden"
    default_message = "Forbidden"


class ConflictError(StorefrontError):
    status_code = 409
    code = "conflict"
    default_message = "Already exists"


class NetworkError(StorefrontError):
    """Blad transportu po stronie klienta - do ponowienia, nie fatalny."""

    status_code = None
    code = "network_error"
    default_message = "Network error. Check your connection and try again."


ERRORS_BY_CODE = {
    cls.code: cls
    for cls in (
        AuthenticationError,
        ValidationError,
        InvalidTokenError,
        EmptyCartError,
        NotFoundError,
        PermissionDeniedError,
        ConflictError,
    )
}

ERRORS_BY_STATUS = {
    401: AuthenticationError,
    400: ValidationError,
    403: PermissionDeniedError,
    404: NotFoundError,
    409: ConflictError,
}


def user_message(exc: Exception) -> str:
    """Tekst do powiadomienia dla uzytkownika: wiadomosc serwera albo ogolna."""
    if isinstance(exc, StorefrontError) and exc.message:
        return exc.message
    return GENERIC_ERROR_MESSAGE
