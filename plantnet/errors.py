"""Error taxonomy shared by the domain modules and the HTTP layer."""


class ApiError(Exception):
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class BadRequest(ApiError):
    status_code = 400


class Unauthenticated(ApiError):
    status_code = 401


class Forbidden(ApiError):
    status_code = 403


class NotFound(ApiError):
    status_code = 404


class Conflict(ApiError):
    status_code = 409


class PaymentGatewayError(ApiError):
    status_code = 502


class NotificationError(Exception):
    """Raised by the mailer; never reaches a client."""
