"""Domain errors raised by services and rendered by the API layer."""


class AfyaConnectError(Exception):
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(AfyaConnectError):
    """Missing or invalid input. `fields` maps field name -> problem."""

    status_code = 400

    def __init__(self, message: str, fields: dict[str, str] | None = None):
        super().__init__(message)
        self.fields = fields or {}


class UnauthorizedError(AfyaConnectError):
    status_code = 401


class ForbiddenError(AfyaConnectError):
    status_code = 403


class NotFoundError(AfyaConnectError):
    status_code = 404


class ConflictError(AfyaConnectError):
    status_code = 409
