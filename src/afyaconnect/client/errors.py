"""Errors raised by the Python client before or after talking to the API."""


class ApiError(Exception):
    """Non-2xx response. `message` is the API's `error` field when present."""

    def __init__(self, status_code: int, message: str):
        super().__init__(f"{status_code}: {message}")
        self.status_code = status_code
        self.message = message


class AuthenticationRequired(Exception):
    """Raised without any request when an endpoint needs a token and none is set."""


class TestimonialValidationError(Exception):
    """A testimonial form failed local validation; nothing was sent."""

    def __init__(self, fields: dict[str, str]):
        super().__init__("Invalid testimonial fields: " + ", ".join(sorted(fields)))
        self.fields = fields
