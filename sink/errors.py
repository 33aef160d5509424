from fastapi import status


class SinkError(Exception):
    """Base error for the sink. Each subclass knows the status it answers with."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    # whether the message is sent back to the caller as the response body
    expose = False


class DecodeError(SinkError):
    """The payload is not a JSON object of the film schema."""

    status_code = status.HTTP_400_BAD_REQUEST
    expose = True


class RecordValidationError(SinkError):
    """A decoded film breaks one of the field rules."""

    status_code = status.HTTP_400_BAD_REQUEST
    expose = True

    def __init__(self, field: str, message: str):
        super().__init__(message)
        self.field = field


class TransientError(SinkError):
    """Simulated backend instability, unrelated to the payload."""

    status_code = status.HTTP_503_SERVICE_UNAVAILABLE


class BodyReadError(SinkError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


class UnsupportedMethodError(SinkError):
    status_code = status.HTTP_405_METHOD_NOT_ALLOWED
    expose = True

    def __init__(self, method: str):
        super().__init__(f"unsupported method: {method}")
        self.method = method
