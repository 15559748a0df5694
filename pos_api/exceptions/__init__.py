"""Custom exceptions for the POS API."""


class PosError(Exception):
    """Base exception for all application errors."""
    def __init__(self, message="System error", status_code=500, error=None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        # Detail shown in the envelope's `error` field; defaults to the message
        self.error = error if error is not None else message

    def to_dict(self):
        return {
            'code': self.status_code,
            'message': self.message,
            'data': None,
            'error': self.error,
        }


class BadRequestError(PosError):
    """Missing or invalid request parameters."""
    def __init__(self, error='Bad request'):
        super().__init__('Bad request', 400, error)


class UnauthorizedError(PosError):
    """Missing, invalid or expired bearer token."""
    def __init__(self, error='Unauthorized'):
        super().__init__('Unauthorized', 401, error)


class NotFoundError(PosError):
    """Exception raised when a resource is not found."""
    def __init__(self, error='Not found', status_code=404):
        message = 'Bad request' if status_code == 400 else 'Not found'
        super().__init__(message, status_code, error)


class SystemFaultError(PosError):
    """Storage failure or aborted transaction."""
    def __init__(self, error='System error', message='System error'):
        super().__init__(message, 500, error)
