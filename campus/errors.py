"""Error types raised by the services and rendered by the HTTP layer."""
from typing import Dict


class ChainAPIError(Exception):
    """Base class for errors that map onto a JSON ``{error, message}`` body.

    Attributes:
        status_code: HTTP status returned to the caller.
        error:       Short error title (the ``error`` field).
        message:     Human-readable detail (the ``message`` field).
    """

    status_code = 500
    error = 'Internal server error'

    def __init__(self, message: str = 'Something went wrong on our end',
                 error: str = None) -> None:
        super().__init__(message)
        self.message = message
        if error is not None:
            self.error = error

    def to_dict(self) -> Dict[str, str]:
        return {'error': self.error, 'message': self.message}


class MissingFieldError(ChainAPIError):
    """A required request field was absent or empty."""

    status_code = 400
    error = 'Missing required fields'


class NotFoundError(ChainAPIError):
    """No record matched the requested id, address or hash."""

    status_code = 404
    error = 'Not found'


def require_fields(payload: Dict, *names: str, message: str = None,
                   error: str = None) -> None:
    """Raise :class:`MissingFieldError` unless every *name* is truthy in *payload*.

    Empty strings, ``None``, ``0`` and absent keys all count as missing.
    """
    missing = [n for n in names if not payload.get(n)]
    if missing:
        if message is None:
            message = _join_names(names) + ' are required'
        raise MissingFieldError(message, error=error)


def _join_names(names) -> str:
    names = list(names)
    if len(names) == 1:
        return names[0]
    if len(names) == 2:
        return f'{names[0]} and {names[1]}'
    return ', '.join(names[:-1]) + f', and {names[-1]}'
