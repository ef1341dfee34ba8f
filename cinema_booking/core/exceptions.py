from fastapi import status


class BookingError(Exception):
    """Base class for errors raised by the booking services."""

    status_code: int = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(BookingError):
    """A referenced entity does not exist (or is not in a usable state)."""

    status_code = status.HTTP_404_NOT_FOUND


class ConflictError(BookingError):
    """The requested transition would break a state invariant."""

    status_code = status.HTTP_400_BAD_REQUEST
