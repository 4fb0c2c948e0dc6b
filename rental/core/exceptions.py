"""
Typed failures raised by the rental core.

Every service operation either returns a value or raises exactly one of
these. The API layer maps them onto HTTP status codes.
"""


class RentalError(Exception):
    """Base class for all rental core failures."""

    kind = "error"

    def __init__(self, message: str = "Rental operation failed") -> None:
        self.message = message
        super().__init__(self.message)

    def __str__(self) -> str:
        return self.message


class ValidationError(RentalError):
    """Raised for malformed or out-of-range input (empty field, bad date, end before start)."""

    kind = "validation_error"

    def __init__(self, message: str = "Invalid input") -> None:
        super().__init__(message)


class NotFoundError(RentalError):
    """Raised when a referenced vehicle, customer, booking or payment does not exist."""

    kind = "not_found"

    def __init__(self, message: str = "Record not found") -> None:
        super().__init__(message)


class ConflictError(RentalError):
    """Raised on overlapping bookings or referential conflicts."""

    kind = "conflict"

    def __init__(self, message: str = "Operation conflicts with existing records") -> None:
        super().__init__(message)


class DeadlineExceededError(RentalError, TimeoutError):
    """Raised when a mutating call runs past its deadline. Nothing has been written."""

    kind = "timeout"

    def __init__(self, message: str = "Operation deadline exceeded") -> None:
        super().__init__(message)
