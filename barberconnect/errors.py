"""
Domain errors for the booking engine.

Raised by the catalog, booking, lifecycle, payment and review modules and
rendered by the exception handler registered in main.py.
"""

from typing import Optional


class BookingError(Exception):
    """Base exception for all booking engine errors."""

    status_code = 400
    code = "booking_error"

    def __init__(self, detail: Optional[str] = None):
        self.detail = detail or self.__doc__.strip().splitlines()[0]
        super().__init__(self.detail)


class NotFound(BookingError):
    """Requested entity does not exist."""

    status_code = 404
    code = "not_found"


class Forbidden(BookingError):
    """Not authorized to perform this action."""

    status_code = 403
    code = "forbidden"


class InvalidService(BookingError):
    """Requested service is not offered by this barber."""

    status_code = 422
    code = "invalid_service"


class PastDateError(BookingError):
    """Appointment date must be in the future."""

    status_code = 422
    code = "past_date"


class SlotConflictError(BookingError):
    """This time slot is already booked."""

    status_code = 409
    code = "slot_conflict"


class InvalidTransition(BookingError):
    """Appointment status change is not allowed."""

    status_code = 409
    code = "invalid_transition"


class DuplicateReview(BookingError):
    """This appointment has already been reviewed."""

    status_code = 409
    code = "duplicate_review"


class ProfileExists(BookingError):
    """Barber profile already exists."""

    status_code = 409
    code = "profile_exists"


class AlreadyPaid(BookingError):
    """Payment already processed for this appointment."""

    status_code = 409
    code = "already_paid"


class VerificationFailed(BookingError):
    """Invalid payment verification."""

    status_code = 400
    code = "verification_failed"
