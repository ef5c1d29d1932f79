class ReservationError(Exception):
    """Base class for operator-facing booking errors; never fatal"""
    pass


class InvalidGuestError(ReservationError):
    """Raised when guest details are rejected (empty name)"""
    pass


class InvalidCategoryError(ReservationError):
    """Raised when the chosen room category does not exist"""
    pass


class NoRoomsAvailableError(ReservationError):
    """Raised when a category has no available rooms left"""
    pass


class RoomUnavailableError(ReservationError):
    """Raised when a room number does not exist or is already booked"""
    pass


class InvalidDateError(ReservationError):
    """Raised when a date does not parse under the configured format"""
    pass


class CheckoutBeforeCheckinError(ReservationError):
    """Raised when the checkout date is not strictly after the check-in date"""
    pass


class InvalidPaymentMethodError(ReservationError):
    """Raised when a payment method choice is not recognised"""
    pass


class ReservationNotFoundError(ReservationError):
    """Raised when no reservation matches the given id"""
    pass


class WorkflowStateError(ReservationError):
    """Raised when a booking step is attempted out of order"""
    pass
