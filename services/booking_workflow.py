from datetime import date, datetime
from typing import List, Optional, Union

from pydantic import ValidationError

from logger import get_logger
from models.booking import BookingState, PaymentResponse
from models.reservation import GuestInfo, PaymentMethod, Reservation, StayDates
from models.room import Room, RoomCategory
from services.errors import (
    CheckoutBeforeCheckinError,
    InvalidCategoryError,
    InvalidDateError,
    InvalidGuestError,
    NoRoomsAvailableError,
    RoomUnavailableError,
    WorkflowStateError,
)

logger = get_logger("booking")


def describe_date_format(date_format: str) -> str:
    """Human form of a strptime format, e.g. %Y-%m-%d -> YYYY-MM-DD"""
    return date_format.replace("%Y", "YYYY").replace("%m", "MM").replace("%d", "DD")


def parse_date(text: str, date_format: str = "%Y-%m-%d") -> date:
    """Parse text in exactly the given format; strptime alone accepts unpadded fields like 2024-1-5"""
    text = text.strip()
    message = f"Invalid date format! Use {describe_date_format(date_format)}"
    try:
        parsed = datetime.strptime(text, date_format)
    except ValueError as e:
        raise InvalidDateError(message) from e
    if parsed.strftime(date_format) != text:
        raise InvalidDateError(message)
    return parsed.date()


def parse_stay_dates(check_in_text: str, check_out_text: str, date_format: str = "%Y-%m-%d") -> StayDates:
    check_in = parse_date(check_in_text, date_format)
    check_out = parse_date(check_out_text, date_format)
    if check_out <= check_in:
        raise CheckoutBeforeCheckinError("Checkout date must be after check-in date!")
    return StayDates(check_in=check_in, check_out=check_out)


class BookingWorkflow:
    """
    One booking attempt, driven step by step by the console

    States run COLLECTING_GUEST_INFO -> SELECTING_CATEGORY -> SELECTING_ROOM ->
    ENTERING_DATES -> SIMULATING_PAYMENT and end in COMMITTED or ABORTED.
    Guest and date errors leave the state unchanged so the caller can re-prompt;
    category and room errors abort the attempt.
    """

    def __init__(self, service):
        self.service = service
        self.state = BookingState.COLLECTING_GUEST_INFO
        self.guest: Optional[GuestInfo] = None
        self.category: Optional[RoomCategory] = None
        self.room: Optional[Room] = None
        self.stay: Optional[StayDates] = None
        self.reservation: Optional[Reservation] = None
        self.abort_reason: Optional[str] = None
        self.saved = False

    def _require(self, expected: BookingState):
        if self.state != expected:
            raise WorkflowStateError(
                f"Booking is {self.state.value.replace('_', ' ')}, expected {expected.value.replace('_', ' ')}"
            )

    def _abort(self, reason: str):
        self.state = BookingState.ABORTED
        self.abort_reason = reason
        logger.info(f"Booking aborted: {reason}")

    def submit_guest(self, name: str, email: str = "", phone: str = "") -> GuestInfo:
        self._require(BookingState.COLLECTING_GUEST_INFO)
        try:
            self.guest = GuestInfo(name=name, email=email, phone=phone)
        except ValidationError as e:
            raise InvalidGuestError("Guest name must not be empty") from e

        self.state = BookingState.SELECTING_CATEGORY
        return self.guest

    def select_category(self, category: Union[RoomCategory, str]) -> List[Room]:
        self._require(BookingState.SELECTING_CATEGORY)
        try:
            if not isinstance(category, RoomCategory):
                category = RoomCategory(category.strip().lower())
        except (AttributeError, ValueError) as e:
            raise InvalidCategoryError(f"Unknown room category: {category}") from e

        rooms = self.service.catalog.find_available_by_category(category)
        if not rooms:
            self._abort("No rooms available in this category!")
            raise NoRoomsAvailableError(self.abort_reason)

        self.category = category
        self.state = BookingState.SELECTING_ROOM
        return rooms

    def select_room(self, room_number: int) -> Room:
        self._require(BookingState.SELECTING_ROOM)
        room = self.service.catalog.find_available(room_number)
        if room is None:
            self._abort("Invalid room number or room not available!")
            raise RoomUnavailableError(self.abort_reason)

        self.room = room
        self.state = BookingState.ENTERING_DATES
        return room

    def enter_dates(self, check_in_text: str, check_out_text: str) -> Reservation:
        """Validate the stay and build the pending reservation (allocates its id)"""
        self._require(BookingState.ENTERING_DATES)
        self.stay = parse_stay_dates(check_in_text, check_out_text, self.service.settings.date_format)
        self.reservation = Reservation.create(self.service.ledger.next_id(), self.guest, self.room, self.stay)
        self.state = BookingState.SIMULATING_PAYMENT
        return self.reservation

    def pay(self, method: Optional[PaymentMethod], confirmed: bool) -> PaymentResponse:
        self._require(BookingState.SIMULATING_PAYMENT)
        response = self.service.payment_service.process_payment(self.reservation, method, confirmed)
        if not response.success:
            # The pending reservation is dropped; the room stays available
            self._abort(response.message)
            return response

        self.service.catalog.set_availability(self.room, False)
        self.service.ledger.add(self.reservation)
        self.saved = self.service.persist()
        self.state = BookingState.COMMITTED
        logger.info(
            f"Committed {self.reservation.reservation_id} for room {self.room.number} "
            f"({self.reservation.nights} nights, {self.reservation.total_amount:.2f})"
        )
        return response

    def abort(self, reason: str = "Booking abandoned"):
        if self.state == BookingState.COMMITTED:
            raise WorkflowStateError("Booking is already committed")
        if self.state != BookingState.ABORTED:
            self._abort(reason)
