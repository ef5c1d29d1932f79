from typing import Callable, List, Optional

from models.booking import AvailabilitySummary, BookingState
from models.reservation import PaymentMethod, Reservation
from models.room import CATEGORY_TABLE, Room, RoomCategory
from services.booking_service import BookingService
from services.booking_workflow import describe_date_format
from services.errors import (
    CheckoutBeforeCheckinError,
    InvalidDateError,
    InvalidGuestError,
    ReservationError,
    ReservationNotFoundError,
)


MENU = [
    "Search Available Rooms",
    "Make Reservation",
    "Cancel Reservation",
    "View Booking Details",
    "View All Reservations",
    "Exit",
]
EXIT_CHOICE = len(MENU)

CATEGORIES: List[RoomCategory] = list(CATEGORY_TABLE)
PAYMENT_METHODS: List[PaymentMethod] = list(PaymentMethod)


class HotelConsole:
    """Numbered text menu over the booking service"""

    def __init__(self, service: BookingService,
                 input_func: Optional[Callable[[str], str]] = None,
                 output: Optional[Callable[..., None]] = None):
        self.service = service
        self.input = input_func or input
        self.output = output or print
        self.currency = service.settings.currency

    # -- formatting --

    def money(self, amount: float) -> str:
        return f"{self.currency}{amount:.2f}"

    def format_room(self, room: Room) -> str:
        status = "Available" if room.available else "Booked"
        return f"Room {room.number} - {room.display_category} ({self.money(room.price)}/night) - {status}"

    def format_reservation(self, reservation: Reservation) -> str:
        room = self.service.room_for(reservation)
        category = room.display_category if room else "unknown"
        method = reservation.payment_method.display_name if reservation.payment_method else "-"
        return "\n".join([
            f"Reservation ID: {reservation.reservation_id}",
            f"Guest: {reservation.guest.name}",
            f"Email: {reservation.guest.email or '-'}",
            f"Phone: {reservation.guest.phone or '-'}",
            f"Room: {reservation.room_number} ({category})",
            f"Check-in: {reservation.check_in.isoformat()}",
            f"Check-out: {reservation.check_out.isoformat()}",
            f"Nights: {reservation.nights}",
            f"Total: {self.money(reservation.total_amount)}",
            f"Payment: {reservation.payment_status.value.upper()} ({method})",
        ])

    # -- prompts --

    def ask(self, prompt: str) -> str:
        return self.input(prompt).strip()

    def ask_number(self, prompt: str) -> Optional[int]:
        text = self.ask(prompt)
        try:
            return int(text)
        except ValueError:
            self.output("Invalid input. Please enter a number.")
            return None

    def ask_choice(self, prompt: str, options: list):
        """Pick an option by its 1-based position; None if the answer is unusable"""
        choice = self.ask_number(prompt)
        if choice is None:
            return None
        if not 1 <= choice <= len(options):
            self.output(f"Invalid choice. Please enter a number between 1 and {len(options)}.")
            return None
        return options[choice - 1]

    def confirm(self, prompt: str) -> bool:
        return self.ask(f"{prompt} (yes/no): ").lower() in ("yes", "y")

    def warn_if_unsaved(self):
        if not self.service.last_save_ok:
            self.output("Warning: changes could not be saved. See the log for details.")

    # -- actions --

    def search_rooms(self):
        summary: AvailabilitySummary = self.service.search_rooms()
        self.output("\n=== AVAILABLE ROOMS ===")
        for entry in summary.categories:
            self.output(
                f"{entry.display_name}: {entry.available_count} rooms available "
                f"(From {self.money(entry.base_price)}/night)"
            )

        self.output("\nDetailed List:")
        for room in summary.rooms:
            self.output(self.format_room(room))

    def make_reservation(self):
        self.output("\n=== MAKE RESERVATION ===")
        workflow = self.service.begin_booking()

        while workflow.state == BookingState.COLLECTING_GUEST_INFO:
            name = self.ask("Enter guest name: ")
            email = self.ask("Enter guest email: ")
            phone = self.ask("Enter guest phone: ")
            try:
                workflow.submit_guest(name, email, phone)
            except InvalidGuestError as e:
                self.output(str(e))

        self.output("\nRoom Categories:")
        for index, category in enumerate(CATEGORIES, start=1):
            info = CATEGORY_TABLE[category]
            self.output(f"{index}. {info.display_name} ({self.money(info.base_price)}/night)")
        category = self.ask_choice(f"Select category (1-{len(CATEGORIES)}): ", CATEGORIES)
        if category is None:
            workflow.abort("No category selected")
            return

        rooms = workflow.select_category(category)
        self.output(f"\nAvailable rooms in {CATEGORY_TABLE[category].display_name}:")
        for room in rooms:
            self.output(str(room.number))

        room_number = self.ask_number("Enter room number: ")
        if room_number is None:
            workflow.abort("No room selected")
            return
        workflow.select_room(room_number)

        date_hint = describe_date_format(self.service.settings.date_format)
        while workflow.state == BookingState.ENTERING_DATES:
            check_in = self.ask(f"Enter check-in date ({date_hint}, blank to abandon): ")
            if not check_in:
                workflow.abort()
                self.output("Reservation abandoned.")
                return
            check_out = self.ask(f"Enter checkout date ({date_hint}): ")
            try:
                workflow.enter_dates(check_in, check_out)
            except (InvalidDateError, CheckoutBeforeCheckinError) as e:
                self.output(str(e))

        reservation = workflow.reservation
        self.output("\n=== PAYMENT SIMULATION ===")
        self.output(f"Total Amount: {self.money(reservation.total_amount)} ({reservation.nights} nights)")
        self.output("\nPayment Methods:")
        for index, method in enumerate(PAYMENT_METHODS, start=1):
            self.output(f"{index}. {method.display_name}")

        method = None
        while method is None:
            method = self.ask_choice(f"Select payment method (1-{len(PAYMENT_METHODS)}): ", PAYMENT_METHODS)

        response = workflow.pay(method, self.confirm("Simulate payment?"))
        self.output(response.message)
        if workflow.state == BookingState.COMMITTED:
            self.output("\nReservation successful!")
            self.output(self.format_reservation(reservation))
            if response.transaction_id:
                self.output(f"Transaction: {response.transaction_id}")
            self.warn_if_unsaved()

    def cancel_reservation(self):
        self.output("\n=== CANCEL RESERVATION ===")
        reservation_id = self.ask("Enter reservation ID: ")

        def confirm(reservation: Reservation) -> bool:
            self.output("\nReservation Details:")
            self.output(self.format_reservation(reservation))
            return self.confirm("Confirm cancellation?")

        cancelled = self.service.cancel_booking(reservation_id, confirm=confirm)
        if cancelled is None:
            self.output("Cancellation aborted.")
            return
        self.output("Reservation cancelled successfully!")
        self.warn_if_unsaved()

    def view_booking(self):
        self.output("\n=== VIEW BOOKING DETAILS ===")
        reservation_id = self.ask("Enter reservation ID: ")
        reservation = self.service.get_booking(reservation_id)
        if reservation is None:
            raise ReservationNotFoundError("Reservation not found!")

        self.output("\n=== RESERVATION DETAILS ===")
        self.output(self.format_reservation(reservation))

    def view_all(self):
        reservations = self.service.get_all_bookings()
        if not reservations:
            self.output("\nNo reservations found.")
            return

        self.output("\n=== ALL RESERVATIONS ===")
        for reservation in reservations:
            self.output(self.format_reservation(reservation))
            self.output("")

    def exit(self):
        self.output("Thank you for using Hotel Reservation System. Goodbye!")
        self.service.shutdown()
        self.warn_if_unsaved()

    # -- loop --

    def display_menu(self):
        self.output("\n=== HOTEL RESERVATION SYSTEM ===")
        for index, label in enumerate(MENU, start=1):
            self.output(f"{index}. {label}")

    def run(self) -> int:
        actions = {
            1: self.search_rooms,
            2: self.make_reservation,
            3: self.cancel_reservation,
            4: self.view_booking,
            5: self.view_all,
        }

        while True:
            self.display_menu()
            try:
                choice = self.ask_number(f"Enter your choice (1-{EXIT_CHOICE}): ")
            except (EOFError, KeyboardInterrupt):
                self.output("")
                choice = EXIT_CHOICE

            if choice is None:
                continue
            if choice == EXIT_CHOICE:
                self.exit()
                return 0
            if choice not in actions:
                self.output(f"Invalid choice. Please enter a number between 1 and {EXIT_CHOICE}.")
                continue

            try:
                actions[choice]()
            except ReservationError as e:
                self.output(str(e))
            except (EOFError, KeyboardInterrupt):
                self.output("\nInput closed.")
                self.exit()
                return 0
