"""
Tests for the text menu.

Sessions are scripted: ScriptedInput supplies the operator's answers and
CapturedOutput records everything printed.
"""

from typing import List

from conftest import CapturedOutput, ScriptedInput
from console.hotel_console import HotelConsole
from models.reservation import PaymentMethod, PaymentStatus
from services.booking_service import BookingService


BOOK_101 = ["2", "Ada Lovelace", "ada@example.com", "555-0100", "1", "101", "2024-01-10", "2024-01-12", "1", "yes"]


def run_console(service: BookingService, answers: List[str]):
    script = ScriptedInput(answers)
    out = CapturedOutput()
    code = HotelConsole(service, input_func=script, output=out).run()
    return code, out, script


class TestMenu:
    """Tests for the menu loop itself."""

    def test_exit(self, service: BookingService) -> None:
        code, out, _ = run_console(service, ["6"])

        assert code == 0
        assert "Goodbye!" in out.text

    def test_non_numeric_choice_reprompts(self, service: BookingService) -> None:
        code, out, script = run_console(service, ["abc", "6"])

        assert code == 0
        assert "Invalid input. Please enter a number." in out.text
        assert len(script.prompts) == 2

    def test_out_of_range_choice(self, service: BookingService) -> None:
        _, out, _ = run_console(service, ["9", "6"])

        assert "Invalid choice. Please enter a number between 1 and 6." in out.text

    def test_end_of_input_exits_cleanly(self, service: BookingService) -> None:
        code, out, _ = run_console(service, [])

        assert code == 0
        assert "Goodbye!" in out.text

    def test_exit_saves(self, service: BookingService, store) -> None:
        service.catalog.set_availability(service.catalog.get(205), False)

        run_console(service, ["6"])

        assert {r.number: r.available for r in store.load().rooms}[205] is False


class TestSearch:
    """Tests for the search action."""

    def test_fresh_availability(self, service: BookingService) -> None:
        _, out, _ = run_console(service, ["1", "6"])

        assert "Standard: 10 rooms available (From $100.00/night)" in out.text
        assert "Deluxe: 10 rooms available (From $200.00/night)" in out.text
        assert "Suite: 5 rooms available (From $350.00/night)" in out.text
        assert "Room 305 - Suite ($350.00/night) - Available" in out.lines


class TestBooking:
    """Tests for the make-reservation action."""

    def test_successful_booking(self, service: BookingService) -> None:
        _, out, _ = run_console(service, BOOK_101 + ["6"])

        reservation = service.get_booking("RES1001")
        assert reservation.total_amount == 200.0
        assert reservation.payment_method == PaymentMethod.CREDIT_CARD
        assert service.catalog.get(101).available is False
        assert "Reservation successful!" in out.text
        assert "Total: $200.00" in out.text
        assert "Room: 101 (Standard)" in out.text

    def test_empty_name_reprompts(self, service: BookingService) -> None:
        answers = ["2", "", "", ""] + BOOK_101[1:] + ["6"]

        _, out, _ = run_console(service, answers)

        assert "Guest name must not be empty" in out.text
        assert service.get_booking("RES1001").guest.name == "Ada Lovelace"

    def test_same_day_checkout_then_abandon(self, service: BookingService) -> None:
        answers = BOOK_101[:6] + ["2024-01-10", "2024-01-10", ""] + ["6"]

        _, out, _ = run_console(service, answers)

        assert "Checkout date must be after check-in date!" in out.text
        assert "Reservation abandoned." in out.text
        assert service.get_all_bookings() == []
        assert service.catalog.get(101).available is True

    def test_bad_date_format_reprompts(self, service: BookingService) -> None:
        answers = BOOK_101[:6] + ["20240110", "20240112"] + BOOK_101[6:] + ["6"]

        _, out, _ = run_console(service, answers)

        assert "Invalid date format! Use YYYY-MM-DD" in out.text
        assert service.get_booking("RES1001") is not None

    def test_declined_payment(self, service: BookingService) -> None:
        answers = BOOK_101[:-1] + ["no", "6"]

        _, out, _ = run_console(service, answers)

        assert "Payment failed! Reservation cancelled." in out.text
        assert service.get_all_bookings() == []
        assert service.catalog.get(101).available is True

    def test_invalid_payment_method_reprompts(self, service: BookingService) -> None:
        answers = BOOK_101[:-2] + ["7", "4", "yes", "6"]

        _, out, _ = run_console(service, answers)

        assert "Invalid choice. Please enter a number between 1 and 4." in out.text
        assert service.get_booking("RES1001").payment_method == PaymentMethod.UPI

    def test_unavailable_room(self, service: BookingService) -> None:
        answers = BOOK_101 + ["2", "Grace", "", "", "1", "101", "6"]

        _, out, _ = run_console(service, answers)

        assert "Invalid room number or room not available!" in out.text
        assert len(service.get_all_bookings()) == 1

    def test_invalid_category(self, service: BookingService) -> None:
        _, out, _ = run_console(service, ["2", "Ada", "", "", "4", "6"])

        assert "Invalid choice. Please enter a number between 1 and 3." in out.text
        assert service.get_all_bookings() == []


class TestCancelAndView:
    """Tests for cancel, view-one and view-all."""

    def test_cancel_with_confirmation(self, service: BookingService) -> None:
        _, out, _ = run_console(service, BOOK_101 + ["3", "RES1001", "yes", "5", "6"])

        assert "Reservation cancelled successfully!" in out.text
        assert "No reservations found." in out.text
        assert service.catalog.get(101).available is True

    def test_cancel_declined(self, service: BookingService) -> None:
        _, out, _ = run_console(service, BOOK_101 + ["3", "res1001", "no", "6"])

        assert "Cancellation aborted." in out.text
        assert service.get_booking("RES1001").payment_status == PaymentStatus.COMPLETED

    def test_cancel_unknown_id(self, service: BookingService) -> None:
        _, out, _ = run_console(service, ["3", "RES9999", "6"])

        assert "Reservation not found!" in out.text
        assert service.catalog.get(101).available is True

    def test_view_one(self, service: BookingService) -> None:
        _, out, _ = run_console(service, BOOK_101 + ["4", "res1001", "6"])

        assert "=== RESERVATION DETAILS ===" in out.text
        assert "Guest: Ada Lovelace" in out.text
        assert "Payment: COMPLETED (Credit Card)" in out.text

    def test_view_one_unknown(self, service: BookingService) -> None:
        _, out, _ = run_console(service, ["4", "RES4242", "6"])

        assert "Reservation not found!" in out.text

    def test_view_all_empty(self, service: BookingService) -> None:
        _, out, _ = run_console(service, ["5", "6"])

        assert "No reservations found." in out.text

    def test_view_all_in_booking_order(self, service: BookingService) -> None:
        second = ["2", "Grace", "", "", "3", "301", "2024-02-01", "2024-02-03", "3", "yes"]

        _, out, _ = run_console(service, BOOK_101 + second + ["5", "6"])

        text = out.text.split("=== ALL RESERVATIONS ===")[1]
        assert text.index("RES1001") < text.index("RES1002")
        assert "Total: $700.00" in text
