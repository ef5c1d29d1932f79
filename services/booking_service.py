from typing import Callable, List, Optional

from config import Settings
from logger import get_logger
from models.booking import AvailabilitySummary
from models.reservation import PaymentStatus, Reservation
from models.room import Room
from services.booking_workflow import BookingWorkflow
from services.errors import ReservationNotFoundError
from services.payment_service import PaymentService
from services.reservation_ledger import ReservationLedger
from services.room_catalog import RoomCatalog
from services.storage import HotelStore

logger = get_logger("service")


class BookingService:
    """Service for managing rooms and reservations, persisted after every change"""

    def __init__(self, store: HotelStore, settings: Optional[Settings] = None,
                 payment_service: Optional[PaymentService] = None):
        self.store = store
        self.settings = settings or Settings()
        self.payment_service = payment_service or PaymentService()
        self.catalog = RoomCatalog()
        self.ledger = ReservationLedger()
        self.last_save_ok = True

    def startup(self):
        """Load saved state and seed the room catalog on first run"""
        snapshot = self.store.load()
        try:
            self.catalog = RoomCatalog(snapshot.rooms)
        except ValueError as e:
            logger.error(f"Saved room catalog is inconsistent, starting from empty state: {e}")
            self.catalog = RoomCatalog()
            snapshot.reservations = []
        self.ledger = ReservationLedger(snapshot.reservations, snapshot.last_sequence)

        if self.catalog.initialize():
            self.persist()

    def persist(self) -> bool:
        self.last_save_ok = self.store.save(self.catalog, self.ledger)
        return self.last_save_ok

    def shutdown(self) -> bool:
        return self.persist()

    def search_rooms(self) -> AvailabilitySummary:
        return AvailabilitySummary(
            categories=self.catalog.count_available_by_category(),
            rooms=self.catalog.available_rooms(),
        )

    def begin_booking(self) -> BookingWorkflow:
        return BookingWorkflow(self)

    def get_booking(self, reservation_id: str) -> Optional[Reservation]:
        """Get reservation by id (case-insensitive)"""
        return self.ledger.find_by_id(reservation_id)

    def get_all_bookings(self) -> List[Reservation]:
        return self.ledger.all()

    def room_for(self, reservation: Reservation) -> Optional[Room]:
        return self.catalog.get(reservation.room_number)

    def cancel_booking(self, reservation_id: str,
                       confirm: Optional[Callable[[Reservation], bool]] = None) -> Optional[Reservation]:
        """
        Cancel a reservation, free its room and refund it

        Args:
            reservation_id: Id to cancel, matched case-insensitively
            confirm: Asked with the reservation before anything changes; a falsy
                answer leaves all state untouched

        Returns:
            The refunded reservation, or None if cancellation was declined

        Raises:
            ReservationNotFoundError: If no reservation has this id
        """
        reservation = self.ledger.find_by_id(reservation_id)
        if reservation is None:
            raise ReservationNotFoundError("Reservation not found!")

        if confirm is not None and not confirm(reservation):
            return None

        room = self.catalog.get(reservation.room_number)
        if room is not None:
            self.catalog.set_availability(room, True)
        else:
            logger.warning(f"Room {reservation.room_number} of {reservation.reservation_id} is not in the catalog")

        reservation.payment_status = PaymentStatus.REFUNDED
        self.ledger.remove(reservation)
        self.persist()
        logger.info(f"Cancelled {reservation.reservation_id}, room {reservation.room_number} available again")
        return reservation
