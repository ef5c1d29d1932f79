from pydantic import BaseModel
from typing import List, Optional
from enum import Enum

from models.reservation import PaymentMethod, PaymentStatus
from models.room import Room, RoomCategory


class BookingState(str, Enum):
    COLLECTING_GUEST_INFO = "collecting_guest_info"
    SELECTING_CATEGORY = "selecting_category"
    SELECTING_ROOM = "selecting_room"
    ENTERING_DATES = "entering_dates"
    SIMULATING_PAYMENT = "simulating_payment"
    COMMITTED = "committed"
    ABORTED = "aborted"


class PaymentResponse(BaseModel):
    success: bool
    message: str
    reservation_id: str
    status: PaymentStatus
    method: Optional[PaymentMethod] = None
    transaction_id: Optional[str] = None


class CategoryAvailability(BaseModel):
    category: RoomCategory
    display_name: str
    base_price: float
    available_count: int


class AvailabilitySummary(BaseModel):
    categories: List[CategoryAvailability]
    rooms: List[Room]

    @property
    def total_available(self) -> int:
        return sum(entry.available_count for entry in self.categories)
