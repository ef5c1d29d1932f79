from pydantic import BaseModel, ConfigDict, field_validator, model_validator
from typing import Optional
from datetime import date
from enum import Enum

from models.room import Room


class PaymentStatus(str, Enum):
    PENDING = "pending"
    COMPLETED = "completed"
    FAILED = "failed"
    REFUNDED = "refunded"


class PaymentMethod(str, Enum):
    CREDIT_CARD = "credit_card"
    DEBIT_CARD = "debit_card"
    CASH = "cash"
    UPI = "upi"

    @property
    def display_name(self) -> str:
        if self is PaymentMethod.UPI:
            return "UPI"
        return self.value.replace("_", " ").title()


class GuestInfo(BaseModel):
    name: str
    email: str = ""
    phone: str = ""

    @field_validator("name")
    @classmethod
    def _name_required(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Guest name must not be empty")
        return value


class StayDates(BaseModel):
    check_in: date
    check_out: date

    @model_validator(mode="after")
    def _check_out_after_check_in(self) -> "StayDates":
        if self.check_out <= self.check_in:
            raise ValueError("Checkout date must be after check-in date")
        return self

    @property
    def nights(self) -> int:
        return (self.check_out - self.check_in).days


class Reservation(BaseModel):
    """A booking of one room; the room is referenced by number and resolved through the catalog"""

    model_config = ConfigDict(validate_assignment=True)

    reservation_id: str
    guest: GuestInfo
    room_number: int
    check_in: date
    check_out: date
    total_amount: float
    payment_status: PaymentStatus = PaymentStatus.PENDING
    payment_method: Optional[PaymentMethod] = None
    transaction_id: Optional[str] = None

    @classmethod
    def create(cls, reservation_id: str, guest: GuestInfo, room: Room, stay: StayDates) -> "Reservation":
        """
        Build a pending reservation priced at the room's current nightly rate

        The total is fixed here; later changes to the room price do not touch it.
        """
        return cls(
            reservation_id=reservation_id,
            guest=guest,
            room_number=room.number,
            check_in=stay.check_in,
            check_out=stay.check_out,
            total_amount=round(room.price * stay.nights, 2),
        )

    @property
    def nights(self) -> int:
        return (self.check_out - self.check_in).days
