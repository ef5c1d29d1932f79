import re
from typing import Iterable, List, Optional

from models.reservation import Reservation


RESERVATION_PREFIX = "RES"
SEQUENCE_START = 1000

_ID_PATTERN = re.compile(rf"^{RESERVATION_PREFIX}(\d+)$", re.IGNORECASE)


def sequence_of(reservation_id: str) -> Optional[int]:
    """Numeric suffix of a reservation id, or None if it is not in RES<n> form"""
    match = _ID_PATTERN.match(reservation_id.strip())
    if not match:
        return None
    return int(match.group(1))


class ReservationIdAllocator:
    """Monotonic reservation id sequence; values are never handed out twice"""

    def __init__(self, last_sequence: int = SEQUENCE_START, prefix: str = RESERVATION_PREFIX):
        self.last_sequence = max(last_sequence, SEQUENCE_START)
        self.prefix = prefix

    def allocate(self) -> str:
        self.last_sequence += 1
        return f"{self.prefix}{self.last_sequence}"

    def reseed(self, reservation_ids: Iterable[str]):
        """Move the sequence past every existing id so restarts don't collide"""
        for reservation_id in reservation_ids:
            sequence = sequence_of(reservation_id)
            if sequence is not None and sequence > self.last_sequence:
                self.last_sequence = sequence


class ReservationLedger:
    """Ordered collection of committed reservations"""

    def __init__(self, reservations: Optional[Iterable[Reservation]] = None, last_sequence: int = SEQUENCE_START):
        self.reservations: List[Reservation] = list(reservations or [])
        self.ids = ReservationIdAllocator(last_sequence)
        self.ids.reseed(r.reservation_id for r in self.reservations)

    def __len__(self) -> int:
        return len(self.reservations)

    def __iter__(self):
        return iter(self.all())

    @property
    def last_sequence(self) -> int:
        return self.ids.last_sequence

    def next_id(self) -> str:
        return self.ids.allocate()

    def add(self, reservation: Reservation):
        self.reservations.append(reservation)

    def find_by_id(self, reservation_id: str) -> Optional[Reservation]:
        """Case-insensitive exact match on the reservation id"""
        wanted = reservation_id.strip().lower()
        for reservation in self.reservations:
            if reservation.reservation_id.lower() == wanted:
                return reservation
        return None

    def remove(self, reservation: Reservation) -> bool:
        """Remove a reservation; returns False if it was not in the ledger"""
        for index, existing in enumerate(self.reservations):
            if existing is reservation or existing.reservation_id == reservation.reservation_id:
                del self.reservations[index]
                return True
        return False

    def all(self) -> List[Reservation]:
        return list(self.reservations)
