from typing import Dict, Iterable, List, Optional

from logger import get_logger
from models.booking import CategoryAvailability
from models.room import CATEGORY_TABLE, Room, RoomCategory

logger = get_logger("catalog")


class RoomCatalog:
    """Fixed inventory of rooms and their live availability"""

    def __init__(self, rooms: Optional[Iterable[Room]] = None):
        # Insertion order is the display order
        self.rooms: List[Room] = []
        self._by_number: Dict[int, Room] = {}
        for room in rooms or []:
            self._add(room)

    def _add(self, room: Room):
        if room.number in self._by_number:
            raise ValueError(f"Duplicate room number {room.number}")
        self.rooms.append(room)
        self._by_number[room.number] = room

    def __len__(self) -> int:
        return len(self.rooms)

    def __iter__(self):
        return iter(list(self.rooms))

    def initialize(self) -> bool:
        """
        Seed the fixed numbering scheme when the catalog is empty

        Returns:
            True if rooms were created (caller must persist), False if the
            catalog already had data
        """
        if self.rooms:
            return False

        for category, info in CATEGORY_TABLE.items():
            for number in range(info.first_number, info.last_number + 1):
                self._add(Room.for_category(number, category))

        logger.info(f"Seeded room catalog with {len(self.rooms)} rooms")
        return True

    def get(self, room_number: int) -> Optional[Room]:
        return self._by_number.get(room_number)

    def find_available_by_category(self, category: RoomCategory) -> List[Room]:
        return [room for room in self.rooms if room.category == category and room.available]

    def find_available(self, room_number: int) -> Optional[Room]:
        """Get a room by number only if it exists and is available"""
        room = self._by_number.get(room_number)
        if room is not None and room.available:
            return room
        return None

    def available_rooms(self) -> List[Room]:
        return [room for room in self.rooms if room.available]

    def set_availability(self, room: Room, available: bool):
        room.available = available

    def count_available_by_category(self) -> List[CategoryAvailability]:
        """Per-category availability counts, in category table order"""
        counts = {category: 0 for category in CATEGORY_TABLE}
        for room in self.rooms:
            if room.available:
                counts[room.category] += 1

        return [
            CategoryAvailability(
                category=category,
                display_name=info.display_name,
                base_price=info.base_price,
                available_count=counts[category],
            )
            for category, info in CATEGORY_TABLE.items()
        ]
