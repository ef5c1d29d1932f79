from pydantic import BaseModel, ConfigDict, Field
from typing import Dict, Optional
from enum import Enum


class RoomCategory(str, Enum):
    STANDARD = "standard"
    DELUXE = "deluxe"
    SUITE = "suite"


class CategoryInfo(BaseModel):
    display_name: str
    base_price: float
    first_number: int
    last_number: int


# Category lookup table: display name, base nightly price and the fixed room numbering
CATEGORY_TABLE: Dict[RoomCategory, CategoryInfo] = {
    RoomCategory.STANDARD: CategoryInfo(display_name="Standard", base_price=100.0, first_number=101, last_number=110),
    RoomCategory.DELUXE: CategoryInfo(display_name="Deluxe", base_price=200.0, first_number=201, last_number=210),
    RoomCategory.SUITE: CategoryInfo(display_name="Suite", base_price=350.0, first_number=301, last_number=305),
}


def category_info(category: RoomCategory) -> CategoryInfo:
    return CATEGORY_TABLE[category]


class Room(BaseModel):
    model_config = ConfigDict(validate_assignment=True)

    number: int
    category: RoomCategory
    price: float = Field(ge=0)
    available: bool = True

    @classmethod
    def for_category(cls, number: int, category: RoomCategory, price: Optional[float] = None) -> "Room":
        """Create a room priced at its category's base rate unless a price is given"""
        if price is None:
            price = category_info(category).base_price
        return cls(number=number, category=category, price=price)

    @property
    def display_category(self) -> str:
        return category_info(self.category).display_name
