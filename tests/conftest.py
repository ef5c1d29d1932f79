"""Shared fixtures for the reservation desk tests."""

from typing import Iterable, List

import pytest

from config import Settings
from models.reservation import PaymentMethod
from services.booking_service import BookingService
from services.storage import JsonFileStore


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(data_dir=str(tmp_path / "data"))


@pytest.fixture
def store(settings: Settings) -> JsonFileStore:
    return JsonFileStore(settings.rooms_path, settings.reservations_path)


@pytest.fixture
def service(store: JsonFileStore, settings: Settings) -> BookingService:
    """A started service on a fresh data directory (catalog seeded)."""
    svc = BookingService(store, settings=settings)
    svc.startup()
    return svc


def book(service: BookingService, room_number: int = 101, check_in: str = "2024-01-10",
         check_out: str = "2024-01-12", name: str = "Ada Lovelace", confirmed: bool = True):
    """Run a whole booking through the workflow and return it."""
    workflow = service.begin_booking()
    workflow.submit_guest(name, "ada@example.com", "555-0100")
    room = service.catalog.get(room_number)
    workflow.select_category(room.category)
    workflow.select_room(room_number)
    workflow.enter_dates(check_in, check_out)
    workflow.pay(PaymentMethod.CREDIT_CARD, confirmed)
    return workflow


class ScriptedInput:
    """Feeds canned answers to the console; raises EOFError when exhausted."""

    def __init__(self, answers: Iterable[str]):
        self.answers: List[str] = list(answers)
        self.prompts: List[str] = []

    def __call__(self, prompt: str = "") -> str:
        self.prompts.append(prompt)
        if not self.answers:
            raise EOFError
        return self.answers.pop(0)


class CapturedOutput:
    def __init__(self):
        self.lines: List[str] = []

    def __call__(self, *args) -> None:
        self.lines.append(" ".join(str(a) for a in args))

    @property
    def text(self) -> str:
        return "\n".join(self.lines)
