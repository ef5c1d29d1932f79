import os
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ValidationError
from pymongo import MongoClient
from pymongo.errors import PyMongoError

from config import Settings
from logger import get_logger
from models.reservation import Reservation
from models.room import Room
from services.reservation_ledger import SEQUENCE_START

logger = get_logger("storage")


class RoomCatalogRecord(BaseModel):
    rooms: List[Room] = []


class ReservationLedgerRecord(BaseModel):
    last_sequence: int = SEQUENCE_START
    reservations: List[Reservation] = []


class HotelSnapshot(BaseModel):
    """Everything the desk needs to resume: rooms, reservations and the id sequence"""

    rooms: List[Room] = []
    reservations: List[Reservation] = []
    last_sequence: int = SEQUENCE_START


def snapshot_of(catalog, ledger) -> HotelSnapshot:
    return HotelSnapshot(
        rooms=list(catalog.rooms),
        reservations=ledger.all(),
        last_sequence=ledger.last_sequence,
    )


class HotelStore(ABC):
    """
    Persistence gateway for the room catalog and reservation ledger

    load() never raises: missing or unreadable state is logged and comes back
    as an empty snapshot. save() never raises either and reports success.
    """

    @abstractmethod
    def load(self) -> HotelSnapshot:
        pass

    @abstractmethod
    def save(self, catalog, ledger) -> bool:
        pass


class JsonFileStore(HotelStore):
    """Two JSON documents on local disk: rooms and reservations"""

    def __init__(self, rooms_path: str, reservations_path: str):
        self.rooms_path = rooms_path
        self.reservations_path = reservations_path

    def load(self) -> HotelSnapshot:
        try:
            rooms = self._read(self.rooms_path, RoomCatalogRecord)
            ledger = self._read(self.reservations_path, ReservationLedgerRecord)
        except (OSError, UnicodeDecodeError, ValidationError) as e:
            logger.error(f"Error loading data, starting from empty state: {e}")
            return HotelSnapshot()

        snapshot = HotelSnapshot(
            rooms=rooms.rooms if rooms else [],
            reservations=ledger.reservations if ledger else [],
            last_sequence=ledger.last_sequence if ledger else SEQUENCE_START,
        )
        logger.info(f"Loaded {len(snapshot.rooms)} rooms and {len(snapshot.reservations)} reservations")
        return snapshot

    def _read(self, path: str, record_type):
        if not os.path.exists(path):
            return None
        with open(path, 'r', encoding="utf-8") as f:
            return record_type.model_validate_json(f.read())

    def save(self, catalog, ledger) -> bool:
        snapshot = snapshot_of(catalog, ledger)
        documents = {
            self.rooms_path: RoomCatalogRecord(rooms=snapshot.rooms),
            self.reservations_path: ReservationLedgerRecord(
                last_sequence=snapshot.last_sequence,
                reservations=snapshot.reservations,
            ),
        }

        staged = [(f"{path}.tmp", path) for path in documents]
        try:
            # Write both temporaries first so a failure leaves the previous files intact
            for tmp_path, path in staged:
                directory = os.path.dirname(path)
                if directory:
                    os.makedirs(directory, exist_ok=True)
                with open(tmp_path, 'w', encoding="utf-8") as f:
                    f.write(documents[path].model_dump_json(indent=2))

            for tmp_path, path in staged:
                os.replace(tmp_path, path)
        except OSError as e:
            logger.error(f"Error saving data: {e}")
            self._discard(tmp_path for tmp_path, _ in staged)
            return False

        logger.debug(f"Saved {len(snapshot.rooms)} rooms and {len(snapshot.reservations)} reservations")
        return True

    def _discard(self, tmp_paths):
        for tmp_path in tmp_paths:
            if not os.path.exists(tmp_path):
                continue
            try:
                os.remove(tmp_path)
            except OSError as e:
                logger.warning(f"Could not remove temporary file {tmp_path}: {e}")


class MongoStore(HotelStore):
    """MongoDB-backed store: one collection, one document per record"""

    COLLECTION = "hotel_state"
    ROOMS_ID = "rooms"
    RESERVATIONS_ID = "reservations"

    def __init__(self, mongo_url: str, db_name: str, client: Optional[MongoClient] = None):
        self.mongo_url = mongo_url
        self.db_name = db_name
        self.client: Optional[MongoClient] = client
        self.collection = None

    def _connect(self):
        """Connect lazily; returns the collection or None when MongoDB is unavailable"""
        if self.collection is not None:
            return self.collection

        try:
            if self.client is None:
                self.client = MongoClient(
                    self.mongo_url,
                    serverSelectionTimeoutMS=2000,  # 2 second timeout
                    connectTimeoutMS=2000
                )

            # Test connection
            self.client.admin.command('ping')
            self.collection = self.client[self.db_name][self.COLLECTION]
            logger.info(f"MongoDB store connected ({self.db_name}.{self.COLLECTION})")
        except PyMongoError as e:
            logger.error(f"MongoDB store is unavailable: {e}")
            self.collection = None

        return self.collection

    def _find_doc(self, doc_id: str) -> Optional[Dict[str, Any]]:
        doc = self.collection.find_one({"_id": doc_id})
        if not doc:
            return None
        return doc.get("payload")

    def _store_doc(self, doc_id: str, payload: Dict[str, Any]):
        self.collection.replace_one(
            {"_id": doc_id},
            {"_id": doc_id, "payload": payload},
            upsert=True
        )

    def load(self) -> HotelSnapshot:
        if self._connect() is None:
            return HotelSnapshot()

        try:
            rooms_payload = self._find_doc(self.ROOMS_ID)
            ledger_payload = self._find_doc(self.RESERVATIONS_ID)
            rooms = RoomCatalogRecord.model_validate(rooms_payload) if rooms_payload else RoomCatalogRecord()
            ledger = ReservationLedgerRecord.model_validate(ledger_payload) if ledger_payload else ReservationLedgerRecord()
        except (PyMongoError, ValidationError) as e:
            logger.error(f"Error loading data from MongoDB, starting from empty state: {e}")
            return HotelSnapshot()

        return HotelSnapshot(
            rooms=rooms.rooms,
            reservations=ledger.reservations,
            last_sequence=ledger.last_sequence,
        )

    def save(self, catalog, ledger) -> bool:
        if self._connect() is None:
            return False

        snapshot = snapshot_of(catalog, ledger)
        try:
            self._store_doc(self.ROOMS_ID, RoomCatalogRecord(rooms=snapshot.rooms).model_dump(mode="json"))
            self._store_doc(
                self.RESERVATIONS_ID,
                ReservationLedgerRecord(
                    last_sequence=snapshot.last_sequence,
                    reservations=snapshot.reservations,
                ).model_dump(mode="json"),
            )
        except PyMongoError as e:
            logger.error(f"Error saving data to MongoDB: {e}")
            return False

        return True


def create_store(settings: Settings) -> HotelStore:
    if settings.storage_backend == "mongo":
        return MongoStore(settings.mongodb_url, settings.mongodb_db_name)
    return JsonFileStore(settings.rooms_path, settings.reservations_path)
