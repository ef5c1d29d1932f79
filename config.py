import os
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, field_validator

load_dotenv()


STORAGE_BACKENDS = ("json", "mongo")


class Settings(BaseModel):
    """Runtime settings for the reservation desk"""

    data_dir: str = "data"
    rooms_file: str = "rooms.json"
    reservations_file: str = "reservations.json"
    storage_backend: str = "json"

    # MongoDB backend
    mongodb_url: str = "mongodb://localhost:27017"
    mongodb_db_name: str = "hotel_reservations"

    log_file: Optional[str] = None
    log_level: str = "INFO"

    date_format: str = "%Y-%m-%d"
    currency: str = "$"

    @field_validator("storage_backend")
    @classmethod
    def _known_backend(cls, value: str) -> str:
        value = value.lower()
        if value not in STORAGE_BACKENDS:
            raise ValueError(f"Unknown storage backend '{value}', expected one of {STORAGE_BACKENDS}")
        return value

    @property
    def rooms_path(self) -> str:
        return os.path.join(self.data_dir, self.rooms_file)

    @property
    def reservations_path(self) -> str:
        return os.path.join(self.data_dir, self.reservations_file)

    @property
    def log_path(self) -> str:
        return self.log_file or os.path.join(self.data_dir, "hotel.log")

    @classmethod
    def from_env(cls, **overrides) -> "Settings":
        """
        Build settings from environment variables (.env is loaded on import)

        Args:
            **overrides: Values that take precedence over the environment,
                e.g. from command line flags. None values are ignored.
        """
        values = {
            "data_dir": os.getenv("HOTEL_DATA_DIR", "data"),
            "rooms_file": os.getenv("HOTEL_ROOMS_FILE", "rooms.json"),
            "reservations_file": os.getenv("HOTEL_RESERVATIONS_FILE", "reservations.json"),
            "storage_backend": os.getenv("HOTEL_STORAGE_BACKEND", "json"),
            "mongodb_url": os.getenv("MONGODB_URL", "mongodb://localhost:27017"),
            "mongodb_db_name": os.getenv("MONGODB_DB_NAME", "hotel_reservations"),
            "log_file": os.getenv("HOTEL_LOG_FILE"),
            "log_level": os.getenv("HOTEL_LOG_LEVEL", "INFO"),
            "date_format": os.getenv("HOTEL_DATE_FORMAT", "%Y-%m-%d"),
            "currency": os.getenv("HOTEL_CURRENCY", "$"),
        }
        values.update({key: value for key, value in overrides.items() if value is not None})
        return cls(**values)
