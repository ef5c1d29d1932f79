import argparse
import sys

from config import STORAGE_BACKENDS, Settings
from console.hotel_console import HotelConsole
from logger import ROOT_LOGGER, setup_logger
from services.booking_service import BookingService
from services.storage import create_store


def build_service(settings: Settings) -> BookingService:
    service = BookingService(create_store(settings), settings=settings)
    service.startup()
    return service


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Hotel reservation desk")
    parser.add_argument("--data-dir", help="Directory holding rooms and reservations (default: HOTEL_DATA_DIR or ./data)")
    parser.add_argument("--storage", choices=STORAGE_BACKENDS, help="Storage backend (default: HOTEL_STORAGE_BACKEND or json)")
    args = parser.parse_args(argv)

    settings = Settings.from_env(data_dir=args.data_dir, storage_backend=args.storage)
    logger = setup_logger(ROOT_LOGGER, settings.log_path, settings.log_level.upper())
    logger.info(f"Starting reservation desk (storage: {settings.storage_backend})")

    service = build_service(settings)
    if not service.last_save_ok:
        print("Warning: could not write initial room catalog. See the log for details.")

    return HotelConsole(service).run()


if __name__ == "__main__":
    sys.exit(main())
