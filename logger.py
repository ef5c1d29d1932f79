import logging
import os


LOG_FORMAT = '%(asctime)s | %(name)s | %(levelname)s | %(message)s'
ROOT_LOGGER = "hotel"


#-- initialize a logger that writes to a file; child loggers (hotel.*) propagate into it
def setup_logger(name: str = ROOT_LOGGER, log_file: str = "data/hotel.log", level="INFO"):
    logger = logging.getLogger(name)
    logger.setLevel(level)
    if logger.handlers:
        return logger

    formatter = logging.Formatter(LOG_FORMAT)
    try:
        directory = os.path.dirname(log_file)
        if directory:
            os.makedirs(directory, exist_ok=True)
        handler = logging.FileHandler(log_file)
    except OSError as e:
        # Unusable log location: keep warnings and errors on stderr instead
        handler = logging.StreamHandler()
        handler.setLevel(logging.WARNING)
        handler.setFormatter(formatter)
        logger.addHandler(handler)
        logger.warning(f"Cannot write log file {log_file}, logging to stderr: {e}")
        return logger

    handler.setFormatter(formatter)
    logger.addHandler(handler)
    return logger


def get_logger(component: str) -> logging.Logger:
    return logging.getLogger(f"{ROOT_LOGGER}.{component}")
