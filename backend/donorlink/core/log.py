import logging

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

def configure_logging(level: str = "INFO") -> None:
    """Install the root handler once; safe to call again on reload."""
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)
    logging.getLogger("donorlink").setLevel(level.upper())
    # Motor/pymongo heartbeat chatter
    logging.getLogger("pymongo").setLevel(logging.WARNING)
