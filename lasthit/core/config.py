"""Application settings, read from the environment (or a .env file)."""

import logging
import os

from dotenv import load_dotenv

load_dotenv()


def _env_flag(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


# Persistence
DATABASE_URL = os.getenv("LASTHIT_DATABASE_URL", "sqlite:///./lasthit.db")
DATABASE_ECHO = _env_flag("LASTHIT_DATABASE_ECHO", False)

# Service behavior
AUTO_PLAY_COM = _env_flag("LASTHIT_AUTO_PLAY_COM", True)
DEFAULT_LIST_LIMIT = 10
MAX_LIST_LIMIT = 100

# Logging
LOG_LEVEL = os.getenv("LASTHIT_LOG_LEVEL", "INFO").upper()
LOG_FORMAT = "%(asctime)s - %(levelname)s - %(name)s - %(message)s"


def setup_logging(level: str = LOG_LEVEL) -> None:
    logging.basicConfig(level=level, format=LOG_FORMAT)
