# debtwise/config.py
import logging
import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional

from dotenv import load_dotenv

DEFAULT_LOG_LEVEL = "INFO"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


@dataclass(frozen=True)
class Settings:
    supabase_url: Optional[str] = None
    supabase_anon_key: Optional[str] = None
    log_level: str = DEFAULT_LOG_LEVEL

    @property
    def supabase_configured(self) -> bool:
        return bool(self.supabase_url and self.supabase_anon_key)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Read settings once from the environment (and a .env file if present).
    Call get_settings.cache_clear() to re-read.
    """
    load_dotenv()
    return Settings(
        supabase_url=os.getenv("SUPABASE_URL") or None,
        supabase_anon_key=os.getenv("SUPABASE_ANON_KEY") or None,
        log_level=os.getenv("DEBTWISE_LOG_LEVEL", DEFAULT_LOG_LEVEL).upper(),
    )


def configure_logging(level: Optional[str] = None) -> int:
    """Set up root logging for applications embedding the simulator."""
    name = (level or get_settings().log_level).upper()
    numeric = logging.getLevelName(name)
    if not isinstance(numeric, int):
        raise ValueError(f"Unknown log level: {name}")
    logging.basicConfig(level=numeric, format=LOG_FORMAT)
    logging.getLogger("debtwise").setLevel(numeric)
    return numeric
