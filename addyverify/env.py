import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

DEFAULT_BASE_URL = "https://api.addy.co.nz/"
DEFAULT_TIMEOUT = 15.0
DEFAULT_DB_PATH = "data/locations.db"


def load_env() -> None:
    """Load .env from project root if present."""
    env_path = Path.cwd() / ".env"
    if not env_path.exists():
        return
    load_dotenv(dotenv_path=env_path)


@dataclass
class Settings:
    api_key: str
    api_secret: str
    base_url: str = DEFAULT_BASE_URL
    timeout: float = DEFAULT_TIMEOUT
    db_path: Path = Path(DEFAULT_DB_PATH)
    log_level: str = "INFO"


def get_settings() -> Settings:
    """Read Addy settings from the environment.

    Credentials are returned as-is (possibly empty); they are only checked
    when a client is built from them.
    """
    timeout = os.getenv("ADDY_TIMEOUT")
    return Settings(
        api_key=os.getenv("ADDY_API_KEY", ""),
        api_secret=os.getenv("ADDY_API_SECRET", ""),
        base_url=os.getenv("ADDY_BASE_URL") or DEFAULT_BASE_URL,
        timeout=float(timeout) if timeout else DEFAULT_TIMEOUT,
        db_path=Path(os.getenv("ADDY_DB_PATH") or DEFAULT_DB_PATH),
        log_level=os.getenv("ADDY_LOG_LEVEL") or "INFO",
    )
