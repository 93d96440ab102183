# bookshare/config.py
import os
import logging
from dataclasses import dataclass, field
from typing import List

DEFAULT_SECRET_KEY = "change-me"


def _split_origins(value: str) -> List[str]:
    return [origin.strip() for origin in value.split(",") if origin.strip()]


@dataclass
class Settings:
    """Runtime settings, read from the environment by `from_env`.

    Passed explicitly to the app factory, the CLI context and the services;
    nothing in the package reads the environment on its own.
    """
    database_url: str = "sqlite:///bookshare.db"
    secret_key: str = DEFAULT_SECRET_KEY
    token_max_age: int = 3600
    store_timeout: float = 5.0
    pairing_max_retries: int = 3
    log_level: str = "INFO"
    cors_origins: List[str] = field(default_factory=lambda: ["*"])

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            database_url=os.getenv("DATABASE_URL", "sqlite:///bookshare.db"),
            secret_key=os.getenv("SECRET_KEY", DEFAULT_SECRET_KEY),
            token_max_age=int(os.getenv("TOKEN_MAX_AGE", "3600")),
            store_timeout=float(os.getenv("STORE_TIMEOUT", "5.0")),
            pairing_max_retries=int(os.getenv("PAIRING_MAX_RETRIES", "3")),
            log_level=os.getenv("BOOKSHARE_LOG_LEVEL", "INFO").upper(),
            cors_origins=_split_origins(os.getenv("CORS_ORIGINS", "*")),
        )


def configure_logging(settings: Settings) -> None:
    """Configure root logging once for an entry point (API or CLI)"""
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    if settings.secret_key == DEFAULT_SECRET_KEY:
        logging.getLogger(__name__).warning("SECRET_KEY is not set; using the insecure default")
