"""Runtime configuration read from environment variables.

Accessors read the environment on every call; nothing is cached.
"""
import os
from dataclasses import dataclass
from typing import Optional

DEFAULT_DATABASE_URL = "sqlite:///kushon.db"
DEFAULT_LOG_LEVEL = "INFO"
DEFAULT_SMTP_PORT = 587
DEFAULT_SMTP_TIMEOUT = 10.0
_TRUE = {"1", "true", "yes", "on"}


def env_bool(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in _TRUE


def database_url() -> str:
    return os.getenv("DATABASE_URL", DEFAULT_DATABASE_URL)


def log_level_name() -> str:
    return os.getenv("KUSHON_LOG_LEVEL", DEFAULT_LOG_LEVEL).upper()


def frontend_url() -> str:
    return os.getenv("FRONTEND_URL", "")


@dataclass(frozen=True)
class SMTPSettings:
    host: Optional[str]
    port: int
    secure: bool
    user: Optional[str]
    password: Optional[str]
    sender: Optional[str]
    timeout: float

    @property
    def has_auth(self) -> bool:
        return bool(self.user and self.password)


def smtp_settings() -> SMTPSettings:
    """Collect SMTP_* variables. SMTP_SECURE selects implicit TLS, otherwise STARTTLS is attempted."""
    return SMTPSettings(
        host=os.getenv("SMTP_HOST"),
        port=int(os.getenv("SMTP_PORT", str(DEFAULT_SMTP_PORT))),
        secure=env_bool("SMTP_SECURE"),
        user=os.getenv("SMTP_USER"),
        password=os.getenv("SMTP_PASS"),
        sender=os.getenv("SMTP_FROM"),
        timeout=float(os.getenv("SMTP_TIMEOUT", str(DEFAULT_SMTP_TIMEOUT))),
    )
