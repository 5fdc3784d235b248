"""
Storefront configuration from environment variables.

A local `.env` file is loaded once on import (python-dotenv); real
environment variables always win over the file.
"""
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

load_dotenv(Path.cwd() / ".env", override=False)


DEFAULT_CART_STORAGE_KEY = "cart"
DEFAULT_CART_TTL = 86400  # 24 hours

# Cart storage backends
STORAGE_MEMORY = "memory"
STORAGE_FILE = "file"
STORAGE_REDIS = "redis"
STORAGE_BACKENDS = (STORAGE_MEMORY, STORAGE_FILE, STORAGE_REDIS)


def _env_bool(name: str, default: bool = False) -> bool:
    value = os.environ.get(name)
    if value is None or value.strip() == "":
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


def _env_int(name: str, default: int) -> int:
    try:
        return int(os.environ.get(name, default))
    except (TypeError, ValueError):
        return default


@dataclass(frozen=True)
class CartConfig:
    """Where the session cart is kept."""
    storage: str = STORAGE_MEMORY
    storage_key: str = DEFAULT_CART_STORAGE_KEY
    storage_dir: str = ".storefront"
    ttl: int = DEFAULT_CART_TTL

    @classmethod
    def from_env(cls) -> "CartConfig":
        storage = os.environ.get("CART_STORAGE", STORAGE_MEMORY).strip().lower()
        if storage not in STORAGE_BACKENDS:
            raise ValueError(
                f"CART_STORAGE must be one of {', '.join(STORAGE_BACKENDS)}, got '{storage}'"
            )
        return cls(
            storage=storage,
            storage_key=os.environ.get("CART_STORAGE_KEY", DEFAULT_CART_STORAGE_KEY),
            storage_dir=os.environ.get("CART_STORAGE_DIR", ".storefront"),
            ttl=_env_int("CART_TTL", DEFAULT_CART_TTL),
        )


@dataclass(frozen=True)
class EmailConfig:
    """Resend transactional email settings."""
    api_key: Optional[str] = None
    from_email: str = "noreply@yourdomain.com"
    from_name: str = "Your Store Name"
    reply_to: str = "support@yourdomain.com"
    simulate: bool = False

    @classmethod
    def from_env(cls) -> "EmailConfig":
        return cls(
            api_key=os.environ.get("RESEND_API_KEY") or None,
            from_email=os.environ.get("FROM_EMAIL", "noreply@yourdomain.com"),
            from_name=os.environ.get("FROM_NAME", "Your Store Name"),
            reply_to=os.environ.get("REPLY_TO_EMAIL", "support@yourdomain.com"),
            simulate=_env_bool("SIMULATE_EMAILS"),
        )

    @property
    def from_address(self) -> str:
        return f"{self.from_name} <{self.from_email}>"

    @property
    def should_simulate(self) -> bool:
        """Log emails instead of sending when asked to, or when no API key is set."""
        return self.simulate or not self.api_key
