"""Runtime configuration read from environment variables."""

import os
from dataclasses import dataclass, field


def _env_bool(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in {"1", "true", "yes", "on"}


def parse_stock(raw: str) -> dict[int, int]:
    """Parse ``"1:10,2:5"`` into ``{1: 10, 2: 5}``.

    Raises:
        ValueError: When an entry is not ``<product_id>:<quantity>`` with
            integer parts.
    """
    stock: dict[int, int] = {}
    for entry in filter(None, (part.strip() for part in raw.split(","))):
        product_id, sep, quantity = entry.partition(":")
        if not sep:
            raise ValueError(f"Invalid stock entry {entry!r}, expected '<product_id>:<quantity>'")
        stock[int(product_id)] = int(quantity)
    return stock


@dataclass(frozen=True)
class Settings:
    log_level: str = "INFO"
    log_json: bool = True
    initial_stock: dict[int, int] = field(default_factory=dict)
    email_sender: str = "orders@example.com"


def load_settings() -> Settings:
    return Settings(
        log_level=os.getenv("ORDERS_LOG_LEVEL", "INFO").upper(),
        log_json=_env_bool("ORDERS_LOG_JSON", "true"),
        initial_stock=parse_stock(os.getenv("ORDERS_INITIAL_STOCK", "")),
        email_sender=os.getenv("ORDERS_EMAIL_SENDER", "orders@example.com"),
    )
