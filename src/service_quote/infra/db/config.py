from __future__ import annotations

import os


def database_url() -> str:
    url = os.getenv("DATABASE_URL")

    if not url:
        raise RuntimeError("DATABASE_URL environment variable is not set")

    return url


def pool_size() -> int:
    # Rule tables are small and read once per request
    return int(os.getenv("DATABASE_POOL_SIZE", "5"))


def echo_sql() -> bool:
    return os.getenv("DATABASE_ECHO", "").lower() in {"1", "true", "yes"}
