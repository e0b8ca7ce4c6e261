from __future__ import annotations

import os


def default_country_code() -> str:
    """Country used when a quote request names none (QUOTE_DEFAULT_COUNTRY, default 'dk')."""
    return os.getenv("QUOTE_DEFAULT_COUNTRY", "dk").strip().lower()
