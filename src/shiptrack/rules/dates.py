# src/shiptrack/rules/dates.py
from __future__ import annotations

import warnings
from datetime import date
from typing import Optional

import pandas as pd


def parse_delivery_date(value: Optional[str]) -> Optional[date]:
    """
    Parse a carrier date string ("March 5, 2024", "2024-03-05", ISO timestamps)
    into a calendar date. Blank or unparseable input returns None; this never raises.
    """
    if value is None:
        return None
    text = str(value).strip()
    if not text:
        return None

    with warnings.catch_warnings():
        # pandas falls back to dateutil for free-form strings and says so loudly
        warnings.filterwarnings("ignore", category=UserWarning)
        try:
            ts = pd.to_datetime(text, errors="coerce")
        except (ValueError, TypeError, OverflowError):
            return None

    if pd.isna(ts):
        return None
    return ts.date()


def is_today(value: Optional[str], today: Optional[date] = None) -> bool:
    """True when `value` parses to the same calendar day as `today` (local date by default)."""
    parsed = parse_delivery_date(value)
    if parsed is None:
        return False
    return parsed == (today or date.today())
