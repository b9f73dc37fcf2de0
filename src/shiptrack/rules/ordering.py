# src/shiptrack/rules/ordering.py
from __future__ import annotations

from datetime import date
from typing import Iterable, List, Tuple

from shiptrack.models import NormalizedTrackingRecord


def _preferred_date_key(record: NormalizedTrackingRecord) -> Tuple[bool, date]:
    # (False, d) sorts before (True, ...): undated records go last
    d = record.preferred_date
    if d is None:
        return True, date.max
    return False, d


def sort_by_preferred_date(records: Iterable[NormalizedTrackingRecord]) -> List[NormalizedTrackingRecord]:
    """
    Order records ascending by preferred date (predicted, else expected).

    Records without a parseable date sort after every dated record. `sorted` is
    stable, so equal keys keep their input order. Returns a new list.
    """
    return sorted(records, key=_preferred_date_key)
