# src/shiptrack/report/reporter.py
from __future__ import annotations

import sys
from datetime import date
from typing import IO, List, Optional, Sequence

from shiptrack.models import NormalizedTrackingRecord
from shiptrack.report.styles import Palette

BANNER = "Shiptrack starting..."

_STATUS_WIDTH = 15
_NUMBER_WIDTH = 25
_SERVICE_WIDTH = 30


def _is_today(record: NormalizedTrackingRecord, today: date) -> bool:
    preferred = record.preferred_date
    return preferred is not None and preferred == today


def arriving_today(records: Sequence[NormalizedTrackingRecord], today: date) -> List[NormalizedTrackingRecord]:
    return [r for r in records if _is_today(r, today)]


def arrival_digest(records: Sequence[NormalizedTrackingRecord], today: date) -> Optional[str]:
    """
    "There are N package(s) arriving today from USPS, ..." or None when nothing
    is due today. Carriers are listed once each, in first-seen order.
    """
    due = arriving_today(records, today)
    if not due:
        return None
    services = list(dict.fromkeys(r.service.value for r in due))
    return f"There are {len(due)} package(s) arriving today from {', '.join(services)}"


def date_phrase(record: NormalizedTrackingRecord, today: date) -> str:
    if record.is_delivered:
        return ""
    label = record.preferred_date_label
    if label is None:
        return ""
    if _is_today(record, today):
        return f"{label} today"
    return f"{label} {record.preferred_date_text}"


def format_record(
    record: NormalizedTrackingRecord,
    today: date,
    palette: Optional[Palette] = None,
) -> List[str]:
    """Lines for one record: headline, optional origin/annotation, summary, blank."""
    palette = palette or Palette(enabled=False)

    service = f"{record.service.value}, {record.tracking_class}"
    columns = [
        record.status_category.ljust(_STATUS_WIDTH),
        palette.bold(record.tracking_number.ljust(_NUMBER_WIDTH)),
        service.ljust(_SERVICE_WIDTH),
    ]
    phrase = date_phrase(record, today)
    if phrase:
        columns.append(palette.blue(phrase))
    lines = [" | ".join(columns).rstrip()]

    if record.origin:
        lines.append(palette.green(f"Arriving from {record.origin}"))

    note = record.annotation
    if note is not None and (note.sender or note.description):
        sender = palette.grey(note.sender or "Unspecified sender")
        lines.append(f"[{sender}] {palette.dim(note.description or '')}".rstrip())

    lines.append(palette.dim(record.status_summary))
    lines.append("")
    return lines


class Reporter:
    """Writes the console report for one run."""

    def __init__(
        self,
        stream: Optional[IO[str]] = None,
        *,
        palette: Optional[Palette] = None,
        today: Optional[date] = None,
        banner: bool = True,
    ) -> None:
        self.stream = stream or sys.stdout
        self.palette = palette or Palette.for_stream(self.stream)
        self.today = today or date.today()
        self.banner = banner

    def _emit(self, line: str = "") -> None:
        self.stream.write(line + "\n")

    def announce(self) -> None:
        """Print the start-of-run banner (no-op when disabled)."""
        if self.banner:
            self._emit(self.palette.banner(BANNER))
            self._emit()
            self.stream.flush()

    def render(self, records: Sequence[NormalizedTrackingRecord]) -> List[str]:
        lines: List[str] = []

        digest = arrival_digest(records, self.today)
        if digest:
            lines.extend([self.palette.bold(digest), ""])

        for record in records:
            lines.extend(format_record(record, self.today, self.palette))
        return lines

    def report(self, records: Sequence[NormalizedTrackingRecord]) -> None:
        for line in self.render(records):
            self._emit(line)
        self.stream.flush()
