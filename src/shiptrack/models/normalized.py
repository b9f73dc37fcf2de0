from __future__ import annotations
from dataclasses import dataclass, asdict
from datetime import date
from enum import Enum
from typing import Any, Optional

from shiptrack.models.config import Annotation
from shiptrack.rules.dates import parse_delivery_date


class Carrier(str, Enum):
    USPS = "USPS"
    FEDEX = "Fedex"
    UPS = "UPS"
    DHL = "DHL"


@dataclass(frozen=True)
class NormalizedTrackingRecord:
    # identity
    service: Carrier
    tracking_number: str

    # carrier-reported status
    tracking_class: str
    status_category: str
    status_summary: str

    # "" means the carrier sent no date
    expected_delivery_date: str = ""
    predicted_delivery_date: str = ""

    origin: Optional[str] = None
    annotation: Optional[Annotation] = None

    @property
    def is_delivered(self) -> bool:
        return self.status_category == "Delivered"

    @property
    def preferred_date_label(self) -> Optional[str]:
        """Which of the two carrier dates represents this record, if any."""
        if self.predicted_delivery_date:
            return "Predicted"
        if self.expected_delivery_date:
            return "Expected"
        return None

    @property
    def preferred_date_text(self) -> str:
        return self.predicted_delivery_date or self.expected_delivery_date

    @property
    def preferred_date(self) -> Optional[date]:
        return parse_delivery_date(self.preferred_date_text)

    def to_dict(self) -> dict[str, Any]:
        """Convenience for logging/tests."""
        d = asdict(self)
        d["service"] = self.service.value
        return d
