# src/shiptrack/api/normalize.py
from __future__ import annotations

import logging
import re
from typing import Any, Dict, Iterable, List, Mapping, Optional

from shiptrack.api.xml import parse_xml_document
from shiptrack.models import Annotation, Carrier, NormalizedTrackingRecord

logger = logging.getLogger("shiptrack.api.normalize")

# a whole <tag>...</tag> element, or any stray <...>
_MARKUP_RE = re.compile(r"<(\w+)[^<>]*>.*?</\1\s*>|<[^<>]*>", re.DOTALL)


def strip_markup(value: str) -> str:
    """Remove any <...> substrings (USPS embeds <SUP>&reg;</SUP> and similar in class names)."""
    return _MARKUP_RE.sub("", value or "").strip()


def _leaf_text(value: Any) -> Optional[str]:
    if isinstance(value, str):
        return value
    if isinstance(value, dict):
        text = value.get("_")
        return text if isinstance(text, str) else ""
    return None


class RawCarrierRecord:
    """
    One TrackInfo entry as parsed: leaf fields are lists of strings, or absent.

    This is the only place that knows about that shape; callers get either a
    joined string or None.
    """

    def __init__(self, entry: Dict[str, Any]) -> None:
        self._entry = entry

    @property
    def identifier(self) -> str:
        attrs = self._entry.get("$") or {}
        return str(attrs.get("ID") or "").strip()

    def values(self, field: str) -> List[str]:
        raw = self._entry.get(field)
        if raw is None:
            return []
        if not isinstance(raw, list):
            raw = [raw]
        out: List[str] = []
        for item in raw:
            text = _leaf_text(item)
            if text is not None:
                out.append(text)
        return out

    def has(self, field: str) -> bool:
        return field in self._entry

    def joined(self, field: str) -> str:
        return ", ".join(self.values(field))

    def optional(self, field: str) -> Optional[str]:
        if not self.has(field):
            return None
        return self.joined(field)

    def error_description(self) -> Optional[str]:
        errors = self._entry.get("Error")
        if not isinstance(errors, list):
            return None
        descriptions = []
        for err in errors:
            if isinstance(err, dict):
                descriptions.extend(RawCarrierRecord(err).values("Description"))
        return ", ".join(d for d in descriptions if d) or None


def _origin(raw: RawCarrierRecord) -> Optional[str]:
    city = raw.optional("OriginCity")
    state = raw.optional("OriginState")
    if city is None or state is None:
        return None
    return f"{city}, {state}"


def normalize_usps_entry(
    raw: RawCarrierRecord,
    *,
    annotations: Mapping[str, Annotation],
) -> NormalizedTrackingRecord:
    tracking_number = raw.identifier
    summary = raw.joined("StatusSummary")
    if not summary:
        # "could not locate the tracking information" arrives as a per-item Error
        summary = raw.error_description() or ""

    return NormalizedTrackingRecord(
        service=Carrier.USPS,
        tracking_number=tracking_number,
        tracking_class=strip_markup(raw.joined("Class")),
        status_category=raw.joined("StatusCategory"),
        status_summary=summary,
        expected_delivery_date=raw.joined("ExpectedDeliveryDate"),
        predicted_delivery_date=raw.joined("PredictedDeliveryDate"),
        origin=_origin(raw),
        annotation=annotations.get(tracking_number),
    )


def records_from_document(
    document: Mapping[str, Any],
    *,
    annotations: Optional[Mapping[str, Annotation]] = None,
    requested: Optional[Iterable[str]] = None,
) -> List[NormalizedTrackingRecord]:
    """
    Normalize a parsed USPS TrackV2 document.

    Only a TrackResponse whose TrackInfo is a list produces records. A missing
    container, or a single TrackInfo object that is not wrapped in a list, is
    "no results" rather than an error.
    """
    annotations = annotations or {}
    wanted = {str(tn) for tn in requested} if requested is not None else None

    if "Error" in document:
        err = document.get("Error")
        desc = RawCarrierRecord(err).joined("Description") if isinstance(err, dict) else ""
        logger.warning("USPS returned an error document: %s", desc or err)
        return []

    response = document.get("TrackResponse")
    if not isinstance(response, dict):
        logger.debug("No TrackResponse container in document; nothing to normalize.")
        return []

    infos = response.get("TrackInfo")
    if not isinstance(infos, list):
        logger.debug("TrackResponse.TrackInfo is not a list (%s); skipping.", type(infos).__name__)
        return []

    records: List[NormalizedTrackingRecord] = []
    for entry in infos:
        if not isinstance(entry, dict):
            continue
        raw = RawCarrierRecord(entry)
        if not raw.identifier:
            logger.warning("Skipping TrackInfo entry without an ID attribute.")
            continue
        if wanted is not None and raw.identifier not in wanted:
            logger.warning("Skipping unrequested tracking number %s in response.", raw.identifier)
            continue
        records.append(normalize_usps_entry(raw, annotations=annotations))

    logger.debug("Normalized %d of %d TrackInfo entries.", len(records), len(infos))
    return records


def normalize_usps_response(
    text: str,
    *,
    annotations: Optional[Mapping[str, Annotation]] = None,
    requested: Optional[Iterable[str]] = None,
) -> List[NormalizedTrackingRecord]:
    """Parse raw TrackV2 response text into normalized records (response order)."""
    document = parse_xml_document(text)
    return records_from_document(document, annotations=annotations, requested=requested)
