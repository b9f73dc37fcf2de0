from __future__ import annotations

import logging
from typing import Dict, List, Optional, Sequence

import requests

from shiptrack.api.normalize import normalize_usps_response
from shiptrack.api.transport import RequestsTransport, Transport
from shiptrack.models import NormalizedTrackingRecord, TrackingConfig

TRACK_API = "TrackV2"
REVISION = "1"


def build_track_request(config: TrackingConfig, tracking_numbers: Sequence[str]) -> str:
    """
    Build the TrackFieldRequest XML payload.

    Values are embedded verbatim; callers are expected to pass plain tracking
    numbers. An empty sequence still yields a complete request.
    """
    entries = "".join(
        f'<TrackID ID="{tn}"><DestinationZipCode>{config.zip}</DestinationZipCode></TrackID>'
        for tn in tracking_numbers
    )
    return (
        '<?xml version="1.0" encoding="UTF-8" ?>'
        f'<TrackFieldRequest USERID="{config.username}">'
        f"<Revision>{REVISION}</Revision>"
        f"<ClientIp>{config.client_ip}</ClientIp>"
        f"<SourceId>{config.source_id}</SourceId>"
        f"{entries}"
        "</TrackFieldRequest>"
    )


def build_track_params(config: TrackingConfig, tracking_numbers: Sequence[str]) -> Dict[str, str]:
    return {"API": TRACK_API, "XML": build_track_request(config, tracking_numbers)}


def build_track_uri(config: TrackingConfig, tracking_numbers: Sequence[str]) -> str:
    """The full GET URI, with the XML payload URL-encoded into the query string."""
    req = requests.Request(
        "GET", config.api_base_url, params=build_track_params(config, tracking_numbers))
    return req.prepare().url


class UspsTracker:
    """USPS TrackV2 client.

    Responsibilities:
    - fetch(): one GET carrying every tracking number, returns the raw body
    - track(): fetch + normalize into NormalizedTrackingRecord (response order)
    """

    def __init__(
        self,
        config: TrackingConfig,
        transport: Optional[Transport] = None,
        *,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self.config = config
        self.transport = transport or RequestsTransport(
            config.timeout, verify=config.verify_tls)
        self.logger: logging.Logger = logger or logging.getLogger(
            "shiptrack.api.usps"
        )

    def fetch(self, tracking_numbers: Sequence[str]) -> str:
        params = build_track_params(self.config, tracking_numbers)
        self.logger.info(
            "Querying USPS for %d tracking number(s) at %s",
            len(tracking_numbers), self.config.api_base_url,
        )
        self.logger.debug("USPS request payload=%s", params["XML"])
        text = self.transport.get_text(self.config.api_base_url, params=params)
        self.logger.debug(
            "USPS response_body=%s",
            (text[:4000] + "...") if len(text) > 4000 else text,
        )
        return text

    def track(self, tracking_numbers: Optional[Sequence[str]] = None) -> List[NormalizedTrackingRecord]:
        numbers: List[str] = list(
            self.config.tracking_numbers if tracking_numbers is None else tracking_numbers)
        text = self.fetch(numbers)
        records = normalize_usps_response(
            text, annotations=self.config.annotations, requested=numbers)
        self.logger.info("USPS returned %d record(s)", len(records))
        return records

    def close(self) -> None:
        close = getattr(self.transport, "close", None)
        if callable(close):
            close()
