from __future__ import annotations

import logging
from typing import List, Optional, Union

from shiptrack.api.carriers import handler_for
from shiptrack.api.transport import Transport
from shiptrack.models import Carrier, NormalizedTrackingRecord, TrackingConfig
from shiptrack.report.reporter import Reporter
from shiptrack.rules.ordering import sort_by_preferred_date


class TrackingRun:
    """
    One fetch -> normalize -> sort -> report pass.

    The carrier handler is resolved through the closed carrier mapping, so an
    unknown name fails with UnsupportedCarrierError before any request is made.
    """

    def __init__(
        self,
        logger: logging.Logger,
        config: TrackingConfig,
        *,
        carrier: Union[str, Carrier] = Carrier.USPS,
        transport: Optional[Transport] = None,
        reporter: Optional[Reporter] = None,
    ) -> None:
        self.logger = logger
        self.config = config
        self.handler_cls = handler_for(carrier)
        self.transport = transport
        self.reporter = reporter or Reporter()

    def collect(self) -> List[NormalizedTrackingRecord]:
        tracker = self.handler_cls(
            self.config,
            transport=self.transport,
            logger=self.logger.getChild("carrier"),
        )
        try:
            records = tracker.track()
        finally:
            tracker.close()
        return sort_by_preferred_date(records)

    def run(self) -> List[NormalizedTrackingRecord]:
        records = self.collect()
        # banner only once the fetch has succeeded
        self.reporter.announce()
        seen = {r.tracking_number for r in records}
        missing = [tn for tn in self.config.tracking_numbers if tn not in seen]
        if missing:
            self.logger.info("No tracking data returned for: %s", ", ".join(missing))
        self.reporter.report(records)
        return records
