# src/shiptrack/__init__.py
from .api.usps import UspsTracker, build_track_request
from .api.normalize import normalize_usps_response
from .pipelines.tracking_run import TrackingRun
from .rules.ordering import sort_by_preferred_date

__all__ = [
    "TrackingRun",
    "UspsTracker",
    "build_track_request",
    "normalize_usps_response",
    "sort_by_preferred_date",
]
