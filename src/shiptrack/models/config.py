from __future__ import annotations
from dataclasses import dataclass, field
from typing import Mapping, Optional, Tuple

DEFAULT_USPS_API_BASE_URL = "https://secure.shippingapis.com/ShippingAPI.dll"


@dataclass(frozen=True)
class Annotation:
    """User-supplied note attached to a tracking number in the config file."""
    sender: Optional[str] = None
    description: Optional[str] = None


@dataclass(frozen=True)
class TrackingConfig:
    # destination
    zip: str

    # carrier credentials
    username: str
    client_ip: str
    source_id: str
    api_base_url: str = DEFAULT_USPS_API_BASE_URL

    # what to track
    tracking_numbers: Tuple[str, ...] = ()
    annotations: Mapping[str, Annotation] = field(default_factory=dict)

    # transport knobs
    timeout: float = 30.0
    verify_tls: bool = True
