from __future__ import annotations
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class EnvCfg:
    """Credential fallbacks read from the process environment / .env."""
    USPS_USERNAME: Optional[str] = None
    USPS_CLIENT_IP: Optional[str] = None
    USPS_SOURCE_ID: Optional[str] = None
    USPS_API_BASE_URL: Optional[str] = None
