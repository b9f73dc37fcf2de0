# src/shiptrack/api/carriers.py
from __future__ import annotations

from typing import Dict, Type, Union

from shiptrack.api.usps import UspsTracker
from shiptrack.models import Carrier


class UnsupportedCarrierError(ValueError):
    """Raised for a carrier name outside the known set or without a handler."""


# Closed mapping: adding a carrier means adding a handler class here.
CARRIER_HANDLERS: Dict[Carrier, Type[UspsTracker]] = {
    Carrier.USPS: UspsTracker,
}


def parse_carrier(name: Union[str, Carrier]) -> Carrier:
    if isinstance(name, Carrier):
        return name
    key = (name or "").strip().upper()
    for carrier in Carrier:
        if carrier.name == key:
            return carrier
    raise UnsupportedCarrierError(
        f"Unsupported carrier: {name!r} (known: {', '.join(c.name.lower() for c in Carrier)})")


def handler_for(name: Union[str, Carrier]) -> Type[UspsTracker]:
    carrier = parse_carrier(name)
    try:
        return CARRIER_HANDLERS[carrier]
    except KeyError:
        raise UnsupportedCarrierError(
            f"Carrier {carrier.value} is not supported yet") from None
