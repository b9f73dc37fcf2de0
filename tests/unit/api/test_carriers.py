import pytest

from shiptrack.api.carriers import UnsupportedCarrierError, handler_for, parse_carrier
from shiptrack.api.usps import UspsTracker
from shiptrack.models import Carrier


@pytest.mark.parametrize("name", ["usps", "USPS", " Usps ", Carrier.USPS])
def test_usps_resolves(name):
    assert handler_for(name) is UspsTracker


def test_parse_known_names():
    assert parse_carrier("fedex") is Carrier.FEDEX
    assert parse_carrier("dhl") is Carrier.DHL


@pytest.mark.parametrize("name", ["fedex", "ups", "dhl"])
def test_known_carrier_without_handler_is_rejected(name):
    with pytest.raises(UnsupportedCarrierError, match="not supported"):
        handler_for(name)


@pytest.mark.parametrize("name", ["", "track", "__init__", "trackUsps"])
def test_unknown_names_are_rejected(name):
    with pytest.raises(UnsupportedCarrierError, match="Unsupported carrier"):
        handler_for(name)
