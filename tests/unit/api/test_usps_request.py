# tests/unit/api/test_usps_request.py
from urllib.parse import parse_qs, urlsplit

from lxml import etree

from shiptrack.api.usps import build_track_request, build_track_uri, build_track_params
from shiptrack.models import TrackingConfig


def _cfg(**overrides):
    base = dict(
        zip="84103",
        username="USER1",
        client_ip="10.0.0.5",
        source_id="shiptrack",
        tracking_numbers=("A1", "B2", "C3"),
    )
    base.update(overrides)
    return TrackingConfig(**base)


def test_request_has_one_entry_per_number_with_zip():
    cfg = _cfg()
    xml = build_track_request(cfg, ["A1", "B2", "C3"])
    root = etree.fromstring(xml.encode("utf-8"))

    assert root.tag == "TrackFieldRequest"
    assert root.get("USERID") == "USER1"
    entries = root.findall("TrackID")
    assert [e.get("ID") for e in entries] == ["A1", "B2", "C3"]
    assert [e.findtext("DestinationZipCode") for e in entries] == ["84103"] * 3


def test_request_header_fields_in_order():
    xml = build_track_request(_cfg(), ["A1"])
    root = etree.fromstring(xml.encode("utf-8"))
    assert [c.tag for c in root][:3] == ["Revision", "ClientIp", "SourceId"]
    assert root.findtext("Revision") == "1"
    assert root.findtext("ClientIp") == "10.0.0.5"
    assert root.findtext("SourceId") == "shiptrack"


def test_empty_sequence_is_still_a_valid_request():
    xml = build_track_request(_cfg(), [])
    root = etree.fromstring(xml.encode("utf-8"))
    assert root.findall("TrackID") == []
    assert xml.endswith("</SourceId></TrackFieldRequest>")


def test_no_stray_content_after_root():
    xml = build_track_request(_cfg(), ["A1"])
    assert xml.endswith("</TrackFieldRequest>")
    assert xml.count("84103") == 1


def test_uri_embeds_payload_in_query():
    cfg = _cfg(api_base_url="https://example.test/ShippingAPI.dll")
    uri = build_track_uri(cfg, ["A1", "B2"])
    parts = urlsplit(uri)
    assert f"{parts.scheme}://{parts.netloc}{parts.path}" == "https://example.test/ShippingAPI.dll"

    qs = parse_qs(parts.query)
    assert qs["API"] == ["TrackV2"]
    assert qs["XML"] == [build_track_request(cfg, ["A1", "B2"])]


def test_params_match_request():
    cfg = _cfg()
    params = build_track_params(cfg, ["A1"])
    assert params == {"API": "TrackV2", "XML": build_track_request(cfg, ["A1"])}
