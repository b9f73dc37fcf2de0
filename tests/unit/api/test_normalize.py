# tests/unit/api/test_normalize.py
import logging
from pathlib import Path

import pytest

from shiptrack.api.normalize import (
    RawCarrierRecord,
    normalize_usps_response,
    records_from_document,
    strip_markup,
)
from shiptrack.api.xml import TrackResponseError
from shiptrack.models import Annotation, Carrier, NormalizedTrackingRecord

DATA = Path(__file__).resolve().parents[2] / "data"


def _wrap(*infos: str) -> str:
    return "<TrackResponse>" + "".join(infos) + "</TrackResponse>"


def test_full_record_fields():
    text = _wrap(
        '<TrackInfo ID="T1">'
        "<Class>Priority Mail&lt;SUP&gt;&amp;reg;&lt;/SUP&gt;</Class>"
        "<StatusCategory>In Transit</StatusCategory>"
        "<StatusSummary>Moving along.</StatusSummary>"
        "<ExpectedDeliveryDate>March 10, 2024</ExpectedDeliveryDate>"
        "<PredictedDeliveryDate>March 11, 2024</PredictedDeliveryDate>"
        "<OriginCity>PORTLAND</OriginCity><OriginState>OR</OriginState>"
        "</TrackInfo>"
    )
    notes = {"T1": Annotation(sender="Mom", description="Cookies")}
    [rec] = normalize_usps_response(text, annotations=notes)

    assert isinstance(rec, NormalizedTrackingRecord)
    assert rec.service is Carrier.USPS
    assert rec.tracking_number == "T1"
    assert rec.tracking_class == "Priority Mail"
    assert rec.status_category == "In Transit"
    assert rec.status_summary == "Moving along."
    assert rec.expected_delivery_date == "March 10, 2024"
    assert rec.predicted_delivery_date == "March 11, 2024"
    assert rec.origin == "PORTLAND, OR"
    assert rec.annotation == Annotation(sender="Mom", description="Cookies")


def test_missing_optional_fields_default_to_empty():
    [rec] = normalize_usps_response(_wrap('<TrackInfo ID="T2"></TrackInfo>'))
    assert rec.tracking_class == ""
    assert rec.status_category == ""
    assert rec.status_summary == ""
    assert rec.expected_delivery_date == ""
    assert rec.predicted_delivery_date == ""
    assert rec.origin is None
    assert rec.annotation is None


def test_city_without_state_has_no_origin():
    [rec] = normalize_usps_response(_wrap('<TrackInfo ID="T3"><OriginCity>AUSTIN</OriginCity></TrackInfo>'))
    assert rec.origin is None


def test_state_without_city_has_no_origin():
    [rec] = normalize_usps_response(_wrap('<TrackInfo ID="T3"><OriginState>TX</OriginState></TrackInfo>'))
    assert rec.origin is None


def test_repeated_fields_are_joined():
    [rec] = normalize_usps_response(_wrap(
        '<TrackInfo ID="T4"><StatusSummary>one</StatusSummary><StatusSummary>two</StatusSummary></TrackInfo>'
    ))
    assert rec.status_summary == "one, two"


def test_markup_stripping():
    assert strip_markup("First-Class<Mail Parcel>") == "First-Class"
    assert strip_markup("Priority Mail Express<SUP>&#153;</SUP>") == "Priority Mail Express"
    assert strip_markup("") == ""


def test_single_bare_trackinfo_object_yields_nothing():
    doc = {"TrackResponse": {"TrackInfo": {"$": {"ID": "T5"}, "StatusCategory": ["Delivered"]}}}
    assert records_from_document(doc) == []


def test_bare_trackinfo_document_yields_nothing():
    assert normalize_usps_response('<TrackInfo ID="T5"><Class>x</Class></TrackInfo>') == []


@pytest.mark.parametrize("text", [
    "",
    "<TrackResponse/>",
    "<TrackResponse><Other>1</Other></TrackResponse>",
    "<Something><TrackInfo ID='X'/></Something>",
])
def test_unexpected_shapes_yield_nothing(text):
    assert normalize_usps_response(text) == []


def test_error_document_yields_nothing(caplog, monkeypatch):
    # the CLI tests configure "shiptrack" with propagate=False
    monkeypatch.setattr(logging.getLogger("shiptrack"), "propagate", True)
    text = (DATA / "error_response.xml").read_text(encoding="utf-8")
    with caplog.at_level("WARNING", logger="shiptrack.api.normalize"):
        assert normalize_usps_response(text) == []
    assert "Authorization failure" in caplog.text


def test_malformed_xml_is_fatal():
    with pytest.raises(TrackResponseError):
        normalize_usps_response("<TrackResponse><TrackInfo ID='x'>")


def test_per_item_error_becomes_summary():
    [rec] = normalize_usps_response(_wrap(
        '<TrackInfo ID="T6"><Error><Number>-1</Number>'
        "<Description>Could not locate the tracking information.</Description></Error></TrackInfo>"
    ))
    assert rec.status_summary == "Could not locate the tracking information."


def test_entries_without_id_or_unrequested_are_dropped():
    text = _wrap(
        "<TrackInfo><Class>x</Class></TrackInfo>",
        '<TrackInfo ID="WANTED"/>',
        '<TrackInfo ID="OTHER"/>',
    )
    recs = normalize_usps_response(text, requested=["WANTED"])
    assert [r.tracking_number for r in recs] == ["WANTED"]


def test_parse_is_idempotent():
    text = (DATA / "track_response.xml").read_text(encoding="utf-8")
    first = normalize_usps_response(text)
    second = normalize_usps_response(text)
    assert first == second
    assert [r.to_dict() for r in first] == [r.to_dict() for r in second]


def test_fixture_response_in_document_order():
    text = (DATA / "track_response.xml").read_text(encoding="utf-8")
    recs = normalize_usps_response(text)
    assert [r.tracking_number[-1] for r in recs] == ["1", "2", "3", "4"]
    assert recs[0].tracking_class == "Priority Mail"


def test_raw_record_optional_vs_joined():
    raw = RawCarrierRecord({"$": {"ID": " X "}, "A": ["1", "2"], "B": [""]})
    assert raw.identifier == "X"
    assert raw.joined("A") == "1, 2"
    assert raw.optional("B") == ""
    assert raw.optional("C") is None
    assert raw.joined("C") == ""
