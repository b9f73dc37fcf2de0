from shiptrack.models import Carrier, NormalizedTrackingRecord
from shiptrack.rules.ordering import sort_by_preferred_date


def _rec(tn, expected="", predicted=""):
    return NormalizedTrackingRecord(
        service=Carrier.USPS,
        tracking_number=tn,
        tracking_class="",
        status_category="In Transit",
        status_summary="",
        expected_delivery_date=expected,
        predicted_delivery_date=predicted,
    )


def test_undated_records_sort_last_in_original_order():
    recs = [_rec("a"), _rec("b", "2024-03-01"), _rec("c"), _rec("d", "2024-02-01")]
    out = sort_by_preferred_date(recs)
    assert [r.tracking_number for r in out] == ["d", "b", "a", "c"]


def test_predicted_wins_over_expected():
    both = _rec("both", expected="2024-04-01", predicted="2024-05-01")
    mid = _rec("mid", expected="2024-04-15")
    out = sort_by_preferred_date([both, mid])
    assert [r.tracking_number for r in out] == ["mid", "both"]


def test_unparseable_dates_sort_like_missing():
    recs = [_rec("junk", "sometime soon"), _rec("dated", "March 3, 2024"), _rec("none")]
    out = sort_by_preferred_date(recs)
    assert [r.tracking_number for r in out] == ["dated", "junk", "none"]


def test_equal_dates_keep_input_order():
    recs = [_rec("x", "2024-03-01"), _rec("y", "March 1, 2024"), _rec("z", predicted="2024-03-01")]
    out = sort_by_preferred_date(recs)
    assert [r.tracking_number for r in out] == ["x", "y", "z"]


def test_input_is_not_mutated():
    recs = [_rec("a"), _rec("b", "2024-01-01")]
    sort_by_preferred_date(recs)
    assert [r.tracking_number for r in recs] == ["a", "b"]


def test_empty_input():
    assert sort_by_preferred_date([]) == []
