from datetime import date

from booking_payments.payments import stringify, customer_metadata, booking_metadata, read_metadata
from booking_payments.payments.models import BookingRequest


def test_stringify():
    assert stringify(100.0) == "100"
    assert stringify(99.5) == "99.5"
    assert stringify(2) == "2"
    assert stringify(date(2025, 3, 10)) == "2025-03-10"
    assert stringify(None) == ""
    assert stringify(True) == "true"
    assert stringify("abc") == "abc"


def test_customer_metadata_defaults_to_empty_identity():
    meta = customer_metadata(None, "deferred")
    assert meta == {
        "integration_type": "payment_element",
        "flow_type": "deferred",
        "customer_name": "",
        "customer_email": "",
        "customer_phone": "",
    }


def test_booking_metadata_values_are_strings(booking_payload):
    booking = BookingRequest.model_validate(booking_payload)
    meta = booking_metadata("TDG-1-ABCDEFGHI", booking)
    assert all(isinstance(v, str) for v in meta.values())
    assert meta["booking_id"] == "TDG-1-ABCDEFGHI"
    assert meta["total_nights"] == "2"
    assert meta["nightly_rate"] == "100"
    assert meta["check_in_date"] == "2025-03-10"
    assert meta["integration_type"] == "payment_link"


def test_read_metadata_tolerates_missing():
    assert read_metadata(None) == {}
    assert read_metadata({"id": "x"}) == {}
    assert read_metadata({"metadata": {"a": "1"}}) == {"a": "1"}
