import re

import pytest

from booking_payments.config import BOOKING_ID_PREFIX, SHIPPING_ALLOWED_COUNTRIES
from booking_payments.payments import PaymentLinkOrchestrator, ProcessorError, generate_booking_id
from booking_payments.payments import links
from booking_payments.payments.models import BookingRequest

BOOKING_ID_RE = re.compile(rf"^{re.escape(BOOKING_ID_PREFIX)}-\d+-[A-Z0-9]{{9}}$")


def test_booking_id_format():
    for _ in range(50):
        assert BOOKING_ID_RE.match(generate_booking_id())


def test_booking_ids_differ_within_same_millisecond(monkeypatch):
    monkeypatch.setattr(links.time, "time", lambda: 1741600000.5)
    first, second = generate_booking_id(), generate_booking_id()
    assert first.split("-")[1] == second.split("-")[1] == "1741600000500"
    assert first != second


def test_booking_id_custom_prefix():
    assert generate_booking_id("HTL").startswith("HTL-")


def test_create_payment_link_request(stripe_fake, booking_payload):
    booking = BookingRequest.model_validate(booking_payload)
    result = PaymentLinkOrchestrator(stripe_fake).create_payment_link(booking, "https://hotel.example/")

    (params,) = stripe_fake.calls_for("payment_links.create")
    assert result == {
        "success": True,
        "paymentLink": "https://buy.stripe.com/test_abc",
        "bookingId": params["metadata"]["booking_id"],
    }
    assert BOOKING_ID_RE.match(result["bookingId"])
    assert [li["price_data"]["unit_amount"] for li in params["line_items"]] == [10000, 10000, 2000]
    assert params["customer_creation"] == "always"
    assert params["payment_intent_data"] == {"setup_future_usage": "off_session"}
    assert params["restrictions"] == {"completed_sessions": {"limit": 1}}
    assert params["billing_address_collection"] == "required"
    assert params["shipping_address_collection"] == {"allowed_countries": SHIPPING_ALLOWED_COUNTRIES}
    assert params["after_completion"] == {
        "type": "redirect",
        "redirect": {"url": "https://hotel.example/success?session_id={CHECKOUT_SESSION_ID}"},
    }
    assert params["metadata"] == {
        "booking_id": result["bookingId"],
        "guest_name": "Ada Lovelace",
        "guest_email": "ada@example.com",
        "check_in_date": "2025-03-10",
        "check_out_date": "2025-03-12",
        "room_type": "Deluxe Room",
        "total_nights": "2",
        "integration_type": "payment_link",
        "nightly_rate": "100",
    }


def test_allowed_countries_override(stripe_fake, booking_payload):
    booking = BookingRequest.model_validate(booking_payload)
    PaymentLinkOrchestrator(stripe_fake, allowed_countries=["FR"]).create_payment_link(booking, "http://localhost:8000")
    (params,) = stripe_fake.calls_for("payment_links.create")
    assert params["shipping_address_collection"] == {"allowed_countries": ["FR"]}


def test_create_payment_link_failure(stripe_fake, booking_payload):
    stripe_fake.fail("payment_links.create", "Invalid line_items")
    booking = BookingRequest.model_validate(booking_payload)
    with pytest.raises(ProcessorError):
        PaymentLinkOrchestrator(stripe_fake).create_payment_link(booking, "http://localhost:8000")
