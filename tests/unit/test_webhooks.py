import logging

from booking_payments.payments import WebhookDispatcher, parse_event
from booking_payments.payments.webhooks import HANDLED, IGNORED, FAILED


def _event(event_type, obj):
    return {"type": event_type, "data": {"object": obj}}


def test_payment_link_session_completed_is_handled(caplog):
    caplog.set_level(logging.INFO, logger="booking_payments.payments.webhooks")
    event = _event("checkout.session.completed", {
        "id": "cs_1",
        "amount_total": 15000,
        "currency": "eur",
        "metadata": {"integration_type": "payment_link", "booking_id": "TDG-1-ABCDEFGHI"},
    })
    assert WebhookDispatcher().dispatch(event) == HANDLED
    assert "Payment Link booking confirmed: TDG-1-ABCDEFGHI" in caplog.text


def test_session_completed_from_other_integration_is_ignored():
    event = _event("checkout.session.completed", {"id": "cs_2", "metadata": {"integration_type": "checkout"}})
    assert WebhookDispatcher().dispatch(event) == IGNORED


def test_payment_intent_succeeded_is_logged(caplog):
    caplog.set_level(logging.INFO, logger="booking_payments.payments.webhooks")
    assert WebhookDispatcher().dispatch(_event("payment_intent.succeeded", {"id": "pi_9"})) == HANDLED
    assert "Payment succeeded: pi_9" in caplog.text


def test_unknown_or_missing_type_is_ignored(caplog):
    caplog.set_level(logging.INFO, logger="booking_payments.payments.webhooks")
    dispatcher = WebhookDispatcher()
    assert dispatcher.dispatch(_event("invoice.paid", {})) == IGNORED
    assert dispatcher.dispatch({}) == IGNORED
    assert dispatcher.dispatch(None) == IGNORED
    assert "Unhandled event type invoice.paid" in caplog.text


def test_handler_exception_is_reported_as_failed():
    def boom(event):
        raise RuntimeError("booking store down")

    dispatcher = WebhookDispatcher({"checkout.session.completed": boom})
    assert dispatcher.dispatch(_event("checkout.session.completed", {})) == FAILED


def test_parse_event():
    assert parse_event(b'{"type": "payment_intent.succeeded"}') == {"type": "payment_intent.succeeded"}
    assert parse_event(b"not json") is None
    assert parse_event(b"[1, 2]") is None
    assert parse_event(b"") is None
    assert parse_event(b"\xff\xfe") is None


def test_dispatch_non_string_type_is_ignored():
    dispatcher = WebhookDispatcher()
    assert dispatcher.dispatch({"type": ["checkout.session.completed"]}) == IGNORED
    assert dispatcher.dispatch({"type": {"a": 1}}) == IGNORED
