import pytest
import stripe

from booking_payments.payments import ProcessorError, StripeClient


def test_api_key_is_passed_per_call(monkeypatch):
    captured = {}

    def fake_create(**kwargs):
        captured.update(kwargs)
        return {"id": "cus_1"}

    monkeypatch.setattr(stripe.Customer, "create", fake_create)
    client = StripeClient("sk_test_abc")
    assert client.create_customer(metadata={"flow_type": "full"}) == {"id": "cus_1"}
    assert captured == {"api_key": "sk_test_abc", "metadata": {"flow_type": "full"}}


def test_update_customer_passes_id(monkeypatch):
    captured = {}

    def fake_modify(customer_id, **kwargs):
        captured["id"] = customer_id
        captured.update(kwargs)
        return {"id": customer_id}

    monkeypatch.setattr(stripe.Customer, "modify", fake_modify)
    StripeClient("sk_test_abc").update_customer("cus_9", name="Ada")
    assert captured == {"id": "cus_9", "api_key": "sk_test_abc", "name": "Ada"}


def test_checkout_session_expand(monkeypatch):
    captured = {}

    def fake_retrieve(session_id, **kwargs):
        captured["id"] = session_id
        captured.update(kwargs)
        return {"id": session_id}

    monkeypatch.setattr(stripe.checkout.Session, "retrieve", fake_retrieve)
    StripeClient("sk_test_abc").retrieve_checkout_session("cs_1", expand=["line_items"])
    assert captured == {"id": "cs_1", "api_key": "sk_test_abc", "expand": ["line_items"]}


def test_stripe_errors_become_processor_errors(monkeypatch):
    def fake_retrieve(intent_id, **kwargs):
        raise stripe.InvalidRequestError("No such payment_intent: 'pi_x'", "intent")

    monkeypatch.setattr(stripe.PaymentIntent, "retrieve", fake_retrieve)
    with pytest.raises(ProcessorError) as exc:
        StripeClient("sk_test_abc").retrieve_payment_intent("pi_x")
    assert "No such payment_intent" in str(exc.value)
    assert exc.value.operation == "payment_intents.retrieve"


def test_non_stripe_errors_are_not_wrapped(monkeypatch):
    def fake_create(**kwargs):
        raise KeyError("bug")

    monkeypatch.setattr(stripe.PaymentLink, "create", fake_create)
    with pytest.raises(KeyError):
        StripeClient("sk_test_abc").create_payment_link()


@pytest.mark.parametrize("key,mode", [("", None), ("sk_test_1", "test"), ("sk_live_1", "live"), ("rk_live_1", "live")])
def test_mode(key, mode):
    assert StripeClient(key).mode == mode
