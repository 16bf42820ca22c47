import os

# Désactive l'init fastapi-limiter (évite toute connexion Redis pendant les tests)
os.environ.setdefault("DISABLE_FASTAPI_LIMITER_INIT_FOR_TESTS", "1")

import pytest
from typing import Any, Dict, Generator, List, Tuple
from fastapi.testclient import TestClient

from booking_payments.app_setup.factory import create_app
from booking_payments.payments.errors import ProcessorError

# Marquage automatique selon le dossier
def pytest_collection_modifyitems(config, items):
    for item in items:
        nodeid = item.nodeid.replace("\\", "/")
        if "/unit/" in nodeid:
            item.add_marker(pytest.mark.unit)
        elif "/integration/" in nodeid or "/functional/" in nodeid:
            item.add_marker(pytest.mark.integration)


class FakeStripeClient:
    """
    Double de StripeClient: enregistre chaque appel (opération, args, params)
    et renvoie des objets dict. fail(operation, message) fait échouer une opération
    comme le ferait Stripe (ProcessorError).
    """
    api_key = "sk_test_fake"
    mode = "test"

    def __init__(self):
        self.calls: List[Tuple[str, tuple, Dict[str, Any]]] = []
        self.failures: Dict[str, str] = {}
        self.objects: Dict[str, Dict[str, Any]] = {}

    def fail(self, operation: str, message: str) -> None:
        self.failures[operation] = message

    def add(self, obj: Dict[str, Any]) -> Dict[str, Any]:
        self.objects[obj["id"]] = obj
        return obj

    def calls_for(self, operation: str) -> List[Dict[str, Any]]:
        return [params for name, _, params in self.calls if name == operation]

    def _record(self, operation: str, *args, **params) -> None:
        self.calls.append((operation, args, params))
        if operation in self.failures:
            raise ProcessorError(self.failures[operation], operation=operation)

    def _retrieve(self, operation: str, object_id: str) -> Dict[str, Any]:
        if object_id not in self.objects:
            raise ProcessorError(f"No such object: '{object_id}'", operation=operation)
        return self.objects[object_id]

    def create_customer(self, **params):
        self._record("customers.create", **params)
        return {"id": "cus_test_123", **params}

    def update_customer(self, customer_id, **params):
        self._record("customers.update", customer_id, **params)
        return {"id": customer_id, **params}

    def create_payment_intent(self, **params):
        self._record("payment_intents.create", **params)
        return {"id": "pi_test_123", "client_secret": "pi_test_123_secret_abc", **params}

    def retrieve_payment_intent(self, intent_id):
        self._record("payment_intents.retrieve", intent_id)
        return self._retrieve("payment_intents.retrieve", intent_id)

    def create_setup_intent(self, **params):
        self._record("setup_intents.create", **params)
        return {"id": "seti_test_123", "client_secret": "seti_test_123_secret_abc", **params}

    def retrieve_setup_intent(self, intent_id):
        self._record("setup_intents.retrieve", intent_id)
        return self._retrieve("setup_intents.retrieve", intent_id)

    def retrieve_checkout_session(self, session_id, expand=None):
        self._record("checkout.sessions.retrieve", session_id, expand=expand)
        return self._retrieve("checkout.sessions.retrieve", session_id)

    def create_payment_link(self, **params):
        self._record("payment_links.create", **params)
        return {"id": "plink_test_123", "url": "https://buy.stripe.com/test_abc", **params}


@pytest.fixture()
def stripe_fake() -> FakeStripeClient:
    return FakeStripeClient()

@pytest.fixture()
def app(stripe_fake):
    return create_app(stripe_client=stripe_fake)

@pytest.fixture()
def client(app) -> Generator[TestClient, None, None]:
    with TestClient(app) as c:
        yield c

@pytest.fixture()
def booking_payload() -> Dict[str, Any]:
    return {
        "guestName": "Ada Lovelace",
        "guestEmail": "ada@example.com",
        "checkInDate": "2025-03-10",
        "checkOutDate": "2025-03-12",
        "roomType": "Deluxe Room",
        "nightlyRate": 100,
        "numberOfNights": 2,
        "addOns": [{"name": "Breakfast", "description": "Continental breakfast", "price": 20, "quantity": 1}],
    }

@pytest.fixture()
def completed_session() -> Dict[str, Any]:
    return {
        "id": "cs_test_1",
        "amount_total": 15000,
        "currency": "eur",
        "customer_details": {"name": "Ada Lovelace", "email": "ada@example.com"},
        "metadata": {
            "booking_id": "TDG-1741600000000-ABC123XYZ",
            "guest_name": "Ada Lovelace",
            "guest_email": "ada@example.com",
            "check_in_date": "2025-03-10",
            "check_out_date": "2025-03-12",
            "integration_type": "payment_link",
        },
        "line_items": {"data": [
            {"description": "Deluxe Room - Night 1", "quantity": 1, "amount_total": 10000},
            {"description": "Breakfast", "quantity": 1, "amount_total": 5000},
        ]},
    }
