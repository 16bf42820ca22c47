"""
Résolution du retour /success.
Le paramètre de requête indique quel objet Stripe vient d'aboutir; l'état est
relu chez Stripe puis projeté en un dict consommé par la page de confirmation.
Priorité: session_id > payment_intent > setup_intent > aucun (redirection /).
"""
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional

from .metadata import read_metadata
from .pricing import from_minor_units
from .stripe_client import StripeClient

logger = logging.getLogger(__name__)


class CallbackKind(str, Enum):
    SESSION = "session"
    PAYMENT_INTENT = "payment_intent"
    SETUP_INTENT = "setup_intent"
    NONE = "none"


# Ordre = priorité: le premier paramètre renseigné l'emporte
CALLBACK_PARAMS = (
    ("session_id", CallbackKind.SESSION),
    ("payment_intent", CallbackKind.PAYMENT_INTENT),
    ("setup_intent", CallbackKind.SETUP_INTENT),
)

FAILURE_MESSAGES = {
    CallbackKind.SESSION: "Error retrieving booking information",
    CallbackKind.PAYMENT_INTENT: "Error retrieving payment information",
    CallbackKind.SETUP_INTENT: "Error retrieving payment information",
}


@dataclass(frozen=True)
class SuccessCallback:
    kind: CallbackKind
    reference: Optional[str] = None


def classify_callback(query: Mapping[str, Any]) -> SuccessCallback:
    for param, kind in CALLBACK_PARAMS:
        value = (query.get(param) or "").strip()
        if value:
            return SuccessCallback(kind, value)
    return SuccessCallback(CallbackKind.NONE)


def _line_items(session: Mapping[str, Any]) -> List[Dict[str, Any]]:
    items = (session.get("line_items") or {}).get("data") or []
    return [
        {
            "description": item.get("description") or "",
            "quantity": item.get("quantity") or 0,
            "amount": from_minor_units(item.get("amount_total") or 0),
        }
        for item in items
    ]


def project_session(session: Mapping[str, Any]) -> Dict[str, Any]:
    meta = read_metadata(session)
    details = session.get("customer_details") or {}
    return {
        "type": "payment_link",
        "bookingId": meta.get("booking_id") or "",
        "amount": from_minor_units(session.get("amount_total") or 0),
        "currency": (session.get("currency") or "").upper(),
        "customerName": details.get("name") or meta.get("guest_name") or "",
        "customerEmail": details.get("email") or meta.get("guest_email") or "",
        "checkIn": meta.get("check_in_date") or "",
        "checkOut": meta.get("check_out_date") or "",
        "lineItems": _line_items(session),
    }


def project_payment_intent(intent: Mapping[str, Any]) -> Dict[str, Any]:
    meta = read_metadata(intent)
    return {
        "type": "payment_element_full",
        "intentId": intent["id"],
        "amount": from_minor_units(intent.get("amount") or 0),
        "currency": (intent.get("currency") or "").upper(),
        "customerName": meta.get("customer_name") or "",
        "customerEmail": meta.get("customer_email") or "",
        "flow": meta.get("flow_type") or "payment",
    }


def project_setup_intent(intent: Mapping[str, Any]) -> Dict[str, Any]:
    meta = read_metadata(intent)
    return {
        "type": "payment_element_deferred",
        "intentId": intent["id"],
        "paymentMethodSaved": True,
        "customerName": meta.get("customer_name") or "",
        "customerEmail": meta.get("customer_email") or "",
        "flow": meta.get("flow_type") or "setup",
    }


class SuccessResolver:
    def __init__(self, client: StripeClient):
        self.client = client

    def resolve(self, callback: SuccessCallback) -> Dict[str, Any]:
        """
        Relit l'objet Stripe correspondant et renvoie sa projection.
        - ProcessorError si Stripe échoue (objet introuvable, clé invalide, ...).
        - ValueError si callback.kind == NONE (l'appelant doit rediriger avant).
        """
        if callback.kind is CallbackKind.SESSION:
            session = self.client.retrieve_checkout_session(callback.reference, expand=["line_items"])
            logger.info(
                "success.payment_link session_id=%s booking_id=%s",
                session.get("id"), read_metadata(session).get("booking_id"),
            )
            return project_session(session)
        if callback.kind is CallbackKind.PAYMENT_INTENT:
            intent = self.client.retrieve_payment_intent(callback.reference)
            logger.info("success.payment_intent id=%s amount=%s currency=%s", intent.get("id"), intent.get("amount"), intent.get("currency"))
            return project_payment_intent(intent)
        if callback.kind is CallbackKind.SETUP_INTENT:
            intent = self.client.retrieve_setup_intent(callback.reference)
            logger.info("success.setup_intent id=%s payment_method=%s", intent.get("id"), intent.get("payment_method"))
            return project_setup_intent(intent)
        raise ValueError("No Stripe reference in success callback")
