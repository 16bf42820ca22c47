"""
Routage des événements Stripe (webhook) par type.
- checkout.session.completed: confirmation de réservation (lien de paiement uniquement).
- payment_intent.succeeded: journalisation.
- autres types: journalisés puis ignorés.
L'endpoint accuse toujours réception: Stripe relivre tant qu'il ne reçoit pas un 2xx.
"""
import json
import logging
from typing import Any, Callable, Dict, Mapping, Optional

from .metadata import read_metadata
from .pricing import from_minor_units

logger = logging.getLogger(__name__)

HANDLED = "handled"
IGNORED = "ignored"
FAILED = "failed"

Handler = Callable[[Mapping[str, Any]], str]

# module booking_payments.payments.webhooks
def parse_event(payload: bytes) -> Optional[Dict[str, Any]]:
    """
    Décode le corps JSON d'un événement Stripe.
    Pas de vérification de signature. Retourne None si le corps n'est pas un objet JSON.
    """
    try:
        event = json.loads(payload.decode("utf-8") or "null")
    except (UnicodeDecodeError, json.JSONDecodeError):
        logger.warning("webhook payload is not valid JSON")
        return None
    return event if isinstance(event, dict) else None

def _event_object(event: Mapping[str, Any]) -> Mapping[str, Any]:
    return (event.get("data") or {}).get("object") or {}

def on_checkout_session_completed(event: Mapping[str, Any]) -> str:
    session = _event_object(event)
    meta = read_metadata(session)
    if meta.get("integration_type") != "payment_link":
        return IGNORED
    # Mise à jour du système de réservation et e-mail de confirmation: hors périmètre
    logger.info("Payment Link booking confirmed: %s", meta.get("booking_id"))
    logger.info(
        "Booking details: booking_id=%s guest_name=%s guest_email=%s check_in=%s check_out=%s total=%s currency=%s",
        meta.get("booking_id"),
        meta.get("guest_name"),
        meta.get("guest_email"),
        meta.get("check_in_date"),
        meta.get("check_out_date"),
        from_minor_units(session.get("amount_total") or 0),
        session.get("currency"),
    )
    return HANDLED

def on_payment_intent_succeeded(event: Mapping[str, Any]) -> str:
    intent = _event_object(event)
    logger.info("Payment succeeded: %s", intent.get("id"))
    return HANDLED


class WebhookDispatcher:
    def __init__(self, handlers: Optional[Dict[str, Handler]] = None):
        self.handlers: Dict[str, Handler] = dict(handlers) if handlers is not None else {
            "checkout.session.completed": on_checkout_session_completed,
            "payment_intent.succeeded": on_payment_intent_succeeded,
        }

    def dispatch(self, event: Optional[Mapping[str, Any]]) -> str:
        """
        Appelle le handler associé au type d'événement.
        Retour: "handled", "ignored" (type inconnu ou non concerné) ou "failed" (exception du handler).
        """
        event_type = (event or {}).get("type")
        # type non chaîne (liste, objet): non hashable, traité comme inconnu
        handler = self.handlers.get(event_type) if isinstance(event_type, str) else None
        if handler is None:
            logger.info("Unhandled event type %s", event_type)
            return IGNORED
        try:
            return handler(event)
        except Exception:
            logger.exception("Erreur webhook handler type=%s", event_type)
            return FAILED
