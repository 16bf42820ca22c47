"""
Liens de paiement Stripe (page hébergée) pour une réservation d'hôtel.
Le booking_id est généré ici et transporté uniquement dans les métadonnées Stripe.
"""
import logging
import secrets
import string
import time
from typing import Any, Dict, List, Optional

from booking_payments.config import BOOKING_ID_PREFIX, SHIPPING_ALLOWED_COUNTRIES
from .metadata import booking_metadata
from .models import BookingRequest
from .pricing import build_line_items
from .stripe_client import StripeClient

logger = logging.getLogger(__name__)

SUFFIX_ALPHABET = string.ascii_uppercase + string.digits
SUFFIX_LENGTH = 9

# module booking_payments.payments.links
def generate_booking_id(prefix: str = BOOKING_ID_PREFIX) -> str:
    """
    Format: <prefix>-<timestamp ms>-<9 caractères A-Z0-9>.
    Aucune vérification d'unicité: le suffixe aléatoire réduit seulement le risque de collision.
    """
    suffix = "".join(secrets.choice(SUFFIX_ALPHABET) for _ in range(SUFFIX_LENGTH))
    return f"{prefix}-{int(time.time() * 1000)}-{suffix}"

def success_redirect_url(origin: str) -> str:
    # {CHECKOUT_SESSION_ID} est remplacé par Stripe au moment du checkout
    return f"{origin.rstrip('/')}/success?session_id={{CHECKOUT_SESSION_ID}}"


class PaymentLinkOrchestrator:
    def __init__(self, client: StripeClient, allowed_countries: Optional[List[str]] = None):
        self.client = client
        self.allowed_countries = list(allowed_countries or SHIPPING_ALLOWED_COUNTRIES)

    def create_payment_link(self, booking: BookingRequest, origin: str) -> Dict[str, Any]:
        """
        Crée un lien de paiement à usage unique pour la réservation.
        - line_items: nuits puis options (pricing.build_line_items)
        - customer_creation=always et setup_future_usage=off_session (moyen de paiement conservé)
        - restrictions.completed_sessions.limit=1, adresse de facturation obligatoire
        - redirection vers /success?session_id=... après paiement
        Retour: {success, paymentLink, bookingId}
        """
        line_items = build_line_items(
            check_in=booking.check_in_date,
            room_type=booking.room_type,
            nightly_rate=booking.nightly_rate,
            nights=booking.number_of_nights,
            add_ons=booking.add_ons,
            currency=booking.currency,
        )
        booking_id = generate_booking_id()

        link = self.client.create_payment_link(
            line_items=line_items,
            customer_creation="always",
            payment_intent_data={"setup_future_usage": "off_session"},
            restrictions={"completed_sessions": {"limit": 1}},
            billing_address_collection="required",
            shipping_address_collection={"allowed_countries": self.allowed_countries},
            after_completion={
                "type": "redirect",
                "redirect": {"url": success_redirect_url(origin)},
            },
            metadata=booking_metadata(booking_id, booking),
        )
        logger.info("links.create payment_link_id=%s booking_id=%s url=%s", link["id"], booking_id, link["url"])
        return {
            "success": True,
            "paymentLink": link["url"],
            "bookingId": booking_id,
        }
