"""
Adaptateur Stripe: centralise les appels au SDK.
Le client est sans état (la clé est passée à chaque appel via api_key), il est
construit une fois par la factory et injecté dans les composants.
"""
import logging
from typing import Any, Dict, List, Optional

import stripe

from .errors import ProcessorError

logger = logging.getLogger(__name__)

# module booking_payments.payments.stripe_client
class StripeClient:
    """
    Enveloppe fine des ressources Stripe utilisées par le service.
    - Toute erreur SDK (stripe.StripeError) devient ProcessorError(message).
    - Retourne les objets Stripe tels quels (compatibles dict: .get, ["..."]).
    """

    def __init__(self, api_key: str):
        self.api_key = api_key

    def _call(self, operation: str, fn, *args, **params) -> Any:
        try:
            return fn(*args, api_key=self.api_key, **params)
        except stripe.StripeError as e:
            message = getattr(e, "user_message", None) or str(e)
            logger.warning("stripe.%s failed: %s", operation, message)
            raise ProcessorError(message, operation=operation) from e

    # Customers
    def create_customer(self, **params: Any) -> Any:
        return self._call("customers.create", stripe.Customer.create, **params)

    def update_customer(self, customer_id: str, **params: Any) -> Any:
        return self._call("customers.update", stripe.Customer.modify, customer_id, **params)

    # Payment intents / setup intents
    def create_payment_intent(self, **params: Any) -> Any:
        return self._call("payment_intents.create", stripe.PaymentIntent.create, **params)

    def retrieve_payment_intent(self, intent_id: str) -> Any:
        return self._call("payment_intents.retrieve", stripe.PaymentIntent.retrieve, intent_id)

    def create_setup_intent(self, **params: Any) -> Any:
        return self._call("setup_intents.create", stripe.SetupIntent.create, **params)

    def retrieve_setup_intent(self, intent_id: str) -> Any:
        return self._call("setup_intents.retrieve", stripe.SetupIntent.retrieve, intent_id)

    # Checkout / payment links
    def retrieve_checkout_session(self, session_id: str, expand: Optional[List[str]] = None) -> Any:
        params: Dict[str, Any] = {}
        if expand:
            params["expand"] = expand
        return self._call("checkout.sessions.retrieve", stripe.checkout.Session.retrieve, session_id, **params)

    def create_payment_link(self, **params: Any) -> Any:
        return self._call("payment_links.create", stripe.PaymentLink.create, **params)

    @property
    def mode(self) -> Optional[str]:
        """'test' ou 'live' selon le préfixe de la clé, None si non configurée."""
        if not self.api_key:
            return None
        return "live" if self.api_key.startswith(("sk_live_", "rk_live_")) else "test"
