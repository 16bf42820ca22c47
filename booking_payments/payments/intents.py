"""
Orchestration des intents Payment Element.
- create_payment_intent: débit immédiat (flow_type=full), moyen de paiement conservé off_session.
- create_setup_intent: autorisation sans débit (flow_type=deferred), usage off_session.
Le client Stripe est provisionné au préalable; son échec n'interrompt pas le flux.
"""
import logging
from typing import Any, Dict, Mapping, Optional

from .customers import ADDRESS_FIELDS, CustomerProvisioner
from .metadata import customer_metadata
from .pricing import to_minor_units
from .stripe_client import StripeClient

logger = logging.getLogger(__name__)

# module booking_payments.payments.intents
def _shipping(customer_info: Mapping[str, Any]) -> Optional[Dict[str, Any]]:
    address = customer_info.get("address")
    if not address:
        return None
    return {
        "name": customer_info.get("name") or "Customer",
        "address": {k: address[k] for k in ADDRESS_FIELDS if address.get(k)},
    }


class IntentOrchestrator:
    def __init__(self, client: StripeClient, provisioner: Optional[CustomerProvisioner] = None):
        self.client = client
        self.provisioner = provisioner or CustomerProvisioner(client)

    def _customer_id(self, flow_type: str) -> Optional[str]:
        reference = self.provisioner.provision(metadata={"flow_type": flow_type})
        return reference.id if reference else None

    def create_payment_intent(
        self,
        amount: float,
        currency: str,
        customer_info: Optional[Mapping[str, Any]] = None,
    ) -> Dict[str, Any]:
        """
        Crée un PaymentIntent pour un paiement complet.
        Retour: {clientSecret, paymentIntentId, customerId}
        """
        customer_id = self._customer_id("full")
        params: Dict[str, Any] = {
            "amount": to_minor_units(amount),
            "currency": currency,
            "setup_future_usage": "off_session",
            "automatic_payment_methods": {"enabled": True},
            "metadata": customer_metadata(customer_info, "full"),
        }
        if customer_id:
            params["customer"] = customer_id
        if customer_info:
            shipping = _shipping(customer_info)
            if shipping:
                params["shipping"] = shipping
            if customer_info.get("email"):
                params["receipt_email"] = customer_info["email"]

        intent = self.client.create_payment_intent(**params)
        logger.info("intents.payment created id=%s customer_id=%s amount=%s", intent["id"], customer_id, params["amount"])
        return {
            "clientSecret": intent["client_secret"],
            "paymentIntentId": intent["id"],
            "customerId": customer_id,
        }

    def create_setup_intent(
        self,
        customer_info: Optional[Mapping[str, Any]] = None,
        currency: Optional[str] = None,
    ) -> Dict[str, Any]:
        """
        Crée un SetupIntent pour un paiement différé (aucun montant).
        currency n'est pas transmise à Stripe: un SetupIntent n'a pas de devise.
        Retour: {clientSecret, setupIntentId, customerId}
        """
        customer_id = self._customer_id("deferred")
        params: Dict[str, Any] = {
            "automatic_payment_methods": {"enabled": True},
            "usage": "off_session",
            "metadata": customer_metadata(customer_info, "deferred"),
        }
        if customer_id:
            params["customer"] = customer_id

        intent = self.client.create_setup_intent(**params)
        logger.info("intents.setup created id=%s customer_id=%s currency=%s", intent["id"], customer_id, currency)
        return {
            "clientSecret": intent["client_secret"],
            "setupIntentId": intent["id"],
            "customerId": customer_id,
        }
