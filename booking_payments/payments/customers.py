"""
Provisionnement des clients Stripe en deux temps.
1) provision(): crée un client vide avant que les coordonnées soient connues
   (l'intent doit exister pour obtenir un client_secret).
2) enrich(): complète le client une fois le formulaire de paiement soumis.
"""
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional

from .errors import ProcessorError, ValidationError
from .stripe_client import StripeClient

logger = logging.getLogger(__name__)

ADDRESS_FIELDS = ("line1", "line2", "city", "state", "postal_code", "country")


class CustomerState(str, Enum):
    PROVISIONAL = "provisional"
    ENRICHED = "enriched"


@dataclass(frozen=True)
class CustomerReference:
    id: str
    state: CustomerState = CustomerState.PROVISIONAL
    updated_fields: List[str] = field(default_factory=list)

    @classmethod
    def provisional(cls, customer_id: Optional[str]) -> "CustomerReference":
        if not customer_id:
            raise ValidationError("Customer ID is required", code="customer_id_required")
        return cls(id=customer_id)

    def enriched(self, updated_fields: List[str]) -> "CustomerReference":
        return CustomerReference(id=self.id, state=CustomerState.ENRICHED, updated_fields=list(updated_fields))


def billing_update(billing_details: Optional[Mapping[str, Any]]) -> Dict[str, Any]:
    """
    Ne retient que les champs présents (name, email, phone, address).
    - address: seules les sous-clés renseignées sont transmises.
    - L'ordre des clés donne l'ordre de updated_fields.
    """
    details = billing_details or {}
    update: Dict[str, Any] = {}
    for key in ("name", "email", "phone"):
        if details.get(key):
            update[key] = details[key]
    address = details.get("address")
    address = {k: address[k] for k in ADDRESS_FIELDS if address.get(k)} if address else {}
    if address:
        update["address"] = address
    return update


class CustomerProvisioner:
    def __init__(self, client: StripeClient):
        self.client = client

    def provision(self, metadata: Optional[Dict[str, str]] = None) -> Optional[CustomerReference]:
        """
        Crée un client Stripe vide.
        Échec non bloquant: journalisé, retourne None et le flux continue sans client.
        """
        try:
            customer = self.client.create_customer(**({"metadata": metadata} if metadata else {}))
        except ProcessorError:
            logger.exception("Erreur création client Stripe (flux poursuivi sans client)")
            return None
        logger.info("customers.provision customer_id=%s", customer["id"])
        return CustomerReference.provisional(customer["id"])

    def enrich(self, customer_id: Optional[str], billing_details: Optional[Mapping[str, Any]]) -> CustomerReference:
        """
        Met à jour le client avec les coordonnées de facturation.
        - ValidationError si customer_id absent (aucun appel Stripe).
        - ProcessorError si Stripe refuse la mise à jour.
        """
        reference = CustomerReference.provisional(customer_id)
        update = billing_update(billing_details)
        customer = self.client.update_customer(reference.id, **update)
        logger.info("customers.enrich customer_id=%s fields=%s", customer["id"], list(update))
        return CustomerReference(id=customer["id"]).enriched(list(update))
