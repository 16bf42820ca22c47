"""
Module 'payments' (feature-first): point d'entrée public.
Réunit tarification, métadonnées Stripe, client Stripe, orchestrateurs et webhook.
"""

from .errors import ValidationError, ProcessorError
from .pricing import to_minor_units, from_minor_units, build_line_items
from .metadata import stringify, make_metadata, customer_metadata, booking_metadata, read_metadata
from .stripe_client import StripeClient
from .customers import CustomerProvisioner, CustomerReference, CustomerState
from .intents import IntentOrchestrator
from .links import PaymentLinkOrchestrator, generate_booking_id
from .success import CallbackKind, SuccessCallback, SuccessResolver, classify_callback
from .webhooks import WebhookDispatcher, parse_event

__all__ = [
    # erreurs
    "ValidationError",
    "ProcessorError",
    # pricing
    "to_minor_units",
    "from_minor_units",
    "build_line_items",
    # metadata
    "stringify",
    "make_metadata",
    "customer_metadata",
    "booking_metadata",
    "read_metadata",
    # stripe
    "StripeClient",
    # orchestration
    "CustomerProvisioner",
    "CustomerReference",
    "CustomerState",
    "IntentOrchestrator",
    "PaymentLinkOrchestrator",
    "generate_booking_id",
    # retour / webhook
    "CallbackKind",
    "SuccessCallback",
    "SuccessResolver",
    "classify_callback",
    "WebhookDispatcher",
    "parse_event",
]
