"""Endpoints de paiement des réservations (Payment Element, liens de paiement, retour, webhook).
- /create-payment-intent, /create-setup-intent: intents + client provisionné (rate-limité).
- /update-customer: complète le client Stripe après saisie du formulaire.
- /create-payment-link: lien hébergé à usage unique (rate-limité).
- /success: page de confirmation alimentée par l'état relu chez Stripe.
- /stripe-webhook: accuse toujours réception.
Les composants sont construits à partir du StripeClient injecté (app.state.stripe_client).
"""
import logging
from typing import Any, Dict

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse, JSONResponse, RedirectResponse
from starlette.status import HTTP_303_SEE_OTHER

from booking_payments.config import BASE_URL, DEFAULT_CURRENCY, STRIPE_PUBLIC_KEY
from booking_payments.utils.rate_limit import optional_rate_limit
from booking_payments.utils.templates import templates
from .customers import CustomerProvisioner
from .errors import ProcessorError
from .intents import IntentOrchestrator
from .links import PaymentLinkOrchestrator
from .models import BookingRequest, PaymentIntentRequest, SetupIntentRequest, UpdateCustomerRequest
from .stripe_client import StripeClient
from .success import CallbackKind, FAILURE_MESSAGES, SuccessResolver, classify_callback
from .webhooks import FAILED, WebhookDispatcher, parse_event

logger = logging.getLogger(__name__)
router = APIRouter(tags=["Payments"])

# module booking_payments.payments.views
def get_stripe_client(request: Request) -> StripeClient:
    return request.app.state.stripe_client

def get_customer_provisioner(client: StripeClient = Depends(get_stripe_client)) -> CustomerProvisioner:
    return CustomerProvisioner(client)

def get_intent_orchestrator(
    client: StripeClient = Depends(get_stripe_client),
    provisioner: CustomerProvisioner = Depends(get_customer_provisioner),
) -> IntentOrchestrator:
    return IntentOrchestrator(client, provisioner)

def get_link_orchestrator(client: StripeClient = Depends(get_stripe_client)) -> PaymentLinkOrchestrator:
    return PaymentLinkOrchestrator(client)

def get_success_resolver(client: StripeClient = Depends(get_stripe_client)) -> SuccessResolver:
    return SuccessResolver(client)

def get_webhook_dispatcher(request: Request) -> WebhookDispatcher:
    return request.app.state.webhook_dispatcher


@router.get("/config")
def client_config() -> Dict[str, Any]:
    """Clé publique Stripe et devise par défaut pour Stripe.js (aucun secret)."""
    return {"publishableKey": STRIPE_PUBLIC_KEY, "currency": DEFAULT_CURRENCY}


@router.post("/create-payment-intent", dependencies=[Depends(optional_rate_limit(times=10, seconds=60))])
def create_payment_intent(body: PaymentIntentRequest, orchestrator: IntentOrchestrator = Depends(get_intent_orchestrator)):
    """
    Crée un PaymentIntent (paiement complet).
    - Entrée JSON: {amount, currency?, customer_info?}
    - Retour: {clientSecret, paymentIntentId, customerId}
    - Erreurs: 500 {"error": ...} si Stripe refuse la création
    """
    customer_info = body.customer_info.model_dump(exclude_none=True) if body.customer_info else None
    logger.info("payments.create_payment_intent amount=%s currency=%s", body.amount, body.currency)
    return orchestrator.create_payment_intent(body.amount, body.currency, customer_info)


@router.post("/create-setup-intent", dependencies=[Depends(optional_rate_limit(times=10, seconds=60))])
def create_setup_intent(body: SetupIntentRequest, orchestrator: IntentOrchestrator = Depends(get_intent_orchestrator)):
    """
    Crée un SetupIntent (paiement différé, sans débit).
    - Entrée JSON: {customer_info?, currency?}
    - Retour: {clientSecret, setupIntentId, customerId}
    """
    customer_info = body.customer_info.model_dump(exclude_none=True) if body.customer_info else None
    logger.info("payments.create_setup_intent currency=%s", body.currency)
    return orchestrator.create_setup_intent(customer_info, body.currency)


@router.post("/update-customer")
def update_customer(body: UpdateCustomerRequest, provisioner: CustomerProvisioner = Depends(get_customer_provisioner)):
    """
    Complète le client Stripe avec les coordonnées de facturation.
    - 400 {"error": "Customer ID is required"} si customer_id absent (aucun appel Stripe)
    - Retour: {success, customer_id, updated_fields}
    """
    billing = body.billing_details.model_dump(exclude_none=True) if body.billing_details else None
    reference = provisioner.enrich(body.customer_id, billing)
    return {
        "success": True,
        "customer_id": reference.id,
        "updated_fields": reference.updated_fields,
    }


@router.post("/create-payment-link", dependencies=[Depends(optional_rate_limit(times=10, seconds=60))])
def create_payment_link(request: Request, body: BookingRequest, orchestrator: PaymentLinkOrchestrator = Depends(get_link_orchestrator)):
    """
    Crée un lien de paiement Stripe pour une réservation.
    - Origine de redirection: en-tête Origin, sinon BASE_URL
    - Retour: {success, paymentLink, bookingId}
    - Erreurs: 500 {"success": false, "error": ...}
    """
    logger.info(
        "payments.create_payment_link guest=%s room=%s nights=%s check_in=%s check_out=%s",
        body.guest_email, body.room_type, body.number_of_nights, body.check_in_date, body.check_out_date,
    )
    origin = request.headers.get("origin") or BASE_URL
    try:
        return orchestrator.create_payment_link(body, origin)
    except ProcessorError as e:
        logger.error("Erreur create_payment_link: %s", e)
        return JSONResponse(status_code=500, content={"success": False, "error": str(e)})


@router.get("/success", response_class=HTMLResponse)
def success_page(request: Request, resolver: SuccessResolver = Depends(get_success_resolver)):
    """
    Page de confirmation commune aux trois flux.
    - session_id > payment_intent > setup_intent; aucun paramètre -> redirection /
    - Échec Stripe: 500 avec message générique (le détail reste dans les logs)
    """
    callback = classify_callback(request.query_params)
    if callback.kind is CallbackKind.NONE:
        return RedirectResponse(url="/", status_code=HTTP_303_SEE_OTHER)
    try:
        session_data = resolver.resolve(callback)
    except ProcessorError:
        logger.exception("Erreur success_page kind=%s reference=%s", callback.kind.value, callback.reference)
        return HTMLResponse(FAILURE_MESSAGES[callback.kind], status_code=500)
    resp = templates.TemplateResponse(request, "success.html", {"session_data": session_data})
    resp.headers["Cache-Control"] = "no-store, no-cache, must-revalidate, max-age=0"
    return resp


@router.post("/stripe-webhook", include_in_schema=False)
async def stripe_webhook(request: Request, dispatcher: WebhookDispatcher = Depends(get_webhook_dispatcher)):
    """
    Webhook Stripe: route l'événement par type puis accuse réception.
    - Toujours 200 {"received": true}, y compris pour un type non géré ou un corps invalide.
    """
    event = parse_event(await request.body())
    try:
        outcome = dispatcher.dispatch(event)
    except Exception:
        logger.exception("Erreur stripe_webhook (accusé de réception maintenu)")
        outcome = FAILED
    logger.info("payments.webhook type=%s outcome=%s", (event or {}).get("type"), outcome)
    return {"received": True}
