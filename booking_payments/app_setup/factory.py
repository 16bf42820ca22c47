"""
Factory d’application utilisée par les entrypoints (booking_payments.app et __main__).
Ordonne les étapes d’initialisation de manière lisible et testable.
"""
from typing import Optional

from fastapi import FastAPI

from booking_payments.config import STRIPE_SECRET_KEY
from booking_payments.payments.stripe_client import StripeClient
from booking_payments.payments.webhooks import WebhookDispatcher
from .lifespan import lifespan
from .middlewares import register_basic_middlewares, register_security_middleware, register_force_https_middleware
from .static import mount_static_files
from .exceptions import register_exception_handlers
from .routes import register_routes
from .routers import register_routers

def create_app(
    stripe_client: Optional[StripeClient] = None,
    webhook_dispatcher: Optional[WebhookDispatcher] = None,
) -> FastAPI:
    """
    Construit l’app FastAPI avec le lifespan et enregistre:
      - le client Stripe et le dispatcher webhook (app.state), injectables pour les tests
      - middlewares de base, statiques, sécurité
      - gestionnaires d’exceptions, routes simples et routers
      - la redirection HTTPS en dernier (s’exécute en premier)
    """
    app = FastAPI(title="Booking Payments API", lifespan=lifespan)
    app.state.stripe_client = stripe_client or StripeClient(STRIPE_SECRET_KEY)
    app.state.webhook_dispatcher = webhook_dispatcher or WebhookDispatcher()
    register_basic_middlewares(app)
    mount_static_files(app)
    register_security_middleware(app)
    register_exception_handlers(app)
    register_routes(app)
    register_routers(app)
    register_force_https_middleware(app)
    return app
