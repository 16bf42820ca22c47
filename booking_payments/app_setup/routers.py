"""
Registre central des routers.
- Payments: intents, clients, liens de paiement, retour /success, webhook
- Health: état du service, configuration Stripe, rate limiting
"""
from fastapi import FastAPI
from booking_payments.payments import views as payments_views
from booking_payments.health.router import router as health_router

def register_routers(app: FastAPI) -> None:
    app.include_router(payments_views.router)
    app.include_router(health_router)
