# module booking_payments.app
import logging

from booking_payments.app_setup.factory import create_app
from booking_payments.config import STRIPE_SECRET_KEY

logger = logging.getLogger("uvicorn.error")

# App globale
app = create_app()

if not STRIPE_SECRET_KEY:
    logger.warning("STRIPE_SECRET_KEY is not set: Stripe calls will fail")
