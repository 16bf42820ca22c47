from fastapi import APIRouter, Request
from booking_payments.utils.rate_limit import rate_limit_health_info

router = APIRouter(prefix="/health", tags=["Health"])

@router.get("")
def health_root():
    return {"ok": True}

@router.get("/stripe")
def health_stripe(request: Request):
    # Jamais la clé elle-même: seulement sa présence et le mode
    client = request.app.state.stripe_client
    return {"configured": bool(client.api_key), "mode": client.mode}

@router.get("/rate-limit")
def health_rate_limit(request: Request):
    return rate_limit_health_info(request)
