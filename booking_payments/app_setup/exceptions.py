"""
Gestionnaires d’exceptions utilisés par la factory.
- ValidationError (métier) -> 400 {"error": ...}
- ProcessorError (Stripe) -> 500 {"error": <message Stripe>}
- HTTPException -> {"error": detail} (ex: 429 du rate limiting)
"""
from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse

from booking_payments.payments.errors import ProcessorError, ValidationError

def register_exception_handlers(app: FastAPI) -> None:
    """
    Convertit les erreurs à la frontière de chaque opération en réponse JSON.
    Le format {"error": ...} est celui attendu par le client navigateur.
    """
    @app.exception_handler(ValidationError)
    async def on_validation_error(request: Request, exc: ValidationError):
        return JSONResponse(status_code=400, content={"error": str(exc)})

    @app.exception_handler(ProcessorError)
    async def on_processor_error(request: Request, exc: ProcessorError):
        return JSONResponse(status_code=500, content={"error": str(exc)})

    @app.exception_handler(HTTPException)
    async def on_http_exception(request: Request, exc: HTTPException):
        return JSONResponse(status_code=exc.status_code, content={"error": exc.detail}, headers=getattr(exc, "headers", None))
