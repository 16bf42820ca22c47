"""
Lancement local: python -m booking_payments
En déploiement, le process manager importe directement booking_payments.app:app.
Variables lues: HOST, PORT (8000 par défaut), UVICORN_RELOAD, LOG_LEVEL.
"""
import os

import uvicorn


def main() -> None:
    uvicorn.run(
        "booking_payments.app:app",
        host=os.getenv("HOST", "127.0.0.1"),
        port=int(os.getenv("PORT", "8000")),
        reload=os.getenv("UVICORN_RELOAD", "").lower() in ("1", "true", "yes"),
        log_level=os.getenv("LOG_LEVEL", "info"),
    )


if __name__ == "__main__":
    main()
