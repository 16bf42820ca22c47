"""
Routes simples (hors routers) pour l’interface de réservation.
- / et /checkout servent public/index.html (liens de paiement et Payment Element).
- /favicon.ico: pas de contenu (204) pour éviter des 404 dans les logs.
"""
from fastapi import FastAPI
from fastapi.responses import FileResponse, Response
from starlette.status import HTTP_204_NO_CONTENT
from booking_payments.config import PUBLIC_DIR

def register_routes(app: FastAPI) -> None:
    index_path = PUBLIC_DIR / "index.html"

    @app.get("/", include_in_schema=False)
    def index():
        return FileResponse(str(index_path))

    @app.get("/checkout", include_in_schema=False)
    def checkout():
        return FileResponse(str(index_path))

    @app.get("/favicon.ico", include_in_schema=False)
    async def favicon():
        return Response(status_code=HTTP_204_NO_CONTENT)
