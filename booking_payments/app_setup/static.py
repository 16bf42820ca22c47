"""
Montage des fichiers statiques.
Expose:
- /assets -> public/assets (CSS, JS, images de l’interface de réservation)
"""
from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles
from booking_payments.config import PUBLIC_DIR

def mount_static_files(app: FastAPI) -> None:
    app.mount("/assets", StaticFiles(directory=str(PUBLIC_DIR / "assets")), name="assets")
