# booking_payments.config
from pathlib import Path
import os
from dotenv import load_dotenv

# Calculer le chemin du projet puis charger .env de manière explicite
BASE_DIR = Path(__file__).resolve().parent.parent
ENV_PATH = BASE_DIR / ".env"
load_dotenv(dotenv_path=ENV_PATH, override=True)

PUBLIC_DIR = BASE_DIR / "public"
TEMPLATES_DIR = BASE_DIR / "templates"

"""
Configuration centrale du service de paiement des réservations.

- Charge le fichier .env à la racine du projet (BASE_DIR/.env)
- Expose les chemins utiles (PUBLIC_DIR, TEMPLATES_DIR)
- Normalise et expose les clés Stripe, CORS/hosts, et les constantes métier
  (devise par défaut, préfixe des réservations, pays de livraison autorisés)
"""

def _clean_env(v: str) -> str:
    """
    Nettoie une valeur d'environnement:
    - supprime les espaces et guillemets (simples, doubles) et backticks
    - retourne toujours une chaîne (jamais None)
    """
    return (v or "").strip().strip("'").strip('"').strip("`")

def _csv_env(name: str, default: str) -> list[str]:
    return [v.strip() for v in _clean_env(os.getenv(name, default)).split(",") if v.strip()]

# Stripe: clés publiques/privées
STRIPE_PUBLIC_KEY = _clean_env(os.getenv("STRIPE_PUBLIC_KEY") or "")
STRIPE_SECRET_KEY = _clean_env(os.getenv("STRIPE_SECRET_KEY") or "")

# En-têtes de sécurité: HSTS uniquement derrière HTTPS
HTTPS_ONLY = (os.getenv("HTTPS_ONLY", "false").lower() == "true")

# CORS (dev)
CORS_ORIGINS = _csv_env("CORS_ORIGINS", "*")
ALLOWED_HOSTS = _csv_env("ALLOWED_HOSTS", "localhost,127.0.0.1")

# Origine utilisée pour la redirection après paiement si l'en-tête Origin est absent
BASE_URL = _clean_env(os.getenv("BASE_URL") or "http://localhost:8000").rstrip("/")

# Réservations
DEFAULT_CURRENCY = _clean_env(os.getenv("DEFAULT_CURRENCY") or "eur").lower()
BOOKING_ID_PREFIX = _clean_env(os.getenv("BOOKING_ID_PREFIX") or "TDG")
SHIPPING_ALLOWED_COUNTRIES = [c.upper() for c in _csv_env("SHIPPING_ALLOWED_COUNTRIES", "GB,IE,US,DE,FR,ES,IT,NL")]

# Images affichées sur la page hébergée Stripe
ROOM_IMAGE_URL = _clean_env(
    os.getenv("ROOM_IMAGE_URL")
    or "https://images.unsplash.com/photo-1611892440504-42a792e24d32?w=500&h=300&fit=crop"
)
ADDON_IMAGE_URL = _clean_env(
    os.getenv("ADDON_IMAGE_URL")
    or "https://images.unsplash.com/photo-1571896349842-33c89424de2d?w=500&h=300&fit=crop"
)
