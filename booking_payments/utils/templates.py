from fastapi.templating import Jinja2Templates
from booking_payments.config import TEMPLATES_DIR

# Autoescape actif (.html): les données injectées passent par le filtre tojson
templates = Jinja2Templates(directory=str(TEMPLATES_DIR))
