"""
Logique de tarification pure (pas de Stripe, pas de réseau).
Construit les line_items d'un séjour: une ligne par nuit puis une ligne par option.
"""
from datetime import date, timedelta
from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Dict, List, Sequence

from booking_payments.config import ROOM_IMAGE_URL, ADDON_IMAGE_URL
from .errors import ValidationError

# module booking_payments.payments.pricing
def to_minor_units(amount: float) -> int:
    """
    Montant en unités mineures (centimes), arrondi au plus proche (demi vers le haut).
    Passe par Decimal(str(...)) pour éviter 0.125 * 100 -> 12.499999.
    """
    cents = Decimal(str(amount)) * 100
    return int(cents.quantize(Decimal("1"), rounding=ROUND_HALF_UP))

def from_minor_units(amount: int) -> float:
    return (amount or 0) / 100

def _price_data(currency: str, name: str, description: str | None, image: str, unit_amount: int) -> Dict[str, Any]:
    product: Dict[str, Any] = {"name": name, "images": [image]}
    if description:
        product["description"] = description
    return {
        "currency": currency,
        "product_data": product,
        "unit_amount": unit_amount,
    }

def build_line_items(
    *,
    check_in: date,
    room_type: str,
    nightly_rate: float,
    nights: int,
    add_ons: Sequence[Any] = (),
    currency: str = "eur",
) -> List[Dict[str, Any]]:
    """
    Construit les line_items Stripe d'une réservation.
    - Nuits d'abord, datées séquentiellement depuis check_in ("<room> - Night <n>").
    - Puis une ligne par option (add-on), dans l'ordre reçu.
    - unit_amount en centimes; quantity = add_on.quantity ou 1.
    - Soulève ValidationError si check_in n'est pas une date ou nights <= 0.
    """
    if not isinstance(check_in, date):
        raise ValidationError("Invalid check-in date", code="invalid_date")
    if nights <= 0:
        raise ValidationError("Number of nights must be positive", code="invalid_nights")

    nightly_amount = to_minor_units(nightly_rate)
    line_items: List[Dict[str, Any]] = []
    for night in range(nights):
        night_date = check_in + timedelta(days=night)
        line_items.append({
            "price_data": _price_data(
                currency,
                f"{room_type} - Night {night + 1}",
                f"{night_date:%d/%m/%Y} - Premium accommodation",
                ROOM_IMAGE_URL,
                nightly_amount,
            ),
            "quantity": 1,
        })

    for addon in add_ons or []:
        line_items.append({
            "price_data": _price_data(
                currency,
                addon.name,
                addon.description,
                addon.image_url or ADDON_IMAGE_URL,
                to_minor_units(addon.price),
            ),
            "quantity": addon.quantity or 1,
        })
    return line_items
