"""
Sérialisation/lecture des métadonnées Stripe (booking_id, identité client, séjour).
Stripe n'accepte que des valeurs chaîne: tout passe par stringify().
"""
from datetime import date
from typing import Any, Dict, Mapping, Optional

# module booking_payments.payments.metadata
def stringify(value: Any) -> str:
    """
    Convertit une valeur en chaîne acceptée par Stripe.
    - None -> "" ; bool -> "true"/"false" ; date -> ISO (YYYY-MM-DD)
    - float entier -> sans ".0" (100.0 -> "100")
    """
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)

def make_metadata(**fields: Any) -> Dict[str, str]:
    return {key: stringify(value) for key, value in fields.items()}

def customer_metadata(customer_info: Optional[Mapping[str, Any]], flow_type: str) -> Dict[str, str]:
    """
    Métadonnées des intents Payment Element.
    - integration_type=payment_element, flow_type=full|deferred
    - identité client (nom, email, téléphone), chaîne vide si absente
    """
    info = customer_info or {}
    return make_metadata(
        integration_type="payment_element",
        flow_type=flow_type,
        customer_name=info.get("name") or "",
        customer_email=info.get("email") or "",
        customer_phone=info.get("phone") or "",
    )

def booking_metadata(booking_id: str, booking: Any) -> Dict[str, str]:
    """
    Métadonnées d'un lien de paiement: booking_id + champs invité/séjour.
    - booking: BookingRequest (attributs snake_case)
    - total_nights et nightly_rate sont sérialisés en chaîne
    """
    return make_metadata(
        booking_id=booking_id,
        guest_name=booking.guest_name,
        guest_email=booking.guest_email,
        check_in_date=booking.check_in_date,
        check_out_date=booking.check_out_date,
        room_type=booking.room_type,
        total_nights=booking.number_of_nights,
        integration_type="payment_link",
        nightly_rate=booking.nightly_rate,
    )

def read_metadata(obj: Optional[Mapping[str, Any]]) -> Mapping[str, Any]:
    """
    Lit obj["metadata"] (session, intent ou objet d'un event) de manière tolérante.
    Retourne toujours un mapping (vide si absent).
    """
    if not obj:
        return {}
    return obj.get("metadata") or {}
