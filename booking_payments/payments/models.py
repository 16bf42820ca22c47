"""
Modèles d'entrée des endpoints payments (pydantic).
Le client navigateur envoie du camelCase pour la réservation (guestName, ...)
et du snake_case pour les infos client (customer_info, billing_details):
les alias reproduisent ce format, les attributs Python restent en snake_case.
"""
from datetime import date
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from booking_payments.config import DEFAULT_CURRENCY


class Address(BaseModel):
    line1: Optional[str] = None
    line2: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    postal_code: Optional[str] = None
    country: Optional[str] = None


class CustomerInfo(BaseModel):
    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[Address] = None


class BillingDetails(CustomerInfo):
    pass


class PaymentIntentRequest(BaseModel):
    amount: float = Field(gt=0, allow_inf_nan=False)
    currency: str = DEFAULT_CURRENCY
    customer_info: Optional[CustomerInfo] = None


class SetupIntentRequest(BaseModel):
    currency: str = DEFAULT_CURRENCY
    customer_info: Optional[CustomerInfo] = None


class UpdateCustomerRequest(BaseModel):
    # customer_id optionnel ici: l'absence est une ValidationError métier (400), pas un 422
    customer_id: Optional[str] = None
    billing_details: Optional[BillingDetails] = None


class AddOn(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str
    description: Optional[str] = None
    price: float = Field(ge=0, allow_inf_nan=False)
    quantity: int = Field(default=1, ge=1)
    image_url: Optional[str] = Field(default=None, alias="imageUrl")


class BookingRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    guest_name: str = Field(alias="guestName")
    guest_email: str = Field(alias="guestEmail")
    check_in_date: date = Field(alias="checkInDate")
    check_out_date: date = Field(alias="checkOutDate")
    room_type: str = Field(alias="roomType")
    nightly_rate: float = Field(alias="nightlyRate", ge=0, allow_inf_nan=False)
    number_of_nights: int = Field(alias="numberOfNights", gt=0)
    add_ons: List[AddOn] = Field(default_factory=list, alias="addOns")
    currency: str = DEFAULT_CURRENCY
