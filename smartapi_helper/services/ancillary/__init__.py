"""
Field value objects.

Each object validates its input on construction (raising InvalidFieldError or
MissingFieldError) and renders itself as an XML fragment with to_xml().
"""

from .address import Address, VALID_COUNTRIES, VALID_STATES
from .credit_card import CreditCard, luhn_valid
from .person_name import PersonName, VALID_SUFFIXES
from .phone_number import PhoneNumber
from .response_formats import ResponseFormats, DEFINED_TYPES

__all__ = [
    "Address",
    "VALID_COUNTRIES",
    "VALID_STATES",
    "CreditCard",
    "luhn_valid",
    "PersonName",
    "VALID_SUFFIXES",
    "PhoneNumber",
    "ResponseFormats",
    "DEFINED_TYPES",
]
