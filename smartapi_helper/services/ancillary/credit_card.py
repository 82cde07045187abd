"""
Payment card value object used for the SERVICE_PAYMENT block.
"""
from __future__ import annotations
import re
from dataclasses import dataclass
from typing import Optional, Union

from lxml import etree

from ...exceptions import InvalidFieldError, MissingFieldError
from ..document import new_element, sub
from .address import Address
from .person_name import PersonName


CVV_RE = re.compile(r"^\d{3,4}$")


def luhn_valid(number: str) -> bool:
    """Luhn checksum over a string of digits."""
    if not number.isdigit():
        return False
    total = 0
    for position, char in enumerate(reversed(number)):
        digit = int(char)
        if position % 2 == 1:
            digit *= 2
            if digit > 9:
                digit -= 9
        total += digit
    return total % 10 == 0


@dataclass
class CreditCard:
    """Cardholder name and billing address plus card details."""
    name: PersonName
    address: Address
    number: str
    exp_month: Union[str, int]
    exp_year: Union[str, int]
    cvv: str = ""

    def __post_init__(self):
        self.number = str(self.number or "").strip()
        if not self.number:
            raise MissingFieldError("card number")
        if not luhn_valid(self.number):
            raise InvalidFieldError("card number", "double-check for typos")

        month = str(self.exp_month or "").strip()
        if not month:
            raise MissingFieldError("expiration month")
        if not month.isdigit() or not 1 <= int(month) <= 12:
            raise InvalidFieldError("expiration month", "must be 1 through 12")
        self.exp_month = f"{int(month):02d}"

        year = str(self.exp_year or "").strip()
        if not year:
            raise MissingFieldError("expiration year")
        if not year.isdigit() or not 2000 <= int(year) <= 3000:
            raise InvalidFieldError("expiration year", "must be a four digit year")
        self.exp_year = str(int(year))

        self.cvv = str(self.cvv or "").strip()
        if self.cvv and not CVV_RE.match(self.cvv):
            raise InvalidFieldError("CVV", "must be 3 or 4 digits")

    @property
    def expiration_date(self) -> str:
        return f"{self.exp_year}-{self.exp_month}"

    def to_xml(self, namespace: Optional[str] = None) -> etree._Element:
        """Render as a SERVICE_PAYMENT element."""
        payment = new_element("SERVICE_PAYMENT", namespace)
        payment.append(self.address.to_xml(namespace))
        payment.append(self.name.to_xml(namespace))
        detail = sub(payment, "SERVICE_PAYMENT_DETAIL")
        sub(detail, "ServicePaymentAccountIdentifier", self.number)
        sub(detail, "ServicePaymentCreditAccountExpirationDate", self.expiration_date)
        if self.cvv:
            sub(detail, "ServicePaymentSecondaryCreditAccountIdentifier", self.cvv)
        return payment
