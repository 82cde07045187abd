"""
Telephone contact point value object.
"""
from __future__ import annotations
import re
from dataclasses import dataclass
from typing import Optional

from lxml import etree

from ...exceptions import InvalidFieldError, MissingFieldError
from ..document import new_element, sub


VALID_TYPES = ["Home", "Mobile", "Work", "Other"]

# Ten digits, optionally wrapped as (###) ###-####, ###.###.#### and similar
NUMBER_RE = re.compile(r"^[^\d]?\d{3}[^\d]{0,2}\d{3}[^\d]?\d{4}$")
EXTENSION_RE = re.compile(r"^\d+$")


@dataclass
class PhoneNumber:
    number: str
    extension: str = ""
    type: str = "Home"
    description: str = ""

    def __post_init__(self):
        number = (self.number or "").strip()
        if not number:
            raise MissingFieldError("phone number")
        if not NUMBER_RE.match(number):
            raise InvalidFieldError(
                "phone number",
                "must be a 10 digit number such as ##########, ###-###-#### or (###) ###-####",
            )
        self.number = re.sub(r"\D", "", number)

        self.extension = (self.extension or "").strip()
        if self.extension and not EXTENSION_RE.match(self.extension):
            raise InvalidFieldError("extension", "must contain only numbers")

        self.type = (self.type or "").strip().capitalize()
        if self.type not in VALID_TYPES:
            raise InvalidFieldError("phone type", f"must be one of: {','.join(VALID_TYPES)}")

        self.description = (self.description or "").strip()

    def to_xml(self, namespace: Optional[str] = None) -> etree._Element:
        """Render as a CONTACT_POINT element."""
        contact_point = new_element("CONTACT_POINT", namespace)
        telephone = sub(contact_point, "CONTACT_POINT_TELEPHONE")
        if self.extension:
            sub(telephone, "ContactPointTelephoneExtensionValue", self.extension)
        sub(telephone, "ContactPointTelephoneValue", self.number)
        detail = sub(contact_point, "CONTACT_POINT_DETAIL")
        sub(detail, "ContactPointRoleType", self.type)
        if self.description:
            sub(detail, "ContactPointRoleTypeOtherDescription", self.description)
        return contact_point
