"""
Person name value object.
"""
from __future__ import annotations
import re
from dataclasses import dataclass
from typing import Optional

from lxml import etree

from ...exceptions import InvalidFieldError, MissingFieldError
from ..document import new_element, sub


VALID_SUFFIXES = ["SR", "JR", "I", "II", "III", "IV", "V", "VI", "VII", "VIII", "IX"]

INVALID_NAME_CHARS_RE = re.compile(r"[^a-zA-Z \-'.]")


def validate_name(name: str) -> bool:
    return INVALID_NAME_CHARS_RE.search(name) is None


@dataclass
class PersonName:
    """First and last name are required; middle name and suffix are optional."""
    first: str
    last: str
    middle: str = ""
    suffix: str = ""

    def __post_init__(self):
        for attr in ("first", "last"):
            value = (getattr(self, attr) or "").strip()
            if not value:
                raise MissingFieldError(f"{attr} name")
            if not validate_name(value):
                raise InvalidFieldError(f"{attr} name", "remove any unusual characters")
            setattr(self, attr, value)

        self.middle = (self.middle or "").strip()
        if self.middle and not validate_name(self.middle):
            raise InvalidFieldError("middle name", "remove any unusual characters")

        self.suffix = (self.suffix or "").strip().upper()
        if self.suffix and self.suffix not in VALID_SUFFIXES:
            raise InvalidFieldError("suffix", f"must be one of: {','.join(VALID_SUFFIXES)}")

    def to_xml(self, namespace: Optional[str] = None) -> etree._Element:
        """Render as a NAME element."""
        name = new_element("NAME", namespace)
        sub(name, "FirstName", self.first)
        sub(name, "LastName", self.last)
        if self.middle:
            sub(name, "MiddleName", self.middle)
        if self.suffix:
            sub(name, "SuffixName", self.suffix)
        return name
