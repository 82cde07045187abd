"""
Postal address value object (US and Canadian addresses).
"""
from __future__ import annotations
import re
from dataclasses import dataclass
from typing import Optional

from lxml import etree

from ...exceptions import InvalidFieldError, MissingFieldError
from ..document import new_element, sub


# =============================================================================
# CONSTANTS
# =============================================================================

VALID_STATES = {
    "AA": "ARMED FORCES", "AB": "ALBERTA", "AE": "ARMED FORCES", "AK": "ALASKA",
    "AL": "ALABAMA", "AP": "ARMED FORCES", "AR": "ARKANSAS", "AS": "AMERICAN SAMOA",
    "AZ": "ARIZONA", "BC": "BRITISH COLUMBIA", "CA": "CALIFORNIA", "CO": "COLORADO",
    "CT": "CONNECTICUT", "DC": "DISTRICT OF COLUMBIA", "DE": "DELAWARE", "FL": "FLORIDA",
    "FM": "FED STATES MICRONESIA", "GA": "GEORGIA", "GU": "GUAM", "HI": "HAWAII",
    "IA": "IOWA", "ID": "IDAHO", "IL": "ILLINOIS", "IN": "INDIANA", "KS": "KANSAS",
    "KY": "KENTUCKY", "LA": "LOUISIANA", "MA": "MASSACHUSETTS", "MB": "MANITOBA",
    "MD": "MARYLAND", "ME": "MAINE", "MH": "MARSHALL ISLANDS", "MI": "MICHIGAN",
    "MN": "MINNESOTA", "MO": "MISSOURI", "MP": "NOR MARIANA ISLANDS", "MS": "MISSISSIPPI",
    "MT": "MONTANA", "NB": "NEW BRUNSWICK", "NC": "NORTH CAROLINA", "ND": "NORTH DAKOTA",
    "NE": "NEBRASKA", "NH": "NEW HAMPSHIRE", "NJ": "NEW JERSEY",
    "NL": "NEWFOUNDLAND AND LABRADOR", "NM": "NEW MEXICO", "NS": "NOVA SCOTIA",
    "NV": "NEVADA", "NY": "NEW YORK", "OH": "OHIO", "OK": "OKLAHOMA", "ON": "ONTARIO",
    "OR": "OREGON", "PA": "PENNSYLVANIA", "PE": "PRINCE EDWARD ISLAND", "PR": "PUERTO RICO",
    "PW": "PALAU", "QC": "QUEBEC", "RI": "RHODE ISLAND", "SC": "SOUTH CAROLINA",
    "SD": "SOUTH DAKOTA", "SK": "SASKATCHEWAN", "TN": "TENNESSEE", "TX": "TEXAS",
    "UT": "UTAH", "VA": "VIRGINIA", "VI": "VIRGIN ISLANDS", "VT": "VERMONT",
    "WA": "WASHINGTON", "WI": "WISCONSIN", "WV": "WEST VIRGINIA", "WY": "WYOMING",
}

VALID_COUNTRIES = {"US": "UNITED STATES", "CA": "CANADA"}

US_ZIP_RE = re.compile(r"^\d{5}$")
US_ZIP4_RE = re.compile(r"^(\d{5})-\d{4}$")
CAN_ZIP_RE = re.compile(r"^[a-zA-Z]\d[a-zA-Z] ?\d[a-zA-Z]\d$")
INVALID_STREET_CHARS_RE = re.compile(r"[^a-zA-Z0-9 \-'.#&/]")


def validate_street(street: str) -> bool:
    return INVALID_STREET_CHARS_RE.search(street) is None


def normalize_zip(zip_code: str) -> Optional[str]:
    """Canonical postal code, or None when the format is not recognized.

    ZIP+4 keeps only the five digit portion; Canadian codes are upper-cased
    with the separator space removed.
    """
    if US_ZIP_RE.match(zip_code):
        return zip_code
    match = US_ZIP4_RE.match(zip_code)
    if match:
        return match.group(1)
    if CAN_ZIP_RE.match(zip_code):
        return zip_code.replace(" ", "").upper()
    return None


@dataclass
class Address:
    """A validated street address. All fields are required."""
    street: str
    city: str
    state: str
    zip_code: str
    country: str = "US"

    def __post_init__(self):
        self.street = (self.street or "").strip()
        if not self.street:
            raise MissingFieldError("street")
        if not validate_street(self.street):
            raise InvalidFieldError("street", "remove any unusual characters")

        self.city = (self.city or "").strip()
        if not self.city:
            raise MissingFieldError("city")

        self.state = (self.state or "").strip().upper()
        if not self.state:
            raise MissingFieldError("state")
        if self.state not in VALID_STATES:
            raise InvalidFieldError("state", f"must be one of: {','.join(VALID_STATES)}")

        zip_code = (self.zip_code or "").strip()
        if not zip_code:
            raise MissingFieldError("zip code")
        normalized = normalize_zip(zip_code)
        if normalized is None:
            raise InvalidFieldError("zip code", "not of a valid format")
        self.zip_code = normalized

        self.country = (self.country or "").strip().upper()
        if not self.country:
            raise MissingFieldError("country")
        if self.country not in VALID_COUNTRIES:
            raise InvalidFieldError("country", f"must be one of: {','.join(VALID_COUNTRIES)}")

    def to_xml(self, namespace: Optional[str] = None) -> etree._Element:
        """Render as an ADDRESS element."""
        address = new_element("ADDRESS", namespace)
        sub(address, "AddressLineText", self.street)
        sub(address, "CityName", self.city)
        sub(address, "CountryCode", self.country)
        sub(address, "PostalCode", self.zip_code)
        sub(address, "StateCode", self.state)
        return address
