"""
SmartAPI Helper - Consumer Credit Request Context

Mutable container for everything a credit request document can carry. It is
built fresh per request, filled through setters that validate and normalize
their input, and handed to the request generator for serialization.
"""

from __future__ import annotations
import logging
import re
from dataclasses import dataclass, field
from typing import Dict, Optional, Union

from ..exceptions import InvalidFieldError, ValidationError
from ..services.ancillary import Address, CreditCard, PersonName, PhoneNumber, ResponseFormats
from ..services.document import DEFAULT_DATA_VERSION
from .wire import AddressType, Person, RequestKind

logger = logging.getLogger(__name__)


# =============================================================================
# CONSTANTS
# =============================================================================

SSN_RE = re.compile(r"^\d{9}$")
DOB_US_RE = re.compile(r"^(\d{2})-(\d{2})-(\d{4})$")
DOB_ISO_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")
# More than one '@', or a separator that suggests a list of addresses
INVALID_EMAIL_RE = re.compile(r"(@.*){2}|[; ,]")

PersonKey = Union[str, Person]


# =============================================================================
# SUPPORTING RECORDS
# =============================================================================

@dataclass
class PersonData:
    """Everything held for one person slot."""
    name: Optional[PersonName] = None
    ssn: str = ""
    dob: str = ""
    phone: Optional[PhoneNumber] = None
    email: str = ""
    addresses: Dict[AddressType, Optional[Address]] = field(
        default_factory=lambda: {address_type: None for address_type in AddressType}
    )

    @property
    def is_set(self) -> bool:
        return self.name is not None


@dataclass
class BureauOptions:
    """Per-repository switches. Equifax has no fraud product."""
    credit: bool = True
    score: bool = True
    fraud: Optional[bool] = True

    def to_dict(self) -> Dict[str, bool]:
        data = {"credit": self.credit, "score": self.score}
        if self.fraud is not None:
            data["fraud"] = self.fraud
        return data


# =============================================================================
# REQUEST CONTEXT
# =============================================================================

class ConsumerCreditRequestData:
    """
    Request context for a consumer credit order.

    Person-scoped setters take 'b' (borrower) or 'c' (co-borrower). String
    setters trim their input, and a blank value clears the field.
    """

    BORROWER = Person.BORROWER.value
    COBORROWER = Person.CO_BORROWER.value
    REQUEST_TYPES = [kind.value for kind in RequestKind]

    def __init__(self):
        self._people: Dict[Person, PersonData] = {person: PersonData() for person in Person}
        self.subject_property: Optional[Address] = None
        self.loan_id = ""
        self.loan_type = ""
        self.credit_card: Optional[CreditCard] = None
        self.equifax_options = BureauOptions(fraud=None)
        self.experian_options = BureauOptions()
        self.transunion_options = BureauOptions()
        self.response_formats = ResponseFormats()
        self.request_type: Optional[RequestKind] = None
        self.vendor_order_id = ""
        self.data_version = DEFAULT_DATA_VERSION

    def person(self, person_id: PersonKey) -> PersonData:
        return self._people[Person.parse(person_id)]

    # -------------------------------------------------------------------------
    # Person-scoped setters
    # -------------------------------------------------------------------------

    def set_name(self, person_id: PersonKey, name: Optional[PersonName]) -> None:
        self.person(person_id).name = name

    def set_ssn(self, person_id: PersonKey, ssn: str) -> None:
        """Accepts exactly nine digits; blank clears the SSN."""
        person = self.person(person_id)
        ssn = (ssn or "").strip()
        if ssn and not SSN_RE.match(ssn):
            raise InvalidFieldError("SSN", "must be of format #########")
        person.ssn = ssn

    def set_address(
        self,
        person_id: PersonKey,
        address: Optional[Address],
        address_type: Union[str, AddressType] = AddressType.CURRENT,
    ) -> None:
        person = self.person(person_id)
        person.addresses[AddressType.parse(address_type)] = address

    def set_dob(self, person_id: PersonKey, dob: str) -> None:
        """Accepts YYYY-MM-DD or MM-DD-YYYY and stores YYYY-MM-DD."""
        person = self.person(person_id)
        dob = (dob or "").strip()
        if dob:
            match = DOB_US_RE.match(dob)
            if match:
                month, day, year = match.groups()
                dob = f"{year}-{month}-{day}"
            elif not DOB_ISO_RE.match(dob):
                raise InvalidFieldError("DOB", "must be of format YYYY-MM-DD or MM-DD-YYYY")
        person.dob = dob

    def set_phone(self, person_id: PersonKey, phone: Optional[PhoneNumber]) -> None:
        self.person(person_id).phone = phone

    def set_email(self, person_id: PersonKey, email: str) -> None:
        person = self.person(person_id)
        email = (email or "").strip()
        if email and INVALID_EMAIL_RE.search(email):
            raise InvalidFieldError("email", "invalid or more than one email was provided")
        person.email = email

    # -------------------------------------------------------------------------
    # Order-level setters
    # -------------------------------------------------------------------------

    def set_subject_property(self, address: Optional[Address]) -> None:
        self.subject_property = address

    def set_loan_id(self, loan_id: str) -> None:
        self.loan_id = (loan_id or "").strip()

    def set_loan_type(self, loan_type: str) -> None:
        self.loan_type = (loan_type or "").strip()

    def set_credit_card(self, card: Optional[CreditCard]) -> None:
        self.credit_card = card

    def set_equifax_options(self, credit: bool, score: bool = True) -> None:
        self.equifax_options = BureauOptions(credit=credit, score=score, fraud=None)

    def set_experian_options(self, credit: bool, score: bool = True, fraud: bool = True) -> None:
        self.experian_options = BureauOptions(credit=credit, score=score, fraud=fraud)

    def set_transunion_options(self, credit: bool, score: bool = True, fraud: bool = True) -> None:
        self.transunion_options = BureauOptions(credit=credit, score=score, fraud=fraud)

    def set_request_type(self, request_type: Union[str, RequestKind]) -> None:
        self.request_type = RequestKind.parse(request_type)

    def set_response_formats(self, formats: ResponseFormats) -> None:
        self.response_formats = formats

    def set_vendor_order_id(self, vendor_order_id: str) -> None:
        self.vendor_order_id = (vendor_order_id or "").strip()

    def set_data_version(self, data_version: str = DEFAULT_DATA_VERSION) -> None:
        data_version = (data_version or "").strip()
        if not data_version:
            raise ValidationError("Data version cannot be blank")
        self.data_version = data_version

    # -------------------------------------------------------------------------
    # Getters
    # -------------------------------------------------------------------------

    def get_name(self, person_id: PersonKey) -> Optional[PersonName]:
        return self.person(person_id).name

    def get_ssn(self, person_id: PersonKey) -> str:
        return self.person(person_id).ssn

    def get_address(
        self,
        person_id: PersonKey,
        address_type: Union[str, AddressType] = AddressType.CURRENT,
    ) -> Optional[Address]:
        return self.person(person_id).addresses[AddressType.parse(address_type)]

    def get_dob(self, person_id: PersonKey) -> str:
        return self.person(person_id).dob

    def get_phone(self, person_id: PersonKey) -> Optional[PhoneNumber]:
        return self.person(person_id).phone

    def get_email(self, person_id: PersonKey) -> str:
        return self.person(person_id).email

    @property
    def has_coborrower(self) -> bool:
        return self._people[Person.CO_BORROWER].is_set

    def get_xml_string(self) -> str:
        """Serialize this context as a request document for its request type."""
        from ..services.request_generator import serialize
        return serialize(self)
