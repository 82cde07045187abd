"""
Required-field table for request documents.

Each request kind needs a different subset of the request context. The table
is evaluated in order before any element is built, so a missing field is
reported by name without producing a partial document.
"""
from __future__ import annotations
from dataclasses import dataclass
from typing import Callable, FrozenSet, List

from ...exceptions import MissingFieldError
from ...models.request_data import ConsumerCreditRequestData
from ...models.wire import AddressType, Person, RequestKind


ALL_KINDS = frozenset(RequestKind)
WITH_RESIDENCES = frozenset({RequestKind.SUBMIT, RequestKind.REFRESH})
WITH_FULFILLMENT = frozenset(ALL_KINDS - {RequestKind.SUBMIT})


@dataclass(frozen=True)
class RequiredField:
    """A field that must be present for the listed kinds."""
    name: str
    kinds: FrozenSet[RequestKind]
    is_present: Callable[[ConsumerCreditRequestData], bool]
    # Only enforced when a co-borrower is on the request
    coborrower_only: bool = False


def _has_name(person: Person):
    return lambda data: data.get_name(person) is not None


def _has_ssn(person: Person):
    return lambda data: bool(data.get_ssn(person))


def _has_current_address(person: Person):
    return lambda data: data.get_address(person, AddressType.CURRENT) is not None


REQUIRED_FIELDS: List[RequiredField] = [
    RequiredField("borrower name", ALL_KINDS, _has_name(Person.BORROWER)),
    RequiredField("borrower current address", WITH_RESIDENCES, _has_current_address(Person.BORROWER)),
    RequiredField("borrower SSN", ALL_KINDS, _has_ssn(Person.BORROWER)),
    RequiredField(
        "co-borrower current address",
        WITH_RESIDENCES,
        _has_current_address(Person.CO_BORROWER),
        coborrower_only=True,
    ),
    RequiredField("co-borrower SSN", ALL_KINDS, _has_ssn(Person.CO_BORROWER), coborrower_only=True),
    RequiredField("vendor order ID", WITH_FULFILLMENT, lambda data: bool(data.vendor_order_id)),
]


def required_fields_for(kind: RequestKind, has_coborrower: bool = False) -> List[str]:
    """Names of the fields a request of this kind must carry."""
    return [
        entry.name
        for entry in REQUIRED_FIELDS
        if kind in entry.kinds and (has_coborrower or not entry.coborrower_only)
    ]


def check_required_fields(data: ConsumerCreditRequestData, kind: RequestKind) -> None:
    """Raise MissingFieldError for the first required field that is absent."""
    has_coborrower = data.has_coborrower
    for entry in REQUIRED_FIELDS:
        if kind not in entry.kinds:
            continue
        if entry.coborrower_only and not has_coborrower:
            continue
        if not entry.is_present(data):
            raise MissingFieldError(entry.name)
