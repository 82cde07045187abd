"""SmartAPI Helper - Models

Wire enums, parsed result records and the request context.
"""
from .wire import (
    AddressType,
    BureauResponse,
    CreditScore,
    Liability,
    Person,
    RequestKind,
    ResponseStatus,
    ScoreFactor,
)
from .request_data import BureauOptions, ConsumerCreditRequestData, PersonData

__all__ = [
    # Enums
    "AddressType",
    "Person",
    "RequestKind",
    "ResponseStatus",
    # Result records
    "BureauResponse",
    "CreditScore",
    "Liability",
    "ScoreFactor",
    # Request context
    "BureauOptions",
    "ConsumerCreditRequestData",
    "PersonData",
]
