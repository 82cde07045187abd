"""SmartAPI Helper

Builds MISMO SmartAPI consumer credit request documents, submits them over
HTTP and resolves the borrower, bureau, score and liability data in the
vendor's responses.
"""
__version__ = "1.0.0"

from .config import SmartAPISettings
from .exceptions import (
    ConfigurationError,
    EmptyResponseError,
    GraphResolutionError,
    InvalidFieldError,
    InvalidPersonError,
    InvalidRatingCodeError,
    MalformedResponseError,
    MissingFieldError,
    NoStatusError,
    PersonNotPresentError,
    ResponseLookupError,
    SmartAPIError,
    StatusError,
    TransportError,
    UnknownStatusError,
    ValidationError,
)
from .models import ConsumerCreditRequestData, Person, RequestKind, ResponseStatus
from .services.ancillary import Address, CreditCard, PersonName, PhoneNumber, ResponseFormats
from .services.polling import PollOutcome, poll_order
from .services.request_generator import ConsumerCreditRequestGenerator, serialize
from .services.response_parser import ConsumerCreditResponseParser, load_response
from .services.transport import SmartAPIClient

__all__ = [
    "__version__",
    # Configuration
    "SmartAPISettings",
    # Errors
    "ConfigurationError",
    "EmptyResponseError",
    "GraphResolutionError",
    "InvalidFieldError",
    "InvalidPersonError",
    "InvalidRatingCodeError",
    "MalformedResponseError",
    "MissingFieldError",
    "NoStatusError",
    "PersonNotPresentError",
    "ResponseLookupError",
    "SmartAPIError",
    "StatusError",
    "TransportError",
    "UnknownStatusError",
    "ValidationError",
    # Request side
    "ConsumerCreditRequestData",
    "ConsumerCreditRequestGenerator",
    "Person",
    "RequestKind",
    "serialize",
    "Address",
    "CreditCard",
    "PersonName",
    "PhoneNumber",
    "ResponseFormats",
    # Response side
    "ConsumerCreditResponseParser",
    "ResponseStatus",
    "load_response",
    # Transport and polling
    "SmartAPIClient",
    "PollOutcome",
    "poll_order",
]
