"""
SmartAPI Helper - Error Taxonomy

Every error raised by the package derives from SmartAPIError so callers can
catch the whole family at once. Presence checks ("is the co-borrower in this
response?") are plain boolean queries and never raise.
"""
from typing import Optional


class SmartAPIError(Exception):
    """Base class for all SmartAPI Helper errors."""
    pass


# =============================================================================
# REQUEST VALIDATION
# =============================================================================

class ValidationError(SmartAPIError):
    """Raised when request data cannot be accepted or serialized."""
    pass


class MissingFieldError(ValidationError):
    """Raised when a field required by the selected request kind is absent."""

    def __init__(self, field: str):
        self.field = field
        super().__init__(f"Missing required field: {field}")


class InvalidFieldError(ValidationError):
    """Raised when a field value fails format validation."""

    def __init__(self, field: str, reason: str):
        self.field = field
        self.reason = reason
        super().__init__(f"Invalid {field}: {reason}")


# =============================================================================
# RESPONSE DECODING
# =============================================================================

class MalformedResponseError(SmartAPIError):
    """Raised when a response is not a parseable SmartAPI MESSAGE document."""
    pass


class EmptyResponseError(MalformedResponseError):
    """Raised when the response body is blank."""

    def __init__(self):
        super().__init__("XML response is empty")


class ResponseLookupError(SmartAPIError):
    """Raised when an entity cannot be resolved from a loaded response."""
    pass


class InvalidPersonError(ResponseLookupError):
    """Raised for a person key other than 'b' (borrower) or 'c' (co-borrower)."""

    def __init__(self, person: str):
        self.person = person
        super().__init__(f"Person ID must be 'b' or 'c', got {person!r}")


class PersonNotPresentError(ResponseLookupError):
    """Raised when a person-scoped query targets a person absent from the response."""

    def __init__(self, person: str):
        self.person = person
        super().__init__(f"Person {person!r} is not present in the response")


class GraphResolutionError(ResponseLookupError):
    """Raised when a relationship edge points at a label that cannot be resolved."""
    pass


class StatusError(SmartAPIError):
    """Raised when the response status cannot be determined."""
    pass


class NoStatusError(StatusError):
    def __init__(self):
        super().__init__("No status code found in the response")


class UnknownStatusError(StatusError):
    def __init__(self, code: str):
        self.code = code
        super().__init__(f"Unknown status code: {code}")


class InvalidRatingCodeError(SmartAPIError):
    """Raised by get_rating_text for a code outside the rating table."""

    def __init__(self, code: str):
        self.code = code
        super().__init__(f"Invalid rating code: {code!r}")


# =============================================================================
# TRANSPORT / CONFIGURATION
# =============================================================================

class TransportError(SmartAPIError):
    """Raised when the HTTP exchange with the SmartAPI endpoint fails."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.status_code = status_code
        super().__init__(message)


class ConfigurationError(SmartAPIError):
    """Raised when transport settings are incomplete or invalid."""
    pass
