"""
Response resolver.

Parses SmartAPI response documents and resolves borrower-scoped entities
through the relationship graph.
"""

from .consumer_credit import RATING_TEXT, ConsumerCreditResponseParser, load_response
from .graph import RelationshipIndex
from .parser import DomObjects, ResponseParser, parse_message
from .status import parse_status_code, resolve_status

__all__ = [
    "RATING_TEXT",
    "ConsumerCreditResponseParser",
    "load_response",
    "RelationshipIndex",
    "DomObjects",
    "ResponseParser",
    "parse_message",
    "parse_status_code",
    "resolve_status",
]
