"""
Consumer credit request generator.

Validates a request context against the required-field table for its kind
and renders it with the matching document builder.
"""
from __future__ import annotations
import logging

from lxml import etree

from ...exceptions import MissingFieldError
from ...models.request_data import ConsumerCreditRequestData
from ..document import to_xml_string
from .builders import BUILDERS
from .field_table import check_required_fields

logger = logging.getLogger(__name__)


class ConsumerCreditRequestGenerator:
    """Renders one request context as a MISMO MESSAGE document."""

    def __init__(self, data: ConsumerCreditRequestData):
        self.data = data

    def build(self) -> etree._Element:
        kind = self.data.request_type
        if kind is None:
            raise MissingFieldError("request type")
        check_required_fields(self.data, kind)
        logger.debug(f"Building {kind.value} request document")
        return BUILDERS[kind](self.data)

    def output_xml_string(self) -> str:
        return to_xml_string(self.build())


def serialize(data: ConsumerCreditRequestData) -> str:
    """Serialize a request context to an XML string for its request type."""
    return ConsumerCreditRequestGenerator(data).output_xml_string()
