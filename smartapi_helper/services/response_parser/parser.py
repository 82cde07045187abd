"""
SmartAPI response parser - base layer.

Loads a MESSAGE document and extracts the fields common to every SmartAPI
product: order status, vendor order ID, transaction ID and the embedded
HTML/PDF report views.
"""
from __future__ import annotations
import copy
import logging
from typing import Dict, NamedTuple, Union

from lxml import etree

from ...exceptions import EmptyResponseError, MalformedResponseError
from ...models.wire import ResponseStatus
from ..document import XPATH_NAMESPACES, first_text
from .status import resolve_status

logger = logging.getLogger(__name__)


# =============================================================================
# PATHS
# =============================================================================

DEAL_PATH = "/P1:MESSAGE/P1:DEAL_SETS/P1:DEAL_SET/P1:DEALS/P1:DEAL"
SERVICE_PATH = f"{DEAL_PATH}/P1:SERVICES/P1:SERVICE"
CREDIT_RESPONSE_PATH = f"{SERVICE_PATH}/P1:CREDIT/P1:CREDIT_RESPONSE"

VENDOR_ORDER_ID_PATH = (
    f"{SERVICE_PATH}/P1:SERVICE_PRODUCT_FULFILLMENT"
    "/P1:SERVICE_PRODUCT_FULFILLMENT_DETAIL/P1:VendorOrderIdentifier"
)
TRANSACTION_ID_PATH = (
    f"{DEAL_PATH}/P1:PARTIES/P1:PARTY/P1:ROLES/P1:ROLE"
    "/P1:RESPONDING_PARTY/P1:RespondingPartyTransactionIdentifier"
)
EMBEDDED_VIEW_PATH = (
    "/P1:MESSAGE/P1:DOCUMENT_SETS/P1:DOCUMENT_SET/P1:DOCUMENTS/P1:DOCUMENT"
    "/P1:VIEWS/P1:VIEW/P1:VIEW_FILES/P1:VIEW_FILE"
    "/P1:FOREIGN_OBJECT[P1:MIMETypeIdentifier = $mime_type]/P1:EmbeddedContentXML"
)

HTML_MIME_TYPE = "text/html"
PDF_MIME_TYPE = "application/pdf"


class DomObjects(NamedTuple):
    """Independent copy of a parsed response for caller-side XPath queries."""
    document: etree._ElementTree
    namespaces: Dict[str, str]

    def xpath(self, expression: str, **variables):
        return self.document.xpath(expression, namespaces=self.namespaces, **variables)


def parse_message(xml_response: Union[str, bytes]) -> etree._Element:
    """Parse a response body and return its MESSAGE root element."""
    if xml_response is None or not xml_response.strip():
        raise EmptyResponseError()
    if isinstance(xml_response, str):
        xml_response = xml_response.encode("utf-8")

    parser = etree.XMLParser(resolve_entities=False, no_network=True)
    try:
        root = etree.fromstring(xml_response, parser=parser)
    except etree.XMLSyntaxError as e:
        raise MalformedResponseError(f"Response is not well-formed XML: {e}") from e

    if etree.QName(root).localname != "MESSAGE":
        raise MalformedResponseError("XML provided is not a valid SmartAPI response document")
    return root


class ResponseParser:
    """
    Parsed SmartAPI response.

    Status and vendor order ID are extracted on load; loading fails if the
    status cannot be determined. The parsed document is never modified.
    """

    def __init__(self, xml_response: Union[str, bytes]):
        self._root = parse_message(xml_response)
        self.status, self.status_description = resolve_status(self._root)
        self.vendor_order_id = first_text(self._root, VENDOR_ORDER_ID_PATH) or ""
        logger.info(
            f"Loaded SmartAPI response: status={self.status.value}, "
            f"vendor_order_id={self.vendor_order_id or '-'}"
        )

    @classmethod
    def load(cls, xml_response: Union[str, bytes]):
        return cls(xml_response)

    @property
    def root(self) -> etree._Element:
        return self._root

    def get_status(self) -> ResponseStatus:
        return self.status

    def get_status_description(self) -> str:
        return self.status_description

    def get_vendor_order_id(self) -> str:
        return self.vendor_order_id

    def get_transaction_id(self) -> str:
        return first_text(self._root, TRANSACTION_ID_PATH) or ""

    def get_html_document(self) -> str:
        """Embedded HTML report view, or an empty string."""
        return first_text(self._root, EMBEDDED_VIEW_PATH, mime_type=HTML_MIME_TYPE) or ""

    def get_pdf_document(self) -> str:
        """Embedded PDF report view (base64 text as sent by the vendor), or an empty string."""
        return first_text(self._root, EMBEDDED_VIEW_PATH, mime_type=PDF_MIME_TYPE) or ""

    def get_dom_objects(self) -> DomObjects:
        return DomObjects(
            document=copy.deepcopy(self._root.getroottree()),
            namespaces=dict(XPATH_NAMESPACES),
        )
