"""
SmartAPI Helper - Shared XML Document Helpers

Namespace constants, element builders used by the request serializer and the
field value objects, and the small XPath helpers used by the response parser.
"""
from __future__ import annotations
from typing import Dict, List, Optional

from lxml import etree


# =============================================================================
# NAMESPACES
# =============================================================================

MISMO_NS = "http://www.mismo.org/residential/2009/schemas"
XLINK_NS = "http://www.w3.org/1999/xlink"
MCL_EXTENSION_NS = "inetapi/MISMO3_4_MCL_Extension.xsd"
XSD_NS = "http://www.w3.org/2001/XMLSchema"
XSI_NS = "http://www.w3.org/2001/XMLSchema-instance"

# Prefixes registered for XPath over response documents
XPATH_NAMESPACES: Dict[str, str] = {
    "P1": MISMO_NS,
    "P2": XLINK_NS,
    "P3": MCL_EXTENSION_NS,
    "P4": XSD_NS,
    "P5": XSI_NS,
}

# Prefixes declared on outbound request documents (MISMO is the default namespace)
REQUEST_NSMAP = {None: MISMO_NS, "P2": XLINK_NS, "P3": MCL_EXTENSION_NS}

_PREFERRED_PREFIX = {MISMO_NS: None, XLINK_NS: "P2", MCL_EXTENSION_NS: "P3"}

ARCROLE_PREFIX = "urn:fdc:Meridianlink.com:2017:mortgage/"

DEFAULT_DATA_VERSION = "201703"


def arcrole(edge: str) -> str:
    """Full arcrole URN for a relationship edge name such as 'PARTY_IsVerifiedBy_SERVICE'."""
    return ARCROLE_PREFIX + edge


def qname(tag: str, namespace: Optional[str] = MISMO_NS) -> str:
    """Clark-notation tag name ({namespace}tag)."""
    if not namespace:
        return tag
    return f"{{{namespace}}}{tag}"


def xlink(attribute: str) -> str:
    return qname(attribute, XLINK_NS)


# =============================================================================
# BUILDING
# =============================================================================

def new_element(tag: str, namespace: Optional[str] = None) -> etree._Element:
    """Create a detached element, declaring its namespace on itself."""
    namespace = namespace or MISMO_NS
    prefix = _PREFERRED_PREFIX.get(namespace)
    return etree.Element(qname(tag, namespace), nsmap={prefix: namespace})


def sub(
    parent: etree._Element,
    tag: str,
    text: Optional[str] = None,
    namespace: Optional[str] = None,
    attrib: Optional[Dict[str, str]] = None,
) -> etree._Element:
    """Append a child element to parent, in the parent's namespace unless one is given."""
    if namespace is None:
        namespace = etree.QName(parent).namespace
    child = etree.SubElement(parent, qname(tag, namespace), attrib=attrib or {})
    if text is not None:
        child.text = text
    return child


def path(parent: etree._Element, *tags: str, namespace: Optional[str] = None) -> etree._Element:
    """Append a chain of nested elements and return the innermost one."""
    node = parent
    for tag in tags:
        node = sub(node, tag, namespace=namespace)
    return node


def bool_text(value: bool) -> str:
    return "true" if value else "false"


def new_request_root() -> etree._Element:
    """Root MESSAGE element of an outbound request document."""
    return etree.Element(
        qname("MESSAGE"),
        attrib={"MessageType": "Request"},
        nsmap=REQUEST_NSMAP,
    )


def to_xml_string(root: etree._Element) -> str:
    return etree.tostring(
        root,
        xml_declaration=True,
        encoding="utf-8",
        pretty_print=True,
    ).decode("utf-8")


# =============================================================================
# READING
# =============================================================================

def xpath(node: etree._Element, expression: str, **variables) -> List:
    """Evaluate an XPath expression with the P1..P5 prefixes registered."""
    return node.xpath(expression, namespaces=XPATH_NAMESPACES, **variables)


def first_text(node: etree._Element, expression: str, **variables) -> Optional[str]:
    """Text content of the first node matched by expression, or None."""
    found = xpath(node, expression, **variables)
    if not found:
        return None
    return text_of(found[0])


def text_of(node) -> str:
    """Full text content of an element (or the value of an attribute result)."""
    if isinstance(node, etree._Element):
        return "".join(node.itertext())
    return str(node)


def descendant_text(node: etree._Element, local_name: str) -> Optional[str]:
    """Text of the first descendant with the given local name, in any namespace."""
    found = node.xpath(".//*[local-name() = $name]", name=local_name)
    if not found:
        return None
    return text_of(found[0])
