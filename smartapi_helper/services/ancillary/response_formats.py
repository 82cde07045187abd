"""
Preferred response formats requested from the vendor.

Xml, Html and Pdf are predefined and all enabled by default. Vendors may
support additional formats, which are added by name with set_custom_format().
"""
from __future__ import annotations
from typing import Dict, List, Optional

from lxml import etree

from ...exceptions import InvalidFieldError
from ..document import MCL_EXTENSION_NS, new_element, sub


DEFINED_TYPES = ["Xml", "Html", "Pdf"]


class ResponseFormats:

    def __init__(self, xml: bool = True, html: bool = True, pdf: bool = True):
        self._formats: Dict[str, bool] = {"Xml": xml, "Html": html, "Pdf": pdf}

    def set_xml(self, flag: bool) -> None:
        self._formats["Xml"] = flag

    def set_html(self, flag: bool) -> None:
        self._formats["Html"] = flag

    def set_pdf(self, flag: bool) -> None:
        self._formats["Pdf"] = flag

    def set_custom_format(self, name: str, flag: bool) -> None:
        name = (name or "").strip()
        if not name:
            raise InvalidFieldError("response format", "name cannot be empty")
        if name.lower() in (defined.lower() for defined in DEFINED_TYPES):
            raise InvalidFieldError(
                "response format",
                f"{name} is a predefined type, use its setter instead",
            )
        self._formats[name] = flag

    @property
    def formats(self) -> List[str]:
        """Names of the enabled formats, in insertion order."""
        return [name for name, enabled in self._formats.items() if enabled]

    @property
    def all_formats(self) -> Dict[str, bool]:
        return dict(self._formats)

    @property
    def count(self) -> int:
        return len(self.formats)

    def __eq__(self, other) -> bool:
        if not isinstance(other, ResponseFormats):
            return NotImplemented
        return self._formats == other._formats

    def __repr__(self) -> str:
        return f"ResponseFormats({self._formats!r})"

    def to_xml(self, namespace: Optional[str] = None) -> etree._Element:
        """Render as SERVICE_PREFERRED_RESPONSE_FORMATS, in the MCL extension namespace by default."""
        container = new_element("SERVICE_PREFERRED_RESPONSE_FORMATS", namespace or MCL_EXTENSION_NS)
        for name in self.formats:
            entry = sub(container, "SERVICE_PREFERRED_RESPONSE_FORMAT")
            detail = sub(entry, "SERVICE_PREFERRED_RESPONSE_FORMAT_DETAIL")
            sub(detail, "PreferredResponseFormatType", name)
        return container
