"""
Response status extraction.

A request-level error block wins over the service status. Otherwise the
service STATUS must carry a StatusCode from the known set.
"""
from __future__ import annotations
from typing import Tuple

from lxml import etree

from ...exceptions import NoStatusError, UnknownStatusError
from ...models.wire import ResponseStatus
from ..document import descendant_text, xpath


REQUEST_ERROR_PATH = (
    "/P1:MESSAGE/P1:DEAL_SETS/P1:DEAL_SET_SERVICES/P1:DEAL_SET_SERVICE"
    "/P1:ERRORS/P1:ERROR/P1:ERROR_MESSAGES/P1:ERROR_MESSAGE"
)
SERVICE_STATUS_PATH = (
    "/P1:MESSAGE/P1:DEAL_SETS/P1:DEAL_SET/P1:DEALS/P1:DEAL"
    "/P1:SERVICES/P1:SERVICE/P1:STATUSES/P1:STATUS"
)


def parse_status_code(code: str) -> ResponseStatus:
    """Match a vendor status code case-insensitively."""
    normalized = code.strip().upper()
    for status in ResponseStatus:
        if status.value == normalized:
            return status
    raise UnknownStatusError(code)


def resolve_status(root: etree._Element) -> Tuple[ResponseStatus, str]:
    """Return (status, description) for a response document."""
    errors = xpath(root, REQUEST_ERROR_PATH)
    if errors:
        error = errors[0]
        parts = [
            descendant_text(error, "ErrorMessageCategoryCode") or "",
            descendant_text(error, "ErrorMessageText") or "",
        ]
        return ResponseStatus.REQUEST_ERROR, " ".join(parts).strip()

    statuses = xpath(root, SERVICE_STATUS_PATH)
    if not statuses:
        raise NoStatusError()
    code = descendant_text(statuses[0], "StatusCode")
    if code is None:
        raise NoStatusError()
    status = parse_status_code(code)
    return status, descendant_text(statuses[0], "StatusDescription") or ""
