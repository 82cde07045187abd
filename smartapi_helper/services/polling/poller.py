"""
Order status polling.

Submits an order, then re-asks for its status with StatusQuery documents
until the vendor reports a terminal status, the time budget runs out, or the
caller asks to stop.
"""
from __future__ import annotations
import logging
import time
from dataclasses import dataclass
from typing import Callable, Optional

from ...exceptions import InvalidFieldError
from ...models.request_data import ConsumerCreditRequestData
from ...models.wire import RequestKind
from ..request_generator import serialize
from ..response_parser import ConsumerCreditResponseParser
from ..transport import SmartAPIClient

logger = logging.getLogger(__name__)

DEFAULT_INTERVAL = 1.0
DEFAULT_TIMEOUT = 90.0


@dataclass
class PollOutcome:
    """Final parsed response and how polling ended."""
    response: ConsumerCreditResponseParser
    attempts: int
    timed_out: bool = False
    aborted: bool = False

    @property
    def completed(self) -> bool:
        return self.response.status.is_terminal


def poll_order(
    client: SmartAPIClient,
    request_data: ConsumerCreditRequestData,
    interval: float = DEFAULT_INTERVAL,
    timeout: float = DEFAULT_TIMEOUT,
    sleep: Callable[[float], None] = time.sleep,
    should_abort: Optional[Callable[[], bool]] = None,
) -> PollOutcome:
    """
    Submit request_data and poll until the order reaches a terminal status.

    After the first response the request is switched to StatusQuery with the
    vendor order ID the vendor returned; request_data is modified in place.
    Codec and transport errors propagate to the caller.
    """
    if interval <= 0:
        raise InvalidFieldError("poll interval", "must be greater than zero")
    if timeout < 0:
        raise InvalidFieldError("poll timeout", "cannot be negative")

    response = ConsumerCreditResponseParser(client.submit(serialize(request_data)))
    attempts = 1
    remaining = timeout

    while not response.status.is_terminal:
        if remaining <= 0:
            logger.warning(
                f"Stopped polling order {response.vendor_order_id} after {attempts} attempts: "
                f"still {response.status.value}"
            )
            return PollOutcome(response=response, attempts=attempts, timed_out=True)
        if should_abort is not None and should_abort():
            logger.info(f"Polling of order {response.vendor_order_id} aborted by caller")
            return PollOutcome(response=response, attempts=attempts, aborted=True)

        request_data.set_request_type(RequestKind.STATUS_QUERY)
        request_data.set_vendor_order_id(response.vendor_order_id)
        sleep(interval)
        remaining -= interval

        logger.debug(f"Polling order {response.vendor_order_id} (status {response.status.value})")
        response = ConsumerCreditResponseParser(client.submit(serialize(request_data)))
        attempts += 1

    logger.info(f"Order {response.vendor_order_id} finished with status {response.status.value}")
    return PollOutcome(response=response, attempts=attempts)
