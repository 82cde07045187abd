"""
HTTP transport for SmartAPI requests.

Posts request documents to the configured endpoint with Basic auth and the
MCL-Interface header, and optionally keeps a raw copy of every exchange in a
log directory:

    <id>_REQUEST.log     request headers and body
    <id>_RESPONSE.log    response status, headers and body
    transactions.log     one send/receive line pair per exchange
"""
from __future__ import annotations
import logging
import os
import platform
import secrets
import time
from datetime import datetime
from pathlib import Path
from typing import Optional

import httpx

from ... import __version__
from ...config import SmartAPISettings
from ...exceptions import ConfigurationError, TransportError

logger = logging.getLogger(__name__)

RESPONSE_SNIFF_LENGTH = 250
TRANSACTIONS_LOG = "transactions.log"


def user_agent() -> str:
    return (
        f"SmartAPIHelper/{__version__} httpx/{httpx.__version__} "
        f"Python/{platform.python_version()}"
    )


def check_log_dir(log_dir: str) -> Path:
    """Confirm the directory exists and is writable by creating and removing a scratch file."""
    path = Path(log_dir)
    if not path.is_dir():
        raise ConfigurationError(
            f'Unable to enable logging: the path "{log_dir}" does not appear to exist. Try creating it first.'
        )
    scratch = path / f"{secrets.token_hex(3)}_testing.txt"
    try:
        scratch.write_text(
            "Test file to confirm access for logging; this file should delete itself.",
            encoding="utf-8",
        )
        scratch.unlink()
    except OSError as e:
        raise ConfigurationError(f'Unable to enable logging: cannot write to "{log_dir}": {e}') from e
    return path


class SmartAPIClient:
    """
    Synchronous SmartAPI HTTP client.

    Owns one httpx.Client unless one is injected. Use as a context manager or
    call close() when done.
    """

    def __init__(self, settings: SmartAPISettings, client: Optional[httpx.Client] = None):
        settings.require_complete()
        self.settings = settings
        self.log_dir: Optional[Path] = check_log_dir(settings.log_dir) if settings.log_dir else None
        self._owns_client = client is None
        self._client = client or httpx.Client(timeout=settings.timeout, follow_redirects=True)

    def __enter__(self) -> "SmartAPIClient":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    def enable_logging(self, log_dir: str) -> None:
        self.log_dir = check_log_dir(log_dir)

    def build_headers(self) -> dict:
        headers = {
            "Content-Type": "application/xml",
            "MCL-Interface": self.settings.interface,
            "User-Agent": user_agent(),
        }
        if self.settings.surrogated_login:
            headers["MCL-SurrogatedLogin"] = self.settings.surrogated_login
        return headers

    def submit(self, xml_request: str) -> str:
        """POST a request document and return the response body.

        Raises TransportError on network failure, a non-200 status, or a body
        that does not look like a SmartAPI MESSAGE document.
        """
        if not xml_request:
            raise TransportError("XML request string is required")

        log_id = self._new_log_id() if self.log_dir else None
        sent_at = datetime.now()
        try:
            response = self._client.post(
                self.settings.endpoint,
                content=xml_request.encode("utf-8"),
                headers=self.build_headers(),
                auth=(self.settings.login, self.settings.password),
                timeout=self.settings.timeout,
                follow_redirects=True,
            )
        except httpx.TimeoutException as e:
            logger.error(f"SmartAPI request timed out after {self.settings.timeout}s")
            raise TransportError(f"Request timed out: {e}") from e
        except httpx.HTTPError as e:
            logger.error(f"SmartAPI request failed: {e}")
            raise TransportError(f"Request failed: {e}") from e

        if log_id:
            self._write_exchange_logs(log_id, response, xml_request, sent_at, datetime.now())

        if response.status_code != 200:
            logger.warning(f"SmartAPI endpoint returned HTTP {response.status_code}")
            raise TransportError(
                f"HTTP {response.status_code} {response.reason_phrase}",
                status_code=response.status_code,
            )

        body = response.text
        if "<MESSAGE " not in body[:RESPONSE_SNIFF_LENGTH]:
            raise TransportError(f"Unexpected response: {body}", status_code=response.status_code)

        logger.info(f"Received SmartAPI response ({len(body)} bytes)")
        return body

    # -------------------------------------------------------------------------
    # Raw exchange logging
    # -------------------------------------------------------------------------

    @staticmethod
    def _new_log_id() -> str:
        # Timestamp prefix keeps files in send order when sorted by name
        stamp = str(int(time.time() * 10000))[-10:]
        return f"{stamp}_{secrets.token_hex(3)}"

    def _write_exchange_logs(
        self,
        log_id: str,
        response: httpx.Response,
        xml_request: str,
        sent_at: datetime,
        received_at: datetime,
    ) -> None:
        request_name = f"{log_id}_REQUEST.log"
        response_name = f"{log_id}_RESPONSE.log"

        # Authorization is never written to disk
        request_headers = "".join(
            f"{name}: {value}\n"
            for name, value in response.request.headers.items()
            if name.lower() != "authorization"
        )
        request_line = f"{response.request.method} {response.request.url}\n"
        (self.log_dir / request_name).write_text(
            request_line + request_headers + os.linesep + xml_request, encoding="utf-8"
        )

        response_headers = "".join(f"{name}: {value}\n" for name, value in response.headers.items())
        status_line = f"HTTP/1.1 {response.status_code} {response.reason_phrase}\n"
        (self.log_dir / response_name).write_text(
            status_line + response_headers + os.linesep + response.text, encoding="utf-8"
        )

        with open(self.log_dir / TRANSACTIONS_LOG, "a", encoding="utf-8") as transactions:
            transactions.write(
                f"{os.linesep}{os.linesep}{sent_at:%m-%d-%Y %I:%M:%S%p} Sending request: {request_name}"
                f"{os.linesep}{received_at:%m-%d-%Y %I:%M:%S%p} Receiving response: {response_name}"
            )
        logger.debug(f"Logged SmartAPI exchange {log_id} to {self.log_dir}")
