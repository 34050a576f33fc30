"""
REST implementation of CustomerService using aiohttp.

Issues a single GET {base_url}/customers/{customer_number} per lookup and
normalizes every outcome into either a Customer or a CustomerLookupError:

    200            -> Customer parsed from the JSON body
    404            -> NotFoundError (backend message if provided)
    400            -> ValidationError (backend message if provided)
    other status   -> NetworkError
    transport error, timeout, undecodable body -> NetworkError

Error bodies are expected as {"message": ..., "error": "NOT_FOUND"} or RFC 7807
problem details ({"title": ..., "detail": ...}); either is optional.
"""

import asyncio
import json
from typing import Any

import aiohttp

from customer_inquiry.errors import (
    CustomerPayloadError,
    NetworkError,
    NotFoundError,
    ValidationError,
)
from customer_inquiry.lib import logs
from customer_inquiry.models.customer import Customer, parse_customer
from customer_inquiry.services.customer_service import CustomerService

LOG = logs.logger(__file__)

_HEADERS = {"Accept": "application/json"}


def _error_message(body: Any) -> str | None:
    """Extract a user-facing message from a backend error body."""
    if not isinstance(body, dict):
        return None
    for key in ("message", "detail", "title"):
        value = body.get(key)
        if isinstance(value, str) and value.strip():
            return value.strip()
    return None


class HttpCustomerService(CustomerService):
    """
    Customer service backed by the REST customer endpoint.

    The aiohttp session is created lazily on first use, on the event loop
    that runs the lookup, unless one is injected.

    Attributes:
        base_url: Backend base URL without trailing slash.
        timeout: Total timeout applied to each request.
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 10.0,
        session: aiohttp.ClientSession | None = None,
    ) -> None:
        """
        Initialize the service.

        Args:
            base_url: Backend base URL, e.g. "http://localhost:8080/api".
            timeout: Total request timeout in seconds.
            session: Optional caller-owned session. Not closed by close().
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = aiohttp.ClientTimeout(total=timeout)
        self._session = session
        self._owns_session = session is None

    def customer_url(self, customer_number: int) -> str:
        return f"{self.base_url}/customers/{customer_number}"

    async def fetch_customer(self, customer_number: int) -> Customer:
        """Fetch one customer. See the module docstring for the error mapping."""
        url = self.customer_url(customer_number)
        LOG.info("GET %s", url)
        session = self._get_session()
        try:
            async with session.get(url, headers=_HEADERS, timeout=self.timeout) as resp:
                status = resp.status
                raw = await resp.read()
                charset = resp.charset or "utf-8"
        except asyncio.TimeoutError as exc:
            LOG.warning("Customer request timed out: %s", url)
            raise NetworkError() from exc
        except aiohttp.ClientError as exc:
            LOG.warning("Customer request failed: %s (%s)", url, exc)
            raise NetworkError() from exc

        return self._handle_response(status, self._decode(raw, charset), customer_number)

    async def close(self) -> None:
        """Close the session if this service created it."""
        if self._session is not None and self._owns_session:
            await self._session.close()
        self._session = None

    def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(timeout=self.timeout)
            self._owns_session = True
        return self._session

    def _handle_response(self, status: int, body: Any, customer_number: int) -> Customer:
        if 200 <= status < 300:
            if body is None:
                LOG.warning("Undecodable body for customer %s", customer_number)
                raise NetworkError()
            try:
                return parse_customer(body)
            except CustomerPayloadError as exc:
                LOG.warning("Invalid customer payload for %s: %s", customer_number, exc)
                raise NetworkError() from exc

        message = _error_message(body)
        if status == 404:
            LOG.info("Customer not found: %s", customer_number)
            raise NotFoundError(message)
        if status == 400:
            LOG.warning("Customer number rejected by backend: %s", customer_number)
            raise ValidationError(message)

        LOG.warning(
            "Unexpected status %s for customer %s: %s", status, customer_number, message
        )
        raise NetworkError()

    @staticmethod
    def _decode(raw: bytes, charset: str) -> Any:
        """Return the decoded JSON body, or None if it is empty or undecodable."""
        try:
            text = raw.decode(charset)
        except (UnicodeDecodeError, LookupError):
            return None
        if not text.strip():
            return None
        try:
            return json.loads(text)
        except ValueError:
            return None
