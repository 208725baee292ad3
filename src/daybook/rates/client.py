"""HTTP client for the exchange rate service."""

import logging
import math
import os

import httpx

from daybook.domain.errors import RateFetchError, rate_unavailable

logger = logging.getLogger(__name__)

DEFAULT_API_URL = "https://api.frankfurter.app"
API_URL_ENV = "DAYBOOK_RATE_API"
API_TIMEOUT = 10.0


class RateClient:
    """Fetches latest exchange rates from a frankfurter-compatible API.

    The service answers ``GET /latest?from=CAD&to=IDR`` with JSON of the
    form ``{"rates": {"IDR": 11800.5}, ...}``.
    """

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float = API_TIMEOUT,
        transport: httpx.BaseTransport | None = None,
    ):
        """Initialize the client.

        Args:
            base_url: Service root; defaults to DAYBOOK_RATE_API or frankfurter
            timeout: Seconds before a request is abandoned
            transport: Optional httpx transport, used to stub the service
        """
        self.base_url = (base_url or os.environ.get(API_URL_ENV) or DEFAULT_API_URL).rstrip("/")
        self.timeout = timeout
        self.transport = transport

    def fetch_rate(self, from_currency: str, to_currency: str) -> float:
        """Return how many units of to_currency one from_currency buys.

        Raises:
            RateFetchError: On network errors, non-200 answers, undecodable
                JSON or a response without the requested rate
        """
        url = f"{self.base_url}/latest"
        params = {"from": from_currency, "to": to_currency}
        try:
            with httpx.Client(timeout=self.timeout, transport=self.transport) as client:
                response = client.get(url, params=params)
        except httpx.HTTPError as e:
            raise RateFetchError(rate_unavailable(from_currency, to_currency, str(e))) from e

        if response.status_code != 200:
            raise RateFetchError(
                rate_unavailable(from_currency, to_currency, f"API returned status {response.status_code}")
            )

        try:
            data = response.json()
        except ValueError as e:
            raise RateFetchError(
                rate_unavailable(from_currency, to_currency, "failed to decode response")
            ) from e

        rates = data.get("rates") if isinstance(data, dict) else None
        rate = rates.get(to_currency) if isinstance(rates, dict) else None
        if isinstance(rate, bool) or not isinstance(rate, (int, float)):
            raise RateFetchError(
                rate_unavailable(from_currency, to_currency, f"rate for {to_currency} not found in response")
            )
        try:
            value = float(rate)
        except OverflowError:
            value = math.inf
        if not math.isfinite(value) or value <= 0:
            raise RateFetchError(
                rate_unavailable(from_currency, to_currency, f"invalid rate {rate!r} in response")
            )

        logger.debug("Fetched rate 1 %s = %s %s", from_currency, value, to_currency)
        return value

    def fetch_cad_to_idr(self) -> float:
        return self.fetch_rate("CAD", "IDR")
