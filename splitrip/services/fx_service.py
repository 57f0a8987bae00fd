"""
Foreign exchange service for currency conversion.

Expenses are normalized into the settlement currency when they are recorded.
When no rate can be obtained the expense is still recorded, keeping the
original amount and marking it ``unconverted`` (fail-open).
"""
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation, ROUND_HALF_EVEN
from typing import Optional
import logging

import httpx

from splitrip.core.config import Settings
from splitrip.core.exceptions import ConversionUnavailable, ValidationError
from splitrip.models.expense import ConversionStatus

logger = logging.getLogger(__name__)

SETTLEMENT_QUANTUM = Decimal("0.0001")


@dataclass(frozen=True)
class NormalizedAmount:
    """Result of normalizing an amount into the settlement currency."""
    amount_settlement: Decimal
    rate: Optional[Decimal]
    status: ConversionStatus

    @property
    def converted(self) -> bool:
        return self.status != ConversionStatus.UNCONVERTED


def clean_currency(currency: str) -> str:
    """Validate and upper-case a three-letter currency code."""
    code = (currency or "").strip().upper()
    if len(code) != 3 or not code.isalpha():
        raise ValidationError(f"Invalid currency code: {currency!r}")
    return code


class ExchangeRateClient:
    """
    Client for ExchangeRate-API style endpoints.

    ``GET {FX_API_URL}/{currency}`` returns either ``{"rates": {...}}`` (v4) or
    ``{"result": "success", "conversion_rates": {...}}`` (v6), where each value
    is how many units of that currency one unit of ``currency`` buys.
    """

    def __init__(self, settings: Settings, http_client: Optional[httpx.Client] = None):
        self.base_url = settings.FX_API_URL.rstrip("/")
        self.timeout = settings.FX_TIMEOUT_SECONDS
        self.debug = settings.DEBUG
        self._client = http_client

    def _get(self, url: str) -> httpx.Response:
        if self._client is not None:
            return self._client.get(url, timeout=self.timeout)
        return httpx.get(url, timeout=self.timeout)

    def get_rate(self, from_currency: str, to_currency: str) -> Decimal:
        """
        Fetch the rate to convert one unit of ``from_currency`` into ``to_currency``.

        Raises:
            ConversionUnavailable: provider unreachable, timed out, non-2xx,
                or the rate is missing or invalid in the response.
        """
        from_upper = from_currency.upper()
        to_upper = to_currency.upper()
        if from_upper == to_upper:
            return Decimal("1")

        api_url = f"{self.base_url}/{from_upper}"
        logger.info(f"Fetching exchange rate {from_upper} -> {to_upper}")

        try:
            response = self._get(api_url)
            response.raise_for_status()
            data = response.json()
        except httpx.TimeoutException as e:
            logger.error(f"Exchange rate request timed out after {self.timeout}s: {e}")
            raise ConversionUnavailable(f"Exchange rate lookup for {from_upper} timed out") from e
        except httpx.HTTPStatusError as e:
            logger.error(f"HTTP error from exchange rate provider: {e.response.status_code}")
            raise ConversionUnavailable(
                f"Exchange rate provider returned HTTP {e.response.status_code}"
            ) from e
        except httpx.HTTPError as e:
            logger.error(f"Network error with exchange rate provider: {e}")
            raise ConversionUnavailable("Exchange rate provider unreachable") from e
        except ValueError as e:
            logger.error(f"Exchange rate provider returned a non-JSON body: {e}")
            raise ConversionUnavailable("Exchange rate provider returned an invalid response") from e

        if self.debug:
            logger.debug(f"Exchange rate response: {data}")

        if not isinstance(data, dict):
            raise ConversionUnavailable("Exchange rate provider returned an invalid response")

        if data.get("result") == "error":
            error_type = data.get("error-type", "unknown")
            logger.error(f"Exchange rate provider returned error: {error_type}")
            raise ConversionUnavailable(f"Exchange rate provider error: {error_type}")

        rates = data.get("rates") or data.get("conversion_rates") or {}
        raw_rate = rates.get(to_upper)
        if raw_rate is None:
            logger.error(f"{to_upper} not found in rates for {from_upper}")
            raise ConversionUnavailable(f"No {from_upper} -> {to_upper} rate available")

        try:
            rate = Decimal(str(raw_rate))
        except InvalidOperation as e:
            raise ConversionUnavailable(f"Invalid exchange rate: {raw_rate!r}") from e
        if not rate.is_finite() or rate <= 0:
            logger.error(f"Invalid rate: {rate}")
            raise ConversionUnavailable(f"Invalid exchange rate: {rate}")

        logger.info(f"Fetched rate: 1 {from_upper} = {rate} {to_upper}")
        return rate


def normalize(
    amount: Decimal,
    currency: str,
    settlement_currency: str,
    client: ExchangeRateClient
) -> NormalizedAmount:
    """
    Convert ``amount`` in ``currency`` into the settlement currency.

    Same currency returns the amount unchanged without touching the network.
    If the rate lookup fails the original amount is returned unconverted.
    """
    if amount is None or amount <= 0:
        raise ValidationError("Amount must be greater than zero")
    currency_upper = clean_currency(currency)
    settlement_upper = settlement_currency.upper()

    if currency_upper == settlement_upper:
        return NormalizedAmount(amount, None, ConversionStatus.IDENTITY)

    try:
        rate = client.get_rate(currency_upper, settlement_upper)
    except ConversionUnavailable as e:
        logger.warning(
            f"Recording {amount} {currency_upper} unconverted, rate lookup failed: {e.message}"
        )
        return NormalizedAmount(amount, None, ConversionStatus.UNCONVERTED)

    converted = (Decimal(amount) * rate).quantize(SETTLEMENT_QUANTUM, rounding=ROUND_HALF_EVEN)
    return NormalizedAmount(converted, rate, ConversionStatus.CONVERTED)
