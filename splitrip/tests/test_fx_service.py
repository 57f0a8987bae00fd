"""
Tests for currency normalization and the exchange-rate client.
"""
from decimal import Decimal

import httpx
import pytest

from splitrip.core.exceptions import ConversionUnavailable, ValidationError
from splitrip.models.expense import ConversionStatus
from splitrip.services.fx_service import ExchangeRateClient, clean_currency, normalize


def client_for(settings, handler) -> ExchangeRateClient:
    return ExchangeRateClient(settings, http_client=httpx.Client(transport=httpx.MockTransport(handler)))


@pytest.mark.parametrize("amount", [Decimal("0.01"), Decimal("100"), Decimal("123456.789")])
def test_settlement_currency_is_identity(settings, rate_client, rate_provider, amount):
    result = normalize(amount, "brl", settings.SETTLEMENT_CURRENCY, rate_client)
    assert result.amount_settlement == amount
    assert result.status == ConversionStatus.IDENTITY
    assert result.rate is None
    assert rate_provider.calls == []


def test_foreign_currency_is_converted(settings, rate_client):
    result = normalize(Decimal("100.00"), "USD", settings.SETTLEMENT_CURRENCY, rate_client)
    assert result.amount_settlement == Decimal("500.0000")
    assert result.rate == Decimal("5.0")
    assert result.status == ConversionStatus.CONVERTED
    assert result.converted


def test_conversion_keeps_sub_cent_precision(settings, rate_provider, rate_client):
    rate_provider.rates["USD"]["BRL"] = 5.12345
    result = normalize(Decimal("3.33"), "USD", settings.SETTLEMENT_CURRENCY, rate_client)
    assert result.amount_settlement == Decimal("17.0611")


def test_provider_down_records_amount_unconverted(settings, rate_provider, rate_client):
    rate_provider.down = True
    result = normalize(Decimal("100.00"), "USD", settings.SETTLEMENT_CURRENCY, rate_client)
    assert result.amount_settlement == Decimal("100.00")
    assert result.status == ConversionStatus.UNCONVERTED
    assert result.rate is None
    assert not result.converted


def test_timeout_records_amount_unconverted(settings):
    def handler(request):
        raise httpx.ReadTimeout("timed out", request=request)

    result = normalize(Decimal("42"), "USD", "BRL", client_for(settings, handler))
    assert result.amount_settlement == Decimal("42")
    assert result.status == ConversionStatus.UNCONVERTED


def test_missing_rate_raises(settings, rate_client):
    with pytest.raises(ConversionUnavailable):
        rate_client.get_rate("EUR", "JPY")


def test_unsupported_currency_raises(settings, rate_client):
    with pytest.raises(ConversionUnavailable):
        rate_client.get_rate("XYZ", "BRL")


def test_v6_response_shape(settings):
    def handler(request):
        return httpx.Response(200, json={"result": "success", "conversion_rates": {"BRL": 5.25}})

    assert client_for(settings, handler).get_rate("USD", "BRL") == Decimal("5.25")


def test_v6_error_result_raises(settings):
    def handler(request):
        return httpx.Response(200, json={"result": "error", "error-type": "invalid-key"})

    with pytest.raises(ConversionUnavailable):
        client_for(settings, handler).get_rate("USD", "BRL")


@pytest.mark.parametrize("bad_rate", [0, -1.5, "abc"])
def test_invalid_rate_raises(settings, bad_rate):
    def handler(request):
        return httpx.Response(200, json={"rates": {"BRL": bad_rate}})

    with pytest.raises(ConversionUnavailable):
        client_for(settings, handler).get_rate("USD", "BRL")


def test_non_json_body_raises(settings):
    def handler(request):
        return httpx.Response(200, text="<html>maintenance</html>")

    with pytest.raises(ConversionUnavailable):
        client_for(settings, handler).get_rate("USD", "BRL")


@pytest.mark.parametrize("amount", [Decimal("0"), Decimal("-5")])
def test_non_positive_amount_rejected(settings, rate_client, amount):
    with pytest.raises(ValidationError):
        normalize(amount, "BRL", settings.SETTLEMENT_CURRENCY, rate_client)


@pytest.mark.parametrize("currency", ["", "US", "USDT", "12A"])
def test_invalid_currency_rejected(currency):
    with pytest.raises(ValidationError):
        clean_currency(currency)
