# nosec B101


import asyncio
from datetime import timedelta

import pytest
from fastapi.testclient import TestClient

from api.dependencies import get_rate_service
from api.main import app
from application.services.rate_service import RateService
from domain.exceptions.currency import DecodingFailureError, NetworkFailureError
from domain.models.currency import RateTableEntry


@pytest.fixture
def rate_service(store, primary, fallback, clock):
    store.rate_entries['eur'] = RateTableEntry(
        base_currency='eur', rates={'usd': 1.1}, captured_at=clock.now
    )
    return RateService(store, primary, fallback, clock=clock)


@pytest.fixture
def client(rate_service):
    app.dependency_overrides[get_rate_service] = lambda: rate_service
    client = TestClient(app)
    yield client
    app.dependency_overrides.clear()


def test_convert_currency_success(client):
    response = client.get('/api/convert/eur/usd/50')

    assert response.status_code == 200
    data = response.json()
    assert data['from_currency'] == 'EUR'
    assert data['to_currency'] == 'USD'
    assert data['original_amount'] == 50
    assert data['converted_amount'] == pytest.approx(55.0)


def test_convert_same_currency(client, primary):
    response = client.get('/api/convert/USD/USD/12.5')

    assert response.status_code == 200
    assert response.json()['converted_amount'] == 12.5
    primary.fetch_rate_table.assert_not_called()


def test_convert_unknown_target_returns_404(client):
    response = client.get('/api/convert/EUR/XYZ/10')

    assert response.status_code == 404


def test_convert_invalid_code_returns_400(client):
    response = client.get('/api/convert/U5D/EUR/10')

    assert response.status_code == 400


def test_rate_all_sources_down_returns_503(client, primary, fallback):
    primary.fetch_rate_table.side_effect = NetworkFailureError('primary down')
    fallback.fetch_rate_table.side_effect = NetworkFailureError('fallback down')

    response = client.get('/api/rate/GBP/USD')

    assert response.status_code == 503
    assert response.json()['detail'] == 'Exchange rate service unavailable'


def test_rate_returns_cached_value(client):
    response = client.get('/api/rate/EUR/USD')

    assert response.status_code == 200
    assert response.json() == {'from_currency': 'EUR', 'to_currency': 'USD', 'rate': 1.1}


def test_rate_table(client, clock):
    response = client.get('/api/rates/eur')

    assert response.status_code == 200
    data = response.json()
    assert data['base_currency'] == 'EUR'
    assert data['rates'] == {'usd': 1.1}


def test_currencies_from_source(client, primary):
    primary.fetch_currency_codes.return_value = ['usd', 'eur']

    response = client.get('/api/currencies')

    assert response.status_code == 200
    assert response.json() == {'currencies': ['EUR', 'USD'], 'fallback': False}


def test_currencies_fall_back_to_builtin_list(client, primary):
    primary.fetch_currency_codes.side_effect = DecodingFailureError('not an object')

    response = client.get('/api/currencies')

    assert response.status_code == 200
    data = response.json()
    assert data['fallback'] is True
    assert 'USD' in data['currencies']


def test_total_success(client):
    response = client.post(
        '/api/totals',
        json={
            'target_currency': 'usd',
            'items': [
                {'amount': 100, 'currency': 'USD', 'sign': 1},
                {'amount': 50, 'currency': 'EUR', 'sign': -1},
            ],
        },
    )

    assert response.status_code == 200
    data = response.json()
    assert data['ok'] is True
    assert data['target_currency'] == 'USD'
    assert data['total'] == pytest.approx(45.0)


def test_total_of_no_items_is_zero(client):
    response = client.post('/api/totals', json={'target_currency': 'USD', 'items': []})

    assert response.status_code == 200
    assert response.json()['total'] == 0


def test_total_failure_has_no_numeric_total(client):
    response = client.post(
        '/api/totals',
        json={
            'target_currency': 'JPY',
            'items': [{'amount': 10, 'currency': 'EUR'}],
        },
    )

    assert response.status_code == 503
    data = response.json()
    assert data['ok'] is False
    assert data['total'] is None
    assert data['detail'] == 'Could not convert all items'


def test_total_rejects_short_currency_code(client):
    response = client.post(
        '/api/totals', json={'target_currency': 'US', 'items': []}
    )

    assert response.status_code == 422


@pytest.mark.parametrize('field', ['amount', 'sign'])
def test_total_rejects_non_finite_numbers(client, field):
    values = {'amount': '10', 'sign': '1'}
    values[field] = 'NaN'
    body = (
        '{"target_currency": "USD", "items": [{"amount": %s, "currency": "EUR", "sign": %s}]}'
        % (values['amount'], values['sign'])
    )

    response = client.post(
        '/api/totals', content=body, headers={'Content-Type': 'application/json'}
    )

    assert response.status_code == 422


def test_schema_examples_are_published(client):
    schemas = client.get('/openapi.json').json()['components']['schemas']

    assert schemas['TotalRequest']['example']['target_currency'] == 'USD'
    assert schemas['ConversionResponse']['example']['converted_amount'] == 85.50
