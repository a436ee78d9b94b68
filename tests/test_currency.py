from decimal import Decimal
from unittest.mock import MagicMock, patch

import pytest
import requests

from maison.errors import UpstreamError, ValidationError
from maison.extensions import db
from maison.models import CurrencyRate
from maison.services.currency import CurrencyService, parse_rate


def _response(payload):
    response = MagicMock()
    response.json.return_value = payload
    response.raise_for_status.return_value = None
    return response


@pytest.fixture
def rates(app):
    with app.app_context():
        db.session.add_all([
            CurrencyRate(currency_code='EUR', rate=Decimal('1'), symbol='€'),
            CurrencyRate(currency_code='USD', rate=Decimal('1.05'), symbol='$'),
        ])
        db.session.commit()
        return {r.currency_code: r.id for r in CurrencyRate.query.all()}


def _stored(app):
    with app.app_context():
        return {r.currency_code: r.rate for r in CurrencyRate.query.all()}


@pytest.mark.parametrize('value', [0, -1, 'abc', None, 'NaN', 'Infinity'])
def test_parse_rate_rejects(value):
    with pytest.raises(ValidationError):
        parse_rate(value)


def test_parse_rate():
    assert parse_rate('10.8') == Decimal('10.8')


def test_get_reports_base_as_one(app, client, auth_headers, rates):
    with app.app_context():
        CurrencyRate.query.filter_by(currency_code='EUR').update({'rate': Decimal('3')})
        db.session.commit()

    body = client.get('/api/admin/currency', headers=auth_headers).get_json()

    by_code = {c['currency_code']: c['rate'] for c in body['currencies']}
    assert by_code == {'EUR': 1.0, 'USD': 1.05}


@patch('maison.services.currency.requests.get')
def test_sync_updates_tracked_and_pins_base(mock_get, app, client, auth_headers, rates):
    mock_get.return_value = _response({'date': '2026-10-19', 'rates': {'USD': 1.09, 'MAD': 10.85, 'EUR': 2}})

    response = client.post('/api/admin/currency/sync', headers=auth_headers)

    assert response.status_code == 200
    body = response.get_json()
    assert body['date'] == '2026-10-19'
    assert body['source'] == 'https://api.exchangerate-api.com/v4/latest/EUR'
    mock_get.assert_called_once_with('https://api.exchangerate-api.com/v4/latest/EUR', timeout=15)
    stored = _stored(app)
    assert stored['USD'] == Decimal('1.09')
    # missing tracked rows are created
    assert stored['MAD'] == Decimal('10.85')
    assert stored['EUR'] == Decimal('1')


@patch('maison.services.currency.requests.get')
def test_sync_failure_writes_nothing(mock_get, app, client, auth_headers, rates):
    mock_get.side_effect = requests.exceptions.ConnectionError('down')

    response = client.post('/api/admin/currency/sync', headers=auth_headers)

    assert response.status_code == 500
    assert response.get_json()['error'] == 'Failed to sync exchange rates. Please try again later.'
    assert _stored(app) == {'EUR': Decimal('1'), 'USD': Decimal('1.05')}


@patch('maison.services.currency.requests.get')
def test_sync_skips_invalid_source_rates(mock_get, app_ctx, rates):
    mock_get.return_value = _response({'rates': {'USD': -3, 'MAD': 'n/a'}})

    CurrencyService(tracked=['USD', 'MAD'], api_url='http://fx.test').sync()

    assert CurrencyRate.query.filter_by(currency_code='USD').one().rate == Decimal('1.05')
    assert CurrencyRate.query.filter_by(currency_code='MAD').first() is None


@patch('maison.services.currency.requests.get')
def test_fetch_rejects_unexpected_payload(mock_get, app_ctx):
    mock_get.return_value = _response(['nope'])
    with pytest.raises(UpstreamError):
        CurrencyService(api_url='http://fx.test').fetch_rates()


def test_manual_update(app, client, auth_headers, rates):
    response = client.put('/api/admin/currency', headers=auth_headers, json={'currencies': [
        {'id': rates['USD'], 'rate': 1.2},
        {'currency_code': 'eur', 'rate': 5},
    ]})

    assert response.status_code == 200
    assert _stored(app) == {'EUR': Decimal('1'), 'USD': Decimal('1.2')}


@pytest.mark.parametrize('entry', [
    {'currency_code': 'USD', 'rate': 0},
    {'currency_code': 'USD', 'rate': 'NaN'},
    {'currency_code': 'XXX', 'rate': 2},
])
def test_manual_update_rejects(app, client, auth_headers, rates, entry):
    response = client.put('/api/admin/currency', headers=auth_headers, json={'currencies': [entry]})

    assert response.status_code == 400
    assert _stored(app)['USD'] == Decimal('1.05')


def test_manual_update_requires_a_list(client, auth_headers):
    response = client.put('/api/admin/currency', headers=auth_headers, json={'currencies': 'USD'})
    assert response.status_code == 400


def test_seed_creates_missing_rows(app_ctx):
    created = CurrencyService(tracked=['USD', 'MAD']).seed()

    assert created == ['USD', 'MAD']
    assert CurrencyRate.query.filter_by(currency_code='EUR').one().rate == Decimal('1')
    assert CurrencyService(tracked=['USD', 'MAD']).seed() == []
