"""
Exchange rates relative to the base currency.

Whatever is written, the base currency's own stored rate is put back to 1.0.
"""
import logging
from decimal import Decimal, InvalidOperation

import requests

from ..errors import UpstreamError, ValidationError
from ..models import CurrencyRate
from ..models.base import utcnow
from .datastore import Repository

logger = logging.getLogger(__name__)

CURRENCY_SYMBOLS = {'EUR': '€', 'USD': '$', 'MAD': 'DH', 'GBP': '£'}


def parse_rate(value):
    try:
        rate = Decimal(str(value))
    except (InvalidOperation, ValueError, TypeError):
        raise ValidationError(f'Invalid exchange rate: {value!r}')
    if not rate.is_finite() or rate <= 0:
        raise ValidationError(f'Invalid exchange rate: {value!r}')
    return rate


class CurrencyService:
    def __init__(self, base_currency='EUR', tracked=('USD', 'MAD'), api_url=None, timeout=15, rates=None):
        self.base_currency = base_currency
        self.tracked = [code for code in tracked if code != base_currency]
        self.api_url = api_url
        self.timeout = timeout
        self.rates = rates or Repository(CurrencyRate)

    @classmethod
    def from_config(cls, config):
        return cls(
            base_currency=config['BASE_CURRENCY'],
            tracked=config['TRACKED_CURRENCIES'],
            api_url=config['EXCHANGE_RATE_API_URL'],
            timeout=config['EXCHANGE_RATE_TIMEOUT'],
        )

    def list_rates(self):
        return self.rates.select(order_by=CurrencyRate.currency_code.asc())

    def serialize(self, rates):
        return [rate.to_dict(base_currency=self.base_currency) for rate in rates]

    def update_rates(self, entries):
        """Write operator supplied rates, ``entries`` being ``[{id|currency_code, rate}]``."""
        pending = []
        for entry in entries:
            if not isinstance(entry, dict):
                raise ValidationError('Each currency entry must be an object')
            row = None
            if entry.get('id'):
                row = self.rates.get(entry['id'])
            elif entry.get('currency_code'):
                row = self.rates.find_one(currency_code=str(entry['currency_code']).upper())
            if row is None:
                raise ValidationError(f'Unknown currency: {entry.get("id") or entry.get("currency_code")}')
            if row.currency_code == self.base_currency:
                continue
            pending.append((row, parse_rate(entry.get('rate'))))

        now = utcnow()
        for row, rate in pending:
            self.rates.update(row, commit=False, rate=rate, updated_at=now)
        self.pin_base_rate(now)
        return self.list_rates()

    def pin_base_rate(self, now=None):
        base = self.rates.find_one(currency_code=self.base_currency)
        now = now or utcnow()
        if base is None:
            self.rates.insert(currency_code=self.base_currency, rate=Decimal('1'),
                              symbol=CURRENCY_SYMBOLS.get(self.base_currency, ''), updated_at=now)
        else:
            self.rates.update(base, rate=Decimal('1'), updated_at=now)

    def fetch_rates(self):
        try:
            response = requests.get(self.api_url, timeout=self.timeout)
            response.raise_for_status()
            data = response.json()
        except (requests.exceptions.RequestException, ValueError) as e:
            logger.error('Exchange rate fetch from %s failed: %s', self.api_url, e)
            raise UpstreamError('Failed to sync exchange rates. Please try again later.') from e
        if not isinstance(data, dict) or not isinstance(data.get('rates'), dict):
            raise UpstreamError('Exchange rate source returned an unexpected payload')
        return data

    def sync(self):
        data = self.fetch_rates()
        now = utcnow()
        for code in self.tracked:
            value = data['rates'].get(code)
            if value is None:
                logger.warning('Exchange rate source has no rate for %s', code)
                continue
            try:
                rate = parse_rate(value)
            except ValidationError:
                logger.warning('Ignoring invalid %s rate from source: %r', code, value)
                continue
            row = self.rates.find_one(currency_code=code)
            if row is None:
                self.rates.insert(commit=False, currency_code=code, rate=rate,
                                  symbol=CURRENCY_SYMBOLS.get(code, code), updated_at=now)
            else:
                self.rates.update(row, commit=False, rate=rate, updated_at=now)
        self.pin_base_rate(now)
        logger.info('Exchange rates synced (as of %s)', data.get('date'))
        return self.list_rates(), data.get('date')

    def seed(self):
        """Create any missing tracked rows at rate 1; returns the codes created."""
        created = []
        now = utcnow()
        for code in self.tracked:
            if self.rates.find_one(currency_code=code) is None:
                self.rates.insert(commit=False, currency_code=code, rate=Decimal('1'),
                                  symbol=CURRENCY_SYMBOLS.get(code, code), updated_at=now)
                created.append(code)
        self.pin_base_rate(now)
        return created
