"""
SumUp hosted-checkout client.

Docs: https://developer.sumup.com/api/checkouts
"""
import logging
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

import requests

from ..errors import UpstreamError, ValidationError

logger = logging.getLogger(__name__)

PAY_LINK_PATTERN = 'https://pay.sumup.com/b2c/Q{checkout_id}'

# Actionable messages for the statuses merchants actually hit
GATEWAY_ERROR_MESSAGES = {
    400: 'Payment request rejected: invalid checkout parameters',
    401: 'Payment gateway credentials are invalid or misconfigured',
    403: 'Merchant account is not enabled for online payments',
}


class PaymentGatewayError(UpstreamError):
    default_message = 'Failed to create payment checkout'

    def __init__(self, message=None, status_code=None, body=None):
        details = None
        if status_code is not None:
            details = {'gateway_status': status_code, 'gateway_response': body}
        super().__init__(message, details=details)
        self.gateway_status = status_code


class CheckoutSession:
    def __init__(self, checkout_id, checkout_url, raw=None):
        self.checkout_id = checkout_id
        self.checkout_url = checkout_url
        self.raw = raw or {}


def normalize_amount(amount):
    """Round to cents; the gateway refuses anything that is not a positive finite amount."""
    try:
        value = Decimal(str(amount))
    except (InvalidOperation, ValueError, TypeError):
        raise ValidationError('Invalid payment amount')
    if not value.is_finite() or value <= 0:
        raise ValidationError('Payment amount must be a positive number')
    return value.quantize(Decimal('0.01'), rounding=ROUND_HALF_UP)


class SumUpGateway:
    def __init__(self, api_key=None, merchant_code=None, api_url='https://api.sumup.com/v0.1', timeout=15):
        self.api_key = api_key
        self.merchant_code = merchant_code
        self.api_url = api_url.rstrip('/')
        self.timeout = timeout

    @classmethod
    def from_config(cls, config):
        return cls(
            api_key=config.get('SUMUP_API_KEY'),
            merchant_code=config.get('SUMUP_MERCHANT_CODE'),
            api_url=config.get('SUMUP_API_URL', 'https://api.sumup.com/v0.1'),
            timeout=config.get('PAYMENT_TIMEOUT', 15),
        )

    @property
    def is_configured(self):
        return bool(self.api_key and self.merchant_code)

    def create_checkout(self, reference, amount, currency, description, return_url):
        amount = normalize_amount(amount)
        payload = {
            'checkout_reference': reference,
            'amount': float(amount),
            'currency': currency,
            'merchant_code': self.merchant_code,
            'description': description,
            'return_url': return_url,
            'redirect_url': return_url,
            'hosted_checkout': {'enabled': True},
        }
        headers = {
            'Authorization': f'Bearer {self.api_key}',
            'Content-Type': 'application/json',
        }
        logger.info('Creating SumUp checkout for %s (%s %s)', reference, amount, currency)
        try:
            response = requests.post(
                f'{self.api_url}/checkouts', json=payload, headers=headers, timeout=self.timeout
            )
        except requests.exceptions.Timeout as e:
            raise PaymentGatewayError('Payment gateway timed out') from e
        except requests.exceptions.RequestException as e:
            raise PaymentGatewayError('Payment gateway unreachable') from e

        if not response.ok:
            body = _json_or_text(response)
            logger.error('SumUp checkout error %s for %s: %s', response.status_code, reference, body)
            message = GATEWAY_ERROR_MESSAGES.get(response.status_code, PaymentGatewayError.default_message)
            raise PaymentGatewayError(message, status_code=response.status_code, body=body)

        data = _json_or_text(response)
        checkout_id = data.get('id') if isinstance(data, dict) else None
        if not checkout_id:
            raise PaymentGatewayError('Payment gateway returned no checkout id', status_code=response.status_code,
                                      body=data)
        checkout_url = data.get('hosted_checkout_url') or PAY_LINK_PATTERN.format(checkout_id=checkout_id)
        return CheckoutSession(checkout_id, checkout_url, raw=data)


def _json_or_text(response):
    try:
        return response.json()
    except ValueError:
        return response.text
