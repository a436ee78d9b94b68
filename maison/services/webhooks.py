"""
Payment status reconciliation from SumUp webhook calls.

The gateway retries on any non-2xx answer, so applying an event twice must
leave the order as applying it once does.
"""
import logging

from ..errors import NotFoundError, ValidationError
from ..models import Order
from ..models.base import utcnow
from .datastore import Repository

logger = logging.getLogger(__name__)

EVENT_PAYMENT_STATUS = {
    'CHECKOUT_COMPLETED': 'paid',
    'CHECKOUT_FAILED': 'failed',
    'CHECKOUT_REFUNDED': 'refunded',
}

STATUS_PAYMENT_STATUS = {
    'PAID': 'paid',
    'FAILED': 'failed',
    'REFUNDED': 'refunded',
}


def map_payment_status(event_type=None, status=None):
    """Internal payment status for a webhook event, or None to leave it unchanged."""
    if event_type and str(event_type).upper() in EVENT_PAYMENT_STATUS:
        return EVENT_PAYMENT_STATUS[str(event_type).upper()]
    if status and str(status).upper() in STATUS_PAYMENT_STATUS:
        return STATUS_PAYMENT_STATUS[str(status).upper()]
    return None


class WebhookReconciler:
    def __init__(self, orders=None):
        self.orders = orders or Repository(Order)

    def handle(self, payload):
        if not isinstance(payload, dict):
            raise ValidationError('Malformed webhook payload')

        reference = payload.get('checkout_reference')
        if not reference:
            raise ValidationError('Missing checkout reference')

        order = self.orders.find_one(order_number=str(reference))
        if order is None:
            logger.error('Order not found for checkout_reference: %s', reference)
            raise NotFoundError('Order not found')

        changes = {}
        payment_status = map_payment_status(payload.get('event_type'), payload.get('status'))
        if payment_status and payment_status != order.payment_status:
            changes['payment_status'] = payment_status
        if payment_status == 'paid' and order.paid_at is None:
            changes['paid_at'] = utcnow()

        transaction_id = payload.get('transaction_id')
        if transaction_id and transaction_id != order.sumup_transaction_id:
            changes['sumup_transaction_id'] = str(transaction_id)

        if changes:
            self.orders.update(order, **changes)
            logger.info('Order %s payment status now %s', reference, order.payment_status)
        else:
            logger.info('Webhook for order %s changed nothing', reference)
        return order
