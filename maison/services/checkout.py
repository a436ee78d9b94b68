"""
Checkout: persist the order and its line items, then open a hosted payment
checkout for it.

The writes are not one transaction. If the line items cannot be stored the
order is deleted again; if the gateway call fails the order stays pending
for manual follow-up.
"""
import logging
from decimal import Decimal

from ..errors import MaisonError, PersistenceError, ValidationError
from ..models import Order, OrderItem
from .datastore import Repository
from .payments import PaymentGatewayError, normalize_amount

logger = logging.getLogger(__name__)

SHIPPING_COST = Decimal('0')


class CheckoutResult:
    def __init__(self, order, checkout_url=None, message=None):
        self.order = order
        self.checkout_url = checkout_url
        self.message = message

    def to_dict(self):
        body = {
            'success': True,
            'order': {
                'id': self.order.id,
                'order_number': self.order.order_number,
                'total_amount': float(self.order.total_amount),
            },
        }
        if self.checkout_url:
            body['checkout_url'] = self.checkout_url
        if self.message:
            body['message'] = self.message
        return body


def compute_totals(items, shipping_cost=SHIPPING_COST, discount_amount=Decimal('0')):
    subtotal = sum((Decimal(str(item['unit_price'])) * item['quantity'] for item in items), Decimal('0'))
    total = subtotal + shipping_cost - discount_amount
    return subtotal, shipping_cost, discount_amount, total


class CheckoutService:
    def __init__(self, gateway, site_url, currency='EUR', store_name='Maison',
                 orders=None, order_items=None):
        self.gateway = gateway
        self.site_url = site_url.rstrip('/')
        self.currency = currency
        self.store_name = store_name
        self.orders = orders or Repository(Order)
        self.order_items = order_items or Repository(OrderItem)

    def place_order(self, items, customer, shipping, customer_notes=None):
        """``items``/``customer``/``shipping`` are validated dicts, see ``CheckoutForm``."""
        if not items:
            raise ValidationError('Cart is empty')

        subtotal, shipping_cost, discount_amount, total = compute_totals(items)
        if self.gateway.is_configured:
            normalize_amount(total)

        order = self.orders.insert(
            customer_first_name=customer['first_name'],
            customer_last_name=customer['last_name'],
            customer_email=customer['email'],
            customer_phone=customer.get('phone') or None,
            shipping_address=shipping['address'],
            shipping_city=shipping['city'],
            shipping_postal_code=shipping.get('postal_code') or None,
            shipping_country=shipping['country'],
            subtotal=subtotal,
            shipping_cost=shipping_cost,
            discount_amount=discount_amount,
            total_amount=total,
            currency=self.currency,
            payment_method='sumup',
            payment_status='pending',
            status='new',
            customer_notes=customer_notes or None,
        )
        logger.info('Order %s created (total %s %s)', order.order_number, total, self.currency)

        self._add_items(order, items)

        if not self.gateway.is_configured:
            logger.warning('Payment gateway not configured, order %s left without payment link',
                           order.order_number)
            return CheckoutResult(order, message='Order created (payment not configured)')

        try:
            session = self.gateway.create_checkout(
                reference=order.order_number,
                amount=total,
                currency=self.currency,
                description=f'{self.store_name} order #{order.order_number}',
                return_url=f'{self.site_url}/checkout/success?order={order.id}',
            )
        except PaymentGatewayError as e:
            logger.error('Checkout for order %s failed at the gateway: %s', order.order_number, e.message)
            e.extra['order'] = {'id': order.id, 'order_number': order.order_number}
            raise

        self.orders.update(order, sumup_checkout_id=session.checkout_id)
        return CheckoutResult(order, checkout_url=session.checkout_url)

    def _add_items(self, order, items):
        rows = []
        for item in items:
            unit_price = Decimal(str(item['unit_price']))
            rows.append({
                'order_id': order.id,
                'product_id': item['product_id'],
                'product_name_en': item['product_name_en'],
                'product_name_fr': item.get('product_name_fr') or item['product_name_en'],
                'product_sku': item.get('product_sku') or None,
                'product_image_url': item.get('product_image_url') or None,
                'quantity': item['quantity'],
                'unit_price': unit_price,
                'total_price': unit_price * item['quantity'],
                'size': item.get('size') or None,
                'color': item.get('color') or None,
            })
        try:
            self.order_items.insert_many(rows)
        except MaisonError:
            logger.error('Line items for order %s failed, removing the order', order.order_number)
            self.orders.delete(order)
            raise PersistenceError('Failed to add order items')
