from flask import Blueprint, current_app, jsonify, request, session

from ..errors import NotFoundError, ValidationError
from ..forms import request_json
from ..forms.checkout_forms import CheckoutForm
from ..models import Order
from ..services.datastore import Repository
from ..services.cart import Cart
from ..services.checkout import CheckoutService
from ..services.webhooks import WebhookReconciler

checkout_bp = Blueprint('checkout', __name__, url_prefix='/api/checkout')


def checkout_service():
    config = current_app.config
    return CheckoutService(
        gateway=current_app.extensions['payment_gateway'],
        site_url=config['SITE_URL'],
        currency=config['STORE_CURRENCY'],
        store_name=config['STORE_NAME'],
    )


@checkout_bp.route('', methods=['POST'])
def checkout():
    """
    Create an order from the submitted cart and open a hosted payment page.

    Checks run cart, customer, shipping, then line items; the first failure
    is returned and nothing is written.
    """
    payload = request_json()
    items = payload.get('items')
    if not isinstance(items, list) or not items:
        raise ValidationError('Cart is empty')

    form = CheckoutForm(data=payload)
    form.validate()
    if form.customer.errors:
        raise ValidationError('Missing customer information', details=form.customer.errors)
    if form.shipping.errors:
        raise ValidationError('Missing shipping address', details=form.shipping.errors)
    if form.items.errors:
        raise ValidationError('Invalid cart items', details=form.items.errors)
    if form.errors:
        raise ValidationError('Invalid request data', details=form.errors)

    result = checkout_service().place_order(
        items=form.items.data,
        customer=form.customer.data,
        shipping=form.shipping.data,
        customer_notes=form.customer_notes.data,
    )
    Cart(session).clear()
    return jsonify(result.to_dict())


@checkout_bp.route('/order', methods=['GET'])
def order_summary():
    """Public order lookup for the payment return page."""
    order_id = request.args.get('order', '').strip()
    if not order_id:
        raise ValidationError('Missing order id')
    order = Repository(Order).get(order_id)
    if order is None:
        raise NotFoundError('Order not found')
    return jsonify(order=order.to_summary())


@checkout_bp.route('/webhook', methods=['POST'])
def payment_webhook():
    payload = request.get_json(silent=True)
    current_app.logger.info('Payment webhook received: %s', payload)
    WebhookReconciler().handle(payload)
    return jsonify(success=True)


@checkout_bp.route('/webhook', methods=['GET'])
def payment_webhook_status():
    return jsonify(status='ok', message='SumUp webhook endpoint')
