from decimal import Decimal

import pytest

from maison.errors import PersistenceError, ValidationError
from maison.extensions import db
from maison.models import Order, OrderItem
from maison.services.checkout import CheckoutService, compute_totals
from maison.services.datastore import Repository
from maison.services.payments import PaymentGatewayError

from conftest import FakeGateway


def _order_count(app):
    with app.app_context():
        return Order.query.count(), OrderItem.query.count()


def test_compute_totals():
    items = [{'unit_price': Decimal('100'), 'quantity': 2}, {'unit_price': Decimal('50'), 'quantity': 1}]
    subtotal, shipping, discount, total = compute_totals(items)
    assert subtotal == Decimal('250')
    assert shipping == Decimal('0')
    assert discount == Decimal('0')
    assert total == Decimal('250')


def test_checkout_without_gateway_creates_order(app, client, checkout_payload):
    response = client.post('/api/checkout', json=checkout_payload)

    assert response.status_code == 200
    body = response.get_json()
    assert body['success'] is True
    assert body['order']['total_amount'] == 250.0
    assert body['order']['order_number'].startswith('ORD-')
    assert 'checkout_url' not in body
    assert body['message'] == 'Order created (payment not configured)'

    with app.app_context():
        order = db.session.get(Order, body['order']['id'])
        assert order.payment_status == 'pending'
        assert order.status == 'new'
        assert order.currency == 'EUR'
        assert order.payment_method == 'sumup'
        assert order.subtotal == Decimal('250.00')
        assert order.customer_notes == 'Gift wrap please'
        assert len(order.items) == 2
        belt = next(i for i in order.items if i.product_id == 'p-2')
        # French name falls back to the English one
        assert belt.product_name_fr == 'Leather belt'
        assert belt.total_price == Decimal('50.00')
        assert belt.size == 'M'


def test_checkout_with_gateway_returns_hosted_url(app, client, gateway, checkout_payload):
    response = client.post('/api/checkout', json=checkout_payload)

    assert response.status_code == 200
    body = response.get_json()
    assert body['checkout_url'] == 'https://pay.example.test/chk_123'

    call = gateway.calls[0]
    assert call['reference'] == body['order']['order_number']
    assert call['amount'] == Decimal('250')
    assert call['currency'] == 'EUR'
    assert call['return_url'] == f"http://localhost:3000/checkout/success?order={body['order']['id']}"

    with app.app_context():
        assert db.session.get(Order, body['order']['id']).sumup_checkout_id == 'chk_123'


def test_gateway_failure_keeps_pending_order(app, client, checkout_payload):
    app.extensions['payment_gateway'] = FakeGateway(error=PaymentGatewayError(
        'Merchant account is not enabled for online payments', status_code=403, body={'message': 'nope'}))

    response = client.post('/api/checkout', json=checkout_payload)

    assert response.status_code == 500
    body = response.get_json()
    assert body['success'] is False
    assert body['error'] == 'Merchant account is not enabled for online payments'
    assert body['details'] == {'gateway_status': 403, 'gateway_response': {'message': 'nope'}}
    with app.app_context():
        order = db.session.get(Order, body['order']['id'])
        assert order.payment_status == 'pending'
        assert order.sumup_checkout_id is None


@pytest.mark.parametrize('mutate, error', [
    (lambda p: p.update(items=[]), 'Cart is empty'),
    (lambda p: p.pop('items'), 'Cart is empty'),
    (lambda p: p['customer'].pop('email'), 'Missing customer information'),
    (lambda p: p.update(customer=None), 'Missing customer information'),
    (lambda p: p['shipping'].update(city='  '), 'Missing shipping address'),
    (lambda p: p['items'][0].update(quantity=0), 'Invalid cart items'),
    (lambda p: p['items'][0].update(unit_price='abc'), 'Invalid cart items'),
    (lambda p: p['items'][1].update(unit_price=-1), 'Invalid cart items'),
    (lambda p: p['items'][1].pop('product_name_en'), 'Invalid cart items'),
    (lambda p: p['items'][0].update(quantity=2.7), 'Invalid cart items'),
    (lambda p: p['items'][0].update(quantity=True), 'Invalid cart items'),
    (lambda p: p.update(customer='Ana Silva'), 'Missing customer information'),
    (lambda p: p['items'].append('not-an-item'), 'Invalid cart items'),
])
def test_checkout_validation_has_no_side_effects(app, client, checkout_payload, mutate, error):
    mutate(checkout_payload)

    response = client.post('/api/checkout', json=checkout_payload)

    assert response.status_code == 400
    assert response.get_json()['error'] == error
    assert _order_count(app) == (0, 0)


def test_unknown_nested_keys_are_ignored(app, client, checkout_payload):
    checkout_payload['customer'].update(prefix='x', obj='y')
    checkout_payload['shipping'].update(formdata='x', meta={'csrf': True})
    checkout_payload['items'][0].update(meta='x', data={'quantity': 9})
    checkout_payload['items'][1]['prefix'] = 'x'

    response = client.post('/api/checkout', json=checkout_payload)

    assert response.status_code == 200
    body = response.get_json()
    assert body['order']['total_amount'] == 250.0
    with app.app_context():
        order = db.session.get(Order, body['order']['id'])
        assert order.customer_first_name == 'Ana'
        assert order.shipping_city == 'Paris'
        assert sorted(i.quantity for i in order.items) == [1, 2]


def test_customer_is_checked_before_shipping(app, client, checkout_payload):
    checkout_payload['customer'] = {}
    checkout_payload['shipping'] = {}
    response = client.post('/api/checkout', json=checkout_payload)
    assert response.get_json()['error'] == 'Missing customer information'


def test_checkout_rejects_non_object_body(client):
    response = client.post('/api/checkout', json=['not', 'an', 'object'])
    assert response.status_code == 400


def test_zero_total_is_rejected_before_any_write(app, client, gateway, checkout_payload):
    for item in checkout_payload['items']:
        item['unit_price'] = 0

    response = client.post('/api/checkout', json=checkout_payload)

    assert response.status_code == 400
    assert gateway.calls == []
    assert _order_count(app) == (0, 0)


def test_checkout_clears_session_cart(client, checkout_payload):
    with client.session_transaction() as session:
        session['maison_cart'] = '[{"product_id": "p-1", "unit_price": 10, "quantity": 1}]'

    client.post('/api/checkout', json=checkout_payload)

    assert client.get('/api/cart').get_json()['cart']['items'] == []


class FailingItems(Repository):
    def insert_many(self, rows, commit=True):
        raise PersistenceError('Failed to write order_items')


def test_item_failure_deletes_the_order(app_ctx, checkout_payload):
    service = CheckoutService(FakeGateway(configured=False), 'http://shop.test',
                              order_items=FailingItems(OrderItem))
    items = [dict(item, unit_price=Decimal(str(item['unit_price']))) for item in checkout_payload['items']]

    with pytest.raises(PersistenceError, match='Failed to add order items'):
        service.place_order(items, checkout_payload['customer'], checkout_payload['shipping'])

    assert Order.query.count() == 0


def test_place_order_requires_items(app_ctx):
    service = CheckoutService(FakeGateway(), 'http://shop.test')
    with pytest.raises(ValidationError, match='Cart is empty'):
        service.place_order([], {}, {})


def test_order_summary(app, client, make_order):
    with app.app_context():
        order_id = make_order(total_amount=Decimal('42.50')).id

    response = client.get(f'/api/checkout/order?order={order_id}')

    assert response.status_code == 200
    order = response.get_json()['order']
    assert order['id'] == order_id
    assert order['total_amount'] == 42.5
    assert order['payment_status'] == 'pending'
    assert 'customer_email' not in order


def test_order_summary_errors(client):
    assert client.get('/api/checkout/order').status_code == 400
    assert client.get('/api/checkout/order?order=missing').status_code == 404
