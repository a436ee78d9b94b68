import pytest

from maison.extensions import db
from maison.models import Order
from maison.services.webhooks import map_payment_status


@pytest.mark.parametrize('event_type, status, expected', [
    ('CHECKOUT_COMPLETED', None, 'paid'),
    (None, 'PAID', 'paid'),
    (None, 'paid', 'paid'),
    ('checkout_failed', None, 'failed'),
    (None, 'FAILED', 'failed'),
    ('CHECKOUT_REFUNDED', None, 'refunded'),
    (None, 'REFUNDED', 'refunded'),
    ('CHECKOUT_CREATED', 'PENDING', None),
    (None, None, None),
])
def test_map_payment_status(event_type, status, expected):
    assert map_payment_status(event_type, status) == expected


@pytest.fixture
def order_number(app, make_order):
    with app.app_context():
        return make_order().order_number


def _order(app, order_number):
    with app.app_context():
        order = Order.query.filter_by(order_number=order_number).one()
        db.session.expunge(order)
        return order


def test_completed_event_marks_order_paid(app, client, order_number):
    response = client.post('/api/checkout/webhook', json={
        'event_type': 'CHECKOUT_COMPLETED',
        'checkout_reference': order_number,
        'transaction_id': 'txn-1',
    })

    assert response.status_code == 200
    assert response.get_json() == {'success': True}
    order = _order(app, order_number)
    assert order.payment_status == 'paid'
    assert order.paid_at is not None
    assert order.sumup_transaction_id == 'txn-1'
    # fulfillment status is not touched by payment events
    assert order.status == 'new'


def test_replayed_event_is_a_no_op(app, client, order_number):
    payload = {'status': 'PAID', 'checkout_reference': order_number, 'transaction_id': 'txn-1'}
    client.post('/api/checkout/webhook', json=payload)
    first = _order(app, order_number)

    response = client.post('/api/checkout/webhook', json=payload)

    assert response.status_code == 200
    second = _order(app, order_number)
    assert second.payment_status == 'paid'
    assert second.paid_at == first.paid_at
    assert second.updated_at == first.updated_at


@pytest.mark.parametrize('payload, expected', [
    ({'event_type': 'CHECKOUT_FAILED'}, 'failed'),
    ({'status': 'refunded'}, 'refunded'),
    ({'event_type': 'SOMETHING_ELSE'}, 'pending'),
])
def test_other_events(app, client, order_number, payload, expected):
    payload['checkout_reference'] = order_number
    client.post('/api/checkout/webhook', json=payload)

    order = _order(app, order_number)
    assert order.payment_status == expected
    assert order.paid_at is None


def test_transaction_id_is_kept_when_absent(app, client, order_number):
    client.post('/api/checkout/webhook', json={'status': 'PAID', 'checkout_reference': order_number,
                                               'transaction_id': 'txn-1'})
    client.post('/api/checkout/webhook', json={'status': 'REFUNDED', 'checkout_reference': order_number})

    order = _order(app, order_number)
    assert order.payment_status == 'refunded'
    assert order.sumup_transaction_id == 'txn-1'


def test_unknown_reference_changes_nothing(app, client, order_number):
    response = client.post('/api/checkout/webhook', json={'status': 'PAID',
                                                          'checkout_reference': 'ORD-00000000-FFFFFF'})

    assert response.status_code == 404
    assert response.get_json() == {'success': False, 'error': 'Order not found'}
    with app.app_context():
        assert Order.query.count() == 1
        assert Order.query.one().payment_status == 'pending'


def test_missing_reference(client):
    response = client.post('/api/checkout/webhook', json={'status': 'PAID'})
    assert response.status_code == 400
    assert response.get_json()['error'] == 'Missing checkout reference'


def test_malformed_payload(client):
    response = client.post('/api/checkout/webhook', data='not json', content_type='application/json')
    assert response.status_code == 400
    response = client.post('/api/checkout/webhook', json=[1, 2])
    assert response.status_code == 400


def test_webhook_status_endpoint(client):
    response = client.get('/api/checkout/webhook')
    assert response.get_json() == {'status': 'ok', 'message': 'SumUp webhook endpoint'}
