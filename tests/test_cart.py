import json
from decimal import Decimal

import pytest

from maison.services.cart import CART_STORAGE_KEY, Cart


@pytest.fixture
def storage():
    return {}


def test_add_merges_lines_with_the_same_key(storage):
    cart = Cart(storage)
    cart.add('p-1', 100, quantity=2, size='M', product_name_en='Scarf')
    cart.add('p-1', 100, size='M')
    cart.add('p-1', 100, size='L')

    assert len(cart.items) == 2
    assert cart.items[0]['quantity'] == 3
    assert cart.total_items == 4
    assert cart.subtotal == Decimal('400')


def test_add_clamps_quantity(storage):
    cart = Cart(storage)
    cart.add('p-1', 10, quantity=0)
    assert cart.items[0]['quantity'] == 1


def test_update_and_remove(storage):
    cart = Cart(storage)
    cart.add('p-1', 10, color='Red')
    cart.add('p-2', 5)

    cart.update_quantity('p-1', 4, color='Red')
    assert cart.total_items == 5

    cart.update_quantity('p-1', 0, color='Red')
    assert [i['product_id'] for i in cart.items] == ['p-2']

    cart.remove('p-2')
    assert cart.items == []


def test_cart_persists_to_storage(storage):
    Cart(storage).add('p-1', 19.9, quantity=2)

    reloaded = Cart(storage)
    assert json.loads(storage[CART_STORAGE_KEY])[0]['product_id'] == 'p-1'
    assert reloaded.subtotal == Decimal('39.8')

    reloaded.clear()
    assert Cart(storage).items == []


@pytest.mark.parametrize('raw', ['{not json', '{"a": 1}', '42', '[1, {"quantity": 2}]'])
def test_corrupt_storage_loads_empty(raw):
    assert Cart({CART_STORAGE_KEY: raw}).items == []


def test_cart_endpoints(app, client, make_product):
    with app.app_context():
        product_id = make_product('Scarf', sku='SC-1', images=['/scarf.jpg'],
                                  sizes=[{'size': 'M', 'stock_quantity': 3, 'price_adjustment': Decimal('10')}]).id

    body = client.post('/api/cart/items', json={'product_id': product_id, 'size': 'M', 'quantity': 2}).get_json()
    cart = body['cart']
    assert cart['totalItems'] == 2
    assert cart['subtotal'] == 260.0
    assert cart['items'][0]['product_sku'] == 'SC-1'
    assert cart['items'][0]['product_image_url'] == '/scarf.jpg'

    cart = client.patch('/api/cart/items', json={'product_id': product_id, 'size': 'M', 'quantity': 1}).get_json()['cart']
    assert cart['totalItems'] == 1

    cart = client.delete('/api/cart/items', json={'product_id': product_id, 'size': 'M'}).get_json()['cart']
    assert cart['items'] == []

    client.post('/api/cart/items', json={'product_id': product_id})
    assert client.get('/api/cart').get_json()['cart']['totalItems'] == 1
    assert client.delete('/api/cart').get_json()['cart']['totalItems'] == 0


def test_cart_add_rejects_unknown_product_and_size(app, client, make_product):
    with app.app_context():
        product_id = make_product('Scarf').id

    assert client.post('/api/cart/items', json={'product_id': 'missing'}).status_code == 404
    response = client.post('/api/cart/items', json={'product_id': product_id, 'size': 'XXL'})
    assert response.status_code == 400
    assert client.post('/api/cart/items', json={}).status_code == 400


@pytest.mark.parametrize('quantity', [1.5, True, 'two'])
def test_cart_add_rejects_non_integer_quantity(app, client, make_product, quantity):
    with app.app_context():
        product_id = make_product('Scarf').id

    response = client.post('/api/cart/items', json={'product_id': product_id, 'quantity': quantity})

    assert response.status_code == 400
    assert client.get('/api/cart').get_json()['cart']['items'] == []
