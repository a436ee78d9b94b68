from datetime import date
from decimal import Decimal

import pytest

from maison import create_app
from maison.config import TestConfig
from maison.extensions import db
from maison.models import Collection, Order, OrderItem, Product, ProductImage, ProductSize, Tag
from maison.services.auth import AuthService
from maison.services.payments import CheckoutSession


class FakeGateway:
    """Stands in for SumUpGateway; records every checkout it is asked to open."""

    def __init__(self, configured=True, error=None, checkout_id='chk_123'):
        self.configured = configured
        self.error = error
        self.checkout_id = checkout_id
        self.calls = []

    @property
    def is_configured(self):
        return self.configured

    def create_checkout(self, **kwargs):
        self.calls.append(kwargs)
        if self.error is not None:
            raise self.error
        return CheckoutSession(self.checkout_id, f'https://pay.example.test/{self.checkout_id}')


@pytest.fixture
def app(tmp_path):
    class Config(TestConfig):
        UPLOAD_FOLDER = str(tmp_path / 'uploads')

    app = create_app(Config)
    app.extensions['payment_gateway'] = FakeGateway(configured=False)
    with app.app_context():
        db.create_all()
    yield app
    with app.app_context():
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def app_ctx(app):
    """For service level tests; do not mix with ``client`` requests in one test."""
    with app.app_context():
        yield app


@pytest.fixture
def gateway(app):
    fake = FakeGateway()
    app.extensions['payment_gateway'] = fake
    return fake


@pytest.fixture
def admin_token(app):
    with app.app_context():
        service = AuthService()
        service.create_admin('admin', 'secret-pass')
        return service.login('admin', 'secret-pass').token


@pytest.fixture
def auth_headers(admin_token):
    return {'Authorization': f'Bearer {admin_token}'}


@pytest.fixture
def checkout_payload():
    return {
        'items': [
            {'product_id': 'p-1', 'product_name_en': 'Silk scarf', 'product_name_fr': 'Foulard en soie',
             'quantity': 2, 'unit_price': 100},
            {'product_id': 'p-2', 'product_name_en': 'Leather belt', 'quantity': 1, 'unit_price': 50,
             'size': 'M', 'color': 'Black'},
        ],
        'customer': {'first_name': 'Ana', 'last_name': 'Silva', 'email': 'ana@example.com'},
        'shipping': {'address': '1 Rue de la Paix', 'city': 'Paris', 'postal_code': '75002',
                     'country': 'FR'},
        'customer_notes': 'Gift wrap please',
    }


@pytest.fixture
def make_product():
    """Insert a product; must be called inside an app context. Returns the Product."""
    def _make(name='Silk scarf', **overrides):
        images = overrides.pop('images', [])
        sizes = overrides.pop('sizes', [])
        collections = overrides.pop('collections', [])
        tags = overrides.pop('tags', [])
        values = {
            'name_en': name,
            'name_fr': overrides.pop('name_fr', name),
            'price': Decimal('120.00'),
            'status': 'published',
            'stock_quantity': 20,
        }
        values.update(overrides)
        product = Product(**values)
        product.images = [ProductImage(image_url=url, display_order=i) for i, url in enumerate(images)]
        product.sizes = [ProductSize(**size) for size in sizes]
        product.collections = collections
        product.tags = tags
        db.session.add(product)
        db.session.commit()
        return product
    return _make


@pytest.fixture
def make_collection():
    def _make(slug, **overrides):
        values = {'slug': slug, 'name_en': slug.title(), 'name_fr': slug.title()}
        values.update(overrides)
        collection = Collection(**values)
        db.session.add(collection)
        db.session.commit()
        return collection
    return _make


@pytest.fixture
def make_tag():
    def _make(slug):
        tag = Tag(slug=slug, name_en=slug.title(), name_fr=slug.title())
        db.session.add(tag)
        db.session.commit()
        return tag
    return _make


@pytest.fixture
def make_order():
    """Insert an order with one line; must be called inside an app context."""
    def _make(**overrides):
        values = {
            'customer_first_name': 'Ana',
            'customer_last_name': 'Silva',
            'customer_email': 'ana@example.com',
            'shipping_address': '1 Rue de la Paix',
            'shipping_city': 'Paris',
            'shipping_country': 'FR',
            'subtotal': Decimal('100.00'),
            'total_amount': Decimal('100.00'),
            'payment_status': 'pending',
            'status': 'new',
        }
        values.update(overrides)
        order = Order(**values)
        order.items = [OrderItem(product_id='p-1', product_name_en='Silk scarf', product_name_fr='Foulard',
                                 quantity=1, unit_price=Decimal('100.00'), total_price=Decimal('100.00'))]
        db.session.add(order)
        db.session.commit()
        return order
    return _make


@pytest.fixture
def today():
    return date(2026, 6, 15)
