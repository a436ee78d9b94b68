from datetime import date
from decimal import Decimal

from maison.models import Product
from maison.services.catalog import CatalogService, product_card


def test_low_stock_and_promotion_rules(today):
    product = Product(name_en='Scarf', stock_quantity=5, low_stock_threshold=5, is_promotion=True,
                      promotion_start_date=date(2026, 6, 1), promotion_end_date=date(2026, 6, 30))
    assert product.is_low_stock
    product.stock_quantity = 6
    assert not product.is_low_stock

    assert product.is_promotion_active(today)
    assert not product.is_promotion_active(date(2026, 7, 1))
    assert not product.is_promotion_active(date(2026, 5, 31))
    product.is_promotion = False
    assert not product.is_promotion_active(today)


def test_slug_is_short_id_and_name():
    product = Product(id='3f2a9c1e-0000-4000-8000-000000000000', name_en='Écharpe en Soie')
    assert product.slug == '3f2a9c1e-echarpe-en-soie'


def test_list_returns_published_in_display_order(app, client, make_product):
    with app.app_context():
        make_product('Second', display_order=2)
        make_product('First', display_order=1)
        make_product('Hidden', status='draft', display_order=0)

    body = client.get('/api/products').get_json()

    assert [p['name'] for p in body['products']] == ['First', 'Second']


def test_list_filters(app, client, make_product, make_collection):
    with app.app_context():
        summer = make_collection('summer')
        winter = make_collection('winter', is_active=False)
        make_collection('empty')
        make_product('Linen shirt', collections=[summer], is_new=True)
        make_product('Straw hat', collections=[summer], is_featured=True)
        make_product('Wool coat', collections=[winter])

    def names(query):
        return sorted(p['name'] for p in client.get(f'/api/products?{query}').get_json()['products'])

    everything = ['Linen shirt', 'Straw hat', 'Wool coat']
    assert names('collection=summer') == ['Linen shirt', 'Straw hat']
    assert names('collection=summer&featured=true') == ['Straw hat']
    assert names('new=true') == ['Linen shirt']
    assert names('collection=winter') == ['Wool coat']
    assert names('collection=empty') == everything
    assert names('collection=nowhere') == everything
    assert len(names('limit=2')) == 2


def test_card_shape(app_ctx, make_product, make_collection, make_tag, today):
    product = make_product(
        'Silk scarf',
        price=Decimal('80.00'),
        original_price=Decimal('100.00'),
        is_promotion=True,
        promotion_label_en='-20%',
        stock_quantity=2,
        images=['/a.jpg', '/b.jpg'],
        sizes=[{'size': 'L', 'stock_quantity': 1, 'display_order': 2},
               {'size': 'S', 'stock_quantity': 3, 'price_adjustment': Decimal('5'), 'display_order': 1}],
        collections=[make_collection('silk')],
        tags=[make_tag('gift')],
    )

    card = product_card(product, today)

    assert card['price'] == 80.0
    assert card['originalPrice'] == 100.0
    assert card['isPromotion'] is True
    assert card['promotionLabel'] == '-20%'
    assert card['isLowStock'] is True
    assert card['images'] == ['/a.jpg', '/b.jpg']
    assert card['sizes'] == [{'size': 'S', 'stock': 3, 'priceAdjustment': 5.0},
                             {'size': 'L', 'stock': 1, 'priceAdjustment': 0.0}]
    assert card['collections'] == ['silk']
    assert card['tags'] == ['gift']
    assert card['slug'] == product.slug


def test_detail_by_id_and_slug(app, client, make_product, make_collection):
    with app.app_context():
        product = make_product('Silk scarf', images=['/a.jpg'], meta_title_en='Scarf',
                               collections=[make_collection('silk')])
        product_id, slug = product.id, product.slug

    by_id = client.get(f'/api/products/{product_id}').get_json()['product']
    by_slug = client.get(f'/api/products/{slug}').get_json()['product']

    assert by_id == by_slug
    assert by_id['images'] == [{'url': '/a.jpg', 'alt_en': None, 'alt_fr': None}]
    assert by_id['metaTitle_en'] == 'Scarf'
    assert by_id['collections'] == [{'slug': 'silk', 'name_en': 'Silk', 'name_fr': 'Silk'}]
    # the short id alone still resolves while it is unambiguous
    assert client.get(f'/api/products/{product_id[:8]}').status_code == 200


def test_detail_not_found(app, client, make_product):
    with app.app_context():
        draft_id = make_product('Draft', status='draft').id

    assert client.get(f'/api/products/{draft_id}').status_code == 404
    assert client.get('/api/products/not-a-product').status_code == 404
    assert client.get('/api/products/00000000-0000-4000-8000-000000000000').status_code == 404


def test_get_product_prefers_exact_slug(app_ctx, make_product):
    first = make_product('Scarf', id='abcdef12-0000-4000-8000-000000000001')
    second = make_product('Belt', id='abcdef12-0000-4000-8000-000000000002')

    service = CatalogService()
    assert service.get_product('abcdef12-belt') == second
    assert service.get_product('abcdef12-scarf') == first
    # ambiguous prefix without a matching name
    assert service.get_product('abcdef12-hat') is None


def test_collections_lists_active_in_order(app, client, make_collection):
    with app.app_context():
        make_collection('b', display_order=2)
        make_collection('a', display_order=1)
        make_collection('hidden', is_active=False)

    body = client.get('/api/collections').get_json()

    assert [c['slug'] for c in body['collections']] == ['a', 'b']
