from datetime import date

from flask import Blueprint, jsonify, request, session

from ..errors import NotFoundError, ValidationError
from ..forms import bind_json, request_json, validated_data
from ..forms.checkout_forms import CartLineForm
from ..services.cart import Cart
from ..services.catalog import CatalogService, collection_card, product_card, product_detail

store_bp = Blueprint('store', __name__, url_prefix='/api')


def _flag(name):
    return request.args.get(name, '').lower() == 'true'


# ---------------------------
#     CATALOG
# ---------------------------

@store_bp.route('/products', methods=['GET'])
def products():
    limit = request.args.get('limit', type=int)
    found = CatalogService().list_products(
        collection=request.args.get('collection') or None,
        featured=_flag('featured'),
        is_new=_flag('new'),
        limit=limit if limit and limit > 0 else None,
    )
    today = date.today()
    return jsonify(success=True, products=[product_card(p, today) for p in found])


@store_bp.route('/products/<key>', methods=['GET'])
def product(key):
    found = CatalogService().get_product(key)
    if found is None:
        raise NotFoundError('Product not found')
    return jsonify(success=True, product=product_detail(found))


@store_bp.route('/collections', methods=['GET'])
def collections():
    return jsonify(success=True, collections=[collection_card(c) for c in CatalogService().list_collections()])


# ---------------------------
#     CART
# ---------------------------

def _cart_line():
    payload = request_json()
    return validated_data(bind_json(CartLineForm, payload), payload)


@store_bp.route('/cart', methods=['GET'])
def cart_view():
    return jsonify(success=True, cart=Cart(session).to_dict())


@store_bp.route('/cart', methods=['DELETE'])
def cart_clear():
    cart = Cart(session)
    cart.clear()
    return jsonify(success=True, cart=cart.to_dict())


@store_bp.route('/cart/items', methods=['POST'])
def cart_add():
    """Add a published product; name, SKU, image and price come from the catalog."""
    line = _cart_line()
    found = CatalogService().get_product(line['product_id'])
    if found is None:
        raise NotFoundError('Product not found')

    unit_price = found.price
    if line['size']:
        size = next((s for s in found.sizes if s.size == line['size']), None)
        if size is None:
            raise ValidationError(f'Unknown size: {line["size"]}')
        unit_price += size.price_adjustment or 0
    if line['color'] and not any(c.name_en == line['color'] for c in found.colors):
        raise ValidationError(f'Unknown color: {line["color"]}')

    cart = Cart(session)
    cart.add(
        found.id,
        unit_price,
        quantity=line['quantity'],
        size=line['size'] or None,
        color=line['color'] or None,
        product_name_en=found.name_en,
        product_name_fr=found.name_fr,
        product_sku=found.sku,
        product_image_url=found.images[0].image_url if found.images else None,
    )
    return jsonify(success=True, cart=cart.to_dict())


@store_bp.route('/cart/items', methods=['PATCH'])
def cart_update():
    line = _cart_line()
    cart = Cart(session)
    cart.update_quantity(line['product_id'], line['quantity'],
                         size=line['size'] or None, color=line['color'] or None)
    return jsonify(success=True, cart=cart.to_dict())


@store_bp.route('/cart/items', methods=['DELETE'])
def cart_remove():
    line = _cart_line()
    cart = Cart(session)
    cart.remove(line['product_id'], size=line['size'] or None, color=line['color'] or None)
    return jsonify(success=True, cart=cart.to_dict())
