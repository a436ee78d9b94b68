from flask import jsonify

from ..forms import bind_json, request_json, validated_data
from ..services.catalog_admin import ProductAdminService, collection_service, tag_service
from . import admin_bp
from .decorators import admin_required
from .forms import CollectionForm, ProductForm, TagForm

# Nested lists only replace the stored ones when the request carries them
PRODUCT_NESTED = ('images', 'sizes', 'colors', 'collections', 'tags')


# ---------------------------
#     PRODUCTS
# ---------------------------

@admin_bp.route('/products', methods=['GET'])
@admin_required
def list_products():
    products = ProductAdminService().list_products()
    return jsonify(success=True, products=[p.to_dict() for p in products])


@admin_bp.route('/products', methods=['POST'])
@admin_required
def create_product():
    payload = request_json()
    form = bind_json(ProductForm, payload)
    product = ProductAdminService().create_product(validated_data(form, payload, PRODUCT_NESTED))
    return jsonify(success=True, product=product.to_dict()), 201


@admin_bp.route('/products/<product_id>', methods=['GET'])
@admin_required
def product_view(product_id):
    product = ProductAdminService().get_product(product_id)
    return jsonify(success=True, product=product.to_dict())


@admin_bp.route('/products/<product_id>', methods=['PUT'])
@admin_required
def update_product(product_id):
    payload = request_json()
    form = bind_json(ProductForm, payload, partial=True)
    product = ProductAdminService().update_product(product_id, validated_data(form, payload, PRODUCT_NESTED))
    return jsonify(success=True, product=product.to_dict())


@admin_bp.route('/products/<product_id>', methods=['DELETE'])
@admin_required
def delete_product(product_id):
    ProductAdminService().delete_product(product_id)
    return jsonify(success=True)


# ---------------------------
#     COLLECTIONS AND TAGS
# ---------------------------

def _create(service, form_class, key):
    payload = request_json()
    form = bind_json(form_class, payload)
    form.process_slug()
    entity = service.create(validated_data(form, payload))
    return jsonify({'success': True, key: entity.to_dict()}), 201


def _update(service, form_class, key, entity_id):
    payload = request_json()
    form = bind_json(form_class, payload, partial=True)
    form.process_slug()
    entity = service.update(entity_id, validated_data(form, payload))
    return jsonify({'success': True, key: entity.to_dict()})


@admin_bp.route('/collections', methods=['GET'])
@admin_required
def list_collections():
    return jsonify(success=True, collections=[c.to_dict() for c in collection_service().list()])


@admin_bp.route('/collections', methods=['POST'])
@admin_required
def create_collection():
    return _create(collection_service(), CollectionForm, 'collection')


@admin_bp.route('/collections/<collection_id>', methods=['GET'])
@admin_required
def collection_view(collection_id):
    return jsonify(success=True, collection=collection_service().get(collection_id).to_dict())


@admin_bp.route('/collections/<collection_id>', methods=['PUT'])
@admin_required
def update_collection(collection_id):
    return _update(collection_service(), CollectionForm, 'collection', collection_id)


@admin_bp.route('/collections/<collection_id>', methods=['DELETE'])
@admin_required
def delete_collection(collection_id):
    collection_service().delete(collection_id)
    return jsonify(success=True)


@admin_bp.route('/tags', methods=['GET'])
@admin_required
def list_tags():
    return jsonify(success=True, tags=[t.to_dict() for t in tag_service().list()])


@admin_bp.route('/tags', methods=['POST'])
@admin_required
def create_tag():
    return _create(tag_service(), TagForm, 'tag')


@admin_bp.route('/tags/<tag_id>', methods=['GET'])
@admin_required
def tag_view(tag_id):
    return jsonify(success=True, tag=tag_service().get(tag_id).to_dict())


@admin_bp.route('/tags/<tag_id>', methods=['PUT'])
@admin_required
def update_tag(tag_id):
    return _update(tag_service(), TagForm, 'tag', tag_id)


@admin_bp.route('/tags/<tag_id>', methods=['DELETE'])
@admin_required
def delete_tag(tag_id):
    tag_service().delete(tag_id)
    return jsonify(success=True)
