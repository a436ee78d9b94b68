"""
Storefront read model: published products and active collections, flattened
into the shape the shop front-end consumes.
"""
import re
from datetime import date

from ..models import Collection, Product
from ..models.base import money
from .datastore import Repository

UUID_RE = re.compile(r'^[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}$', re.IGNORECASE)
SHORT_ID_RE = re.compile(r'^[0-9a-f]{8}$', re.IGNORECASE)


def is_uuid(value):
    return bool(UUID_RE.match(value or ''))


def _sizes(product):
    return [
        {'size': s.size, 'stock': s.stock_quantity, 'priceAdjustment': money(s.price_adjustment)}
        for s in sorted(product.sizes, key=lambda s: s.display_order)
    ]


def _colors(product):
    return [
        {'name': c.name_en, 'name_en': c.name_en, 'name_fr': c.name_fr, 'hex': c.hex_code, 'stock': c.stock_quantity}
        for c in sorted(product.colors, key=lambda c: c.display_order)
    ]


def _base(product, today):
    return {
        'id': product.id,
        'slug': product.slug,
        'sku': product.sku,
        'name': product.name_en,
        'name_en': product.name_en,
        'name_fr': product.name_fr,
        'description': product.description_en,
        'description_en': product.description_en,
        'description_fr': product.description_fr,
        'price': money(product.price),
        'originalPrice': money(product.original_price),
        'isPromotion': product.is_promotion_active(today),
        'promotionLabel': product.promotion_label_en,
        'stockQuantity': product.stock_quantity,
        'isLowStock': product.is_low_stock,
        'isFeatured': product.is_featured,
        'isNew': product.is_new,
        'sizes': _sizes(product),
        'colors': _colors(product),
    }


def product_card(product, today=None):
    data = _base(product, today or date.today())
    data['images'] = [img.image_url for img in sorted(product.images, key=lambda i: i.display_order)]
    data['collections'] = [c.slug for c in product.collections if c.slug]
    data['tags'] = [t.slug for t in product.tags if t.slug]
    return data


def product_detail(product, today=None):
    data = _base(product, today or date.today())
    data.update({
        'promotionLabel_en': product.promotion_label_en,
        'promotionLabel_fr': product.promotion_label_fr,
        'metaTitle_en': product.meta_title_en,
        'metaTitle_fr': product.meta_title_fr,
        'metaDescription_en': product.meta_description_en,
        'metaDescription_fr': product.meta_description_fr,
        'images': [
            {'url': img.image_url, 'alt_en': img.alt_text_en, 'alt_fr': img.alt_text_fr}
            for img in sorted(product.images, key=lambda i: i.display_order)
        ],
        'collections': [
            {'slug': c.slug, 'name_en': c.name_en, 'name_fr': c.name_fr}
            for c in product.collections if c.slug
        ],
        'tags': [
            {'slug': t.slug, 'name_en': t.name_en, 'name_fr': t.name_fr}
            for t in product.tags if t.slug
        ],
    })
    return data


def collection_card(collection):
    return {
        'id': collection.id,
        'slug': collection.slug,
        'name': collection.name_en,
        'name_en': collection.name_en,
        'name_fr': collection.name_fr,
        'description': collection.description_en,
        'description_en': collection.description_en,
        'description_fr': collection.description_fr,
        'image': collection.image_url,
        'metaTitle_en': collection.meta_title_en,
        'metaTitle_fr': collection.meta_title_fr,
        'metaDescription_en': collection.meta_description_en,
        'metaDescription_fr': collection.meta_description_fr,
    }


class CatalogService:
    def __init__(self, products=None, collections=None):
        self.products = products or Repository(Product)
        self.collections = collections or Repository(Collection)

    def _published(self):
        return self.products.query().filter(Product.status == 'published')

    def list_products(self, collection=None, featured=False, is_new=False, limit=None):
        query = self._published()
        if collection:
            # An unknown or empty collection leaves the listing unfiltered
            found = self.collections.find_one(slug=collection)
            if found is not None and found.products:
                query = query.filter(Product.collections.any(Collection.id == found.id))
        if featured:
            query = query.filter(Product.is_featured.is_(True))
        if is_new:
            query = query.filter(Product.is_new.is_(True))
        query = query.order_by(Product.display_order.asc(), Product.created_at.asc())
        if limit:
            query = query.limit(limit)
        return query.all()

    def get_product(self, key):
        """Resolve a raw id or a ``shortid-name-slug`` composite to a published product."""
        key = (key or '').strip().lower()
        if not key:
            return None
        if is_uuid(key):
            return self._published().filter(Product.id == key).first()

        short_id = key.split('-', 1)[0]
        if not SHORT_ID_RE.match(short_id):
            return None
        candidates = self._published().filter(Product.id.like(f'{short_id}%')).all()
        for product in candidates:
            if product.slug == key:
                return product
        return candidates[0] if len(candidates) == 1 else None

    def list_collections(self):
        return self.collections.select(filters={'is_active': True},
                                       order_by=Collection.display_order.asc())
