"""
Back-office management of products, collections and tags.
"""
import logging
from datetime import date

from ..errors import NotFoundError, ValidationError
from ..models import Collection, Order, Product, ProductColor, ProductImage, ProductSize, Tag
from ..models.product import MAX_PRODUCT_IMAGES
from .datastore import Repository

logger = logging.getLogger(__name__)

PRODUCT_FIELDS = (
    'sku', 'name_en', 'name_fr', 'description_en', 'description_fr', 'price', 'original_price',
    'is_promotion', 'promotion_start_date', 'promotion_end_date', 'promotion_label_en',
    'promotion_label_fr', 'stock_quantity', 'low_stock_threshold', 'status', 'is_featured',
    'is_new', 'meta_title_en', 'meta_title_fr', 'meta_description_en', 'meta_description_fr',
    'display_order',
)


class ProductAdminService:
    def __init__(self, products=None, collections=None, tags=None):
        self.products = products or Repository(Product)
        self.collections = collections or Repository(Collection)
        self.tags = tags or Repository(Tag)

    def list_products(self):
        return self.products.select(order_by=Product.created_at.desc())

    def get_product(self, product_id):
        product = self.products.get(product_id)
        if product is None:
            raise NotFoundError('Product not found')
        return product

    def create_product(self, data):
        product = Product(**{name: data[name] for name in PRODUCT_FIELDS if name in data})
        self._apply_relations(product, data)
        self.products.save(product)
        logger.info('Product %s created', product.id)
        return product

    def update_product(self, product_id, data):
        product = self.get_product(product_id)
        for name in PRODUCT_FIELDS:
            if name in data:
                setattr(product, name, data[name])
        self._apply_relations(product, data)
        self.products.save(product)
        logger.info('Product %s updated', product.id)
        return product

    def delete_product(self, product_id):
        product = self.get_product(product_id)
        self.products.delete(product)
        logger.info('Product %s deleted', product_id)

    def _apply_relations(self, product, data):
        """Nested lists present in ``data`` replace the product's current ones."""
        if data.get('sizes') is not None:
            product.sizes = [ProductSize(**size) for size in data['sizes']]
        if data.get('colors') is not None:
            product.colors = [ProductColor(**color) for color in data['colors']]
        if data.get('images') is not None:
            if len(data['images']) > MAX_PRODUCT_IMAGES:
                raise ValidationError(f'A product can have at most {MAX_PRODUCT_IMAGES} images')
            product.images = [ProductImage(**self._image_values(product, image)) for image in data['images']]
        if data.get('collections') is not None:
            product.collections = self._resolve(self.collections, data['collections'], 'collection')
        if data.get('tags') is not None:
            product.tags = self._resolve(self.tags, data['tags'], 'tag')

    @staticmethod
    def _image_values(product, image):
        # Only colors already stored on the product have ids to link to
        color_id = image.get('color_id') or None
        if color_id and color_id not in {color.id for color in product.colors if color.id}:
            raise ValidationError(f'Unknown color: {color_id}')
        return dict(image, color_id=color_id)

    @staticmethod
    def _resolve(repository, ids, label):
        ids = list(dict.fromkeys(ids))
        found = repository.select(filters={'id': ids}) if ids else []
        missing = set(ids) - {row.id for row in found}
        if missing:
            raise ValidationError(f'Unknown {label}: {", ".join(sorted(missing))}')
        return found


class SlugEntityService:
    """CRUD for the slug-identified catalog entities (collections, tags)."""

    def __init__(self, model, label, fields, order_by=None, repository=None):
        self.model = model
        self.label = label
        self.fields = fields
        self.order_by = order_by
        self.repository = repository or Repository(model)

    def list(self):
        return self.repository.select(order_by=self.order_by)

    def get(self, entity_id):
        entity = self.repository.get(entity_id)
        if entity is None:
            raise NotFoundError(f'{self.label.capitalize()} not found')
        return entity

    def _check_slug(self, slug, entity_id=None):
        existing = self.repository.find_one(slug=slug)
        if existing and existing.id != entity_id:
            raise ValidationError(f'A {self.label} with this slug already exists')

    def create(self, data):
        self._check_slug(data['slug'])
        values = {name: data[name] for name in self.fields if name in data}
        entity = self.repository.insert(**values)
        logger.info('%s %s created', self.label.capitalize(), entity.slug)
        return entity

    def update(self, entity_id, data):
        entity = self.get(entity_id)
        if 'slug' in data:
            self._check_slug(data['slug'], entity.id)
        values = {name: data[name] for name in self.fields if name in data}
        return self.repository.update(entity, **values)

    def delete(self, entity_id):
        entity = self.get(entity_id)
        self.repository.delete(entity)
        logger.info('%s %s deleted', self.label.capitalize(), entity_id)


def collection_service():
    return SlugEntityService(
        Collection,
        'collection',
        ('slug', 'name_en', 'name_fr', 'description_en', 'description_fr', 'image_url',
         'meta_title_en', 'meta_title_fr', 'meta_description_en', 'meta_description_fr',
         'display_order', 'is_active'),
        order_by=Collection.display_order.asc(),
    )


def tag_service():
    return SlugEntityService(Tag, 'tag', ('slug', 'name_en', 'name_fr'), order_by=Tag.name_en.asc())


class DashboardService:
    def __init__(self, products=None, collections=None, orders=None):
        self.products = products or Repository(Product)
        self.collections = collections or Repository(Collection)
        self.orders = orders or Repository(Order)

    def summary(self, today=None):
        today = today or date.today()
        products = self.products.select()
        collections = self.collections.select()
        orders = self.orders.select()
        published = [p for p in products if p.status == 'published']
        low_stock = [p for p in published if p.is_low_stock]

        recent = self.orders.select(order_by=Order.created_at.desc(), limit=5)
        return {
            'stats': {
                'totalProducts': len(products),
                'publishedProducts': len(published),
                'draftProducts': sum(1 for p in products if p.status == 'draft'),
                'totalCollections': len(collections),
                'activeCollections': sum(1 for c in collections if c.is_active),
                'lowStockProducts': len(low_stock),
                'activePromotions': sum(1 for p in products if p.is_promotion_active(today)),
                'featuredProducts': sum(1 for p in published if p.is_featured),
                'newProducts': sum(1 for p in published if p.is_new),
            },
            'orderStats': {
                'newOrders': sum(1 for o in orders if o.status == 'new'),
                'pendingOrders': sum(1 for o in orders if o.status == 'pending'),
                'deliveredOrders': sum(1 for o in orders if o.status == 'delivered'),
            },
            'recentOrders': [
                {
                    'id': o.id,
                    'order_number': o.order_number,
                    'customer_first_name': o.customer_first_name,
                    'customer_last_name': o.customer_last_name,
                    'total_amount': float(o.total_amount),
                    'currency': o.currency,
                    'status': o.status,
                    'created_at': o.created_at.isoformat() if o.created_at else None,
                }
                for o in recent
            ],
            'lowStockProducts': [
                {
                    'id': p.id,
                    'name_en': p.name_en,
                    'name_fr': p.name_fr,
                    'sku': p.sku,
                    'stock_quantity': p.stock_quantity,
                    'low_stock_threshold': p.low_stock_threshold,
                }
                for p in low_stock
            ],
        }
