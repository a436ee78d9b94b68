from datetime import date

from ..extensions import db
from .base import BaseModel, isoformat, money, utcnow

PRODUCT_STATUSES = ('draft', 'published', 'archived', 'out_of_season')
MAX_PRODUCT_IMAGES = 5

product_collections = db.Table(
    'product_collections',
    db.Column('product_id', db.String(36), db.ForeignKey('products.id', ondelete='CASCADE'), primary_key=True),
    db.Column('collection_id', db.String(36), db.ForeignKey('collections.id', ondelete='CASCADE'), primary_key=True),
)

product_tags = db.Table(
    'product_tags',
    db.Column('product_id', db.String(36), db.ForeignKey('products.id', ondelete='CASCADE'), primary_key=True),
    db.Column('tag_id', db.String(36), db.ForeignKey('tags.id', ondelete='CASCADE'), primary_key=True),
)


class Product(BaseModel):
    __tablename__ = 'products'

    sku = db.Column(db.String(100), nullable=True)
    name_en = db.Column(db.String(255), nullable=False)
    name_fr = db.Column(db.String(255), nullable=False)
    description_en = db.Column(db.Text, nullable=True)
    description_fr = db.Column(db.Text, nullable=True)
    price = db.Column(db.Numeric(10, 2), nullable=False, default=0)
    original_price = db.Column(db.Numeric(10, 2), nullable=True)

    is_promotion = db.Column(db.Boolean, nullable=False, default=False)
    promotion_start_date = db.Column(db.Date, nullable=True)
    promotion_end_date = db.Column(db.Date, nullable=True)
    promotion_label_en = db.Column(db.String(100), nullable=True)
    promotion_label_fr = db.Column(db.String(100), nullable=True)

    stock_quantity = db.Column(db.Integer, nullable=False, default=0)
    low_stock_threshold = db.Column(db.Integer, nullable=False, default=5)

    # Only 'published' products are visible on the storefront
    status = db.Column(db.String(20), nullable=False, default='draft', index=True)
    is_featured = db.Column(db.Boolean, nullable=False, default=False)
    is_new = db.Column(db.Boolean, nullable=False, default=False)

    meta_title_en = db.Column(db.String(255), nullable=True)
    meta_title_fr = db.Column(db.String(255), nullable=True)
    meta_description_en = db.Column(db.Text, nullable=True)
    meta_description_fr = db.Column(db.Text, nullable=True)

    display_order = db.Column(db.Integer, nullable=False, default=0)
    created_at = db.Column(db.DateTime, default=utcnow)
    updated_at = db.Column(db.DateTime, default=utcnow, onupdate=utcnow)

    images = db.relationship('ProductImage', backref='product', cascade='all, delete-orphan',
                             order_by='ProductImage.display_order')
    sizes = db.relationship('ProductSize', backref='product', cascade='all, delete-orphan',
                            order_by='ProductSize.display_order')
    colors = db.relationship('ProductColor', backref='product', cascade='all, delete-orphan',
                             order_by='ProductColor.display_order')
    collections = db.relationship('Collection', secondary=product_collections, backref='products')
    tags = db.relationship('Tag', secondary=product_tags, backref='products')

    @property
    def is_low_stock(self):
        return (self.stock_quantity or 0) <= (self.low_stock_threshold or 0)

    def is_promotion_active(self, today=None):
        """A promotion counts only inside its date window, for whichever bounds are set."""
        if not self.is_promotion:
            return False
        today = today or date.today()
        if self.promotion_start_date and self.promotion_start_date > today:
            return False
        if self.promotion_end_date and self.promotion_end_date < today:
            return False
        return True

    @property
    def short_id(self):
        return self.id.replace('-', '')[:8]

    @property
    def slug(self):
        """Short URL slug: first 8 hex chars of the id + slugified English name."""
        name_slug = self.slugify(self.name_en)
        return f'{self.short_id}-{name_slug}' if name_slug else self.short_id

    def to_dict(self):
        return {
            'id': self.id,
            'sku': self.sku,
            'name_en': self.name_en,
            'name_fr': self.name_fr,
            'description_en': self.description_en,
            'description_fr': self.description_fr,
            'price': money(self.price),
            'original_price': money(self.original_price),
            'is_promotion': self.is_promotion,
            'promotion_start_date': isoformat(self.promotion_start_date),
            'promotion_end_date': isoformat(self.promotion_end_date),
            'promotion_label_en': self.promotion_label_en,
            'promotion_label_fr': self.promotion_label_fr,
            'stock_quantity': self.stock_quantity,
            'low_stock_threshold': self.low_stock_threshold,
            'is_low_stock': self.is_low_stock,
            'status': self.status,
            'is_featured': self.is_featured,
            'is_new': self.is_new,
            'meta_title_en': self.meta_title_en,
            'meta_title_fr': self.meta_title_fr,
            'meta_description_en': self.meta_description_en,
            'meta_description_fr': self.meta_description_fr,
            'display_order': self.display_order,
            'created_at': isoformat(self.created_at),
            'updated_at': isoformat(self.updated_at),
            'product_images': [image.to_dict() for image in self.images],
            'product_sizes': [size.to_dict() for size in self.sizes],
            'product_colors': [color.to_dict() for color in self.colors],
            'collections': [collection.id for collection in self.collections],
            'tags': [tag.id for tag in self.tags],
        }

    def __repr__(self):
        return f'<Product {self.name_en!r} {self.status}>'


class ProductImage(BaseModel):
    __tablename__ = 'product_images'

    product_id = db.Column(db.String(36), db.ForeignKey('products.id', ondelete='CASCADE'), nullable=False, index=True)
    color_id = db.Column(db.String(36), db.ForeignKey('product_colors.id', ondelete='SET NULL'), nullable=True)
    image_url = db.Column(db.String(500), nullable=False)
    display_order = db.Column(db.Integer, nullable=False, default=0)
    alt_text_en = db.Column(db.String(255), nullable=True)
    alt_text_fr = db.Column(db.String(255), nullable=True)
    created_at = db.Column(db.DateTime, default=utcnow)

    def to_dict(self):
        return {
            'id': self.id,
            'color_id': self.color_id,
            'image_url': self.image_url,
            'display_order': self.display_order,
            'alt_text_en': self.alt_text_en,
            'alt_text_fr': self.alt_text_fr,
        }


class ProductSize(BaseModel):
    __tablename__ = 'product_sizes'

    product_id = db.Column(db.String(36), db.ForeignKey('products.id', ondelete='CASCADE'), nullable=False, index=True)
    size = db.Column(db.String(50), nullable=False)
    stock_quantity = db.Column(db.Integer, nullable=False, default=0)
    price_adjustment = db.Column(db.Numeric(10, 2), nullable=False, default=0)
    display_order = db.Column(db.Integer, nullable=False, default=0)
    created_at = db.Column(db.DateTime, default=utcnow)

    def to_dict(self):
        return {
            'id': self.id,
            'size': self.size,
            'stock_quantity': self.stock_quantity,
            'price_adjustment': money(self.price_adjustment),
            'display_order': self.display_order,
        }


class ProductColor(BaseModel):
    __tablename__ = 'product_colors'

    product_id = db.Column(db.String(36), db.ForeignKey('products.id', ondelete='CASCADE'), nullable=False, index=True)
    name_en = db.Column(db.String(100), nullable=False)
    name_fr = db.Column(db.String(100), nullable=False)
    hex_code = db.Column(db.String(7), nullable=False)
    stock_quantity = db.Column(db.Integer, nullable=False, default=0)
    display_order = db.Column(db.Integer, nullable=False, default=0)
    created_at = db.Column(db.DateTime, default=utcnow)

    def to_dict(self):
        return {
            'id': self.id,
            'name_en': self.name_en,
            'name_fr': self.name_fr,
            'hex_code': self.hex_code,
            'stock_quantity': self.stock_quantity,
            'display_order': self.display_order,
        }
