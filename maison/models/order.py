import secrets

from ..extensions import db
from .base import BaseModel, isoformat, money, utcnow

ORDER_STATUSES = ('new', 'pending', 'delivered', 'cancelled')


def generate_order_number():
    return f"ORD-{utcnow():%Y%m%d}-{secrets.token_hex(3).upper()}"


class Order(BaseModel):
    __tablename__ = 'orders'

    order_number = db.Column(db.String(32), unique=True, nullable=False, default=generate_order_number)

    customer_first_name = db.Column(db.String(100), nullable=False)
    customer_last_name = db.Column(db.String(100), nullable=False)
    customer_email = db.Column(db.String(255), nullable=False, index=True)
    customer_phone = db.Column(db.String(50), nullable=True)

    shipping_address = db.Column(db.String(255), nullable=False)
    shipping_city = db.Column(db.String(100), nullable=False)
    shipping_postal_code = db.Column(db.String(20), nullable=True)
    shipping_country = db.Column(db.String(100), nullable=False)

    billing_address = db.Column(db.String(255), nullable=True)
    billing_city = db.Column(db.String(100), nullable=True)
    billing_postal_code = db.Column(db.String(20), nullable=True)
    billing_country = db.Column(db.String(100), nullable=True)

    # Fixed at checkout, never recomputed from the catalog
    subtotal = db.Column(db.Numeric(10, 2), nullable=False, default=0)
    shipping_cost = db.Column(db.Numeric(10, 2), nullable=False, default=0)
    discount_amount = db.Column(db.Numeric(10, 2), nullable=False, default=0)
    total_amount = db.Column(db.Numeric(10, 2), nullable=False, default=0)
    currency = db.Column(db.String(3), nullable=False, default='EUR')

    payment_method = db.Column(db.String(50), nullable=True)
    payment_status = db.Column(db.String(20), nullable=False, default='pending')
    sumup_checkout_id = db.Column(db.String(255), nullable=True)
    sumup_transaction_id = db.Column(db.String(255), nullable=True)

    # Fulfillment, owned by the back-office
    status = db.Column(db.String(20), nullable=False, default='new', index=True)

    customer_notes = db.Column(db.Text, nullable=True)
    admin_notes = db.Column(db.Text, nullable=True)

    created_at = db.Column(db.DateTime, default=utcnow, index=True)
    updated_at = db.Column(db.DateTime, default=utcnow, onupdate=utcnow)
    paid_at = db.Column(db.DateTime, nullable=True)
    delivered_at = db.Column(db.DateTime, nullable=True)

    items = db.relationship(
        'OrderItem',
        backref='order',
        cascade='all, delete-orphan',
        order_by='OrderItem.created_at',
    )

    def to_summary(self):
        """Public view for the post-payment confirmation page: no contact or address data."""
        return {
            'id': self.id,
            'order_number': self.order_number,
            'total_amount': money(self.total_amount),
            'currency': self.currency,
            'payment_status': self.payment_status,
        }

    def to_dict(self, with_items=True):
        data = {
            'id': self.id,
            'order_number': self.order_number,
            'customer_first_name': self.customer_first_name,
            'customer_last_name': self.customer_last_name,
            'customer_email': self.customer_email,
            'customer_phone': self.customer_phone,
            'shipping_address': self.shipping_address,
            'shipping_city': self.shipping_city,
            'shipping_postal_code': self.shipping_postal_code,
            'shipping_country': self.shipping_country,
            'billing_address': self.billing_address,
            'billing_city': self.billing_city,
            'billing_postal_code': self.billing_postal_code,
            'billing_country': self.billing_country,
            'subtotal': money(self.subtotal),
            'shipping_cost': money(self.shipping_cost),
            'discount_amount': money(self.discount_amount),
            'total_amount': money(self.total_amount),
            'currency': self.currency,
            'payment_method': self.payment_method,
            'payment_status': self.payment_status,
            'sumup_checkout_id': self.sumup_checkout_id,
            'sumup_transaction_id': self.sumup_transaction_id,
            'status': self.status,
            'customer_notes': self.customer_notes,
            'admin_notes': self.admin_notes,
            'created_at': isoformat(self.created_at),
            'updated_at': isoformat(self.updated_at),
            'paid_at': isoformat(self.paid_at),
            'delivered_at': isoformat(self.delivered_at),
        }
        if with_items:
            data['order_items'] = [item.to_dict() for item in self.items]
        return data

    def __repr__(self):
        return f'<Order {self.order_number} {self.status}/{self.payment_status}>'


class OrderItem(BaseModel):
    __tablename__ = 'order_items'

    order_id = db.Column(db.String(36), db.ForeignKey('orders.id', ondelete='CASCADE'), nullable=False, index=True)
    # Snapshot of the product at purchase time, not a foreign key
    product_id = db.Column(db.String(36), nullable=False)
    product_name_en = db.Column(db.String(255), nullable=False)
    product_name_fr = db.Column(db.String(255), nullable=False)
    product_sku = db.Column(db.String(100), nullable=True)
    product_image_url = db.Column(db.String(500), nullable=True)
    quantity = db.Column(db.Integer, nullable=False, default=1)
    unit_price = db.Column(db.Numeric(10, 2), nullable=False)
    total_price = db.Column(db.Numeric(10, 2), nullable=False)
    size = db.Column(db.String(50), nullable=True)
    color = db.Column(db.String(50), nullable=True)
    created_at = db.Column(db.DateTime, default=utcnow)

    def to_dict(self):
        return {
            'id': self.id,
            'order_id': self.order_id,
            'product_id': self.product_id,
            'product_name_en': self.product_name_en,
            'product_name_fr': self.product_name_fr,
            'product_sku': self.product_sku,
            'product_image_url': self.product_image_url,
            'quantity': self.quantity,
            'unit_price': money(self.unit_price),
            'total_price': money(self.total_price),
            'size': self.size,
            'color': self.color,
        }
