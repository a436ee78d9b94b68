"""
Shopping cart held by the client.

Lines are keyed by (product, size, color); adding an existing key merges the
quantities. The cart is stored as a JSON list under one key of whatever
mapping it is bound to: the browser's storage, or the Flask session on the
server.
"""
import json
import logging
from decimal import Decimal

logger = logging.getLogger(__name__)

CART_STORAGE_KEY = 'maison_cart'


def item_key(product_id, size=None, color=None):
    return f"{product_id}|{size or ''}|{color or ''}"


class Cart:
    def __init__(self, storage, key=CART_STORAGE_KEY):
        self.storage = storage
        self.key = key
        self.items = self._load()

    def _load(self):
        raw = self.storage.get(self.key)
        if not raw:
            return []
        try:
            parsed = json.loads(raw) if isinstance(raw, str) else raw
        except ValueError:
            logger.warning('Discarding unreadable cart storage')
            return []
        if not isinstance(parsed, list):
            return []
        return [dict(item) for item in parsed if isinstance(item, dict) and item.get('product_id')]

    def save(self):
        self.storage[self.key] = json.dumps(self.items)

    def _index(self, key):
        for idx, item in enumerate(self.items):
            if item_key(item['product_id'], item.get('size'), item.get('color')) == key:
                return idx
        return -1

    def add(self, product_id, unit_price, quantity=1, size=None, color=None, **details):
        quantity = max(1, int(quantity or 1))
        idx = self._index(item_key(product_id, size, color))
        if idx >= 0:
            self.items[idx]['quantity'] += quantity
        else:
            item = {
                'product_id': product_id,
                'product_name_en': details.get('product_name_en'),
                'product_name_fr': details.get('product_name_fr'),
                'product_sku': details.get('product_sku'),
                'product_image_url': details.get('product_image_url'),
                'unit_price': float(unit_price),
                'size': size,
                'color': color,
                'quantity': quantity,
            }
            self.items.append(item)
        self.save()
        return self.items

    def update_quantity(self, product_id, quantity, size=None, color=None):
        idx = self._index(item_key(product_id, size, color))
        if idx < 0:
            return self.items
        if quantity < 1:
            self.items.pop(idx)
        else:
            self.items[idx]['quantity'] = int(quantity)
        self.save()
        return self.items

    def remove(self, product_id, size=None, color=None):
        key = item_key(product_id, size, color)
        self.items = [i for i in self.items if item_key(i['product_id'], i.get('size'), i.get('color')) != key]
        self.save()
        return self.items

    def clear(self):
        self.items = []
        self.save()

    @property
    def total_items(self):
        return sum(item['quantity'] for item in self.items)

    @property
    def subtotal(self):
        return sum((Decimal(str(i['unit_price'])) * i['quantity'] for i in self.items), Decimal('0'))

    def to_dict(self):
        return {
            'items': self.items,
            'totalItems': self.total_items,
            'subtotal': float(self.subtotal),
        }
