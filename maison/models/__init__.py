from .admin import Admin, AdminSession
from .collection import Collection
from .currency import CurrencyRate
from .order import Order, OrderItem
from .product import Product, ProductColor, ProductImage, ProductSize, product_collections, product_tags
from .tag import Tag
