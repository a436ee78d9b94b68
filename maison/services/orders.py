import logging

from ..errors import NotFoundError, ValidationError
from ..models import Order, OrderItem
from ..models.base import utcnow
from ..models.order import ORDER_STATUSES
from .datastore import Repository

logger = logging.getLogger(__name__)

SEARCH_COLUMNS = ('order_number', 'customer_email', 'customer_first_name', 'customer_last_name')
DEFAULT_PAGE_SIZE = 20
MAX_PAGE_SIZE = 100


class OrderAdminService:
    def __init__(self, orders=None, order_items=None):
        self.orders = orders or Repository(Order)
        self.order_items = order_items or Repository(OrderItem)

    def list_orders(self, status_filter=None, search=None, page=1, limit=DEFAULT_PAGE_SIZE):
        page = max(1, page or 1)
        limit = min(max(1, limit or DEFAULT_PAGE_SIZE), MAX_PAGE_SIZE)
        filters = {}
        if status_filter and status_filter != 'all':
            filters['status'] = status_filter
        return self.orders.paginate(
            page=page,
            limit=limit,
            filters=filters,
            order_by=Order.created_at.desc(),
            search=(search or '').strip() or None,
            search_columns=SEARCH_COLUMNS,
        )

    def get_order(self, order_id):
        order = self.orders.get(order_id)
        if order is None:
            raise NotFoundError('Order not found')
        return order

    def update_order(self, order_id, status=None, admin_notes=None, set_notes=False):
        """Change fulfillment status and/or admin notes.

        ``delivered_at`` is stamped the first time an order is marked delivered
        and is kept if the order later moves to another status.
        """
        order = self.get_order(order_id)
        changes = {}
        if status:
            if status not in ORDER_STATUSES:
                raise ValidationError(f'Invalid order status: {status}')
            changes['status'] = status
            if status == 'delivered' and order.delivered_at is None:
                changes['delivered_at'] = utcnow()
        if set_notes:
            changes['admin_notes'] = admin_notes
        if changes:
            self.orders.update(order, **changes)
            logger.info('Order %s updated: %s', order.order_number, sorted(changes))
        return order

    def delete_order(self, order_id):
        order = self.get_order(order_id)
        order_number = order.order_number
        # Items go first so nothing is orphaned even without a cascading FK
        self.order_items.delete_where(order_id=order.id)
        self.orders.delete(order)
        logger.info('Order %s deleted', order_number)
