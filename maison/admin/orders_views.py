from flask import current_app, jsonify, request

from ..errors import ValidationError
from ..forms import request_json
from ..services.datastore import pagination_dict
from ..services.orders import DEFAULT_PAGE_SIZE, OrderAdminService
from . import admin_bp
from .decorators import admin_required
from .utils import query_int


@admin_bp.route('/orders', methods=['GET'])
@admin_required
def admin_orders():
    """Orders with their items, newest first; ``filter`` is a status or ``all``."""
    page = OrderAdminService().list_orders(
        status_filter=request.args.get('filter', '').strip() or None,
        search=request.args.get('search'),
        page=query_int('page', 1),
        limit=query_int('limit', DEFAULT_PAGE_SIZE),
    )
    return jsonify(
        success=True,
        orders=[order.to_dict() for order in page.items],
        pagination=pagination_dict(page),
    )


@admin_bp.route('/orders/<order_id>', methods=['GET'])
@admin_required
def admin_order_view(order_id):
    order = OrderAdminService().get_order(order_id)
    return jsonify(success=True, order=order.to_dict())


@admin_bp.route('/orders/<order_id>', methods=['PUT'])
@admin_required
def admin_order_update(order_id):
    payload = request_json()
    status = payload.get('status')
    if status is not None and not isinstance(status, str):
        raise ValidationError(f'Invalid order status: {status}')
    admin_notes = payload.get('admin_notes')
    if admin_notes is not None and not isinstance(admin_notes, str):
        raise ValidationError('admin_notes must be a string')

    order = OrderAdminService().update_order(
        order_id,
        status=status,
        admin_notes=admin_notes,
        set_notes='admin_notes' in payload,
    )
    current_app.logger.info('Order %s updated from the back office', order.order_number)
    return jsonify(success=True, order=order.to_dict())


@admin_bp.route('/orders/<order_id>', methods=['DELETE'])
@admin_required
def admin_order_delete(order_id):
    OrderAdminService().delete_order(order_id)
    return jsonify(success=True)
