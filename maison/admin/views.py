from flask import jsonify

from ..services.catalog_admin import DashboardService
from . import admin_bp
from .decorators import admin_required


@admin_bp.route('/dashboard', methods=['GET'])
@admin_required
def admin_index():
    summary = DashboardService().summary()
    return jsonify(success=True, **summary)
