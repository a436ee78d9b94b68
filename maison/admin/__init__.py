from flask import Blueprint

# JSON back-office API; every route requires an admin session
admin_bp = Blueprint('admin', __name__, url_prefix='/api/admin')


from . import catalog_views, currency_views, media_views, orders_views, views  # noqa: E402,F401
