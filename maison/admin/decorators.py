import logging
from functools import wraps

from flask_login import current_user, login_required

from ..extensions import login_manager
from ..models import Admin

logger = logging.getLogger(__name__)


def admin_required(f):
    """Only an authenticated back-office Admin may reach the view."""
    @wraps(f)
    @login_required
    def decorated_function(*args, **kwargs):
        if not isinstance(current_user._get_current_object(), Admin):
            logger.debug('Rejected non-admin principal %r', current_user)
            return login_manager.unauthorized()
        return f(*args, **kwargs)
    return decorated_function
