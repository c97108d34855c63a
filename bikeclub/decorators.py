# bikeclub/decorators.py
from functools import wraps
from flask import abort, current_app
from flask_login import current_user
from bikeclub.logging_config import setup_logging

logger = setup_logging()


def admin_required(f):
    """Allow only users whose session role is admin.

    Anonymous users go through Flask-Login's login redirect; signed-in
    non-admins get 403.
    """
    @wraps(f)
    def wrapper(*args, **kwargs):
        if not current_user.is_authenticated:
            return current_app.login_manager.unauthorized()
        if not current_user.is_admin:
            logger.warning(f"Non-admin {current_user.email} denied access to admin panel.")
            abort(403, description='Access Denied')
        return f(*args, **kwargs)

    return wrapper
