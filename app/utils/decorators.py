from functools import wraps
import hmac

from flask import current_app, jsonify, request
from flask_babel import _


def admin_required(f):
    """Require the admin API token when one is configured.

    The token is sent in the ``X-Admin-Token`` header.
    """
    @wraps(f)
    def decorated_function(*args, **kwargs):
        expected = current_app.config.get('ADMIN_API_TOKEN')
        if expected:
            provided = request.headers.get('X-Admin-Token', '')
            if not hmac.compare_digest(provided, expected):
                return jsonify({'error': _("You do not have the required privileges to access this page.")}), 403
        return f(*args, **kwargs)
    return decorated_function
