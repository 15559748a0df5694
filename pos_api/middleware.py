"""Middleware for bearer-token authentication and CORS."""
from functools import wraps
from flask import g, request, current_app
from pos_api.database import get_session
from pos_api.exceptions import UnauthorizedError
from pos_api.services.auth_service import extract_bearer_token, resolve_token


def load_user_from_token():
    """
    Load the current user identity into g (Flask's per-request global).

    Called before each request. Sets g.user to a UserIdentity when the
    Authorization header carries a valid, non-expired token; otherwise
    leaves it as None and lets `require_token` decide.
    """
    g.user = None

    token = extract_bearer_token(request.headers.get('Authorization'))
    if not token:
        return

    g.user = resolve_token(get_session(), token)
    if g.user is None:
        current_app.logger.info("Rejected unknown or expired bearer token")


def require_token(f):
    """
    Decorator: Require a valid bearer token.

    Raises UnauthorizedError, rendered as a 401 envelope by the app's
    error handler. No side effects happen before the check.
    """
    @wraps(f)
    def decorated_function(*args, **kwargs):
        if g.get('user') is None:
            raise UnauthorizedError()
        return f(*args, **kwargs)
    return decorated_function


def apply_cors_headers(response):
    """Attach CORS headers to every response."""
    config = current_app.config
    response.headers['Access-Control-Allow-Origin'] = config.get('CORS_ALLOWED_ORIGINS', '*')
    response.headers['Access-Control-Allow-Methods'] = config.get('CORS_ALLOWED_METHODS')
    response.headers['Access-Control-Allow-Headers'] = config.get('CORS_ALLOWED_HEADERS')
    response.headers['Access-Control-Max-Age'] = str(config.get('CORS_MAX_AGE', 86400))
    return response
