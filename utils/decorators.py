"""
Decorators Module - Per-visitor state injection for views
"""

from functools import wraps
from flask import current_app, request
from .preferences import get_visitor_id
from .theme import parse_prefers_dark, PREFERS_COLOR_SCHEME_HEADER


def get_portfolio_state():
    """Resolve the PortfolioState of the visitor making the current request"""
    registry = current_app.extensions['portfolio_state']
    prefers_dark = parse_prefers_dark(request.headers.get(PREFERS_COLOR_SCHEME_HEADER))
    return registry.get(get_visitor_id(), prefers_dark=prefers_dark)


def with_portfolio_state(f):
    """Decorator passing the visitor's state to the view as ``state``"""
    @wraps(f)
    def decorated_function(*args, **kwargs):
        kwargs['state'] = get_portfolio_state()
        return f(*args, **kwargs)
    return decorated_function


def wants_json():
    """True when the client asked for JSON rather than an HTML redirect"""
    if request.is_json:
        return True
    best = request.accept_mimetypes.best_match(['application/json', 'text/html'])
    return best == 'application/json'
