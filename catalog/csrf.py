"""Session-bound anti-forgery tokens for HTML form posts."""
import hmac
import logging
import secrets

from flask import abort, current_app, request, session

logger = logging.getLogger(__name__)

SESSION_KEY = "_csrf_token"
FORM_FIELD = "csrf_token"


def generate_csrf_token():
    """Return this session's token, creating it on first use."""
    if SESSION_KEY not in session:
        session[SESSION_KEY] = secrets.token_urlsafe(32)
    return session[SESSION_KEY]


def protect():
    """before_request hook: reject POSTs whose token doesn't match the session."""
    if request.method != "POST" or not current_app.config.get("CSRF_ENABLED", True):
        return None

    expected = session.get(SESSION_KEY, "")
    submitted = request.form.get(FORM_FIELD, "")
    if not expected or not hmac.compare_digest(submitted.encode(), expected.encode()):
        logger.warning("Rejected POST %s: bad anti-forgery token", request.path)
        abort(400)
    return None


def init_csrf(app):
    app.jinja_env.globals["csrf_token"] = generate_csrf_token
