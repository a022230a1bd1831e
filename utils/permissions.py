"""
Session gate for the registry's authenticated views.

    guard()                    -> SessionUser or None (Allow / Deny)
    redirect_if_authenticated  -> view decorator for the entry and login
                                  pages; a logged-in family goes straight
                                  to the dashboard
    admin_signed_in()          -> True once /admin/login has succeeded

Family routes behind the gate use Flask-Login's ``login_required``, which
redirects to ``login_manager.login_view`` (``auth.login``) on Deny.
"""
from functools import wraps

from flask import redirect, session, url_for
from flask_login import current_user

ADMIN_SESSION_KEY = 'is_admin'


def guard():
    """Return the SessionUser bound to this session, or ``None`` if there is none."""
    if current_user.is_authenticated:
        return current_user._get_current_object()
    return None


def redirect_if_authenticated(view):
    """Send sessions that are already logged in to the dashboard instead of *view*."""
    @wraps(view)
    def wrapped(*args, **kwargs):
        if guard() is not None:
            return redirect(url_for('dashboard.index'))
        return view(*args, **kwargs)
    return wrapped


def admin_signed_in():
    """Template-safe helper – True when the admin panel login has been passed."""
    return bool(session.get(ADMIN_SESSION_KEY))
