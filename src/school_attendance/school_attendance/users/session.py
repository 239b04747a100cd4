from __future__ import annotations

from functools import wraps

from flask import session

from .model import CurrentUser


def login_required(view):
    """Resolve the session caller and pass it to the view as `user`."""

    @wraps(view)
    def wrapper(*args, **kwargs):
        return view(*args, user=CurrentUser.from_session(session), **kwargs)

    return wrapper
