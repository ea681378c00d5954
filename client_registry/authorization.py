"""Identifies the acting principal from a bearer JWT."""

import logging
from functools import wraps
from typing import Any, Callable, Optional

import jwt
from flask import request, current_app, g
from werkzeug.exceptions import Unauthorized

from .domain import Principal

logger = logging.getLogger(__name__)

MISSING_TOKEN = 'Missing authorization token'
INVALID_TOKEN = 'Invalid authorization token'


def get_token(header: Optional[str]) -> Optional[str]:
    """Extract the token from an ``Authorization`` header value."""
    if not header:
        return None
    parts = header.split(None, 1)
    if len(parts) == 2 and parts[0].lower() == 'bearer':
        return parts[1].strip()
    return header.strip()


def decode_principal(token: str, secret: str) -> Principal:
    """
    Decode a JWT into a :class:`.Principal`.

    The user is identified by the ``user_id`` claim, or failing that by the
    ``sub`` claim.

    Raises
    ------
    ValueError
        If the token cannot be decoded or does not identify a user.

    """
    try:
        claims: dict = jwt.decode(token, secret, algorithms=['HS256'])
    except jwt.exceptions.InvalidTokenError as e:
        raise ValueError('Not a valid token') from e
    user_id = claims.get('user_id', claims.get('sub'))
    try:
        return Principal(user_id=int(user_id))
    except (TypeError, ValueError) as e:
        raise ValueError('Token does not identify a user') from e


def authenticated(func: Callable[..., Any]) -> Callable[..., Any]:
    """Require a valid token, and attach the principal to ``g``."""
    @wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        token = get_token(request.headers.get('Authorization'))
        if token is None:
            raise Unauthorized(MISSING_TOKEN)
        try:
            g.principal = decode_principal(token,
                                           current_app.config['JWT_SECRET'])
        except ValueError as e:
            logger.info('Rejected auth token: %s', e)
            raise Unauthorized(INVALID_TOKEN) from e
        return func(*args, **kwargs)
    return wrapper
