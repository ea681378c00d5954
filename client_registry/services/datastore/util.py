"""Helpers and Flask application integration."""

import logging
from contextlib import contextmanager
from typing import Generator

from flask import Flask
from sqlalchemy.orm.session import Session

from .models import db

logger = logging.getLogger(__name__)


@contextmanager
def transaction() -> Generator[Session, None, None]:
    """Context manager for database transaction."""
    try:
        yield db.session
        if db.session.new or db.session.dirty or db.session.deleted:
            db.session.commit()
    except Exception as e:
        logger.warning('Commit failed, rolling back: %s', type(e).__name__)
        db.session.rollback()
        raise


def init_app(app: Flask) -> None:
    """Set configuration defaults and attach session to the application."""
    db.init_app(app)


def create_all() -> None:
    """Create all tables in the database."""
    db.create_all()


def drop_all() -> None:
    """Drop all tables in the database."""
    db.drop_all()
