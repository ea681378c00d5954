"""SQLAlchemy models for database integration."""

from datetime import datetime

from flask_sqlalchemy import SQLAlchemy
from pytz import UTC
from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

db: SQLAlchemy = SQLAlchemy()


def _now() -> datetime:
    return datetime.now(tz=UTC)


class DBUser(db.Model):
    """Persistence for :class:`domain.User`. Managed by the identity system."""

    __tablename__ = 'user'

    user_id = Column(Integer, primary_key=True, autoincrement=True)
    nickname = Column(String(255))
    created = Column(DateTime, default=_now)

    privileges = relationship('DBUserPrivilege', back_populates='user')
    clients = relationship('DBClient', back_populates='owner',
                           order_by='DBClient.id')


class DBUserPrivilege(db.Model):
    """A privilege held by a user, optionally scoped to a resource."""

    __tablename__ = 'user_privilege'

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(ForeignKey('user.user_id'), nullable=False, index=True)
    privilege = Column(String(50), nullable=False)
    resource = Column(String(255), nullable=False, default='*')

    user = relationship('DBUser', back_populates='privileges')


class DBClient(db.Model):
    """Persistence for :class:`domain.OAuth2Client`."""

    __tablename__ = 'oauth2_client'

    id = Column(Integer, primary_key=True, autoincrement=True)
    client_id = Column(String(255), nullable=False, unique=True)
    user_id = Column(ForeignKey('user.user_id'), nullable=False, index=True)
    allowed_grant_types = Column(Text, nullable=False)
    """Space-delimited grant types, in the order requested."""
    client_secret = Column(String(60), nullable=False)
    """The bcrypt hash of the client secret."""
    created = Column(DateTime, default=_now)

    owner = relationship('DBUser', back_populates='clients')
    redirect_uris = relationship('DBRedirectURI', back_populates='client',
                                 order_by='DBRedirectURI.id',
                                 lazy='joined')


class DBRedirectURI(db.Model):
    """A redirect URI registered for a :class:`DBClient`."""

    __tablename__ = 'oauth2_redirect_uri'

    id = Column(Integer, primary_key=True, autoincrement=True)
    oauth2_client_id = Column(ForeignKey('oauth2_client.id'), nullable=False,
                              index=True)
    uri = Column(Text, nullable=False)

    client = relationship('DBClient', back_populates='redirect_uris')
