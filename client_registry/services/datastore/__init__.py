"""Database integration for users, privileges and OAuth2 clients."""

import logging
from typing import List

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from . import util, models
from ... import domain
from ...exceptions import NotFound, Conflict, Unavailable

logger = logging.getLogger(__name__)

init_app = util.init_app
create_all = util.create_all
drop_all = util.drop_all


def load_user(user_id: int) -> domain.User:
    """
    Load a :class:`domain.User` by ID.

    Raises
    ------
    :class:`.NotFound`
        If there is no such user.
    :class:`.Unavailable`
        If the database could not be queried.

    """
    try:
        db_user = models.db.session.get(models.DBUser, user_id)
    except SQLAlchemyError as e:
        raise Unavailable('Could not query database') from e
    if db_user is None:
        raise NotFound(f'User {user_id} does not exist')
    return domain.User(user_id=db_user.user_id, nickname=db_user.nickname)


def has_privilege(principal: domain.Principal, privilege: str) -> bool:
    """Determine whether ``principal`` holds a global ``privilege``."""
    try:
        match = models.db.session.query(models.DBUserPrivilege) \
            .filter(models.DBUserPrivilege.user_id == principal.user_id) \
            .filter(models.DBUserPrivilege.privilege == privilege) \
            .filter(models.DBUserPrivilege.resource == '*') \
            .first()
    except SQLAlchemyError as e:
        raise Unavailable('Could not query database') from e
    return match is not None


def load_clients_by_user(user: domain.User) -> List[domain.OAuth2Client]:
    """Load all of the clients owned by ``user``, in storage order."""
    try:
        db_clients = models.db.session.query(models.DBClient) \
            .filter(models.DBClient.user_id == user.user_id) \
            .order_by(models.DBClient.id) \
            .all()
    except SQLAlchemyError as e:
        raise Unavailable('Could not query database') from e
    return [_to_domain(db_client, user) for db_client in db_clients]


def save_client(client: domain.OAuth2Client,
                redirect_uris: List[str]) -> domain.OAuth2Client:
    """
    Persist a new :class:`domain.OAuth2Client` with its redirect URIs.

    The client and its redirect URIs are written in a single transaction.

    Parameters
    ----------
    client : :class:`domain.OAuth2Client`
        A client that has not yet been persisted.
    redirect_uris : list
        Items are URIs, in the order that they were registered.

    Returns
    -------
    :class:`domain.OAuth2Client`
        The persisted client, with its storage ID.

    Raises
    ------
    :class:`.Conflict`
        If a client with the same ``client_id`` already exists.
    :class:`.Unavailable`
        If the client could not be written for some other reason.

    """
    db_client = models.DBClient(
        client_id=client.client_id,
        user_id=client.owner.user_id,
        allowed_grant_types=' '.join(gt.value
                                     for gt in client.allowed_grant_types),
        client_secret=client.client_secret_hash,
        redirect_uris=[models.DBRedirectURI(uri=uri)
                       for uri in redirect_uris]
    )
    try:
        with util.transaction() as dbsession:
            dbsession.add(db_client)
    except IntegrityError as e:
        raise Conflict(f'Client {client.client_id} already exists') from e
    except SQLAlchemyError as e:
        raise Unavailable('Could not save client') from e
    logger.debug('Saved client %s with id %s', client.client_id, db_client.id)
    return _to_domain(db_client, client.owner)


def _to_domain(db_client: models.DBClient,
               owner: domain.User) -> domain.OAuth2Client:
    return domain.OAuth2Client(
        id=db_client.id,
        client_id=db_client.client_id,
        owner=owner,
        allowed_grant_types=[domain.GrantType(gt) for gt
                             in db_client.allowed_grant_types.split()],
        client_secret_hash=db_client.client_secret,
        redirect_uris=[r.uri for r in db_client.redirect_uris],
        created=db_client.created
    )
