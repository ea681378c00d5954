"""Handles requests to list and register OAuth2 clients."""

import logging
from http import HTTPStatus as status
from typing import Any, Dict, Optional, Tuple

from flask import current_app, url_for
from werkzeug.exceptions import Forbidden, NotFound, Conflict, \
    UnprocessableEntity, ServiceUnavailable, BadRequest, \
    InternalServerError

from .. import exceptions
from ..domain import Principal, OAuth2Client, NewClientRequest
from ..registration import RegistrationService
from ..credentials import hash_secret

logger = logging.getLogger(__name__)

Response = Tuple[Optional[dict], int, dict]

ERRORS = {
    exceptions.NotFound: NotFound,
    exceptions.Forbidden: Forbidden,
    exceptions.UnprocessableInput: UnprocessableEntity,
    exceptions.Conflict: Conflict,
    exceptions.Unavailable: ServiceUnavailable,
}


def get_service() -> RegistrationService:
    """Get a :class:`.RegistrationService` for the current application."""
    rounds = int(current_app.config['BCRYPT_ROUNDS'])
    return RegistrationService.from_datastore(
        hash_secret=lambda secret: hash_secret(secret, rounds=rounds)
    )


def list_clients(principal: Principal, user_id: int) -> Response:
    """
    List the OAuth2 clients owned by a user.

    Parameters
    ----------
    principal : :class:`.Principal`
    user_id : int

    Returns
    -------
    dict
        Representation of the collection of clients.
    int
        An HTTP status code.
    dict
        Some extra headers to add to the response.

    """
    try:
        clients = get_service().list_clients(principal, user_id)
    except exceptions.RegistryError as e:
        _raise_http(e)
    response_data = {
        '_links': {
            'self': {'href': url_for('clients.list_clients',
                                     user_id=user_id)},
            'up': {'href': f'/user/{user_id}'},
        },
        'total': len(clients),
        'clients': [_client_data(client) for client in clients]
    }
    return response_data, status.OK, {}


def create_client(principal: Principal, user_id: int,
                  payload: Optional[Dict[str, Any]]) -> Response:
    """
    Register a new OAuth2 client for a user.

    Parameters
    ----------
    principal : :class:`.Principal`
    user_id : int
    payload : dict
        May contain ``clientId``, ``allowedGrantTypes`` and ``redirectUris``.

    Returns
    -------
    dict
        Representation of the new client, including the client secret.
    int
        An HTTP status code.
    dict
        Some extra headers to add to the response.

    """
    if payload is None:
        payload = {}
    if not isinstance(payload, dict):
        raise BadRequest('Request body must be an object')
    try:
        request = NewClientRequest(
            client_id=_get_str(payload, 'clientId'),
            allowed_grant_types=_get_str(payload, 'allowedGrantTypes'),
            redirect_uris=_get_str(payload, 'redirectUris')
        )
    except TypeError as e:
        raise BadRequest(str(e)) from e

    try:
        registration = get_service().create_client(principal, user_id,
                                                   request)
    except exceptions.RegistryError as e:
        _raise_http(e)

    response_data = _client_data(registration.client)
    response_data['clientSecret'] = registration.client_secret
    response_data['redirectUris'] = registration.redirect_uris
    headers = {'Location': url_for('clients.list_clients', user_id=user_id)}
    return response_data, status.CREATED, headers


def _get_str(payload: Dict[str, Any], key: str) -> Optional[str]:
    value = payload.get(key)
    if value is not None and not isinstance(value, str):
        raise TypeError(f'{key} must be a string')
    return value


def _raise_http(error: exceptions.RegistryError) -> None:
    if isinstance(error, exceptions.Unavailable):
        logger.error('Backing service failed: %s', error.reason)
    raise ERRORS.get(type(error), InternalServerError)(error.reason) \
        from error


def _client_data(client: OAuth2Client) -> Dict[str, Any]:
    return {
        'id': client.id,
        'clientId': client.client_id,
        'owner': client.owner.user_id,
        'allowedGrantTypes': [gt.value for gt in client.allowed_grant_types],
        'redirectUris': client.redirect_uris,
        'created': client.created.isoformat() if client.created else None,
    }
