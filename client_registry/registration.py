"""
Registration of OAuth2 clients on behalf of users.

:class:`RegistrationService` is the only place where registration decisions
are made. Resolving users, checking privileges and persisting clients are
delegated to collaborators; by default these are provided by
:mod:`client_registry.services.datastore`.
"""

import logging
from typing import Callable, List, Optional

from . import credentials, grant_types
from .access import AccessGuard, Action
from .domain import User, Principal, OAuth2Client, NewClientRequest, \
    ClientRegistration
from .exceptions import UnprocessableInput

logger = logging.getLogger(__name__)

MIN_CLIENT_ID_LENGTH = 6
MAX_CLIENT_ID_LENGTH = 255
CLIENT_ID_TOO_SHORT = (f'clientId must be at least {MIN_CLIENT_ID_LENGTH}'
                       ' characters or left empty')
CLIENT_ID_TOO_LONG = (f'clientId must be at most {MAX_CLIENT_ID_LENGTH}'
                      ' characters')

UserLoader = Callable[[int], User]
PrivilegeCheck = Callable[[Principal, str], bool]
ClientLoader = Callable[[User], List[OAuth2Client]]
ClientSaver = Callable[[OAuth2Client, List[str]], OAuth2Client]


class RegistrationService(object):
    """Lists and creates OAuth2 clients for users."""

    def __init__(self, load_user: UserLoader, has_privilege: PrivilegeCheck,
                 load_clients: ClientLoader, save_client: ClientSaver,
                 random_source: Optional[credentials.RandomSource] = None,
                 hash_secret: Callable[[str], str] = credentials.hash_secret) \
            -> None:
        """Initialize with collaborators."""
        self._load_user = load_user
        self._load_clients = load_clients
        self._save_client = save_client
        self._random = random_source or credentials.SYSTEM_RANDOM
        self._hash_secret = hash_secret
        self.guard = AccessGuard(has_privilege)

    @classmethod
    def from_datastore(cls, **kwargs) -> 'RegistrationService':
        """Create a service backed by the application database."""
        from .services import datastore
        return cls(datastore.load_user, datastore.has_privilege,
                   datastore.load_clients_by_user, datastore.save_client,
                   **kwargs)

    def list_clients(self, principal: Optional[Principal],
                     target_user_id: int) -> List[OAuth2Client]:
        """
        Get the clients owned by a user.

        Parameters
        ----------
        principal : :class:`.Principal`
            The identity making the request.
        target_user_id : int
            The user whose clients are requested.

        Returns
        -------
        list
            Items are :class:`.OAuth2Client`, in storage order.

        Raises
        ------
        :class:`.NotFound`
            If the target user does not exist.
        :class:`.Forbidden`
            If the principal may not view the target user's clients.

        """
        user = self._load_user(target_user_id)
        self.guard.authorize(principal, user.user_id, Action.READ)
        return self._load_clients(user)

    def create_client(self, principal: Optional[Principal],
                      target_user_id: int,
                      request: NewClientRequest) -> ClientRegistration:
        """
        Register a new client for a user.

        Parameters
        ----------
        principal : :class:`.Principal`
            The identity making the request.
        target_user_id : int
            The user who will own the new client.
        request : :class:`.NewClientRequest`

        Returns
        -------
        :class:`.ClientRegistration`
            Carries the plaintext client secret. The caller is responsible
            for delivering it to the user, and must not log it.

        Raises
        ------
        :class:`.NotFound`
            If the target user does not exist.
        :class:`.Forbidden`
            If the principal may not create clients for the target user.
        :class:`.UnprocessableInput`
            If the client ID or grant types are invalid.
        :class:`.Conflict`
            If the client ID is already in use.

        """
        user = self._load_user(target_user_id)
        self.guard.authorize(principal, user.user_id, Action.CREATE)

        redirect_uris = request.redirect_uris.split() \
            if request.redirect_uris else []

        client_id = request.client_id
        if not client_id:
            client_id = credentials.generate_id(credentials.CLIENT_ID_BYTES,
                                                self._random)
        elif len(client_id) < MIN_CLIENT_ID_LENGTH:
            raise UnprocessableInput(CLIENT_ID_TOO_SHORT)
        elif len(client_id) > MAX_CLIENT_ID_LENGTH:
            raise UnprocessableInput(CLIENT_ID_TOO_LONG)

        allowed = grant_types.validate(request.allowed_grant_types)

        client_secret = credentials.generate_id(
            credentials.CLIENT_SECRET_BYTES, self._random
        )
        new_client = OAuth2Client(
            client_id=client_id,
            owner=user,
            allowed_grant_types=allowed,
            client_secret_hash=self._hash_secret(client_secret)
        )
        client = self._save_client(new_client, redirect_uris)
        logger.info('Registered client %s for user %s', client.client_id,
                    user.user_id)
        return ClientRegistration(
            client=client._replace(client_secret_hash=None),
            client_secret=client_secret,
            redirect_uris=redirect_uris
        )
