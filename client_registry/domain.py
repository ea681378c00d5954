"""Core domain classes for the OAuth2 client registry."""

from datetime import datetime
from enum import Enum
from typing import NamedTuple, Optional, List, Sequence


class GrantType(Enum):
    """OAuth2 grant types that a client may be registered for."""

    PASSWORD = 'password'
    CLIENT_CREDENTIALS = 'client_credentials'
    REFRESH_TOKEN = 'refresh_token'
    IMPLICIT = 'implicit'
    AUTHORIZATION_CODE = 'authorization_code'


class User(NamedTuple):
    """An end user who may own OAuth2 clients."""

    user_id: int
    """Unique identifier for the user."""

    nickname: Optional[str] = None
    """Display name of the user."""


class Principal(NamedTuple):
    """The identity on whose behalf a request is made."""

    user_id: int
    """The ID of the acting :class:`.User`."""


class OAuth2Client(NamedTuple):
    """A registered OAuth2 client."""

    client_id: str
    """Public identifier for the client."""

    owner: User
    """The user to whom this client belongs."""

    allowed_grant_types: List[GrantType]
    """Grant types that the client is permitted to use."""

    client_secret_hash: Optional[str]
    """
    One-way hash of the client secret.

    Only set on clients loaded from or written to storage; cleared before a
    client is handed back to callers of the registration service.
    """

    redirect_uris: Sequence[str] = ()
    """Redirect URIs registered for the client, in the order given."""

    id: Optional[int] = None
    """Storage identifier, assigned when the client is persisted."""

    created: Optional[datetime] = None
    """The date/time when the client was persisted."""

    def __repr__(self) -> str:
        """Represent the client without the secret hash."""
        return (f'OAuth2Client(id={self.id!r}, client_id={self.client_id!r}, '
                f'owner={self.owner!r}, '
                f'allowed_grant_types={self.allowed_grant_types!r}, '
                f'redirect_uris={self.redirect_uris!r}, '
                f'created={self.created!r})')


class NewClientRequest(NamedTuple):
    """Caller-supplied data for registering a new client."""

    allowed_grant_types: Optional[str] = None
    """Space-delimited grant types."""

    redirect_uris: Optional[str] = None
    """Space-delimited redirect URIs."""

    client_id: Optional[str] = None
    """Desired client ID. If omitted, one is generated."""


class ClientRegistration(NamedTuple):
    """The outcome of registering a new client."""

    client: OAuth2Client
    """The persisted client."""

    client_secret: str
    """
    The plaintext client secret.

    This is the only time that the secret is available. It must not be logged
    or persisted.
    """

    redirect_uris: List[str]
    """Redirect URIs registered for the client."""

    def __repr__(self) -> str:
        """Represent the registration without the secret."""
        return (f'ClientRegistration(client_id={self.client.client_id!r}, '
                f'redirect_uris={self.redirect_uris!r})')
