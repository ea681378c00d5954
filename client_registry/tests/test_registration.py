"""Tests for :mod:`client_registry.registration`."""

from datetime import datetime
from typing import Dict, List
from unittest import TestCase, mock

from .. import credentials
from ..domain import User, Principal, OAuth2Client, NewClientRequest, \
    GrantType
from ..exceptions import NotFound, Forbidden, UnprocessableInput, Conflict
from ..registration import RegistrationService


class FakeStore(object):
    """In-memory stand-in for the datastore."""

    def __init__(self) -> None:
        self.users: Dict[int, User] = {
            1: User(user_id=1, nickname='owner'),
            2: User(user_id=2, nickname='other'),
            3: User(user_id=3, nickname='admin'),
        }
        self.admins = {3}
        self.clients: List[OAuth2Client] = []

    def load_user(self, user_id: int) -> User:
        if user_id not in self.users:
            raise NotFound(f'User {user_id} does not exist')
        return self.users[user_id]

    def has_privilege(self, principal: Principal, privilege: str) -> bool:
        return privilege == 'admin' and principal.user_id in self.admins

    def load_clients(self, user: User) -> List[OAuth2Client]:
        return [c for c in self.clients if c.owner == user]

    def save_client(self, client: OAuth2Client,
                    redirect_uris: List[str]) -> OAuth2Client:
        if any(c.client_id == client.client_id for c in self.clients):
            raise Conflict(f'Client {client.client_id} already exists')
        saved = client._replace(id=len(self.clients) + 1,
                                redirect_uris=list(redirect_uris),
                                created=datetime.now())
        self.clients.append(saved)
        return saved


def fast_hash(secret: str) -> str:
    return credentials.hash_secret(secret, rounds=4)


class TestListClients(TestCase):
    """Tests for :meth:`.RegistrationService.list_clients`."""

    def setUp(self):
        """Set up a service with some existing clients."""
        self.store = FakeStore()
        self.service = RegistrationService(
            self.store.load_user, self.store.has_privilege,
            self.store.load_clients, self.store.save_client,
            hash_secret=fast_hash
        )
        for owner_id, client_id in [(1, 'first1'), (2, 'second'),
                                    (1, 'third3')]:
            self.store.save_client(OAuth2Client(
                client_id=client_id,
                owner=self.store.users[owner_id],
                allowed_grant_types=[GrantType.PASSWORD],
                client_secret_hash='x'
            ), [])

    def test_own_clients(self):
        """Users can list their own clients, in storage order."""
        clients = self.service.list_clients(Principal(user_id=1), 1)
        self.assertEqual([c.client_id for c in clients],
                         ['first1', 'third3'])

    def test_other_users_clients(self):
        """Users cannot list clients belonging to others."""
        with self.assertRaises(Forbidden):
            self.service.list_clients(Principal(user_id=2), 1)

    def test_admin(self):
        """Admins can list anyone's clients."""
        clients = self.service.list_clients(Principal(user_id=3), 2)
        self.assertEqual([c.client_id for c in clients], ['second'])

    def test_no_such_user(self):
        """Listing clients of a user that does not exist raises NotFound."""
        with self.assertRaises(NotFound):
            self.service.list_clients(Principal(user_id=3), 42)

    def test_existence_checked_before_authorization(self):
        """A missing user is reported as such, even to non-admins."""
        with self.assertRaises(NotFound):
            self.service.list_clients(Principal(user_id=2), 42)


class TestCreateClient(TestCase):
    """Tests for :meth:`.RegistrationService.create_client`."""

    def setUp(self):
        """Set up a service backed by an in-memory store."""
        self.store = FakeStore()
        self.service = RegistrationService(
            self.store.load_user, self.store.has_privilege,
            self.store.load_clients, self.store.save_client,
            hash_secret=fast_hash
        )
        self.owner = Principal(user_id=1)

    def test_create_client(self):
        """The owner registers a client with a generated ID."""
        registration = self.service.create_client(
            self.owner, 1,
            NewClientRequest(
                allowed_grant_types='client_credentials refresh_token',
                redirect_uris='https://a.example/cb'
            )
        )
        client = registration.client
        self.assertEqual(len(client.client_id), 14)
        self.assertEqual(len(registration.client_secret), 27)
        self.assertEqual(client.allowed_grant_types,
                         [GrantType.CLIENT_CREDENTIALS,
                          GrantType.REFRESH_TOKEN])
        self.assertEqual(registration.redirect_uris, ['https://a.example/cb'])
        self.assertEqual(client.owner, self.store.users[1])
        self.assertIsNotNone(client.id)

        stored, = self.store.clients
        self.assertNotEqual(stored.client_secret_hash,
                            registration.client_secret)
        self.assertTrue(credentials.check_secret(registration.client_secret,
                                                 stored.client_secret_hash))
        self.assertEqual(stored.redirect_uris, ['https://a.example/cb'])

    def test_secret_not_in_repr(self):
        """The plaintext secret does not leak through ``repr``."""
        registration = self.service.create_client(
            self.owner, 1,
            NewClientRequest(allowed_grant_types='password')
        )
        self.assertNotIn(registration.client_secret, repr(registration))

    def test_hash_not_returned(self):
        """The returned client carries no secret hash, even in its repr."""
        registration = self.service.create_client(
            self.owner, 1,
            NewClientRequest(allowed_grant_types='password')
        )
        stored_hash = self.store.clients[0].client_secret_hash
        self.assertIsNone(registration.client.client_secret_hash)
        self.assertNotIn(stored_hash, repr(registration.client))
        self.assertNotIn(stored_hash, '%s' % (registration.client,))
        self.assertNotIn(stored_hash, repr(self.store.clients[0]))

    def test_long_client_id(self):
        """Long client IDs are accepted, up to the storage limit."""
        registration = self.service.create_client(
            self.owner, 1,
            NewClientRequest(client_id='x' * 255,
                             allowed_grant_types='password')
        )
        self.assertEqual(registration.client.client_id, 'x' * 255)
        with self.assertRaises(UnprocessableInput) as ctx:
            self.service.create_client(
                self.owner, 1,
                NewClientRequest(client_id='y' * 256,
                                 allowed_grant_types='password')
            )
        self.assertIn('at most 255 characters', ctx.exception.reason)

    def test_redirect_uris_default_is_not_shared(self):
        """Clients built without redirect URIs do not share a mutable list."""
        client = OAuth2Client(client_id='abcdef', owner=User(user_id=1),
                              allowed_grant_types=[GrantType.PASSWORD],
                              client_secret_hash=None)
        self.assertEqual(client.redirect_uris, ())
        self.assertIsInstance(client.redirect_uris, tuple)

    def test_supplied_client_id(self):
        """A client ID of six or more characters is used as-is."""
        registration = self.service.create_client(
            self.owner, 1,
            NewClientRequest(client_id='abcdef',
                             allowed_grant_types='password')
        )
        self.assertEqual(registration.client.client_id, 'abcdef')

    def test_short_client_id(self):
        """A client ID of fewer than six characters is rejected."""
        with self.assertRaises(UnprocessableInput) as ctx:
            self.service.create_client(
                self.owner, 1,
                NewClientRequest(client_id='abcde',
                                 allowed_grant_types='password')
            )
        self.assertIn('at least 6 characters', ctx.exception.reason)
        self.assertEqual(self.store.clients, [])

    def test_missing_grant_types(self):
        """Grant types are required."""
        with self.assertRaises(UnprocessableInput) as ctx:
            self.service.create_client(self.owner, 1, NewClientRequest())
        self.assertEqual(ctx.exception.reason,
                         'You must specify the allowedGrantTypes property')

    def test_invalid_grant_types(self):
        """Unsupported grant types are rejected."""
        with self.assertRaises(UnprocessableInput) as ctx:
            self.service.create_client(
                self.owner, 1,
                NewClientRequest(allowed_grant_types='password bogus')
            )
        for grant_type in GrantType:
            self.assertIn(grant_type.value, ctx.exception.reason)

    def test_no_redirect_uris(self):
        """Redirect URIs are optional."""
        registration = self.service.create_client(
            self.owner, 1,
            NewClientRequest(allowed_grant_types='password')
        )
        self.assertEqual(registration.redirect_uris, [])

    def test_redirect_uris_keep_order(self):
        """Redirect URIs are split on whitespace, preserving order."""
        registration = self.service.create_client(
            self.owner, 1,
            NewClientRequest(allowed_grant_types='implicit',
                             redirect_uris='https://b/cb  https://a/cb')
        )
        self.assertEqual(registration.redirect_uris,
                         ['https://b/cb', 'https://a/cb'])

    def test_other_user(self):
        """Non-admins cannot register clients for other users."""
        with self.assertRaises(Forbidden):
            self.service.create_client(
                Principal(user_id=2), 1,
                NewClientRequest(allowed_grant_types='password')
            )
        self.assertEqual(self.store.clients, [])

    def test_forbidden_before_validation(self):
        """Authorization is checked before the request is validated."""
        with self.assertRaises(Forbidden):
            self.service.create_client(Principal(user_id=2), 1,
                                       NewClientRequest(client_id='abc'))

    def test_admin(self):
        """Admins can register clients for other users."""
        registration = self.service.create_client(
            Principal(user_id=3), 1,
            NewClientRequest(allowed_grant_types='password')
        )
        self.assertEqual(registration.client.owner.user_id, 1)

    def test_no_such_user(self):
        """Registering a client for a missing user raises NotFound."""
        with self.assertRaises(NotFound):
            self.service.create_client(
                Principal(user_id=3), 42,
                NewClientRequest(allowed_grant_types='password')
            )

    def test_conflict(self):
        """A reused client ID is reported, not silently replaced."""
        request = NewClientRequest(client_id='abcdef',
                                   allowed_grant_types='password')
        self.service.create_client(self.owner, 1, request)
        with self.assertRaises(Conflict):
            self.service.create_client(self.owner, 1, request)
        self.assertEqual(len(self.store.clients), 1)

    def test_random_source_is_injected(self):
        """IDs and secrets are drawn from the injected random source."""
        source = mock.MagicMock(spec=credentials.RandomSource)
        source.token_bytes.side_effect = lambda n: b'\x00' * n
        service = RegistrationService(
            self.store.load_user, self.store.has_privilege,
            self.store.load_clients, self.store.save_client,
            random_source=source, hash_secret=fast_hash
        )
        registration = service.create_client(
            self.owner, 1, NewClientRequest(allowed_grant_types='password')
        )
        self.assertEqual(registration.client.client_id, 'A' * 14)
        self.assertEqual(registration.client_secret, 'A' * 27)
        self.assertEqual([c.args for c in source.token_bytes.call_args_list],
                         [(10,), (20,)])
