"""Tests for :mod:`client_registry.access`."""

from unittest import TestCase, mock

from ..access import AccessGuard, Action
from ..domain import Principal
from ..exceptions import Forbidden


class TestAccessGuard(TestCase):
    """Tests for :class:`.AccessGuard`."""

    def setUp(self):
        """Set up a guard with a mock privilege lookup."""
        self.has_privilege = mock.MagicMock(return_value=False)
        self.guard = AccessGuard(self.has_privilege)

    def test_owner(self):
        """Users may act on their own clients."""
        for action in Action:
            self.guard.authorize(Principal(user_id=5), 5, action)
        self.has_privilege.assert_not_called()

    def test_non_owner_without_admin(self):
        """Other users may not act on a user's clients."""
        for action in Action:
            with self.assertRaises(Forbidden) as ctx:
                self.guard.authorize(Principal(user_id=6), 5, action)
            self.assertIn('"admin" privilege', ctx.exception.reason)
            self.assertNotIn('5', ctx.exception.reason)

    def test_non_owner_with_admin(self):
        """Admins may act on anyone's clients."""
        self.has_privilege.return_value = True
        principal = Principal(user_id=6)
        for action in Action:
            self.guard.authorize(principal, 5, action)
        self.has_privilege.assert_called_with(principal, 'admin')

    def test_no_principal(self):
        """Anonymous requests are denied."""
        with self.assertRaises(Forbidden):
            self.guard.authorize(None, 5, Action.READ)
