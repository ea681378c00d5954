"""Decides who may act on OAuth2 clients that belong to a given user."""

import logging
from enum import Enum
from typing import Callable, Optional

from .domain import Principal
from .exceptions import Forbidden

logger = logging.getLogger(__name__)

ADMIN = 'admin'
NOT_YOUR_OWN = ('Only users with the "admin" privilege can inspect OAuth2'
                ' clients that are not your own')


class Action(Enum):
    """Actions on a user's clients that are subject to authorization."""

    READ = 'read'
    CREATE = 'create'


class AccessGuard(object):
    """
    Authorizes actions on a user's clients.

    A principal may act on their own clients. Acting on another user's
    clients requires the ``admin`` privilege. The same rule applies to every
    :class:`Action`.
    """

    def __init__(self, has_privilege: Callable[[Principal, str], bool]) \
            -> None:
        """Initialize with a privilege lookup."""
        self._has_privilege = has_privilege

    def authorize(self, principal: Optional[Principal], target_user_id: int,
                  action: Action) -> None:
        """
        Check that ``principal`` may perform ``action`` for a user.

        Raises
        ------
        :class:`.Forbidden`
            If the principal is neither the target user nor an admin.

        """
        if principal is None:
            raise Forbidden(NOT_YOUR_OWN)
        if principal.user_id == target_user_id:
            return
        if not self._has_privilege(principal, ADMIN):
            logger.info('Denied %s on clients of user %s to user %s',
                        action.value, target_user_id, principal.user_id)
            raise Forbidden(NOT_YOUR_OWN)
        logger.debug('Admin %s allowed to %s clients of user %s',
                     principal.user_id, action.value, target_user_id)
