"""
The MIT License (MIT)

Copyright (c) 2015-present Rapptz

Permission is hereby granted, free of charge, to any person obtaining a
copy of this software and associated documentation files (the "Software"),
to deal in the Software without restriction, including without limitation
the rights to use, copy, modify, merge, publish, distribute, sublicense,
and/or sell copies of the Software, and to permit persons to whom the
Software is furnished to do so, subject to the following conditions:

The above copyright notice and this permission notice shall be included in
all copies or substantial portions of the Software.

THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND, EXPRESS
OR IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF MERCHANTABILITY,
FITNESS FOR A PARTICULAR PURPOSE AND NONINFRINGEMENT. IN NO EVENT SHALL THE
AUTHORS OR COPYRIGHT HOLDERS BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER
LIABILITY, WHETHER IN AN ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING
FROM, OUT OF OR IN CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER
DEALINGS IN THE SOFTWARE.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Dict, Optional, Tuple

if TYPE_CHECKING:
    from .permissions import Permissions
    from .user import Member, User

__all__ = (
    'MemoryCache',
)

_log = logging.getLogger(__name__)


class MemoryCache:
    """A plain dictionary backed cache.

    This satisfies :class:`~chatmodels.abc.CacheSnapshot` and is what the
    library uses when a :class:`~chatmodels.Client` is created with
    ``cache=True``. Permissions are stored already resolved, per user and
    channel, since overwrite resolution belongs to whatever feeds the cache.

    Parameters
    -----------
    user: Optional[:class:`User`]
        The user the client is logged in as.
    """

    def __init__(self, user: Optional[User] = None) -> None:
        self.clear()
        self.user: Optional[User] = user

    def clear(self) -> None:
        self.user = None
        self._permissions: Dict[Tuple[int, int, int], Permissions] = {}
        self._roles: Dict[int, str] = {}
        self._members: Dict[Tuple[int, int], Member] = {}
        self._users: Dict[int, User] = {}

    def __repr__(self) -> str:
        return (
            f'<MemoryCache user={self.user!r} members={len(self._members)} '
            f'roles={len(self._roles)} permissions={len(self._permissions)}>'
        )

    # writers

    def set_permissions(self, guild_id: int, channel_id: int, user_id: int, permissions: Permissions) -> None:
        self._permissions[(guild_id, channel_id, user_id)] = permissions

    def remove_permissions(self, guild_id: int, channel_id: int, user_id: int) -> None:
        self._permissions.pop((guild_id, channel_id, user_id), None)

    def store_role(self, role_id: int, name: str) -> None:
        self._roles[role_id] = name

    def remove_role(self, role_id: int) -> None:
        self._roles.pop(role_id, None)

    def store_member(self, member: Member) -> None:
        self._members[(member.guild_id, member.id)] = member
        self.store_user(member.user)

    def store_user(self, user: User) -> User:
        try:
            return self._users[user.id]
        except KeyError:
            self._users[user.id] = user
            return user

    def get_user(self, id: int) -> Optional[User]:
        return self._users.get(id)

    # CacheSnapshot

    def current_user(self) -> Optional[User]:
        return self.user

    def permissions_for(self, user_id: int, channel_id: int, guild_id: int) -> Optional[Permissions]:
        try:
            return self._permissions[(guild_id, channel_id, user_id)]
        except KeyError:
            _log.debug('No cached permissions for user ID %s in channel ID %s.', user_id, channel_id)
            return None

    def role_name(self, role_id: int) -> Optional[str]:
        return self._roles.get(role_id)

    def get_member(self, guild_id: int, user_id: int) -> Optional[Member]:
        return self._members.get((guild_id, user_id))
