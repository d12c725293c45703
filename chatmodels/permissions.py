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
from typing import TYPE_CHECKING, Optional

from .flags import BaseFlags, alias_flag_value, flag_value
from .errors import InsufficientPermissions

__all__ = (
    'Permissions',
    'authorize',
)

if TYPE_CHECKING:
    from typing_extensions import Self

    from .abc import CacheSnapshot

_log = logging.getLogger(__name__)


class Permissions(BaseFlags):
    """The permission bits that matter to message operations.

    Each bit is a settable :class:`bool` property. Bits that are not
    modelled here survive in :attr:`value` untouched.

    .. container:: operations

        .. describe:: x == y

            Checks if two permission sets are equal.

        .. describe:: x <= y, x >= y

            Subset and superset checks.

        .. describe:: x | y, x & y, x ^ y

            Combines the bits of two permission sets into a new one.

        .. describe:: iter(x)

            Returns an iterator of ``(name, value)`` pairs, aliases excluded.

    Attributes
    -----------
    value: :class:`int`
        The raw bitset.
    """

    __slots__ = ()

    def __init__(self, permissions: int = 0, **kwargs: bool):
        if not isinstance(permissions, int):
            raise TypeError(f'Expected int parameter, received {permissions.__class__.__name__} instead.')

        self.value = permissions
        for name, toggle in kwargs.items():
            if name not in self.VALID_FLAGS:
                raise TypeError(f'{name!r} is not a valid permission name.')
            setattr(self, name, toggle)

    def _check_other(self, other: object) -> Permissions:
        if not isinstance(other, Permissions):
            raise TypeError(f'cannot compare {self.__class__.__name__} with {other.__class__.__name__}')
        return other

    def is_subset(self, other: Permissions) -> bool:
        """Whether every bit of self is also set in ``other``."""
        return self.value & ~self._check_other(other).value == 0

    def is_superset(self, other: Permissions) -> bool:
        """Whether every bit of ``other`` is also set in self."""
        return self._check_other(other).value & ~self.value == 0

    __le__ = is_subset
    __ge__ = is_superset

    @classmethod
    def none(cls) -> Self:
        """An empty permission set."""
        return cls(0)

    @classmethod
    def all(cls) -> Self:
        """Every modelled permission."""
        return cls(cls._all_bits())

    @classmethod
    def text(cls) -> Self:
        """Everything a moderator of a text channel has, short of administrator."""
        return cls(
            add_reactions=True,
            read_messages=True,
            send_messages=True,
            send_tts_messages=True,
            manage_messages=True,
            embed_links=True,
            attach_files=True,
            read_message_history=True,
            mention_everyone=True,
            external_emojis=True,
        )

    def missing_from(self, available: Permissions) -> Permissions:
        """Returns the permissions of self that ``available`` does not grant.

        An ``available`` set with :attr:`administrator` grants everything.
        """
        if available.administrator:
            return Permissions.none()
        return Permissions(self.value & ~available.value)

    @flag_value
    def administrator(self) -> int:
        """:class:`bool`: Grants every other permission, channel overwrites included."""
        return 1 << 3

    @flag_value
    def manage_channels(self) -> int:
        return 1 << 4

    @flag_value
    def add_reactions(self) -> int:
        """:class:`bool`: Needed by :meth:`Message.react` for an emoji nobody reacted with yet."""
        return 1 << 6

    @flag_value
    def read_messages(self) -> int:
        return 1 << 10

    @alias_flag_value
    def view_channel(self) -> int:
        """:class:`bool`: Alias for :attr:`read_messages`."""
        return 1 << 10

    @flag_value
    def send_messages(self) -> int:
        """:class:`bool`: Needed to send and reply to messages."""
        return 1 << 11

    @flag_value
    def send_tts_messages(self) -> int:
        return 1 << 12

    @flag_value
    def manage_messages(self) -> int:
        """:class:`bool`: Needed to delete other people's messages, to pin, unpin and
        crosspost, and to remove reactions that are not yours.

        Nobody can edit someone else's message, whatever their permissions.
        """
        return 1 << 13

    @flag_value
    def embed_links(self) -> int:
        return 1 << 14

    @flag_value
    def attach_files(self) -> int:
        return 1 << 15

    @flag_value
    def read_message_history(self) -> int:
        return 1 << 16

    @flag_value
    def mention_everyone(self) -> int:
        """:class:`bool`: Whether ``@everyone`` and ``@here`` actually ping."""
        return 1 << 17

    @flag_value
    def external_emojis(self) -> int:
        return 1 << 18

    @flag_value
    def manage_threads(self) -> int:
        return 1 << 34

    @flag_value
    def send_messages_in_threads(self) -> int:
        return 1 << 38


def authorize(
    cache: Optional[CacheSnapshot],
    channel_id: int,
    guild_id: Optional[int],
    required: Permissions,
) -> None:
    """Fails fast when the cache knows the current user lacks ``required``.

    The check only happens when there is a cache and the channel belongs to
    a guild. A cache that cannot resolve the channel, guild or member lets
    the action through and leaves the decision to the server.

    Parameters
    -----------
    cache: Optional[:class:`~chatmodels.abc.CacheSnapshot`]
        The cache to consult.
    channel_id: :class:`int`
        The channel the action happens in.
    guild_id: Optional[:class:`int`]
        The guild of the channel, ``None`` for private channels.
    required: :class:`Permissions`
        The permissions the action needs.

    Raises
    -------
    InsufficientPermissions
        The cached permissions do not cover ``required``.
    """
    if cache is None or guild_id is None:
        return

    me = cache.current_user()
    if me is None:
        _log.debug('Current user is not cached, skipping permission check in channel ID %s.', channel_id)
        return

    available = cache.permissions_for(me.id, channel_id, guild_id)
    if available is None:
        _log.debug('Permissions for channel ID %s are not cached, deferring to the server.', channel_id)
        return

    missing = required.missing_from(available)
    if missing.value:
        _log.debug('Refusing action in channel ID %s, missing permissions %s.', channel_id, missing.value)
        raise InsufficientPermissions(required, missing)
