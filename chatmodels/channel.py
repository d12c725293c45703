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

from typing import TYPE_CHECKING, Any, Callable, Optional

from .builders import MessageBuilder
from .mixins import Hashable
from .permissions import Permissions, authorize
from .utils import MISSING
from .validation import check_all

if TYPE_CHECKING:
    from .enums import ChannelType
    from .message import Message
    from .state import ConnectionState

__all__ = (
    'PartialMessageable',
)


class PartialMessageable(Hashable):
    """Represents a partial messageable to aid with working messageable channels when
    only a channel ID is present.

    The only way to construct this class is through :meth:`Client.get_partial_messageable`.

    .. container:: operations

        .. describe:: x == y

            Checks if two partial messageables are equal.

        .. describe:: x != y

            Checks if two partial messageables are not equal.

        .. describe:: hash(x)

            Returns the partial messageable's hash.

    Attributes
    -----------
    id: :class:`int`
        The channel ID associated with this partial messageable.
    guild_id: Optional[:class:`int`]
        The guild ID associated with this partial messageable.
        ``None`` means a direct message.
    type: Optional[:class:`ChannelType`]
        The channel type associated with this partial messageable, if given.
    """

    __slots__ = ('id', 'guild_id', 'type', '_state')

    def __init__(
        self, state: ConnectionState, id: int, guild_id: Optional[int] = None, type: Optional[ChannelType] = None
    ) -> None:
        self._state: ConnectionState = state
        self.id: int = id
        self.guild_id: Optional[int] = guild_id
        self.type: Optional[ChannelType] = type

    def __repr__(self) -> str:
        return f'<{self.__class__.__name__} id={self.id} type={self.type!r}>'

    @property
    def jump_url(self) -> str:
        """:class:`str`: Returns a URL that allows the client to jump to the channel."""
        if self.guild_id is None:
            return f'https://discord.com/channels/@me/{self.id}'
        return f'https://discord.com/channels/{self.guild_id}/{self.id}'

    @property
    def mention(self) -> str:
        """:class:`str`: Returns a string that allows you to mention the channel."""
        return f'<#{self.id}>'

    async def send(
        self,
        content: Optional[Any] = MISSING,
        *,
        builder: Optional[Callable[[MessageBuilder], Any]] = None,
        **fields: Any,
    ) -> Message:
        r"""|coro|

        Sends a message to the destination with the content given.

        The content must be a type that can convert to a string through ``str(content)``.
        Every other part of the message is given either as keyword arguments
        or by the ``builder`` callback, which receives the :class:`MessageBuilder`
        after the keyword arguments were applied.

        If the client has a cache that knows your permissions in this channel,
        :attr:`~Permissions.send_messages` is checked before anything is sent.

        Parameters
        ------------
        content: Optional[:class:`str`]
            The content of the message to send.
        builder: Optional[Callable[[:class:`MessageBuilder`], Any]]
            A callback that finishes the draft.
        \*\*fields
            Any field accepted by :meth:`MessageBuilder.apply`, e.g.
            ``embed``, ``files``, ``tts``, ``reference`` or ``stickers``.

        Raises
        --------
        InsufficientPermissions
            The cache knows you do not have the proper permissions to send the message.
        ValidationError
            The message goes over one of the platform's limits.
        HTTPException
            Sending the message failed.

        Returns
        ---------
        :class:`Message`
            The message that was sent.
        """
        draft = MessageBuilder(**fields)
        if content is not MISSING:
            draft.content(content)
        if builder is not None:
            builder(draft)
        return await self._send_draft(draft)

    async def _send_draft(self, draft: MessageBuilder) -> Message:
        state = self._state
        authorize(state.cache, self.id, self.guild_id, Permissions(send_messages=True))

        with draft.build(default_allowed_mentions=state.allowed_mentions) as params:
            check_all(params.payload)
            data = await state.http.send_message(self.id, params=params)

        return state.create_message(channel=self, data=data)

    async def fetch_message(self, id: int, /) -> Message:
        """|coro|

        Retrieves a single :class:`Message` from the destination.

        Parameters
        ------------
        id: :class:`int`
            The message ID to look for.

        Raises
        --------
        NotFound
            The specified message was not found.
        Forbidden
            You do not have the permissions required to get a message.
        HTTPException
            Retrieving the message failed.

        Returns
        --------
        :class:`Message`
            The message asked for.
        """
        data = await self._state.http.get_message(self.id, id)
        return self._state.create_message(channel=self, data=data)
