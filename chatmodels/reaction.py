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

from typing import TYPE_CHECKING, Any, Dict, List, Optional, Union

from .partial_emoji import PartialEmoji

# fmt: off
__all__ = (
    'Reaction',
    'RawReaction',
)
# fmt: on

if TYPE_CHECKING:
    from .abc import Snowflake
    from .message import Message
    from .user import Member, User

EmojiInputType = Union[PartialEmoji, str]


def convert_emoji_reaction(emoji: Union[EmojiInputType, Reaction, RawReaction]) -> str:
    if isinstance(emoji, (Reaction, RawReaction)):
        emoji = emoji.emoji

    if isinstance(emoji, PartialEmoji):
        return emoji._as_reaction()
    if isinstance(emoji, str):
        # Reactions can be in :name:id format, but not <:name:id>.
        # No existing emojis have <> in them, so this should be okay.
        return emoji.strip('<>')

    raise TypeError(f'emoji argument must be str, PartialEmoji, or Reaction not {emoji.__class__.__name__}.')


def _emoji_from_payload(data: Dict[str, Any]) -> Union[PartialEmoji, str]:
    emoji = PartialEmoji.from_dict(data)
    if emoji.is_unicode_emoji():
        return emoji.name
    return emoji


class Reaction:
    """Represents the aggregate of one emoji's reactions on a message.

    .. container:: operations

        .. describe:: x == y

            Checks if two reactions are equal. This works by checking if the emoji
            is the same. So two messages with the same reaction will be considered
            "equal".

        .. describe:: hash(x)

            Returns the reaction's hash.

        .. describe:: str(x)

            Returns the string form of the reaction's emoji.

    Attributes
    -----------
    emoji: Union[:class:`PartialEmoji`, :class:`str`]
        The reaction emoji. May be a custom emoji, or a unicode emoji.
    count: :class:`int`
        Number of times this reaction was made.
    me: :class:`bool`
        If the current user sent this reaction.
    message: :class:`Message`
        Message this reaction is for.
    """

    __slots__ = ('message', 'count', 'emoji', 'me')

    def __init__(self, *, message: Message, data: Dict[str, Any], emoji: Optional[EmojiInputType] = None):
        self.message: Message = message
        self.emoji: EmojiInputType = emoji or _emoji_from_payload(data['emoji'])
        self.count: int = data.get('count', 1)
        self.me: bool = data.get('me', False)

    def is_custom_emoji(self) -> bool:
        """:class:`bool`: If this is a custom emoji."""
        return not isinstance(self.emoji, str)

    def __eq__(self, other: object) -> bool:
        return isinstance(other, self.__class__) and other.emoji == self.emoji

    def __ne__(self, other: object) -> bool:
        if isinstance(other, self.__class__):
            return other.emoji != self.emoji
        return True

    def __hash__(self) -> int:
        return hash(self.emoji)

    def __str__(self) -> str:
        return str(self.emoji)

    def __repr__(self) -> str:
        return f'<Reaction emoji={self.emoji!r} me={self.me} count={self.count}>'

    async def remove(self, user: Snowflake) -> None:
        """|coro|

        Remove the reaction by the provided user from the message.

        If the reaction is not your own then :attr:`~Permissions.manage_messages`
        is needed.

        Parameters
        -----------
        user: :class:`abc.Snowflake`
             The user or member from which to remove the reaction.

        Raises
        -------
        InsufficientPermissions
            The cache knows you lack the permissions to remove the reaction.
        HTTPException
            Removing the reaction failed.
        """
        await self.message.remove_reaction(self.emoji, user)

    async def clear(self) -> None:
        """|coro|

        Clears this reaction from the message.

        You must have :attr:`~Permissions.manage_messages` to do this.

        Raises
        -------
        InsufficientPermissions
            The cache knows you lack the permissions to clear the reaction.
        HTTPException
            Clearing the reaction failed.
        """
        await self.message.clear_reaction(self.emoji)

    async def users(self, *, limit: int = 50, after: Optional[Snowflake] = None) -> List[User]:
        """|coro|

        Fetches the users that reacted with this emoji.

        See :meth:`Message.reaction_users`.
        """
        return await self.message.reaction_users(self.emoji, limit=limit, after=after)


class RawReaction:
    """Represents a reaction that was just added by the current user.

    This is what :meth:`Message.react` returns. It is built locally from
    what was sent, the server does not echo reactions back.

    Attributes
    -----------
    message_id: :class:`int`
        The message ID that got the reaction.
    channel_id: :class:`int`
        The channel ID of the message.
    guild_id: Optional[:class:`int`]
        The guild ID of the message, if applicable.
    user_id: Optional[:class:`int`]
        The ID of the current user. ``None`` when it is not known locally.
    emoji: :class:`PartialEmoji`
        The custom or unicode emoji being used.
    member: Optional[:class:`Member`]
        The current user's member in the guild, if cached.
    """

    __slots__ = (
        'message_id',
        'channel_id',
        'guild_id',
        'user_id',
        'emoji',
        'member',
    )

    def __init__(
        self,
        *,
        message_id: int,
        channel_id: int,
        guild_id: Optional[int],
        user_id: Optional[int],
        emoji: PartialEmoji,
        member: Optional[Member] = None,
    ) -> None:
        self.message_id: int = message_id
        self.channel_id: int = channel_id
        self.guild_id: Optional[int] = guild_id
        self.user_id: Optional[int] = user_id
        self.emoji: PartialEmoji = emoji
        self.member: Optional[Member] = member

    def __repr__(self) -> str:
        value = ' '.join(f'{attr}={getattr(self, attr)!r}' for attr in self.__slots__)
        return f'<{self.__class__.__name__} {value}>'

    def __eq__(self, other: object) -> bool:
        return (
            isinstance(other, RawReaction)
            and self.message_id == other.message_id
            and self.user_id == other.user_id
            and self.emoji == other.emoji
        )
