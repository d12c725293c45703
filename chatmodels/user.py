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

from typing import TYPE_CHECKING, Any, Dict, List, Optional

from .utils import MISSING, parse_time, snowflake_time

if TYPE_CHECKING:
    from datetime import datetime

    from typing_extensions import Self

    from .message import Message
    from .state import ConnectionState

__all__ = (
    'User',
    'Member',
)


class _UserTag:
    __slots__ = ()
    id: int


class User(_UserTag):
    """Represents a user.

    .. container:: operations

        .. describe:: x == y

            Checks if two users are equal.

        .. describe:: hash(x)

            Return the user's hash.

        .. describe:: str(x)

            Returns the user's name with discriminator.

    Attributes
    -----------
    name: :class:`str`
        The user's username.
    id: :class:`int`
        The user's unique ID.
    discriminator: :class:`str`
        The user's discriminator.
    global_name: Optional[:class:`str`]
        The user's global nickname.
    bot: :class:`bool`
        Specifies if the user is a bot account.
    system: :class:`bool`
        Specifies if the user is a system user.
    """

    __slots__ = (
        'name',
        'id',
        'discriminator',
        'global_name',
        '_avatar',
        'bot',
        'system',
        '_state',
        '__weakref__',
    )

    if TYPE_CHECKING:
        name: str
        id: int
        discriminator: str
        global_name: Optional[str]
        bot: bool
        system: bool
        _state: Optional[ConnectionState]
        _avatar: Optional[str]

    def __init__(self, *, state: Optional[ConnectionState] = None, data: Dict[str, Any]) -> None:
        self._state = state
        self._update(data)

    def __repr__(self) -> str:
        return (
            f"<User id={self.id} name={self.name!r} discriminator={self.discriminator!r}"
            f" bot={self.bot} system={self.system}>"
        )

    def __str__(self) -> str:
        return f'{self.name}#{self.discriminator.zfill(4)}'

    def __eq__(self, other: object) -> bool:
        return isinstance(other, _UserTag) and other.id == self.id

    def __ne__(self, other: object) -> bool:
        return not self.__eq__(other)

    def __hash__(self) -> int:
        return self.id >> 22

    def _update(self, data: Dict[str, Any]) -> None:
        self.name = data['username']
        self.id = int(data['id'])
        self.discriminator = str(data.get('discriminator', '0'))
        self.global_name = data.get('global_name')
        self._avatar = data.get('avatar')
        self.bot = data.get('bot', False)
        self.system = data.get('system', False)

    def _to_minimal_user_json(self) -> Dict[str, Any]:
        return {
            'username': self.name,
            'id': self.id,
            'avatar': self._avatar,
            'discriminator': self.discriminator,
            'global_name': self.global_name,
            'bot': self.bot,
        }

    @property
    def mention(self) -> str:
        """:class:`str`: Returns a string that allows you to mention the given user."""
        return f'<@{self.id}>'

    @property
    def created_at(self) -> datetime:
        """:class:`datetime.datetime`: Returns the user's creation time in UTC."""
        return snowflake_time(self.id)

    @property
    def display_name(self) -> str:
        """:class:`str`: Returns the user's display name.

        This is their global name if they have one, otherwise their username.
        """
        return self.global_name or self.name

    def mentioned_in(self, message: Message) -> bool:
        """Checks if the user is mentioned in the specified message.

        Parameters
        -----------
        message: :class:`Message`
            The message to check if you're mentioned in.

        Returns
        -------
        :class:`bool`
            Indicates if the user is mentioned in the message.
        """
        if message.mention_everyone:
            return True

        return any(user.id == self.id for user in message.mentions)


class Member(_UserTag):
    """Represents the guild specific part of a user, as far as messages carry it.

    Attributes such as :attr:`name` and :attr:`mention` are forwarded to the
    underlying :class:`User`.

    Attributes
    -----------
    guild_id: :class:`int`
        The guild the member belongs to.
    nick: Optional[:class:`str`]
        The guild specific nickname of the member.
    roles: List[:class:`int`]
        The IDs of the member's roles.
    joined_at: Optional[:class:`datetime.datetime`]
        When the member joined the guild. Can be ``None`` for
        some partial members.
    """

    __slots__ = (
        'guild_id',
        'nick',
        'roles',
        'joined_at',
        '_user',
        '_state',
    )

    def __init__(
        self,
        *,
        data: Dict[str, Any],
        guild_id: int,
        state: Optional[ConnectionState] = None,
        user: Optional[User] = MISSING,
    ) -> None:
        self._state: Optional[ConnectionState] = state
        self.guild_id: int = guild_id
        if user is MISSING:
            user = User(state=state, data=data['user'])
        self._user: User = user  # type: ignore
        self.nick: Optional[str] = data.get('nick')
        self.roles: List[int] = [int(r) for r in data.get('roles', [])]
        self.joined_at: Optional[datetime] = parse_time(data.get('joined_at'))

    @classmethod
    def _from_message(cls, *, message: Message, data: Dict[str, Any]) -> Self:
        return cls(data=data, guild_id=message.guild_id, state=message._state, user=message.author)  # type: ignore

    def __repr__(self) -> str:
        return f'<Member id={self.id} name={self.name!r} guild_id={self.guild_id} nick={self.nick!r}>'

    def __str__(self) -> str:
        return str(self._user)

    def __eq__(self, other: object) -> bool:
        return isinstance(other, _UserTag) and other.id == self.id

    def __hash__(self) -> int:
        return hash(self._user)

    def _to_dict(self) -> Dict[str, Any]:
        return {
            'user': self._user._to_minimal_user_json(),
            'nick': self.nick,
            'roles': [str(r) for r in self.roles],
            'joined_at': self.joined_at.isoformat() if self.joined_at else None,
        }

    @property
    def user(self) -> User:
        """:class:`User`: The user this member wraps."""
        return self._user

    @property
    def id(self) -> int:  # type: ignore
        """:class:`int`: The member's user ID."""
        return self._user.id

    @property
    def name(self) -> str:
        """:class:`str`: The member's username."""
        return self._user.name

    @property
    def discriminator(self) -> str:
        return self._user.discriminator

    @property
    def bot(self) -> bool:
        return self._user.bot

    @property
    def mention(self) -> str:
        """:class:`str`: Returns a string that allows you to mention the member."""
        return self._user.mention

    @property
    def display_name(self) -> str:
        """:class:`str`: Returns the member's nickname if set, otherwise their user's display name."""
        return self.nick or self._user.display_name

