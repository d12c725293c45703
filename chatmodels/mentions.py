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
from typing import Iterable, Optional, Union, Sequence, TYPE_CHECKING, Any, Dict

# fmt: off
__all__ = (
    'AllowedMentions',
    'content_safe',
)
# fmt: on

if TYPE_CHECKING:
    from typing_extensions import Self

    from .abc import CacheSnapshot, Snowflake
    from .user import User


class _FakeBool:
    def __repr__(self):
        return 'True'

    def __eq__(self, other):
        return other is True

    def __bool__(self):
        return True


default: Any = _FakeBool()


class AllowedMentions:
    """A class that represents what mentions are allowed in a message.

    This class can be set during :class:`Client` initialisation to apply
    to every message sent. It can also be applied on a per message basis
    via the message builders for more fine-grained control.

    Attributes
    ------------
    everyone: :class:`bool`
        Whether to allow everyone and here mentions. Defaults to ``True``.
    users: Union[:class:`bool`, Sequence[:class:`abc.Snowflake`]]
        Controls the users being mentioned. If ``True`` (the default) then
        users are mentioned based on the message content. If ``False`` then
        users are not mentioned at all. If a list of :class:`abc.Snowflake`
        is given then only the users provided will be mentioned, provided those
        users are in the message content.
    roles: Union[:class:`bool`, Sequence[:class:`abc.Snowflake`]]
        Same as ``users`` but for roles.
    replied_user: :class:`bool`
        Whether to mention the author of the message being replied to. Defaults
        to ``True``.
    """

    __slots__ = ('everyone', 'users', 'roles', 'replied_user')

    def __init__(
        self,
        *,
        everyone: bool = default,
        users: Union[bool, Sequence[Snowflake]] = default,
        roles: Union[bool, Sequence[Snowflake]] = default,
        replied_user: bool = default,
    ):
        self.everyone: bool = everyone
        self.users: Union[bool, Sequence[Snowflake]] = users
        self.roles: Union[bool, Sequence[Snowflake]] = roles
        self.replied_user: bool = replied_user

    @classmethod
    def all(cls) -> Self:
        """A factory method that returns a :class:`AllowedMentions` with all fields explicitly set to ``True``"""
        return cls(everyone=True, users=True, roles=True, replied_user=True)

    @classmethod
    def none(cls) -> Self:
        """A factory method that returns a :class:`AllowedMentions` with all fields set to ``False``"""
        return cls(everyone=False, users=False, roles=False, replied_user=False)

    @classmethod
    def reply(cls, *, ping: bool) -> Self:
        """A factory method for inline replies.

        Everyone, user and role mentions are parsed from the content, only
        the ping of the replied-to author is controlled by ``ping``.
        """
        return cls(everyone=True, users=True, roles=True, replied_user=ping)

    def to_dict(self) -> Dict[str, Any]:
        parse = []
        data: Dict[str, Any] = {}

        if self.everyone:
            parse.append('everyone')

        if self.users == True:
            parse.append('users')
        elif self.users != False:
            data['users'] = [x.id for x in self.users]  # type: ignore

        if self.roles == True:
            parse.append('roles')
        elif self.roles != False:
            data['roles'] = [x.id for x in self.roles]  # type: ignore

        data['replied_user'] = bool(self.replied_user)
        data['parse'] = parse
        return data

    def merge(self, other: AllowedMentions) -> AllowedMentions:
        # 'self' values are kept unless explicitly overridden by 'other'.
        everyone = self.everyone if other.everyone is default else other.everyone
        users = self.users if other.users is default else other.users
        roles = self.roles if other.roles is default else other.roles
        replied_user = self.replied_user if other.replied_user is default else other.replied_user
        return AllowedMentions(everyone=everyone, roles=roles, users=users, replied_user=replied_user)

    def __repr__(self) -> str:
        return (
            f'{self.__class__.__name__}(everyone={self.everyone}, '
            f'users={self.users}, roles={self.roles}, replied_user={self.replied_user})'
        )


def content_safe(
    content: str,
    users: Iterable[User],
    role_ids: Iterable[int],
    cache: Optional[CacheSnapshot] = None,
) -> str:
    """Rewrites mentions in ``content`` into text that pings nobody.

    User mentions become ``@name#discriminator``, role mentions become
    ``@role-name`` (or ``@deleted-role`` when the role is unknown), and
    ``@everyone`` and ``@here`` are broken with a zero width space.

    Only the given users and roles are rewritten, so pass the mentions of
    the message the content came from. This never fails, running it on
    its own output returns the same text.

    Parameters
    -----------
    content: :class:`str`
        The text to render.
    users: Iterable[:class:`User`]
        The users mentioned in the text.
    role_ids: Iterable[:class:`int`]
        The IDs of the roles mentioned in the text.
    cache: Optional[:class:`~chatmodels.abc.CacheSnapshot`]
        Used to look up role names.

    Returns
    --------
    :class:`str`
        The rendered text.
    """
    result = content

    for user in users:
        # <@id> first, the nickname form <@!id> otherwise
        mention = f'<@{user.id}>'
        if mention not in result:
            mention = f'<@!{user.id}>'
        result = result.replace(mention, f'@{user.name}#{user.discriminator.zfill(4)}')

    for role_id in role_ids:
        name = cache.role_name(role_id) if cache is not None else None
        result = result.replace(f'<@&{role_id}>', f'@{name}' if name is not None else '@deleted-role')

    return result.replace('@everyone', '@\u200beveryone').replace('@here', '@\u200bhere')
