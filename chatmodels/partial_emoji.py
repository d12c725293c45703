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

import re
from typing import TYPE_CHECKING, Any, Dict, Optional

from .utils import _get_as_snowflake, snowflake_time

# fmt: off
__all__ = (
    'PartialEmoji',
)
# fmt: on

if TYPE_CHECKING:
    from datetime import datetime

    from typing_extensions import Self

CDN_URL = 'https://cdn.discordapp.com'

# <a:name:id>, a:name:id, <:name:id> and name:id
_CUSTOM_EMOJI_RE = re.compile(r'<?(?:(?P<animated>a)?:)?(?P<name>\w+):(?P<id>[0-9]{13,20})>?', re.ASCII)


class PartialEmoji:
    """An emoji as it appears in a reaction.

    A unicode emoji only has a :attr:`name`. A custom emoji is identified by
    its :attr:`id`, the name being informational.

    .. container:: operations

        .. describe:: x == y

            Unicode emoji compare by name, custom emoji by ID.

        .. describe:: hash(x)

            Return the emoji's hash.

        .. describe:: str(x)

            Returns the emoji in the form the chat client renders.

    Attributes
    -----------
    name: :class:`str`
        The unicode emoji itself or the custom emoji's name. Empty when
        a custom emoji was deleted.
    id: Optional[:class:`int`]
        The custom emoji's ID.
    animated: :class:`bool`
        Whether the custom emoji is animated.
    """

    __slots__ = ('name', 'id', 'animated')

    def __init__(self, *, name: str, id: Optional[int] = None, animated: bool = False):
        self.name: str = name
        self.id: Optional[int] = id
        self.animated: bool = animated

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> Self:
        return cls(
            name=data.get('name') or '',
            id=_get_as_snowflake(data, 'id'),
            animated=data.get('animated', False),
        )

    @classmethod
    def from_str(cls, value: str) -> Self:
        """Parses a reaction written by a user.

        Anything that does not look like ``name:id``, optionally animated
        or wrapped in angle brackets, is taken to be a unicode emoji.
        """
        match = _CUSTOM_EMOJI_RE.fullmatch(value)
        if match is None:
            return cls(name=value)
        return cls(name=match['name'], id=int(match['id']), animated=match['animated'] is not None)

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {'id': self.id, 'name': self.name}
        if self.animated:
            payload['animated'] = True
        return payload

    def __str__(self) -> str:
        if self.id is None:
            return self.name
        prefix = 'a' if self.animated else ''
        return f'<{prefix}:{self.name or "_"}:{self.id}>'

    def __repr__(self) -> str:
        return f'<PartialEmoji name={self.name!r} id={self.id} animated={self.animated}>'

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PartialEmoji):
            return NotImplemented
        if self.id is None and other.id is None:
            return self.name == other.name
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.name) if self.id is None else hash(self.id)

    def is_custom_emoji(self) -> bool:
        """:class:`bool`: Whether the emoji is a custom one."""
        return self.id is not None

    def is_unicode_emoji(self) -> bool:
        """:class:`bool`: Whether the emoji is a unicode one."""
        return self.id is None

    def _as_reaction(self) -> str:
        # The reaction routes take the bare emoji or name:id, never <:name:id>.
        if self.id is None:
            return self.name
        return f'{self.name}:{self.id}'

    @property
    def created_at(self) -> Optional[datetime]:
        """Optional[:class:`datetime.datetime`]: When the custom emoji was created."""
        return None if self.id is None else snowflake_time(self.id)

    @property
    def url(self) -> str:
        """:class:`str`: The CDN URL of a custom emoji, empty for unicode emoji."""
        if self.id is None:
            return ''
        return f'{CDN_URL}/emojis/{self.id}.{"gif" if self.animated else "png"}'
