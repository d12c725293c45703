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

import copy
import datetime
from typing import TYPE_CHECKING, Any, Dict, List, Mapping, Optional

from . import utils
from .validation import embed_length

if TYPE_CHECKING:
    from typing_extensions import Self

__all__ = (
    'Embed',
)


class EmbedProxy:
    """Dotted read access to one nested object of an embed, missing keys being ``None``."""

    def __init__(self, layer: Mapping[str, Any]):
        self.__dict__.update(layer)

    def __len__(self) -> int:
        return len(self.__dict__)

    def __repr__(self) -> str:
        inner = ', '.join(f'{k}={v!r}' for k, v in self.__dict__.items() if not k.startswith('_'))
        return f'EmbedProxy({inner})'

    def __getattr__(self, attr: str) -> None:
        return None

    def __eq__(self, other: object) -> bool:
        return isinstance(other, EmbedProxy) and self.__dict__ == other.__dict__


def _optional_str(value: Any) -> Optional[str]:
    return None if value is None else str(value)


class Embed:
    """A rich embed.

    The embed keeps the document the API uses, so an embed received with
    a message is sent back unchanged when the message is edited. Nested
    objects (author, footer, image, thumbnail, video, provider and fields)
    are read through ``EmbedProxy`` objects, e.g. ``embed.author.icon_url``.

    Every parameter expecting a :class:`str` is converted with :func:`str`.

    .. container:: operations

        .. describe:: len(x)

            Returns the length counted towards the embed text limit: the
            title, description, field names and values, footer text and
            author name.

        .. describe:: bool(b)

            Returns whether the embed has any data besides its type.

        .. describe:: x == y

            Checks if two embeds produce the same document.

    Parameters
    -----------
    title: Optional[:class:`str`]
        The title of the embed.
    type: :class:`str`
        The type of embed, ``'rich'`` for the ones bots send.
    description: Optional[:class:`str`]
        The description of the embed.
    url: Optional[:class:`str`]
        The URL the title links to.
    timestamp: Optional[:class:`datetime.datetime`]
        The timestamp of the embed content. Naive datetimes are taken
        to be local time.
    colour: Optional[:class:`int`]
        The colour of the left border. Aliased to ``color``.
    """

    __slots__ = ('_data', '_timestamp')

    def __init__(
        self,
        *,
        colour: Optional[int] = None,
        color: Optional[int] = None,
        title: Optional[Any] = None,
        type: str = 'rich',
        url: Optional[Any] = None,
        description: Optional[Any] = None,
        timestamp: Optional[datetime.datetime] = None,
    ):
        self._data: Dict[str, Any] = {'type': type}
        self._timestamp: Optional[datetime.datetime] = None
        self.title = title
        self.description = description
        self.url = url
        self.colour = colour if colour is not None else color
        self.timestamp = timestamp

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Self:
        """Creates an embed from the document the API sends.

        The document is copied, later changes to either side do not leak.
        """
        self = cls.__new__(cls)
        self._data = copy.deepcopy(dict(data))
        self._timestamp = utils.parse_time(self._data.pop('timestamp', None))
        for key in ('title', 'description', 'url'):
            if self._data.get(key) is not None:
                self._data[key] = str(self._data[key])
        return self

    def copy(self) -> Self:
        """Returns a copy of the embed."""
        return self.__class__.from_dict(self.to_dict())

    def __len__(self) -> int:
        return embed_length(self._data)

    def __bool__(self) -> bool:
        return self._timestamp is not None or any(v for k, v in self._data.items() if k != 'type')

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Embed) and self.to_dict() == other.to_dict()

    def __repr__(self) -> str:
        return f'<Embed type={self.type!r} title={self.title!r} fields={len(self._data.get("fields", ()))}>'

    def _set(self, key: str, value: Any) -> None:
        if value is None:
            self._data.pop(key, None)
        else:
            self._data[key] = value

    @property
    def title(self) -> Optional[str]:
        return self._data.get('title')

    @title.setter
    def title(self, value: Optional[Any]) -> None:
        self._set('title', _optional_str(value))

    @property
    def description(self) -> Optional[str]:
        return self._data.get('description')

    @description.setter
    def description(self, value: Optional[Any]) -> None:
        self._set('description', _optional_str(value))

    @property
    def url(self) -> Optional[str]:
        return self._data.get('url')

    @url.setter
    def url(self, value: Optional[Any]) -> None:
        self._set('url', _optional_str(value))

    @property
    def type(self) -> Optional[str]:
        return self._data.get('type')

    @property
    def colour(self) -> Optional[int]:
        return self._data.get('color')

    @colour.setter
    def colour(self, value: Optional[int]) -> None:
        if value is not None and not isinstance(value, int):
            raise TypeError(f'Expected int or None but received {value.__class__.__name__} instead.')
        self._set('color', value)

    color = colour

    @property
    def timestamp(self) -> Optional[datetime.datetime]:
        return self._timestamp

    @timestamp.setter
    def timestamp(self, value: Optional[datetime.datetime]) -> None:
        if value is None:
            self._timestamp = None
        elif isinstance(value, datetime.datetime):
            self._timestamp = value if value.tzinfo is not None else value.astimezone()
        else:
            raise TypeError(f'Expected datetime.datetime or None received {value.__class__.__name__} instead')

    # nested objects

    @property
    def footer(self) -> EmbedProxy:
        """``EmbedProxy``: The footer, with ``text`` and ``icon_url``."""
        return EmbedProxy(self._data.get('footer', {}))

    def set_footer(self, *, text: Optional[Any] = None, icon_url: Optional[Any] = None) -> Self:
        """Sets the footer. Returns the embed for chaining.

        Parameters
        -----------
        text: :class:`str`
            The footer text, counted towards the embed text limit.
        icon_url: :class:`str`
            The URL of the footer icon.
        """
        footer = {'text': _optional_str(text), 'icon_url': _optional_str(icon_url)}
        self._data['footer'] = {k: v for k, v in footer.items() if v is not None}
        return self

    def remove_footer(self) -> Self:
        self._data.pop('footer', None)
        return self

    @property
    def image(self) -> EmbedProxy:
        """``EmbedProxy``: The image, with ``url``, ``proxy_url``, ``width`` and ``height``."""
        return EmbedProxy(self._data.get('image', {}))

    def set_image(self, *, url: Optional[Any]) -> Self:
        """Sets the image, or removes it when ``url`` is ``None``. Returns the embed for chaining."""
        self._set('image', None if url is None else {'url': str(url)})
        return self

    @property
    def thumbnail(self) -> EmbedProxy:
        """``EmbedProxy``: The thumbnail, with the same attributes as :attr:`image`."""
        return EmbedProxy(self._data.get('thumbnail', {}))

    def set_thumbnail(self, *, url: Optional[Any]) -> Self:
        """Sets the thumbnail, or removes it when ``url`` is ``None``. Returns the embed for chaining."""
        self._set('thumbnail', None if url is None else {'url': str(url)})
        return self

    @property
    def video(self) -> EmbedProxy:
        """``EmbedProxy``: The video of a link embed. It cannot be set."""
        return EmbedProxy(self._data.get('video', {}))

    @property
    def provider(self) -> EmbedProxy:
        """``EmbedProxy``: The provider of a link embed, with ``name`` and ``url``. It cannot be set."""
        return EmbedProxy(self._data.get('provider', {}))

    @property
    def author(self) -> EmbedProxy:
        """``EmbedProxy``: The author, with ``name``, ``url`` and ``icon_url``."""
        return EmbedProxy(self._data.get('author', {}))

    def set_author(self, *, name: Any, url: Optional[Any] = None, icon_url: Optional[Any] = None) -> Self:
        """Sets the author. Returns the embed for chaining.

        Parameters
        -----------
        name: :class:`str`
            The name of the author, counted towards the embed text limit.
        url: :class:`str`
            The URL the name links to.
        icon_url: :class:`str`
            The URL of the author icon.
        """
        author = {'name': str(name), 'url': _optional_str(url), 'icon_url': _optional_str(icon_url)}
        self._data['author'] = {k: v for k, v in author.items() if v is not None}
        return self

    def remove_author(self) -> Self:
        self._data.pop('author', None)
        return self

    # fields

    @property
    def fields(self) -> List[EmbedProxy]:
        """List[``EmbedProxy``]: The fields, each with ``name``, ``value`` and ``inline``."""
        return [EmbedProxy(field) for field in self._data.get('fields', [])]

    def add_field(self, *, name: Any, value: Any, inline: bool = True) -> Self:
        """Appends a field. Returns the embed for chaining.

        Both ``name`` and ``value`` count towards the embed text limit.
        """
        return self.insert_field_at(len(self._data.get('fields', [])), name=name, value=value, inline=inline)

    def insert_field_at(self, index: int, *, name: Any, value: Any, inline: bool = True) -> Self:
        """Inserts a field before ``index``. Returns the embed for chaining."""
        field = {'inline': inline, 'name': str(name), 'value': str(value)}
        self._data.setdefault('fields', []).insert(index, field)
        return self

    def clear_fields(self) -> Self:
        self._data['fields'] = []
        return self

    def remove_field(self, index: int) -> Self:
        """Removes the field at ``index``. An invalid index is ignored."""
        try:
            del self._data['fields'][index]
        except (KeyError, IndexError):
            pass
        return self

    def set_field_at(self, index: int, *, name: Any, value: Any, inline: bool = True) -> Self:
        """Replaces the field at ``index``. Returns the embed for chaining.

        Raises
        -------
        IndexError
            There is no field at ``index``.
        """
        fields = self._data.get('fields', [])
        try:
            fields[index] = {'inline': inline, 'name': str(name), 'value': str(value)}
        except (TypeError, IndexError):
            raise IndexError('field index out of range') from None
        return self

    def to_dict(self) -> Dict[str, Any]:
        """Returns the document the API expects, as a fresh :class:`dict`."""
        result = copy.deepcopy(self._data)
        if self._timestamp is not None:
            result['timestamp'] = self._timestamp.astimezone(tz=datetime.timezone.utc).isoformat()
        return result
