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

import types
from typing import TYPE_CHECKING, Any, ClassVar, Dict, Iterator, List, Mapping, Tuple, Type, TypeVar

__all__ = (
    'Enum',
    'ChannelType',
    'MessageType',
    'StickerFormatType',
    'try_enum',
)


class _EnumValue:
    # Members are instances of a per-enum subclass so that identity checks work
    # and unknown values can be produced without registering them.
    __slots__ = ('name', 'value')

    _enum_name_: ClassVar[str]
    _actual_enum_cls_: ClassVar[type]

    def __init__(self, name: str, value: Any) -> None:
        object.__setattr__(self, 'name', name)
        object.__setattr__(self, 'value', value)

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f'{self._enum_name_} members are read-only')

    def __repr__(self) -> str:
        return f'<{self._enum_name_}.{self.name}: {self.value!r}>'

    def __str__(self) -> str:
        return f'{self._enum_name_}.{self.name}'

    def __eq__(self, other: object) -> bool:
        return isinstance(other, self.__class__) and other.value == self.value

    def __hash__(self) -> int:
        return hash((self._enum_name_, self.value))

    def __reduce__(self) -> Tuple[Any, ...]:
        return (try_enum, (self._actual_enum_cls_, self.value))


class EnumMeta(type):
    if TYPE_CHECKING:
        _enum_member_names_: ClassVar[List[str]]
        _enum_member_map_: ClassVar[Dict[str, Any]]
        _enum_value_map_: ClassVar[Dict[Any, Any]]
        _enum_value_cls_: ClassVar[Type[_EnumValue]]

    def __new__(cls, name: str, bases: Tuple[type, ...], attrs: Dict[str, Any]) -> EnumMeta:
        namespace: Dict[str, Any] = {'__slots__': (), '_enum_name_': name}
        by_value: Dict[Any, _EnumValue] = {}
        by_name: Dict[str, _EnumValue] = {}
        names: List[str] = []

        # Descriptors and dunders define behaviour of the members themselves.
        for key, value in list(attrs.items()):
            if hasattr(value, '__get__') and not isinstance(value, classmethod):
                namespace[key] = attrs.pop(key)

        value_cls = type(f'_EnumValue_{name}', (_EnumValue,), namespace)

        for key, value in list(attrs.items()):
            if key.startswith('_') or isinstance(value, classmethod):
                continue

            member = by_value.get(value)
            if member is None:
                member = by_value[value] = value_cls(key, value)
                names.append(key)
            by_name[key] = attrs[key] = member

        attrs['_enum_value_map_'] = by_value
        attrs['_enum_member_map_'] = by_name
        attrs['_enum_member_names_'] = names
        attrs['_enum_value_cls_'] = value_cls
        actual_cls = super().__new__(cls, name, bases, attrs)
        type.__setattr__(value_cls, '_actual_enum_cls_', actual_cls)
        return actual_cls

    def __iter__(cls) -> Iterator[Any]:
        return (cls._enum_member_map_[name] for name in cls._enum_member_names_)

    def __len__(cls) -> int:
        return len(cls._enum_member_names_)

    def __repr__(cls) -> str:
        return f'<enum {cls.__name__}>'

    @property
    def __members__(cls) -> Mapping[str, Any]:
        return types.MappingProxyType(cls._enum_member_map_)

    def __call__(cls, value: Any) -> Any:
        try:
            return cls._enum_value_map_[value]
        except (KeyError, TypeError):
            raise ValueError(f'{value!r} is not a valid {cls.__name__}') from None

    def __getitem__(cls, key: str) -> Any:
        return cls._enum_member_map_[key]

    def __setattr__(cls, name: str, value: Any) -> None:
        raise TypeError('Enums are immutable.')

    def __delattr__(cls, attr: str) -> None:
        raise TypeError('Enums are immutable.')

    def __instancecheck__(cls, instance: Any) -> bool:
        return getattr(instance, '_actual_enum_cls_', None) is cls


if TYPE_CHECKING:
    from enum import Enum
else:

    class Enum(metaclass=EnumMeta):
        pass


class ChannelType(Enum):
    """Specifies the type of channel a message was sent in."""

    text = 0
    private = 1
    voice = 2
    group = 3
    category = 4
    news = 5
    news_thread = 10
    public_thread = 11
    private_thread = 12
    stage_voice = 13
    forum = 15
    media = 16

    def __str__(self) -> str:
        return self.name


class MessageType(Enum):
    """Specifies the type of a message.

    Only :attr:`default` messages can be crossposted, and :attr:`pins_add`
    and :attr:`new_member` have their content filled in locally.
    """

    default = 0
    recipient_add = 1
    recipient_remove = 2
    call = 3
    channel_name_change = 4
    channel_icon_change = 5
    pins_add = 6
    new_member = 7
    premium_guild_subscription = 8
    premium_guild_tier_1 = 9
    premium_guild_tier_2 = 10
    premium_guild_tier_3 = 11
    channel_follow_add = 12
    guild_discovery_disqualified = 14
    guild_discovery_requalified = 15
    guild_discovery_grace_period_initial_warning = 16
    guild_discovery_grace_period_final_warning = 17
    thread_created = 18
    reply = 19
    chat_input_command = 20
    thread_starter_message = 21
    guild_invite_reminder = 22
    context_menu_command = 23
    auto_moderation_action = 24


class StickerFormatType(Enum):
    png = 1
    apng = 2
    lottie = 3
    gif = 4

    @property
    def file_extension(self) -> str:
        if self.value == 3:
            return 'json'
        if self.value == 4:
            return 'gif'
        return 'png'


E = TypeVar('E', bound='Enum')


def try_enum(cls: Type[E], val: Any) -> E:
    """Turns ``val`` into a member of ``cls``.

    Values the library does not know about yet become a member named
    ``unknown_<val>`` that is not registered on the enum.
    """

    try:
        return cls._enum_value_map_[val]  # type: ignore
    except (KeyError, TypeError, AttributeError):
        return cls._enum_value_cls_(f'unknown_{val}', val)  # type: ignore
