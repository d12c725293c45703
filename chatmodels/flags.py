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

from typing import TYPE_CHECKING, Any, Callable, ClassVar, Dict, Iterator, Optional, Tuple, Type, overload

if TYPE_CHECKING:
    from typing_extensions import Self


__all__ = (
    'BaseFlags',
    'MessageFlags',
)


class flag_value:
    """A single bit of a :class:`BaseFlags` subclass, declared with a method
    returning the bit. The method's docstring documents the flag.
    """

    def __init__(self, func: Callable[[Any], int]):
        self.flag: int = func(None)
        self.name: str = func.__name__
        self.__doc__: Optional[str] = func.__doc__

    @overload
    def __get__(self, instance: None, owner: Type[Any]) -> Self:
        ...

    @overload
    def __get__(self, instance: BaseFlags, owner: Type[Any]) -> bool:
        ...

    def __get__(self, instance: Optional[BaseFlags], owner: Type[Any]) -> Any:
        if instance is None:
            return self
        return instance._has_flag(self.flag)

    def __set__(self, instance: BaseFlags, value: bool) -> None:
        instance._set_flag(self.flag, value)

    def __repr__(self) -> str:
        return f'<{self.__class__.__name__} name={self.name!r} flag={self.flag!r}>'


class alias_flag_value(flag_value):
    """A second name for a bit. Aliases are settable but not iterated."""


class BaseFlags:
    """The shared bitset behaviour of :class:`MessageFlags` and :class:`Permissions`.

    Subclasses declare their bits with :class:`flag_value` and get
    :attr:`VALID_FLAGS` filled in when the class is created.
    """

    VALID_FLAGS: ClassVar[Dict[str, int]] = {}
    DEFAULT_VALUE: ClassVar[int] = 0

    __slots__ = ('value',)

    value: int

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        cls.VALID_FLAGS = {
            name: descriptor.flag for name, descriptor in vars(cls).items() if isinstance(descriptor, flag_value)
        }

    def __init__(self, **kwargs: bool):
        self.value = self.DEFAULT_VALUE
        for key, value in kwargs.items():
            if key not in self.VALID_FLAGS:
                raise TypeError(f'{key!r} is not a valid flag name.')
            setattr(self, key, value)

    @classmethod
    def _from_value(cls, value: int) -> Self:
        self = cls.__new__(cls)
        self.value = value
        return self

    @classmethod
    def _all_bits(cls) -> int:
        value = 0
        for bit in cls.VALID_FLAGS.values():
            value |= bit
        return value

    def __or__(self, other: Self) -> Self:
        return self._from_value(self.value | other.value)

    def __and__(self, other: Self) -> Self:
        return self._from_value(self.value & other.value)

    def __xor__(self, other: Self) -> Self:
        return self._from_value(self.value ^ other.value)

    def __invert__(self) -> Self:
        # Bits outside the known flags are left alone.
        return self._from_value(self.value ^ self._all_bits())

    def __bool__(self) -> bool:
        return self.value != self.DEFAULT_VALUE

    def __eq__(self, other: object) -> bool:
        return isinstance(other, self.__class__) and self.value == other.value

    def __hash__(self) -> int:
        return hash((self.__class__, self.value))

    def __repr__(self) -> str:
        return f'<{self.__class__.__name__} value={self.value}>'

    def __iter__(self) -> Iterator[Tuple[str, bool]]:
        for name, descriptor in vars(self.__class__).items():
            if isinstance(descriptor, flag_value) and not isinstance(descriptor, alias_flag_value):
                yield name, self._has_flag(descriptor.flag)

    def _has_flag(self, o: int) -> bool:
        return (self.value & o) == o

    def _set_flag(self, o: int, toggle: bool) -> None:
        if toggle is True:
            self.value |= o
        elif toggle is False:
            self.value &= ~o
        else:
            raise TypeError(f'Value to set for {self.__class__.__name__} must be a bool.')


class MessageFlags(BaseFlags):
    r"""The flag bits of a :class:`Message`.

    A received message's flags are treated as read only. Operations that
    change them, such as :meth:`Message.suppress_embeds`, return a new message
    carrying the flags the server sent back.

    .. container:: operations

        .. describe:: x == y

            Checks if two flags are equal.

        .. describe:: x | y, x & y, x ^ y

            Combines the bits of two flag values into a new one.

        .. describe:: ~x

            Inverts every known flag.

        .. describe:: iter(x)

            Returns an iterator of ``(name, value)`` pairs, aliases excluded.

    Attributes
    -----------
    value: :class:`int`
        The raw value.
    """

    __slots__ = ()

    @flag_value
    def crossposted(self):
        """:class:`bool`: The message was published to the channels following it."""
        return 1 << 0

    @flag_value
    def is_crossposted(self):
        """:class:`bool`: The message is a copy published from a followed channel."""
        return 1 << 1

    @flag_value
    def suppress_embeds(self):
        """:class:`bool`: Embeds are hidden when the message is rendered."""
        return 1 << 2

    @flag_value
    def source_message_deleted(self):
        return 1 << 3

    @flag_value
    def urgent(self):
        """:class:`bool`: The message came from the platform's Trust and Safety team."""
        return 1 << 4

    @flag_value
    def has_thread(self):
        return 1 << 5

    @flag_value
    def ephemeral(self):
        """:class:`bool`: Only the invoking user can see the message."""
        return 1 << 6

    @flag_value
    def loading(self):
        return 1 << 7

    @flag_value
    def failed_to_mention_some_roles_in_thread(self):
        return 1 << 8

    @flag_value
    def suppress_notifications(self):
        """:class:`bool`: The message does not trigger push or desktop notifications."""
        return 1 << 12

    @alias_flag_value
    def silent(self):
        """:class:`bool`: Alias for :attr:`suppress_notifications`."""
        return 1 << 12

    @flag_value
    def voice(self):
        return 1 << 13
