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
import weakref
from typing import TYPE_CHECKING, Any, Dict, Optional

from .channel import PartialMessageable
from .enums import ChannelType
from .errors import InvalidData
from .message import Message
from .user import User

if TYPE_CHECKING:
    from .abc import CacheSnapshot
    from .http import HTTPClient
    from .mentions import AllowedMentions

_log = logging.getLogger(__name__)


class ConnectionState:
    """Everything a model needs to talk back to the API.

    Every :class:`Message` holds a reference to one of these, which is how
    its mutating methods reach the HTTP client, the optional cache and the
    client-wide allowed mentions.
    """

    def __init__(
        self,
        *,
        http: HTTPClient,
        cache: Optional[CacheSnapshot] = None,
        allowed_mentions: Optional[AllowedMentions] = None,
    ) -> None:
        self.http: HTTPClient = http
        self.cache: Optional[CacheSnapshot] = cache
        self.allowed_mentions: Optional[AllowedMentions] = allowed_mentions
        self._users: weakref.WeakValueDictionary[int, User] = weakref.WeakValueDictionary()
        self.user: Optional[User] = None

    def __repr__(self) -> str:
        return f'<ConnectionState cache={self.cache!r} allowed_mentions={self.allowed_mentions!r}>'

    @property
    def self_id(self) -> Optional[int]:
        me = self.cache.current_user() if self.cache is not None else None
        if me is None:
            me = self.user
        return me.id if me is not None else None

    def store_user(self, data: Dict[str, Any]) -> User:
        user_id = int(data['id'])
        try:
            user = self._users[user_id]
        except KeyError:
            user = User(state=self, data=data)
            self._users[user_id] = user
        else:
            user._update(data)
        return user

    def get_partial_messageable(
        self, id: int, guild_id: Optional[int] = None, type: Optional[ChannelType] = None
    ) -> PartialMessageable:
        return PartialMessageable(state=self, id=id, guild_id=guild_id, type=type)

    def create_message(self, *, channel: PartialMessageable, data: Dict[str, Any]) -> Message:
        try:
            return Message(state=self, channel=channel, data=data)
        except (KeyError, TypeError, ValueError) as exc:
            _log.debug('Received a malformed message payload in channel ID %s: %s', channel.id, data)
            raise InvalidData(f'Malformed message payload: {exc!r}') from exc
