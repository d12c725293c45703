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

from typing import Any, Dict, List, Optional, Tuple

import chatmodels
import pytest
from chatmodels.http import HTTPClient, Route
from chatmodels.state import ConnectionState


ME_ID = 80351110224678912
OTHER_ID = 80088516616269824
GUILD_ID = 81384788765712384
CHANNEL_ID = 381870129706958858
MESSAGE_ID = 1000000000000000000
ROLE_ID = 381978264698224660


def user_payload(id: int, username: str, discriminator: str = '0') -> Dict[str, Any]:
    return {'id': str(id), 'username': username, 'discriminator': discriminator, 'avatar': None}


def message_payload(**overrides: Any) -> Dict[str, Any]:
    data: Dict[str, Any] = {
        'id': str(MESSAGE_ID),
        'channel_id': str(CHANNEL_ID),
        'guild_id': str(GUILD_ID),
        'type': 0,
        'content': 'hello',
        'author': user_payload(ME_ID, 'me', '1'),
        'timestamp': '2022-07-22T11:22:59.817000+00:00',
        'edited_timestamp': None,
        'tts': False,
        'mention_everyone': False,
        'mentions': [],
        'mention_roles': [],
        'attachments': [],
        'embeds': [],
        'pinned': False,
        'flags': 0,
    }
    data.update(overrides)
    return data


class FakeHTTPClient(HTTPClient):
    """Records every request instead of sending it.

    ``responses`` maps a route key, e.g. ``'PATCH /channels/{channel_id}/messages/{message_id}'``,
    to the data the request returns. Unknown routes return ``None``.
    """

    def __init__(self) -> None:
        super().__init__()
        self.calls: List[Tuple[Route, Dict[str, Any]]] = []
        self.responses: Dict[str, Any] = {}

    async def request(self, route: Route, *, files: Optional[Any] = None, form: Optional[Any] = None, **kwargs: Any) -> Any:
        kwargs['files'] = files
        kwargs['form'] = form
        self.calls.append((route, kwargs))
        return self.responses.get(route.key)

    @property
    def keys(self) -> List[str]:
        return [route.key for route, _ in self.calls]


@pytest.fixture
def http() -> FakeHTTPClient:
    return FakeHTTPClient()


@pytest.fixture
def me() -> chatmodels.User:
    return chatmodels.User(data=user_payload(ME_ID, 'me', '1'))


@pytest.fixture
def cache(me: chatmodels.User) -> chatmodels.MemoryCache:
    return chatmodels.MemoryCache(me)


@pytest.fixture
def state(http: FakeHTTPClient) -> ConnectionState:
    return ConnectionState(http=http)


@pytest.fixture
def cached_state(http: FakeHTTPClient, cache: chatmodels.MemoryCache) -> ConnectionState:
    return ConnectionState(http=http, cache=cache)


def make_message(state: ConnectionState, **overrides: Any) -> chatmodels.Message:
    data = message_payload(**overrides)
    guild_id = int(data['guild_id']) if data.get('guild_id') else None
    channel = state.get_partial_messageable(int(data['channel_id']), guild_id=guild_id)
    return state.create_message(channel=channel, data=data)
