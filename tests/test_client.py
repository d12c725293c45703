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

from unittest import mock

import chatmodels
import pytest
from chatmodels import Permissions

from conftest import CHANNEL_ID, GUILD_ID, ME_ID, MESSAGE_ID, message_payload, user_payload

SEND = 'POST /channels/{channel_id}/messages'


@pytest.mark.asyncio
async def test_send(state, http):
    http.responses[SEND] = message_payload(content='hi')
    channel = state.get_partial_messageable(CHANNEL_ID, guild_id=GUILD_ID)

    message = await channel.send('hi', tts=True, builder=lambda b: b.add_embed({'title': 't'}))

    route, kwargs = http.calls[0]
    assert route.key == SEND
    assert route.url.endswith(f'/channels/{CHANNEL_ID}/messages')
    assert kwargs['json']['content'] == 'hi'
    assert kwargs['json']['tts'] is True
    assert kwargs['json']['embeds'] == [{'title': 't'}]
    assert message.channel is channel
    assert message.content == 'hi'


@pytest.mark.asyncio
async def test_send_uses_default_allowed_mentions(state, http):
    state.allowed_mentions = chatmodels.AllowedMentions.none()
    http.responses[SEND] = message_payload()

    await state.get_partial_messageable(CHANNEL_ID).send('@everyone')

    _, kwargs = http.calls[0]
    assert kwargs['json']['allowed_mentions'] == {'replied_user': False, 'parse': []}


@pytest.mark.asyncio
async def test_send_gated(cached_state, cache, http):
    cache.set_permissions(GUILD_ID, CHANNEL_ID, ME_ID, Permissions(read_messages=True))
    channel = cached_state.get_partial_messageable(CHANNEL_ID, guild_id=GUILD_ID)

    with pytest.raises(chatmodels.InsufficientPermissions):
        await channel.send('hi')

    # direct messages are never gated locally
    http.responses[SEND] = message_payload(guild_id=None)
    await cached_state.get_partial_messageable(CHANNEL_ID).send('hi')
    assert len(http.calls) == 1


@pytest.mark.asyncio
async def test_send_validated(state, http):
    channel = state.get_partial_messageable(CHANNEL_ID)

    with pytest.raises(chatmodels.ContentTooLong):
        await channel.send('x' * 2001)

    assert http.calls == []


@pytest.mark.asyncio
async def test_fetch_message(state, http):
    http.responses['GET /channels/{channel_id}/messages/{message_id}'] = message_payload()
    message = await state.get_partial_messageable(CHANNEL_ID, guild_id=GUILD_ID).fetch_message(MESSAGE_ID)
    assert message.id == MESSAGE_ID
    assert f'/messages/{MESSAGE_ID}' in http.calls[0][0].url


def test_partial_messageable(state):
    channel = state.get_partial_messageable(CHANNEL_ID, guild_id=GUILD_ID)
    assert channel.mention == f'<#{CHANNEL_ID}>'
    assert channel.jump_url == f'https://discord.com/channels/{GUILD_ID}/{CHANNEL_ID}'
    assert channel == state.get_partial_messageable(CHANNEL_ID)
    assert state.get_partial_messageable(CHANNEL_ID).jump_url == f'https://discord.com/channels/@me/{CHANNEL_ID}'


def test_client_cache_option():
    assert chatmodels.Client().cache is None
    assert chatmodels.Client(cache=False).cache is None
    assert isinstance(chatmodels.Client(cache=True).cache, chatmodels.MemoryCache)

    cache = chatmodels.MemoryCache()
    assert chatmodels.Client(cache=cache).cache is cache


def test_client_allowed_mentions():
    client = chatmodels.Client(allowed_mentions=chatmodels.AllowedMentions.none())
    assert client.allowed_mentions is not None

    with pytest.raises(TypeError):
        client.allowed_mentions = 'everyone'  # type: ignore


def test_client_partial_messageable():
    client = chatmodels.Client()
    channel = client.get_partial_messageable(CHANNEL_ID, guild_id=GUILD_ID)
    assert channel.id == CHANNEL_ID
    assert channel.guild_id == GUILD_ID


@pytest.mark.asyncio
async def test_client_login_fills_cache():
    client = chatmodels.Client(cache=True)
    with mock.patch.object(client.http, 'request', mock.AsyncMock(return_value=user_payload(ME_ID, 'me', '1'))):
        async with client:
            await client.login(' token ')

            assert client.http.token == 'token'
            assert client.user is not None
            assert client.user.id == ME_ID
            assert client.cache.current_user() is client.user  # type: ignore

    assert client.is_closed()


@pytest.mark.asyncio
async def test_client_login_rejects_non_str():
    client = chatmodels.Client()
    with pytest.raises(TypeError):
        await client.login(123)  # type: ignore


def test_route_quotes_parameters():
    route = chatmodels.Route(
        'PUT',
        '/channels/{channel_id}/messages/{message_id}/reactions/{emoji}/@me',
        channel_id=CHANNEL_ID,
        message_id=MESSAGE_ID,
        emoji='cool:123456789',
    )
    assert route.key == 'PUT /channels/{channel_id}/messages/{message_id}/reactions/{emoji}/@me'
    assert route.url == (
        f'{chatmodels.Route.BASE}/channels/{CHANNEL_ID}/messages/{MESSAGE_ID}/reactions/cool%3A123456789/@me'
    )
    assert route.channel_id == CHANNEL_ID


@pytest.mark.asyncio
async def test_static_login_failure_restores_token():
    class Response:
        status = 401
        reason = 'Unauthorized'

    http = chatmodels.HTTPClient()
    http.startup = mock.AsyncMock()  # type: ignore
    http.request = mock.AsyncMock(side_effect=chatmodels.HTTPException(Response(), 'nope'))  # type: ignore

    with pytest.raises(chatmodels.LoginFailure):
        await http.static_login('bad')

    assert http.token is None


def test_client_run_returns_main_result():
    client = chatmodels.Client()

    async def main(c: chatmodels.Client) -> int:
        assert c.user is not None
        return c.user.id

    with mock.patch.object(client.http, 'request', mock.AsyncMock(return_value=user_payload(ME_ID, 'me', '1'))):
        with mock.patch.object(chatmodels.utils, 'setup_logging') as setup_logging:
            assert client.run('token', main, log_handler=None) == ME_ID

    setup_logging.assert_not_called()
    assert client.is_closed()
