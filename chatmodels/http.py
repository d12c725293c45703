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
import sys
from typing import TYPE_CHECKING, Any, ClassVar, Coroutine, Dict, List, Optional, Sequence, Type, TypeVar, Union
from urllib.parse import quote as _uriquote

import aiohttp

from . import __version__, utils
from .errors import Forbidden, HTTPException, LoginFailure, NotFound, ServerError
from .utils import MISSING

_log = logging.getLogger(__name__)

if TYPE_CHECKING:
    from .abc import Snowflake
    from .builders import MessageParameters
    from .file import File

    T = TypeVar('T')
    Response = Coroutine[Any, Any, T]

__all__ = (
    'Route',
    'HTTPClient',
)

API_VERSION: int = 10

_MESSAGE_PATH = '/channels/{channel_id}/messages/{message_id}'
_REACTION_PATH = _MESSAGE_PATH + '/reactions/{emoji}'


async def json_or_text(response: aiohttp.ClientResponse) -> Union[Dict[str, Any], str]:
    text = await response.text(encoding='utf-8')
    # Error pages from the edge proxy come without a content type
    if response.headers.get('content-type') == 'application/json':
        return utils._from_json(text)
    return text


class Route:
    """A method and a path template of the REST API.

    Parameters fill the template, string ones being percent-encoded so that
    an emoji or a ``name:id`` pair fits in a single path segment.
    """

    BASE: ClassVar[str] = f'https://discord.com/api/v{API_VERSION}'

    __slots__ = ('method', 'path', 'url', 'channel_id', 'guild_id')

    def __init__(self, method: str, path: str, **parameters: Any) -> None:
        self.method: str = method
        self.path: str = path
        quoted = {k: _uriquote(v, safe='') if isinstance(v, str) else v for k, v in parameters.items()}
        self.url: str = (self.BASE + path).format_map(quoted)
        self.channel_id: Optional[Snowflake] = parameters.get('channel_id')
        self.guild_id: Optional[Snowflake] = parameters.get('guild_id')

    def __repr__(self) -> str:
        return f'<Route {self.key}>'

    @property
    def key(self) -> str:
        """The method and the unformatted path, e.g. ``PATCH /channels/{channel_id}/messages/{message_id}``."""
        return f'{self.method} {self.path}'


class HTTPClient:
    """Sends requests to the REST API over an :class:`aiohttp.ClientSession`.

    Every request is sent once. Failures are raised as the matching
    :exc:`HTTPException` subclass, there is no retry and no rate limit
    bookkeeping.
    """

    ERRORS: ClassVar[Dict[int, Type[HTTPException]]] = {
        403: Forbidden,
        404: NotFound,
    }

    def __init__(
        self,
        connector: Optional[aiohttp.BaseConnector] = None,
        *,
        proxy: Optional[str] = None,
        proxy_auth: Optional[aiohttp.BasicAuth] = None,
        http_trace: Optional[aiohttp.TraceConfig] = None,
        user_agent: Optional[str] = None,
    ) -> None:
        self.connector: aiohttp.BaseConnector = connector or MISSING
        self.__session: aiohttp.ClientSession = MISSING
        self.token: Optional[str] = None
        self.proxy: Optional[str] = proxy
        self.proxy_auth: Optional[aiohttp.BasicAuth] = proxy_auth
        self.http_trace: Optional[aiohttp.TraceConfig] = http_trace

        if user_agent is None:
            python = '{0.major}.{0.minor}'.format(sys.version_info)
            user_agent = (
                f'chatmodels (https://github.com/chatmodels/chatmodels {__version__}) '
                f'Python/{python} aiohttp/{aiohttp.__version__}'
            )
        self.user_agent: str = user_agent

    async def startup(self) -> None:
        if self.__session and not self.__session.closed:
            return

        if self.connector is MISSING:
            self.connector = aiohttp.TCPConnector(limit=0)

        trace_configs = None if self.http_trace is None else [self.http_trace]
        self.__session = aiohttp.ClientSession(connector=self.connector, trace_configs=trace_configs)

    def _headers(self, reason: Optional[str]) -> Dict[str, str]:
        headers = {'User-Agent': self.user_agent}
        if self.token is not None:
            headers['Authorization'] = f'Bot {self.token}'
        if reason:
            headers['X-Audit-Log-Reason'] = _uriquote(reason, safe='/ ')
        return headers

    async def request(
        self,
        route: Route,
        *,
        files: Optional[Sequence[File]] = None,
        form: Optional[List[Dict[str, Any]]] = None,
        **kwargs: Any,
    ) -> Any:
        headers = self._headers(kwargs.pop('reason', None))

        payload = kwargs.pop('json', None)
        if payload is not None:
            headers['Content-Type'] = 'application/json'
            kwargs['data'] = utils._to_json(payload)

        if form:
            for f in files or ():
                f.reset()
            # the API rejects escaped brackets in field names such as files[0]
            form_data = aiohttp.FormData(quote_fields=False)
            for field in form:
                form_data.add_field(**field)
            kwargs['data'] = form_data

        if self.proxy is not None:
            kwargs['proxy'] = self.proxy
        if self.proxy_auth is not None:
            kwargs['proxy_auth'] = self.proxy_auth

        if not self.__session:
            await self.startup()

        async with self.__session.request(route.method, route.url, headers=headers, **kwargs) as response:
            _log.debug('%s %s with %s has returned %s.', route.method, route.url, kwargs.get('data'), response.status)
            data = await json_or_text(response)

            if 200 <= response.status < 300:
                _log.debug('%s %s has received %s.', route.method, route.url, data)
                return data

            if response.status == 429:
                _log.warning('Rate limited on %s, the request is not retried.', route.key)

            if response.status >= 500:
                raise ServerError(response, data)
            raise self.ERRORS.get(response.status, HTTPException)(response, data)

    async def close(self) -> None:
        if self.__session:
            await self.__session.close()

    # Login management

    async def static_login(self, token: str) -> Dict[str, Any]:
        previous, self.token = self.token, token
        await self.startup()

        try:
            return await self.get_me()
        except HTTPException as exc:
            self.token = previous
            if exc.status == 401:
                raise LoginFailure('Improper token has been passed.') from exc
            raise

    def get_me(self) -> Response[Dict[str, Any]]:
        return self.request(Route('GET', '/users/@me'))

    # Message management

    def _send_params(self, route: Route, params: MessageParameters) -> Response[Dict[str, Any]]:
        if params.files:
            return self.request(route, files=params.files, form=params.multipart)
        return self.request(route, json=params.to_json())

    def send_message(self, channel_id: Snowflake, *, params: MessageParameters) -> Response[Dict[str, Any]]:
        r = Route('POST', '/channels/{channel_id}/messages', channel_id=channel_id)
        return self._send_params(r, params)

    def edit_message(
        self, channel_id: Snowflake, message_id: Snowflake, *, params: MessageParameters
    ) -> Response[Dict[str, Any]]:
        r = Route('PATCH', _MESSAGE_PATH, channel_id=channel_id, message_id=message_id)
        return self._send_params(r, params)

    def delete_message(
        self, channel_id: Snowflake, message_id: Snowflake, *, reason: Optional[str] = None
    ) -> Response[None]:
        r = Route('DELETE', _MESSAGE_PATH, channel_id=channel_id, message_id=message_id)
        return self.request(r, reason=reason)

    def get_message(self, channel_id: Snowflake, message_id: Snowflake) -> Response[Dict[str, Any]]:
        return self.request(Route('GET', _MESSAGE_PATH, channel_id=channel_id, message_id=message_id))

    def publish_message(self, channel_id: Snowflake, message_id: Snowflake) -> Response[Dict[str, Any]]:
        r = Route('POST', _MESSAGE_PATH + '/crosspost', channel_id=channel_id, message_id=message_id)
        return self.request(r)

    def pin_message(self, channel_id: Snowflake, message_id: Snowflake, reason: Optional[str] = None) -> Response[None]:
        r = Route('PUT', '/channels/{channel_id}/pins/{message_id}', channel_id=channel_id, message_id=message_id)
        return self.request(r, reason=reason)

    def unpin_message(self, channel_id: Snowflake, message_id: Snowflake, reason: Optional[str] = None) -> Response[None]:
        r = Route('DELETE', '/channels/{channel_id}/pins/{message_id}', channel_id=channel_id, message_id=message_id)
        return self.request(r, reason=reason)

    # Reaction management

    def _reaction_route(
        self, method: str, suffix: str, channel_id: Snowflake, message_id: Snowflake, **params: Any
    ) -> Route:
        return Route(method, _REACTION_PATH + suffix, channel_id=channel_id, message_id=message_id, **params)

    def add_reaction(self, channel_id: Snowflake, message_id: Snowflake, emoji: str) -> Response[None]:
        return self.request(self._reaction_route('PUT', '/@me', channel_id, message_id, emoji=emoji))

    def remove_reaction(
        self, channel_id: Snowflake, message_id: Snowflake, emoji: str, member_id: Snowflake
    ) -> Response[None]:
        r = self._reaction_route('DELETE', '/{member_id}', channel_id, message_id, emoji=emoji, member_id=member_id)
        return self.request(r)

    def remove_own_reaction(self, channel_id: Snowflake, message_id: Snowflake, emoji: str) -> Response[None]:
        return self.request(self._reaction_route('DELETE', '/@me', channel_id, message_id, emoji=emoji))

    def get_reaction_users(
        self,
        channel_id: Snowflake,
        message_id: Snowflake,
        emoji: str,
        limit: int,
        after: Optional[Snowflake] = None,
    ) -> Response[List[Dict[str, Any]]]:
        params: Dict[str, Any] = {'limit': limit}
        if after:
            params['after'] = after
        return self.request(self._reaction_route('GET', '', channel_id, message_id, emoji=emoji), params=params)

    def clear_reactions(self, channel_id: Snowflake, message_id: Snowflake) -> Response[None]:
        r = Route('DELETE', _MESSAGE_PATH + '/reactions', channel_id=channel_id, message_id=message_id)
        return self.request(r)

    def clear_single_reaction(self, channel_id: Snowflake, message_id: Snowflake, emoji: str) -> Response[None]:
        return self.request(self._reaction_route('DELETE', '', channel_id, message_id, emoji=emoji))

    # Member management

    def get_member(self, guild_id: Snowflake, member_id: Snowflake) -> Response[Dict[str, Any]]:
        return self.request(Route('GET', '/guilds/{guild_id}/members/{member_id}', guild_id=guild_id, member_id=member_id))
