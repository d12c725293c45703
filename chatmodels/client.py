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

import asyncio
import logging
from typing import TYPE_CHECKING, Any, Callable, Coroutine, Optional, Type, Union

import aiohttp

from . import utils
from .cache import MemoryCache
from .http import HTTPClient
from .mentions import AllowedMentions
from .state import ConnectionState
from .user import User
from .utils import MISSING

if TYPE_CHECKING:
    from types import TracebackType

    from typing_extensions import Self

    from .abc import CacheSnapshot
    from .channel import PartialMessageable
    from .enums import ChannelType
    from .message import Message

# fmt: off
__all__ = (
    'Client',
)
# fmt: on

_log = logging.getLogger(__name__)


class Client:
    r"""Represents a client connection to the REST API.

    This class is used to reach messages and act on them. There is no
    gateway connection, messages come from :meth:`fetch_message` or from
    sending them.

    .. container:: operations

        .. describe:: async with x

            Opens the HTTP session and closes the client on exit.

    Parameters
    -----------
    cache: Union[:class:`bool`, :class:`~chatmodels.abc.CacheSnapshot`, None]
        The cache used to check permissions and resolve names locally.
        ``True`` creates a :class:`MemoryCache`, ``None`` (the default) and
        ``False`` disable local checks, leaving every decision to the server.
    allowed_mentions: Optional[:class:`AllowedMentions`]
        The allowed mentions merged into every message the client sends.
    connector: Optional[:class:`aiohttp.BaseConnector`]
        The connector to use for connection pooling.
    proxy: Optional[:class:`str`]
        Proxy URL.
    proxy_auth: Optional[:class:`aiohttp.BasicAuth`]
        The credentials for the proxy.
    http_trace: Optional[:class:`aiohttp.TraceConfig`]
        Hooks into the requests the session makes.

    Attributes
    -----------
    http: :class:`HTTPClient`
        The HTTP client requests are sent with.
    """

    def __init__(
        self,
        *,
        cache: Union[bool, CacheSnapshot, None] = None,
        allowed_mentions: Optional[AllowedMentions] = None,
        connector: Optional[aiohttp.BaseConnector] = None,
        proxy: Optional[str] = None,
        proxy_auth: Optional[aiohttp.BasicAuth] = None,
        http_trace: Optional[aiohttp.TraceConfig] = None,
    ) -> None:
        self.http: HTTPClient = HTTPClient(
            connector,
            proxy=proxy,
            proxy_auth=proxy_auth,
            http_trace=http_trace,
        )

        if cache is True:
            cache = MemoryCache()
        elif cache is False:
            cache = None

        self._connection: ConnectionState = ConnectionState(http=self.http, cache=cache)
        self.allowed_mentions = allowed_mentions
        self._closed: bool = False

    async def __aenter__(self) -> Self:
        await self.http.startup()
        return self

    async def __aexit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc_value: Optional[BaseException],
        traceback: Optional[TracebackType],
    ) -> None:
        await self.close()

    # properties

    @property
    def user(self) -> Optional[User]:
        """Optional[:class:`User`]: Represents the connected client. ``None`` if not logged in."""
        return self._connection.user

    @property
    def cache(self) -> Optional[CacheSnapshot]:
        """Optional[:class:`~chatmodels.abc.CacheSnapshot`]: The cache the client checks against, if any."""
        return self._connection.cache

    @property
    def allowed_mentions(self) -> Optional[AllowedMentions]:
        """Optional[:class:`AllowedMentions`]: The allowed mention configuration."""
        return self._connection.allowed_mentions

    @allowed_mentions.setter
    def allowed_mentions(self, value: Optional[AllowedMentions]) -> None:
        if value is None or isinstance(value, AllowedMentions):
            self._connection.allowed_mentions = value
        else:
            raise TypeError(f'allowed_mentions must be AllowedMentions not {value.__class__.__name__}')

    def is_closed(self) -> bool:
        """:class:`bool`: Indicates if the HTTP session was closed."""
        return self._closed

    # login state management

    async def login(self, token: str) -> None:
        """|coro|

        Checks the token against the API and remembers the user it belongs to.

        A :class:`MemoryCache` that does not know its current user yet is
        told who that is.

        Raises
        ------
        TypeError
            The token is not a string.
        LoginFailure
            The API rejected the token.
        HTTPException
            Any other failure of the request.
        """

        _log.info('logging in using static token')

        if not isinstance(token, str):
            raise TypeError(f'expected token to be a str, received {token.__class__.__name__} instead')
        token = token.strip()

        data = await self.http.static_login(token)
        self._connection.user = user = self._connection.store_user(data)

        cache = self._connection.cache
        if isinstance(cache, MemoryCache) and cache.user is None:
            cache.user = user

    async def close(self) -> None:
        """|coro|

        Closes the HTTP session.
        """
        if self._closed:
            return

        self._closed = True
        await self.http.close()

    def run(
        self,
        token: str,
        main: Callable[[Client], Coroutine[Any, Any, Any]],
        *,
        log_handler: Optional[logging.Handler] = MISSING,
        log_formatter: logging.Formatter = MISSING,
        log_level: int = MISSING,
        root_logger: bool = False,
    ) -> Any:
        """Runs ``main(client)`` in a fresh event loop, logged in with ``token``.

        The client is closed once ``main`` returns or raises. Unless
        ``log_handler`` is ``None``, :func:`~chatmodels.utils.setup_logging`
        is called first with the ``log_*`` and ``root_logger`` arguments.

        Returns
        --------
        Any
            Whatever ``main`` returned.
        """

        async def runner():
            async with self:
                await self.login(token)
                return await main(self)

        if log_handler is not None:
            utils.setup_logging(
                handler=log_handler,
                formatter=log_formatter,
                level=log_level,
                root=root_logger,
            )

        return asyncio.run(runner())

    # helpers/getters

    def get_partial_messageable(
        self, id: int, *, guild_id: Optional[int] = None, type: Optional[ChannelType] = None
    ) -> PartialMessageable:
        """Returns a :class:`PartialMessageable` for a channel ID without any request.

        Pass ``guild_id`` for guild channels: without it the channel is treated
        as a direct message, :attr:`~PartialMessageable.jump_url` uses ``@me``
        and no permission checks happen.
        """
        return self._connection.get_partial_messageable(id, guild_id=guild_id, type=type)

    async def fetch_message(self, channel_id: int, message_id: int, /, *, guild_id: Optional[int] = None) -> Message:
        """|coro|

        Retrieves a single :class:`Message` from a channel.

        ``guild_id`` is only needed for the permission checks and links of the
        returned message.

        Raises
        --------
        NotFound
            There is no such message.
        HTTPException
            Fetching the message failed.
        """
        channel = self.get_partial_messageable(channel_id, guild_id=guild_id)
        return await channel.fetch_message(message_id)
