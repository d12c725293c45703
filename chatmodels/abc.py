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

from typing import TYPE_CHECKING, Any, Dict, Optional, Protocol, Sequence, runtime_checkable

if TYPE_CHECKING:
    from .file import File
    from .http import Route
    from .permissions import Permissions
    from .user import Member, User

__all__ = (
    'Snowflake',
    'Transport',
    'CacheSnapshot',
)


@runtime_checkable
class Snowflake(Protocol):
    """An ABC that details the common operations on a model.

    Almost all models meet this abstract base class.

    If you want to create a snowflake on your own, consider using
    :class:`.Object`.

    Attributes
    -----------
    id: :class:`int`
        The model's unique ID.
    """

    id: int


class Transport(Protocol):
    """The request interface the models talk to.

    :class:`~chatmodels.http.HTTPClient` is the implementation shipped with
    the library. Anything providing ``request`` with the same signature can
    stand in for it.
    """

    async def request(
        self,
        route: Route,
        *,
        files: Optional[Sequence[File]] = ...,
        form: Optional[Sequence[Dict[str, Any]]] = ...,
        **kwargs: Any,
    ) -> Any:
        ...


@runtime_checkable
class CacheSnapshot(Protocol):
    """A read-only view of a local cache.

    Every lookup is synchronous and may miss. A miss is never an error,
    the models fall back to asking the server.

    :class:`~chatmodels.cache.MemoryCache` implements this protocol.
    """

    def current_user(self) -> Optional[User]:
        """Returns the user the client is logged in as."""
        ...

    def permissions_for(self, user_id: int, channel_id: int, guild_id: int) -> Optional[Permissions]:
        """Returns the resolved permissions of a user in a guild channel.

        ``None`` means the channel, guild or member is not cached.
        """
        ...

    def role_name(self, role_id: int) -> Optional[str]:
        ...

    def get_member(self, guild_id: int, user_id: int) -> Optional[Member]:
        ...
