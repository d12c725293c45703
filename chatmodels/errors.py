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

from typing import TYPE_CHECKING, Any, Dict, List, Optional, Tuple, Union

if TYPE_CHECKING:
    from aiohttp import ClientResponse
    from typing_extensions import TypeGuard

    from .permissions import Permissions

__all__ = (
    'ChatModelsException',
    'ClientException',
    'InvalidData',
    'LoginFailure',
    'HTTPException',
    'Forbidden',
    'NotFound',
    'ServerError',
    'ValidationError',
    'ContentTooLong',
    'TooManyEmbeds',
    'EmbedTooLarge',
    'TooManyStickers',
    'InsufficientPermissions',
    'AlreadyCrossposted',
    'CannotCrosspost',
    'NotAuthor',
    'ItemMissing',
)


class ChatModelsException(Exception):
    """Base exception class for chatmodels.

    Ideally speaking, this could be caught to handle any exceptions raised from this library.
    """

    __slots__ = ()


class ClientException(ChatModelsException):
    """Exception that's raised when an operation in the :class:`Client` fails.

    These are usually for exceptions that happened due to user input.
    """

    __slots__ = ()


class InvalidData(ClientException):
    """Exception that's raised when the library encounters unknown
    or invalid data from the remote API.
    """

    __slots__ = ()


class LoginFailure(ClientException):
    """Exception that's raised when the :meth:`Client.login` function
    fails to log you in from improper credentials or some other misc.
    failure.
    """

    __slots__ = ()


def _flatten_error_dict(d: Dict[str, Any], key: str = '', /) -> Dict[str, str]:
    def is_wrapper(x: Dict[str, Any]) -> TypeGuard[Dict[str, Any]]:
        return '_errors' in x

    items: List[Tuple[str, str]] = []

    if is_wrapper(d) and not key:
        items.append(('miscellaneous', ' '.join(x.get('message', '') for x in d['_errors'])))
        d.pop('_errors')

    for k, v in d.items():
        new_key = key + '.' + k if key else k

        if isinstance(v, dict):
            if is_wrapper(v):
                _errors = v['_errors']
                items.append((new_key, ' '.join(x.get('message', '') for x in _errors)))
            else:
                items.extend(_flatten_error_dict(v, new_key).items())
        else:
            items.append((new_key, v))

    return dict(items)


class HTTPException(ChatModelsException):
    """Exception that's raised when an HTTP request operation fails.

    This is the opaque transport error. The mutators never retry or
    translate it, it propagates to the caller unchanged.

    Attributes
    ------------
    response: :class:`aiohttp.ClientResponse`
        The response of the failed HTTP request.
    text: :class:`str`
        The text of the error. Could be an empty string.
    status: :class:`int`
        The status code of the HTTP request.
    code: :class:`int`
        The platform specific error code for the failure.
    json: :class:`dict`
        The raw error JSON.
    """

    def __init__(self, response: ClientResponse, message: Optional[Union[str, Dict[str, Any]]]):
        self.response: ClientResponse = response
        self.status: int = response.status
        self.code: int = 0
        self.text: str
        self.json: Dict[str, Any]
        if isinstance(message, dict):
            self.json = message
            self.code = message.get('code', 0)
            base = message.get('message', '')
            errors = message.get('errors')
            if errors:
                errors = _flatten_error_dict(errors)
                helpful = '\n'.join('In %s: %s' % t for t in errors.items())
                self.text = base + '\n' + helpful
            else:
                self.text = base
        else:
            self.text = message or ''
            self.json = {'code': 0, 'message': message or ''}

        fmt = '{0.status} {0.reason} (error code: {1})'
        if len(self.text):
            fmt += ': {2}'

        super().__init__(fmt.format(self.response, self.code, self.text))


class Forbidden(HTTPException):
    """Exception that's raised for when status code 403 occurs.

    Subclass of :exc:`HTTPException`
    """

    __slots__ = ()


class NotFound(HTTPException):
    """Exception that's raised for when status code 404 occurs.

    Subclass of :exc:`HTTPException`
    """

    __slots__ = ()


class ServerError(HTTPException):
    """Exception that's raised for when a 500 range status code occurs.

    Subclass of :exc:`HTTPException`.
    """

    __slots__ = ()


class ValidationError(ClientException):
    """Base class for payloads rejected locally, before anything is sent.

    Subclass of :exc:`ClientException`.
    """

    __slots__ = ()


class ContentTooLong(ValidationError):
    """Exception that's raised when message content exceeds the
    character limit.

    Attributes
    -----------
    excess: :class:`int`
        The number of characters over the limit.
    """

    __slots__ = ('excess',)

    def __init__(self, excess: int):
        self.excess: int = excess
        super().__init__(f'Message content is {excess} character(s) over the limit.')


class TooManyEmbeds(ValidationError):
    """Exception that's raised when a payload carries more embeds than allowed.

    Attributes
    -----------
    count: :class:`int`
        The number of embeds in the payload.
    """

    __slots__ = ('count',)

    def __init__(self, count: int):
        self.count: int = count
        super().__init__(f'A message can only have up to 10 embeds, got {count}.')


class EmbedTooLarge(ValidationError):
    """Exception that's raised when the text of an embed exceeds the limit.

    Only the first offending embed is reported.

    Attributes
    -----------
    excess: :class:`int`
        The number of characters over the limit.
    index: :class:`int`
        The position of the offending embed in the payload.
    """

    __slots__ = ('excess', 'index')

    def __init__(self, excess: int, index: int = 0):
        self.excess: int = excess
        self.index: int = index
        super().__init__(f'Embed at index {index} is {excess} character(s) over the limit.')


class TooManyStickers(ValidationError):
    """Exception that's raised when a payload references more stickers than allowed.

    Attributes
    -----------
    count: :class:`int`
        The number of sticker IDs in the payload.
    """

    __slots__ = ('count',)

    def __init__(self, count: int):
        self.count: int = count
        super().__init__(f'A message can only have up to 3 stickers, got {count}.')


class InsufficientPermissions(ClientException):
    """Exception that's raised when the cached permissions of the current
    user do not cover the ones required by an action.

    This is advisory. The server remains the source of truth.

    Attributes
    -----------
    required: :class:`Permissions`
        The permissions the action needs.
    missing: :class:`Permissions`
        The subset of ``required`` the current user lacks.
    """

    __slots__ = ('required', 'missing')

    def __init__(self, required: Permissions, missing: Permissions):
        self.required: Permissions = required
        self.missing: Permissions = missing
        names = ', '.join(name for name, value in missing if value)
        super().__init__(f'Missing permission(s): {names}')


class AlreadyCrossposted(ClientException):
    """Exception that's raised when crossposting a message that has
    already been crossposted.
    """

    __slots__ = ()

    def __init__(self):
        super().__init__('This message has already been crossposted.')


class CannotCrosspost(ClientException):
    """Exception that's raised when crossposting a message that is
    itself a crosspost or is not a regular message.
    """

    __slots__ = ()

    def __init__(self):
        super().__init__('This message cannot be crossposted.')


class NotAuthor(ClientException):
    """Exception that's raised when an action requires the current user
    to be the author of the message.
    """

    __slots__ = ()

    def __init__(self):
        super().__init__('The current user is not the author of this message.')


class ItemMissing(ClientException):
    """Exception that's raised when a required piece of data is absent,
    e.g. asking for a member of a message sent outside a guild.
    """

    __slots__ = ()
