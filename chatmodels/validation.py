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
from typing import Any, Mapping, Optional

from .errors import EmbedTooLarge, ContentTooLong, TooManyEmbeds, TooManyStickers

__all__ = (
    'MESSAGE_CODE_LIMIT',
    'EMBED_MAX_LENGTH',
    'EMBED_MAX_COUNT',
    'STICKER_MAX_COUNT',
    'overflow_length',
    'embed_length',
    'check_content_length',
    'check_embed_limits',
    'check_sticker_count',
    'check_all',
)

_log = logging.getLogger(__name__)

MESSAGE_CODE_LIMIT = 2000
EMBED_MAX_LENGTH = 6000
EMBED_MAX_COUNT = 10
STICKER_MAX_COUNT = 3


def overflow_length(content: str) -> Optional[int]:
    """Returns how many characters ``content`` is over the message limit.

    Characters are counted as code points, not bytes.

    Parameters
    -----------
    content: :class:`str`
        The text to measure.

    Returns
    --------
    Optional[:class:`int`]
        ``None`` if the text fits, otherwise the number of excess characters.
    """
    count = len(content)
    if count <= MESSAGE_CODE_LIMIT:
        return None
    return count - MESSAGE_CODE_LIMIT


def _text(data: Any, key: str) -> str:
    if not isinstance(data, Mapping):
        return ''
    value = data.get(key)
    return value if isinstance(value, str) else ''


def embed_length(embed: Mapping[str, Any]) -> int:
    """Returns the length of the text of an embed document that counts
    towards the limit.

    That is the author name, description, every field's name and value,
    the footer text and the title.
    """
    total = len(_text(embed.get('author'), 'name'))
    total += len(_text(embed, 'description'))

    fields = embed.get('fields')
    if isinstance(fields, list):
        for field in fields:
            total += len(_text(field, 'name'))
            total += len(_text(field, 'value'))

    total += len(_text(embed.get('footer'), 'text'))
    total += len(_text(embed, 'title'))
    return total


def check_content_length(payload: Mapping[str, Any]) -> None:
    """Checks the ``content`` of a payload against the message limit.

    Missing or non-string content passes.

    Raises
    -------
    ContentTooLong
        The content is too long.
    """
    content = payload.get('content')
    if not isinstance(content, str):
        return

    excess = overflow_length(content)
    if excess is not None:
        raise ContentTooLong(excess)


def check_embed_limits(payload: Mapping[str, Any]) -> None:
    """Checks the ``embeds`` of a payload against the count and size limits.

    The count is checked first, regardless of what the embeds contain.
    Only the first embed that is too large is reported.

    Raises
    -------
    TooManyEmbeds
        There are more than 10 embeds.
    EmbedTooLarge
        The text of an embed is over the limit.
    """
    embeds = payload.get('embeds')
    if not isinstance(embeds, list):
        return

    if len(embeds) > EMBED_MAX_COUNT:
        raise TooManyEmbeds(len(embeds))

    for index, embed in enumerate(embeds):
        if not isinstance(embed, Mapping):
            continue
        length = embed_length(embed)
        if length > EMBED_MAX_LENGTH:
            raise EmbedTooLarge(length - EMBED_MAX_LENGTH, index)


def check_sticker_count(payload: Mapping[str, Any]) -> None:
    """Checks the ``sticker_ids`` of a payload against the limit.

    Raises
    -------
    TooManyStickers
        There are more than 3 stickers.
    """
    sticker_ids = payload.get('sticker_ids')
    if isinstance(sticker_ids, list) and len(sticker_ids) > STICKER_MAX_COUNT:
        raise TooManyStickers(len(sticker_ids))


def check_all(payload: Mapping[str, Any]) -> None:
    """Runs every check on a payload, content first, then embeds, then stickers.

    The first failure is raised.

    Raises
    -------
    ValidationError
        The payload breaks one of the limits.
    """
    try:
        check_content_length(payload)
        check_embed_limits(payload)
        check_sticker_count(payload)
    except Exception as exc:
        _log.debug('Payload rejected before sending: %s', exc)
        raise
