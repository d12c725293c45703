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

import datetime
import json
import logging
import os
import re
import sys
from operator import attrgetter
from typing import Any, Callable, Dict, Iterable, Optional, TypeVar, overload

try:
    import orjson  # type: ignore
except ModuleNotFoundError:
    HAS_ORJSON = False
else:
    HAS_ORJSON = True


__all__ = (
    'snowflake_time',
    'time_snowflake',
    'find',
    'get',
    'escape_mentions',
    'MISSING',
    'setup_logging',
)

# Milliseconds between the Unix epoch and the first second of 2015.
DISCORD_EPOCH = 1420070400000


class _MissingSentinel:
    __slots__ = ()

    def __eq__(self, other):
        return False

    def __bool__(self):
        return False

    def __hash__(self):
        return 0

    def __repr__(self):
        return '...'


MISSING: Any = _MissingSentinel()

T = TypeVar('T')


@overload
def parse_time(timestamp: None) -> None:
    ...


@overload
def parse_time(timestamp: str) -> datetime.datetime:
    ...


def parse_time(timestamp: Optional[str]) -> Optional[datetime.datetime]:
    if not timestamp:
        return None
    return datetime.datetime.fromisoformat(timestamp)


def snowflake_time(id: int, /) -> datetime.datetime:
    """Returns when a snowflake was generated, as an aware UTC datetime."""
    millis = (id >> 22) + DISCORD_EPOCH
    return datetime.datetime.fromtimestamp(millis / 1000, tz=datetime.timezone.utc)


def time_snowflake(dt: datetime.datetime, /, *, high: bool = False) -> int:
    """Builds a snowflake that looks like it was generated at ``dt``.

    The lower 22 bits (worker, process and increment) are all zero, or all
    one when ``high`` is ``True``, which makes the pair of them the bounds of
    every snowflake generated during that millisecond. A naive ``dt`` is
    taken to be local time.
    """
    millis = int(dt.timestamp() * 1000) - DISCORD_EPOCH
    low_bits = (1 << 22) - 1 if high else 0
    return (millis << 22) | low_bits


def find(predicate: Callable[[T], Any], iterable: Iterable[T], /) -> Optional[T]:
    """Returns the first element of ``iterable`` the predicate accepts, or ``None``.

    For example: ::

        reaction = chatmodels.utils.find(lambda r: r.me, message.reactions)
    """
    for element in iterable:
        if predicate(element):
            return element
    return None


def get(iterable: Iterable[T], /, **attrs: Any) -> Optional[T]:
    r"""Returns the first element whose attributes equal every keyword given.

    Nested attributes are reached with a double underscore, e.g. ``author__name``.

    .. code-block:: python3

        user = chatmodels.utils.get(message.mentions, name='Foo')
    """
    checks = [(attrgetter(name.replace('__', '.')), value) for name, value in attrs.items()]
    return find(lambda element: all(getter(element) == value for getter, value in checks), iterable)


def _get_as_snowflake(data: Any, key: str) -> Optional[int]:
    value = data.get(key)
    return int(value) if value else None


def _to_jsonable(obj: Any) -> Dict[str, Any]:
    # Mappings that are not dicts, e.g. the read-only payload of MessageParameters.
    try:
        return dict(obj)
    except (TypeError, ValueError):
        raise TypeError(f'Type {obj.__class__.__name__} is not JSON serializable') from None


if HAS_ORJSON:

    def _to_json(obj: Any) -> str:
        return orjson.dumps(obj, default=_to_jsonable).decode('utf-8')

    _from_json = orjson.loads  # type: ignore

else:

    def _to_json(obj: Any) -> str:
        return json.dumps(obj, separators=(',', ':'), ensure_ascii=True, default=_to_jsonable)

    _from_json = json.loads


_MENTION_RE = re.compile(r'@(everyone|here|[!&]?[0-9]{17,20})')


def escape_mentions(text: str) -> str:
    """Breaks every mention in ``text`` with a zero width space.

    Unlike :func:`~chatmodels.mentions.content_safe` mentions are not turned
    into names, they just stop pinging anyone.
    """
    return _MENTION_RE.sub('@\u200b\\1', text)


def _generate_nonce() -> str:
    now = datetime.datetime.now(datetime.timezone.utc)
    return str(time_snowflake(now))


def _in_docker() -> bool:
    if os.path.exists('/.dockerenv'):
        return True
    try:
        with open('/proc/self/cgroup') as fp:
            return 'docker' in fp.read()
    except OSError:
        return False


def stream_supports_colour(stream: Any) -> bool:
    # Editors with their own terminals handle ANSI codes without being a tty.
    if 'PYCHARM_HOSTED' in os.environ or os.environ.get('TERM_PROGRAM') == 'vscode':
        return True

    is_a_tty = getattr(stream, 'isatty', lambda: False)()
    if sys.platform == 'win32':
        return is_a_tty and ('ANSICON' in os.environ or 'WT_SESSION' in os.environ)
    return is_a_tty or _in_docker()


class _ColourFormatter(logging.Formatter):
    RESET = '\x1b[0m'
    LEVEL_COLOURS = {
        logging.DEBUG: '\x1b[40;1m',
        logging.INFO: '\x1b[34;1m',
        logging.WARNING: '\x1b[33;1m',
        logging.ERROR: '\x1b[31m',
        logging.CRITICAL: '\x1b[41m',
    }

    def __init__(self) -> None:
        super().__init__(datefmt='%Y-%m-%d %H:%M:%S')

    def format(self, record: logging.LogRecord) -> str:
        colour = self.LEVEL_COLOURS.get(record.levelno, self.LEVEL_COLOURS[logging.DEBUG])
        reset = self.RESET
        self._style._fmt = (
            f'\x1b[30;1m%(asctime)s{reset} {colour}%(levelname)-8s{reset} \x1b[35m%(name)s{reset} %(message)s'
        )

        if record.exc_info and not record.exc_text:
            record.exc_text = f'\x1b[31m{self.formatException(record.exc_info)}{reset}'
            try:
                return super().format(record)
            finally:
                # the cached text is coloured, other handlers must not reuse it
                record.exc_text = None

        return super().format(record)


def setup_logging(
    *,
    handler: logging.Handler = MISSING,
    formatter: logging.Formatter = MISSING,
    level: int = MISSING,
    root: bool = True,
) -> None:
    """Attaches a handler to the library's logger, or to the root logger.

    :class:`~chatmodels.Client.run` calls this unless its ``log_handler`` is ``None``.

    Parameters
    -----------
    handler: :class:`logging.Handler`
        Defaults to a :class:`logging.StreamHandler` on stderr.
    formatter: :class:`logging.Formatter`
        Defaults to a coloured formatter when the handler's stream can show
        colour, a plain one otherwise.
    level: :class:`int`
        Defaults to ``logging.INFO``.
    root: :class:`bool`
        Whether to configure the root logger instead of ``chatmodels``.
    """

    if handler is MISSING:
        handler = logging.StreamHandler()

    if formatter is MISSING:
        stream = getattr(handler, 'stream', None)
        if stream is not None and stream_supports_colour(stream):
            formatter = _ColourFormatter()
        else:
            formatter = logging.Formatter('[{asctime}] [{levelname:<8}] {name}: {message}', '%Y-%m-%d %H:%M:%S', style='{')

    logger = logging.getLogger() if root else logging.getLogger(__name__.partition('.')[0])
    handler.setFormatter(formatter)
    logger.setLevel(logging.INFO if level is MISSING else level)
    logger.addHandler(handler)
