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

import io
import os
from typing import Any, Dict, Optional, Tuple, Union

from .utils import MISSING

# fmt: off
__all__ = (
    'File',
)
# fmt: on

_SPOILER_PREFIX = 'SPOILER_'


def _split_spoiler(filename: str) -> Tuple[str, bool]:
    name = filename
    while name.startswith(_SPOILER_PREFIX):
        name = name[len(_SPOILER_PREFIX) :]
    return name, name != filename


class File:
    r"""An upload sent along with a message.

    A file is meant for a single request. After the request the library
    rewinds it with :meth:`reset` so that a failed attempt can be repeated,
    and :meth:`close` releases it for good.

    Parameters
    -----------
    fp: Union[:class:`str`, :class:`os.PathLike`, :class:`bytes`, :class:`io.BufferedIOBase`]
        What to upload. A path is opened in binary mode and owned by the file,
        raw :class:`bytes` are wrapped in :class:`io.BytesIO` and a buffer
        must be readable and seekable. Buffers you pass in are never closed
        by the library.
    filename: Optional[:class:`str`]
        The name to display. Defaults to the path's base name, the buffer's
        ``name`` attribute or ``'untitled'``.
    spoiler: :class:`bool`
        Whether the upload is hidden behind a spoiler. If left unspecified
        the ``SPOILER_`` prefix of the filename decides.
    description: Optional[:class:`str`]
        The alt text of the upload.
    """

    __slots__ = ('fp', '_name', 'spoiler', 'description', '_start', '_owned', '_real_close')

    def __init__(
        self,
        fp: Union[str, bytes, os.PathLike[Any], io.BufferedIOBase],
        filename: Optional[str] = None,
        *,
        spoiler: bool = MISSING,
        description: Optional[str] = None,
    ):
        if isinstance(fp, bytes):
            fp = io.BytesIO(fp)

        if isinstance(fp, io.IOBase):
            if not (fp.seekable() and fp.readable()):
                raise ValueError(f'File buffer {fp!r} must be seekable and readable')
            self.fp: io.BufferedIOBase = fp  # type: ignore
            self._start: int = fp.tell()
            self._owned: bool = False
            default_name = getattr(fp, 'name', None)
        else:
            path = os.fspath(fp)
            self.fp = open(path, 'rb')  # type: ignore
            self._start = 0
            self._owned = True
            default_name = os.path.basename(path)

        # aiohttp closes what it uploads, the real close is deferred to close()
        self._real_close = self.fp.close
        self.fp.close = lambda: None  # type: ignore

        if not isinstance(default_name, str):
            default_name = 'untitled'

        self._name, prefixed = _split_spoiler(filename if filename is not None else default_name)
        self.spoiler: bool = prefixed if spoiler is MISSING else spoiler
        self.description: Optional[str] = description

    def __repr__(self) -> str:
        return f'<File filename={self.filename!r} spoiler={self.spoiler}>'

    @property
    def filename(self) -> str:
        """:class:`str`: The name sent to the server, ``SPOILER_`` prefixed for spoilers."""
        if self.spoiler:
            return _SPOILER_PREFIX + self._name
        return self._name

    @filename.setter
    def filename(self, value: str) -> None:
        self._name, self.spoiler = _split_spoiler(value)

    def reset(self) -> None:
        """Rewinds the buffer to where it was when the file was created."""
        self.fp.seek(self._start)

    def close(self) -> None:
        """Restores the buffer's ``close`` and closes it if the file opened it."""
        self.fp.close = self._real_close  # type: ignore
        if self._owned:
            self._real_close()

    def to_dict(self, index: int) -> Dict[str, Any]:
        """The attachment entry of the payload, ``index`` being the multipart slot."""
        payload: Dict[str, Any] = {'id': index, 'filename': self.filename}
        if self.description is not None:
            payload['description'] = self.description
        return payload
