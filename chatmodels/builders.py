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

import types
from typing import (
    TYPE_CHECKING,
    Any,
    Dict,
    Iterable,
    List,
    Mapping,
    NamedTuple,
    Optional,
    Sequence,
    Type,
    TypeVar,
    Union,
)

from . import utils
from .file import File
from .flags import MessageFlags
from .utils import MISSING

if TYPE_CHECKING:
    from types import TracebackType

    from typing_extensions import Self

    from .abc import Snowflake
    from .embeds import Embed
    from .mentions import AllowedMentions
    from .message import Attachment, Message, MessageReference

    BE = TypeVar('BE', bound=BaseException)

__all__ = (
    'MessageParameters',
    'MessageBuilder',
    'EditMessageBuilder',
)


class MessageParameters(NamedTuple):
    """The frozen result of a builder.

    Attributes
    -----------
    payload: Mapping[:class:`str`, Any]
        A read-only view of the JSON document to send.
    files: Sequence[:class:`File`]
        The files to upload alongside the payload.
    """

    payload: Mapping[str, Any]
    files: Sequence[File]

    def __enter__(self) -> Self:
        return self

    def __exit__(
        self,
        exc_type: Optional[Type[BE]],
        exc: Optional[BE],
        traceback: Optional[TracebackType],
    ) -> None:
        for file in self.files:
            file.close()

    def to_json(self) -> Dict[str, Any]:
        """Returns a mutable copy of the payload."""
        return {key: value for key, value in self.payload.items()}

    @property
    def multipart(self) -> List[Dict[str, Any]]:
        """List[Dict[:class:`str`, Any]]: The form parts for a multipart upload.

        Empty when there are no files, in which case the payload is sent as JSON.
        """
        if not self.files:
            return []

        form: List[Dict[str, Any]] = [{'name': 'payload_json', 'value': utils._to_json(self.to_json())}]
        for index, file in enumerate(self.files):
            form.append(
                {
                    'name': f'files[{index}]',
                    'value': file.fp,
                    'filename': file.filename,
                    'content_type': 'application/octet-stream',
                }
            )
        return form


def _embed_to_dict(embed: Union[Embed, Mapping[str, Any]]) -> Dict[str, Any]:
    if isinstance(embed, Mapping):
        return dict(embed)
    return embed.to_dict()


class _BaseBuilder:
    # Every field starts as MISSING, which means "leave it out of the payload".
    __slots__ = (
        '_content',
        '_embeds',
        '_attachments',
        '_allowed_mentions',
        '_components',
        '_flags',
    )

    _FIELDS: Dict[str, str] = {}

    def __init__(self, **fields: Any) -> None:
        self._content: Optional[str] = MISSING
        self._embeds: List[Union[Embed, Mapping[str, Any]]] = MISSING
        self._attachments: List[Union[Attachment, File]] = MISSING
        self._allowed_mentions: Optional[AllowedMentions] = MISSING
        self._components: List[Dict[str, Any]] = MISSING
        self._flags: MessageFlags = MISSING
        self.apply(**fields)

    def apply(self, **fields: Any) -> Self:
        r"""Applies keyword arguments through the matching setters.

        ``builder.apply(content='hi', embed=e)`` is the same as
        ``builder.content('hi').embed(e)``.

        This function returns the class instance to allow for fluent-style
        chaining.

        Raises
        -------
        TypeError
            A keyword argument does not name a field of this builder.
        """
        for key, value in fields.items():
            try:
                setter = self._FIELDS[key]
            except KeyError:
                raise TypeError(f'{self.__class__.__name__} got an unexpected keyword argument {key!r}') from None
            getattr(self, setter)(value)
        return self

    def content(self, content: Optional[Any]) -> Self:
        """Sets the content of the message. ``None`` sends an explicit empty content.

        This function returns the class instance to allow for fluent-style
        chaining.
        """
        self._content = None if content is None else str(content)
        return self

    def embed(self, embed: Optional[Union[Embed, Mapping[str, Any]]]) -> Self:
        """Replaces the embeds of the message with a single one, or none if ``None``.

        This function returns the class instance to allow for fluent-style
        chaining.
        """
        self._embeds = [] if embed is None else [embed]
        return self

    def embeds(self, embeds: Iterable[Union[Embed, Mapping[str, Any]]]) -> Self:
        """Replaces the embeds of the message.

        This function returns the class instance to allow for fluent-style
        chaining.
        """
        self._embeds = list(embeds)
        return self

    def add_embed(self, embed: Union[Embed, Mapping[str, Any]]) -> Self:
        """Appends an embed to the message.

        This function returns the class instance to allow for fluent-style
        chaining.
        """
        if self._embeds is MISSING:
            self._embeds = []
        self._embeds.append(embed)
        return self

    def add_file(self, file: File) -> Self:
        """Appends a file to upload.

        This function returns the class instance to allow for fluent-style
        chaining.
        """
        if self._attachments is MISSING:
            self._attachments = []
        self._attachments.append(file)
        return self

    def files(self, files: Iterable[File]) -> Self:
        """Appends several files to upload.

        This function returns the class instance to allow for fluent-style
        chaining.
        """
        for file in files:
            self.add_file(file)
        return self

    def allowed_mentions(self, allowed_mentions: Optional[AllowedMentions]) -> Self:
        """Sets the mentions that are allowed to ping.

        This is merged over the client-wide default when the message is built.

        This function returns the class instance to allow for fluent-style
        chaining.
        """
        self._allowed_mentions = allowed_mentions
        return self

    def components(self, components: Iterable[Mapping[str, Any]]) -> Self:
        """Sets the raw component rows of the message.

        This function returns the class instance to allow for fluent-style
        chaining.
        """
        self._components = [dict(c) for c in components]
        return self

    def flags(self, flags: MessageFlags) -> Self:
        """Sets the flags of the message.

        This function returns the class instance to allow for fluent-style
        chaining.
        """
        self._flags = flags
        return self

    def suppress_embeds(self, suppress: bool = True) -> Self:
        """Sets or clears the :attr:`MessageFlags.suppress_embeds` flag.

        This function returns the class instance to allow for fluent-style
        chaining.
        """
        flags = MessageFlags._from_value(0 if self._flags is MISSING else self._flags.value)
        flags.suppress_embeds = suppress
        self._flags = flags
        return self

    def _has_files(self) -> bool:
        return self._attachments is not MISSING and any(isinstance(a, File) for a in self._attachments)

    def _build_common(self, payload: Dict[str, Any], default_allowed_mentions: Optional[AllowedMentions]) -> List[File]:
        if self._content is not MISSING:
            payload['content'] = self._content

        if self._embeds is not MISSING:
            payload['embeds'] = [_embed_to_dict(e) for e in self._embeds]

        if self._components is not MISSING:
            payload['components'] = self._components

        if self._flags is not MISSING:
            payload['flags'] = self._flags.value

        if self._allowed_mentions:
            if default_allowed_mentions is not None:
                payload['allowed_mentions'] = default_allowed_mentions.merge(self._allowed_mentions).to_dict()
            else:
                payload['allowed_mentions'] = self._allowed_mentions.to_dict()
        elif default_allowed_mentions is not None:
            payload['allowed_mentions'] = default_allowed_mentions.to_dict()

        files: List[File] = []
        if self._attachments is not MISSING:
            file_index = 0
            attachments_payload = []
            for attachment in self._attachments:
                if isinstance(attachment, File):
                    attachments_payload.append(attachment.to_dict(file_index))
                    files.append(attachment)
                    file_index += 1
                else:
                    attachments_payload.append(attachment.to_dict())

            payload['attachments'] = attachments_payload

        return files


class MessageBuilder(_BaseBuilder):
    r"""A draft of a new message.

    Every setter returns the builder so calls can be chained, and any
    setter can also be reached through a keyword argument of the same
    name, e.g. ``MessageBuilder(content='hi', tts=True)``.

    Nothing is validated here, :meth:`build` only freezes the draft into
    :class:`MessageParameters`. The limits are checked by whoever sends it.

    Parameters
    -----------
    \*\*fields
        Initial values, see :meth:`apply`.
    """

    __slots__ = ('_tts', '_nonce', '_reference', '_sticker_ids')

    _FIELDS = {
        'content': 'content',
        'embed': 'embed',
        'embeds': 'embeds',
        'file': 'add_file',
        'files': 'files',
        'allowed_mentions': 'allowed_mentions',
        'components': 'components',
        'flags': 'flags',
        'suppress_embeds': 'suppress_embeds',
        'tts': 'tts',
        'nonce': 'nonce',
        'reference': 'reference',
        'stickers': 'stickers',
    }

    def __init__(self, **fields: Any) -> None:
        self._tts: bool = False
        self._nonce: Optional[Union[int, str]] = MISSING
        self._reference: Optional[Dict[str, Any]] = MISSING
        self._sticker_ids: List[int] = MISSING
        super().__init__(**fields)

    def __repr__(self) -> str:
        return f'<MessageBuilder content={self._content!r} reference={self._reference!r}>'

    def tts(self, tts: bool = True) -> Self:
        """Sets whether the message is read out loud.

        This function returns the class instance to allow for fluent-style
        chaining.
        """
        self._tts = tts
        return self

    def nonce(self, nonce: Optional[Union[int, str]]) -> Self:
        """Sets the nonce of the message. By default one is generated,
        ``None`` sends none at all.

        This function returns the class instance to allow for fluent-style
        chaining.
        """
        self._nonce = nonce
        return self

    def reference(self, reference: Optional[Union[Message, MessageReference]], *, fail_if_not_exists: bool = True) -> Self:
        """Makes this message an inline reply to ``reference``.

        This function returns the class instance to allow for fluent-style
        chaining.

        Parameters
        -----------
        reference: Optional[Union[:class:`Message`, :class:`MessageReference`]]
            The message to reply to. ``None`` removes the reference.
        fail_if_not_exists: :class:`bool`
            Whether replying to a deleted message errors out rather than
            sending a normal message.
        """
        if reference is None:
            self._reference = None
            return self

        to_reference = getattr(reference, 'to_reference', None)
        if to_reference is not None:
            reference = to_reference(fail_if_not_exists=fail_if_not_exists)
        self._reference = reference.to_dict()  # type: ignore
        return self

    def add_sticker(self, sticker: Union[Snowflake, int]) -> Self:
        """Appends a sticker to the message.

        This function returns the class instance to allow for fluent-style
        chaining.
        """
        if self._sticker_ids is MISSING:
            self._sticker_ids = []
        self._sticker_ids.append(sticker if isinstance(sticker, int) else sticker.id)
        return self

    def stickers(self, stickers: Iterable[Union[Snowflake, int]]) -> Self:
        """Replaces the stickers of the message.

        This function returns the class instance to allow for fluent-style
        chaining.
        """
        self._sticker_ids = []
        for sticker in stickers:
            self.add_sticker(sticker)
        return self

    def build(self, *, default_allowed_mentions: Optional[AllowedMentions] = None) -> MessageParameters:
        """Freezes the draft.

        Parameters
        -----------
        default_allowed_mentions: Optional[:class:`AllowedMentions`]
            The client-wide allowed mentions to merge under the draft's own.

        Returns
        --------
        :class:`MessageParameters`
            The payload and files to send.
        """
        payload: Dict[str, Any] = {'tts': self._tts}
        files = self._build_common(payload, default_allowed_mentions)

        if self._nonce is MISSING:
            payload['nonce'] = utils._generate_nonce()
        elif self._nonce:
            payload['nonce'] = self._nonce

        if self._reference is not MISSING and self._reference is not None:
            payload['message_reference'] = self._reference

        if self._sticker_ids is not MISSING:
            payload['sticker_ids'] = [str(s) for s in self._sticker_ids]

        return MessageParameters(payload=types.MappingProxyType(payload), files=files)


class EditMessageBuilder(_BaseBuilder):
    r"""A draft of the changes to an existing message.

    Fields left unset are not sent and so stay as they are on the server.
    :meth:`Message.edit` pre-fills the content, embeds and attachments from
    the current message before applying the caller's changes.

    Parameters
    -----------
    \*\*fields
        Initial values, see :meth:`apply`.
    """

    __slots__ = ()

    _FIELDS = {
        'content': 'content',
        'embed': 'embed',
        'embeds': 'embeds',
        'file': 'add_file',
        'files': 'files',
        'attachments': 'attachments',
        'allowed_mentions': 'allowed_mentions',
        'components': 'components',
        'flags': 'flags',
        'suppress': 'suppress_embeds',
        'suppress_embeds': 'suppress_embeds',
    }

    def __repr__(self) -> str:
        return f'<EditMessageBuilder content={self._content!r}>'

    def attachments(self, attachments: Iterable[Union[Attachment, File]]) -> Self:
        """Replaces the attachments of the message.

        Existing :class:`Attachment` objects are kept, :class:`File` objects
        are uploaded, anything on the message that is not listed is removed.

        This function returns the class instance to allow for fluent-style
        chaining.
        """
        self._attachments = list(attachments)
        return self

    def remove_attachment(self, attachment: Union[Attachment, int]) -> Self:
        """Removes an existing attachment from the message.

        This function returns the class instance to allow for fluent-style
        chaining.
        """
        attachment_id = attachment if isinstance(attachment, int) else attachment.id
        if self._attachments is not MISSING:
            self._attachments = [
                a for a in self._attachments if isinstance(a, File) or a.id != attachment_id
            ]
        return self

    def clear_attachments(self) -> Self:
        """Removes every attachment from the message.

        This function returns the class instance to allow for fluent-style
        chaining.
        """
        self._attachments = []
        return self

    def build(self, *, default_allowed_mentions: Optional[AllowedMentions] = None) -> MessageParameters:
        """Freezes the draft.

        Parameters
        -----------
        default_allowed_mentions: Optional[:class:`AllowedMentions`]
            The client-wide allowed mentions to merge under the draft's own.

        Returns
        --------
        :class:`MessageParameters`
            The payload and files to send.
        """
        payload: Dict[str, Any] = {}
        files = self._build_common(payload, default_allowed_mentions)
        return MessageParameters(payload=types.MappingProxyType(payload), files=files)
