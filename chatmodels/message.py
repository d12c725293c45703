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
import logging
import re
from typing import TYPE_CHECKING, Any, Callable, Dict, List, Optional, Tuple, Union

from . import utils
from .builders import EditMessageBuilder, MessageBuilder
from .embeds import Embed
from .enums import MessageType, try_enum
from .errors import AlreadyCrossposted, CannotCrosspost, ItemMissing, NotAuthor
from .flags import MessageFlags
from .mentions import AllowedMentions, content_safe
from .mixins import Hashable
from .partial_emoji import PartialEmoji
from .permissions import Permissions, authorize
from .reaction import RawReaction, Reaction, convert_emoji_reaction
from .sticker import StickerItem
from .user import Member, User
from .utils import MISSING
from .validation import check_all, overflow_length

if TYPE_CHECKING:
    from typing_extensions import Self

    from .abc import CacheSnapshot, Snowflake
    from .channel import PartialMessageable
    from .reaction import EmojiInputType
    from .state import ConnectionState

    ReplyCallback = Callable[[MessageBuilder], Any]

# fmt: off
__all__ = (
    'Attachment',
    'Message',
    'MessageReference',
    'JOIN_MESSAGES',
)
# fmt: on

_log = logging.getLogger(__name__)

JOIN_MESSAGES: Tuple[str, ...] = (
    '$user just joined the server - glhf!',
    '$user just joined. Everyone, look busy!',
    '$user just joined. Can I get a heal?',
    '$user joined your party.',
    '$user joined. You must construct additional pylons.',
    'Ermagherd. $user is here.',
    'Welcome, $user. Stay awhile and listen.',
    'Welcome, $user. We were expecting you ( \u0361\u00b0 \u035c\u0296 \u0361\u00b0)',
    'Welcome, $user. We hope you brought pizza.',
    'Welcome $user. Leave your weapons by the door.',
    'A wild $user appeared.',
    'Swoooosh. $user just landed.',
    'Brace yourselves. $user just joined the server.',
    '$user just joined. Hide your bananas.',
    '$user just arrived. Seems OP - please nerf.',
    '$user just slid into the server.',
    'A $user has spawned in the server.',
    'Big $user showed up!',
    'Where\u2019s $user? In the server!',
    '$user hopped into the server. Kangaroo!!',
    '$user just showed up. Hold my beer.',
    'Challenger approaching - $user has appeared!',
    "It's a bird! It's a plane! Nevermind, it's just $user.",
    "It's $user! Praise the sun! \\[T]/",
    'Never gonna give $user up. Never gonna let $user down.',
    "Hello. Is it $user you're looking for?",
    'Roses are red, violets are blue, $user joined this server with you',
    'Ha! $user has joined! You activated my trap card!',
)


def _to_partial_emoji(emoji: Union[EmojiInputType, Reaction, RawReaction]) -> PartialEmoji:
    if isinstance(emoji, (Reaction, RawReaction)):
        emoji = emoji.emoji
    if isinstance(emoji, PartialEmoji):
        return emoji
    return PartialEmoji.from_str(emoji)


class Attachment(Hashable):
    """Represents an attachment of a message.

    .. container:: operations

        .. describe:: x == y

            Checks if the attachment is equal to another attachment.

        .. describe:: hash(x)

            Returns the hash of the attachment.

        .. describe:: str(x)

            Returns the URL of the attachment.

    Attributes
    ------------
    id: :class:`int`
        The attachment ID.
    size: :class:`int`
        The attachment size in bytes.
    height: Optional[:class:`int`]
        The attachment's height, in pixels. Only applicable to images and videos.
    width: Optional[:class:`int`]
        The attachment's width, in pixels. Only applicable to images and videos.
    filename: :class:`str`
        The attachment's filename.
    url: :class:`str`
        The attachment URL.
    proxy_url: :class:`str`
        The proxy URL.
    content_type: Optional[:class:`str`]
        The attachment's `media type <https://en.wikipedia.org/wiki/Media_type>`_
    description: Optional[:class:`str`]
        The attachment's description. Only applicable to images.
    ephemeral: :class:`bool`
        Whether the attachment is ephemeral.
    """

    __slots__ = (
        'id',
        'size',
        'height',
        'width',
        'filename',
        'url',
        'proxy_url',
        'content_type',
        'description',
        'ephemeral',
    )

    def __init__(self, *, data: Dict[str, Any]):
        self.id: int = int(data['id'])
        self.size: int = data['size']
        self.height: Optional[int] = data.get('height')
        self.width: Optional[int] = data.get('width')
        self.filename: str = data['filename']
        self.url: str = data['url']
        self.proxy_url: str = data['proxy_url']
        self.content_type: Optional[str] = data.get('content_type')
        self.description: Optional[str] = data.get('description')
        self.ephemeral: bool = data.get('ephemeral', False)

    def is_spoiler(self) -> bool:
        """:class:`bool`: Whether this attachment contains a spoiler."""
        return self.filename.startswith('SPOILER_')

    def __repr__(self) -> str:
        return f'<Attachment id={self.id} filename={self.filename!r} url={self.url!r}>'

    def __str__(self) -> str:
        return self.url or ''

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {
            'filename': self.filename,
            'id': self.id,
            'proxy_url': self.proxy_url,
            'size': self.size,
            'url': self.url,
            'spoiler': self.is_spoiler(),
        }
        if self.height:
            result['height'] = self.height
        if self.width:
            result['width'] = self.width
        if self.content_type:
            result['content_type'] = self.content_type
        if self.description is not None:
            result['description'] = self.description
        return result


class MessageReference:
    """Represents a reference to a :class:`Message`.

    This class can be constructed by users to reply to a message that
    is not at hand, see :meth:`MessageBuilder.reference`.

    Attributes
    -----------
    message_id: Optional[:class:`int`]
        The id of the message referenced.
    channel_id: :class:`int`
        The channel id of the message referenced.
    guild_id: Optional[:class:`int`]
        The guild id of the message referenced.
    fail_if_not_exists: :class:`bool`
        Whether replying to the referenced message should raise :class:`HTTPException`
        if the message no longer exists or the API could not fetch the message.
    resolved: Optional[:class:`Message`]
        The message that this reference resolved to, if the API sent it along.
        A resolved message never carries a resolved reference of its own.
    """

    __slots__ = ('message_id', 'channel_id', 'guild_id', 'fail_if_not_exists', 'resolved', '_state')

    def __init__(self, *, message_id: int, channel_id: int, guild_id: Optional[int] = None, fail_if_not_exists: bool = True):
        self._state: Optional[ConnectionState] = None
        self.resolved: Optional[Message] = None
        self.message_id: Optional[int] = message_id
        self.channel_id: int = channel_id
        self.guild_id: Optional[int] = guild_id
        self.fail_if_not_exists: bool = fail_if_not_exists

    @classmethod
    def with_state(cls, state: ConnectionState, data: Dict[str, Any]) -> Self:
        self = cls.__new__(cls)
        self.message_id = utils._get_as_snowflake(data, 'message_id')
        self.channel_id = int(data['channel_id'])
        self.guild_id = utils._get_as_snowflake(data, 'guild_id')
        self.fail_if_not_exists = data.get('fail_if_not_exists', True)
        self._state = state
        self.resolved = None
        return self

    @classmethod
    def from_message(cls, message: Message, *, fail_if_not_exists: bool = True) -> Self:
        """Creates a :class:`MessageReference` from an existing :class:`Message`.

        Parameters
        ----------
        message: :class:`Message`
            The message to be converted into a reference.
        fail_if_not_exists: :class:`bool`
            Whether replying to the referenced message should raise :class:`HTTPException`
            if the message no longer exists or the API could not fetch the message.

        Returns
        -------
        :class:`MessageReference`
            A reference to the message.
        """
        self = cls(
            message_id=message.id,
            channel_id=message.channel.id,
            guild_id=message.guild_id,
            fail_if_not_exists=fail_if_not_exists,
        )
        self._state = message._state
        return self

    @property
    def jump_url(self) -> str:
        """:class:`str`: Returns a URL that allows the client to jump to the referenced message."""
        guild_id = self.guild_id if self.guild_id is not None else '@me'
        return f'https://discord.com/channels/{guild_id}/{self.channel_id}/{self.message_id}'

    def __repr__(self) -> str:
        return f'<MessageReference message_id={self.message_id!r} channel_id={self.channel_id!r} guild_id={self.guild_id!r}>'

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {'message_id': self.message_id} if self.message_id is not None else {}
        result['channel_id'] = self.channel_id
        if self.guild_id is not None:
            result['guild_id'] = self.guild_id
        if self.fail_if_not_exists is not None:
            result['fail_if_not_exists'] = self.fail_if_not_exists
        return result


class Message(Hashable):
    r"""Represents a message.

    Messages are values: none of the methods below change the message they
    are called on. The ones that change the message on the server return the
    server's new version of it instead.

    When the client has a cache, the methods check what the cache knows
    about your permissions before sending anything and raise
    :exc:`InsufficientPermissions` early. Without a cache, or when the
    cache does not know, the request is sent and the server decides.

    .. container:: operations

        .. describe:: x == y

            Checks if two messages are equal.

        .. describe:: x != y

            Checks if two messages are not equal.

        .. describe:: hash(x)

            Returns the message's hash.

    Attributes
    -----------
    id: :class:`int`
        The message ID.
    channel: :class:`PartialMessageable`
        The channel the message was sent in.
    guild_id: Optional[:class:`int`]
        The guild the message was sent in. ``None`` for direct messages.
    type: :class:`MessageType`
        The type of message.
    author: :class:`User`
        The user that sent the message.
    member: Optional[:class:`Member`]
        The partial guild member of the author, if the API sent it.
    content: :class:`str`
        The actual contents of the message. Pin notices and member join
        messages have their content filled in with the text the client
        would show.
    nonce: Optional[Union[:class:`str`, :class:`int`]]
        The value used to discern whether a message was sent.
    embeds: List[:class:`Embed`]
        A list of embeds the message has.
    attachments: List[:class:`Attachment`]
        A list of attachments given to a message.
    components: List[Dict[:class:`str`, Any]]
        The raw component documents of the message.
    stickers: List[:class:`StickerItem`]
        A list of sticker items given to the message.
    reactions: List[:class:`Reaction`]
        Reactions to a message, one aggregate per emoji.
    reference: Optional[:class:`MessageReference`]
        The message that this message references, for replies and crossposts.
    mentions: List[:class:`User`]
        The users that were mentioned.
    role_mentions: List[:class:`int`]
        The IDs of the roles that were mentioned.
    channel_mentions: List[:class:`int`]
        The IDs of the channels that were mentioned, as far as the API lists them.
    mention_everyone: :class:`bool`
        Specifies if the message mentions everyone.
    tts: :class:`bool`
        Specifies if the message was done with text-to-speech.
    pinned: :class:`bool`
        Specifies if the message is currently pinned.
    flags: :class:`MessageFlags`
        Extra features of the message.
    webhook_id: Optional[:class:`int`]
        If this message was sent by a webhook, then this is the webhook ID.
    application_id: Optional[:class:`int`]
        The application ID of the application that created this message.
    """

    __slots__ = (
        '_state',
        '_edited_timestamp',
        'id',
        'channel',
        'guild_id',
        'type',
        'author',
        'member',
        'content',
        'nonce',
        'embeds',
        'attachments',
        'components',
        'stickers',
        'reactions',
        'reference',
        'mentions',
        'role_mentions',
        'channel_mentions',
        'mention_everyone',
        'tts',
        'pinned',
        'flags',
        'webhook_id',
        'application_id',
    )

    def __init__(self, *, state: ConnectionState, channel: PartialMessageable, data: Dict[str, Any]) -> None:
        self._state: ConnectionState = state
        self.channel: PartialMessageable = channel
        self.id: int = int(data['id'])
        self.guild_id: Optional[int] = utils._get_as_snowflake(data, 'guild_id') or channel.guild_id
        self.type: MessageType = try_enum(MessageType, data.get('type', 0))
        self.content: str = data.get('content', '')
        self.nonce: Optional[Union[int, str]] = data.get('nonce')
        self.tts: bool = data.get('tts', False)
        self.pinned: bool = data.get('pinned', False)
        self.mention_everyone: bool = data.get('mention_everyone', False)
        self.flags: MessageFlags = MessageFlags._from_value(data.get('flags', 0))
        self.webhook_id: Optional[int] = utils._get_as_snowflake(data, 'webhook_id')
        self.application_id: Optional[int] = utils._get_as_snowflake(data, 'application_id')
        self._edited_timestamp: Optional[datetime.datetime] = utils.parse_time(data.get('edited_timestamp'))

        self.author: User = state.store_user(data['author'])
        self.member: Optional[Member] = None
        member = data.get('member')
        if member is not None and self.guild_id is not None:
            self.member = Member._from_message(message=self, data=member)

        self.embeds: List[Embed] = [Embed.from_dict(a) for a in data.get('embeds', [])]
        self.attachments: List[Attachment] = [Attachment(data=a) for a in data.get('attachments', [])]
        self.components: List[Dict[str, Any]] = list(data.get('components', []))
        self.stickers: List[StickerItem] = [StickerItem(data=d) for d in data.get('sticker_items', [])]
        self.reactions: List[Reaction] = [Reaction(message=self, data=d) for d in data.get('reactions', [])]

        self.mentions: List[User] = [state.store_user(m) for m in data.get('mentions', [])]
        self.role_mentions: List[int] = [int(r) for r in data.get('mention_roles', [])]
        self.channel_mentions: List[int] = [int(c['id']) for c in data.get('mention_channels', [])]

        self.reference: Optional[MessageReference] = None
        self._handle_reference(data)
        self._transform_content()

    def _handle_reference(self, data: Dict[str, Any]) -> None:
        ref = data.get('message_reference')
        resolved = data.get('referenced_message')
        if ref is not None:
            self.reference = MessageReference.with_state(self._state, ref)
        elif resolved is not None:
            self.reference = MessageReference(
                message_id=int(resolved['id']),
                channel_id=int(resolved['channel_id']),
                guild_id=self.guild_id,
            )
            self.reference._state = self._state

        if resolved is None or self.reference is None:
            return

        channel_id = int(resolved.get('channel_id', self.channel.id))
        if channel_id == self.channel.id:
            channel = self.channel
        else:
            channel = self._state.get_partial_messageable(channel_id, guild_id=self.reference.guild_id)

        # only one level of referenced messages is kept
        resolved = {k: v for k, v in resolved.items() if k != 'referenced_message'}
        self.reference.resolved = self.__class__(state=self._state, channel=channel, data=resolved)

    def _transform_content(self) -> None:
        if self.type == MessageType.pins_add:
            self.content = f'{self.author.mention} pinned a message to this channel. See all the pins.'
        elif self.type == MessageType.new_member:
            seconds = int(self.created_at.timestamp())
            chosen = JOIN_MESSAGES[seconds % len(JOIN_MESSAGES)]
            self.content = chosen.replace('$user', self.author.mention)

    def __repr__(self) -> str:
        name = self.__class__.__name__
        return (
            f'<{name} id={self.id} channel={self.channel!r} type={self.type!r} author={self.author!r} flags={self.flags!r}>'
        )

    # Properties

    @property
    def created_at(self) -> datetime.datetime:
        """:class:`datetime.datetime`: The message's creation time in UTC."""
        return utils.snowflake_time(self.id)

    @property
    def edited_at(self) -> Optional[datetime.datetime]:
        """Optional[:class:`datetime.datetime`]: An aware UTC datetime object containing the edited time of the message."""
        return self._edited_timestamp

    @property
    def jump_url(self) -> str:
        """:class:`str`: Returns a URL that allows the client to jump to this message."""
        guild_id = self.guild_id if self.guild_id is not None else '@me'
        return f'https://discord.com/channels/{guild_id}/{self.channel.id}/{self.id}'

    link = jump_url

    @property
    def raw_mentions(self) -> List[int]:
        """List[:class:`int`]: A property that returns an array of user IDs matched with
        the syntax of ``<@user_id>`` in the message content.

        This allows you to receive the user IDs of mentioned users
        even in a private message context.
        """
        return [int(x) for x in re.findall(r'<@!?([0-9]{15,20})>', self.content)]

    @property
    def raw_role_mentions(self) -> List[int]:
        """List[:class:`int`]: A property that returns an array of role IDs matched with
        the syntax of ``<@&role_id>`` in the message content.
        """
        return [int(x) for x in re.findall(r'<@&([0-9]{15,20})>', self.content)]

    @property
    def clean_content(self) -> str:
        """:class:`str`: The content with mentions rendered as names, see :meth:`content_safe`.

        Uses the client's cache, if any.
        """
        return self.content_safe()

    overflow_length = staticmethod(overflow_length)

    def content_safe(self, cache: Optional[CacheSnapshot] = MISSING) -> str:
        """Returns the content with user and role mentions replaced by names
        and ``@everyone`` and ``@here`` neutralised.

        Parameters
        -----------
        cache: Optional[:class:`~chatmodels.abc.CacheSnapshot`]
            The cache to resolve role names with. Defaults to the client's
            cache. Roles that cannot be resolved become ``@deleted-role``.

        Returns
        --------
        :class:`str`
            The safe content.
        """
        if cache is MISSING:
            cache = self._state.cache
        return content_safe(self.content, self.mentions, self.role_mentions, cache)

    def is_private(self) -> bool:
        """:class:`bool`: Whether the message was sent outside of a guild."""
        return self.guild_id is None

    def is_own(self, cache: Optional[CacheSnapshot] = MISSING) -> bool:
        """Checks whether the message was sent by the current user.

        Parameters
        -----------
        cache: Optional[:class:`~chatmodels.abc.CacheSnapshot`]
            The cache to ask for the current user. Defaults to the client's cache.

        Returns
        --------
        :class:`bool`
            ``True`` if the cache knows the current user and it is the author.
        """
        if cache is MISSING:
            cache = self._state.cache
        if cache is None:
            return False
        me = cache.current_user()
        return me is not None and me.id == self.author.id

    def _is_foreign(self, cache: Optional[CacheSnapshot]) -> bool:
        # False when the current user is unknown, the server decides then
        if cache is None:
            return False
        me = cache.current_user() or self._state.user
        return me is not None and me.id != self.author.id

    def mentions_user(self, user: Snowflake) -> bool:
        """:class:`bool`: Whether ``user`` is among :attr:`mentions`."""
        return self.mentions_user_id(user.id)

    def mentions_user_id(self, user_id: int) -> bool:
        """:class:`bool`: Whether the user with the given ID is among :attr:`mentions`."""
        return any(user.id == user_id for user in self.mentions)

    def author_nick(self) -> Optional[str]:
        """Returns the author's nickname in the message's guild.

        The partial member sent along with the message is used first, then
        the cache. Returns ``None`` outside guilds or when no nickname is known.
        """
        if self.guild_id is None:
            return None
        if self.member is not None:
            return self.member.nick

        cache = self._state.cache
        if cache is not None:
            member = cache.get_member(self.guild_id, self.author.id)
            if member is not None:
                return member.nick
        return None

    def to_reference(self, *, fail_if_not_exists: bool = True) -> MessageReference:
        """Creates a :class:`MessageReference` from the current message.

        Parameters
        ----------
        fail_if_not_exists: :class:`bool`
            Whether replying using the message reference should raise :class:`HTTPException`
            if the message no longer exists or the API could not fetch the message.

        Returns
        ---------
        :class:`MessageReference`
            The reference to this message.
        """
        return MessageReference.from_message(self, fail_if_not_exists=fail_if_not_exists)

    # Lookups

    async def fetch_member(self) -> Member:
        """|coro|

        Retrieves the author as a guild member, from the cache if it has it.

        Raises
        -------
        ItemMissing
            The message was not sent in a guild.
        HTTPException
            Fetching the member failed.

        Returns
        --------
        :class:`Member`
            The author's member.
        """
        if self.guild_id is None:
            raise ItemMissing('Message was not sent in a guild.')

        cache = self._state.cache
        if cache is not None:
            member = cache.get_member(self.guild_id, self.author.id)
            if member is not None:
                return member

        data = await self._state.http.get_member(self.guild_id, self.author.id)
        return Member(data=data, guild_id=self.guild_id, state=self._state)

    async def mentions_me(self) -> bool:
        """|coro|

        Checks whether the current user is among :attr:`mentions`.

        The current user is taken from the cache, or fetched when there
        is no cache that knows it.

        Raises
        -------
        HTTPException
            Fetching the current user failed.
        """
        me = self._state.cache.current_user() if self._state.cache is not None else None
        if me is not None:
            return self.mentions_user_id(me.id)

        data = await self._state.http.get_me()
        return self.mentions_user_id(int(data['id']))

    async def reaction_users(
        self,
        emoji: Union[EmojiInputType, Reaction],
        *,
        limit: int = 50,
        after: Optional[Snowflake] = None,
    ) -> List[User]:
        """|coro|

        Fetches the users that reacted to the message with ``emoji``.

        Parameters
        -----------
        emoji: Union[:class:`PartialEmoji`, :class:`Reaction`, :class:`str`]
            The emoji to look up.
        limit: :class:`int`
            The maximum number of users to return. At most 100.
        after: Optional[:class:`abc.Snowflake`]
            Only return users with an ID after this one.

        Raises
        -------
        HTTPException
            Getting the users failed.

        Returns
        --------
        List[:class:`User`]
            The users that reacted.
        """
        emoji = convert_emoji_reaction(emoji)
        limit = min(max(limit, 1), 100)
        after_id = after.id if after is not None else None
        data = await self._state.http.get_reaction_users(self.channel.id, self.id, emoji, limit, after=after_id)
        return [self._state.store_user(d) for d in data]

    # Mutators

    async def edit(self, builder: Optional[Callable[[EditMessageBuilder], Any]] = None, **fields: Any) -> Message:
        r"""|coro|

        Edits the message.

        The draft starts out with the current content, embeds and attachments,
        then the keyword arguments are applied and last the ``builder`` callback
        is called with the draft. Passing ``content=None`` removes the content,
        leaving it out keeps it.

        Parameters
        -----------
        builder: Optional[Callable[[:class:`EditMessageBuilder`], Any]]
            A callback that finishes the draft.
        \*\*fields
            Any field accepted by :meth:`EditMessageBuilder.apply`, e.g.
            ``content``, ``embed``, ``attachments`` or ``suppress``.

        Raises
        -------
        NotAuthor
            The cache knows the message is not yours.
        ValidationError
            The edited message goes over one of the platform's limits.
        HTTPException
            Editing the message failed.

        Returns
        --------
        :class:`Message`
            The message as the server has it after the edit.
        """
        cache = self._state.cache
        if self._is_foreign(cache):
            _log.debug('Refusing to edit message ID %s not sent by the current user.', self.id)
            raise NotAuthor()

        draft = EditMessageBuilder()
        if self.content:
            draft.content(self.content)
        draft.embeds(self.embeds)
        draft.attachments(self.attachments)
        draft.apply(**fields)
        if builder is not None:
            builder(draft)

        with draft.build(default_allowed_mentions=self._state.allowed_mentions) as params:
            check_all(params.payload)
            data = await self._state.http.edit_message(self.channel.id, self.id, params=params)

        return self._state.create_message(channel=self.channel, data=data)

    async def suppress_embeds(self, suppress: bool = True) -> Message:
        """|coro|

        Suppresses or unsuppresses the embeds of the message.

        With a cache this needs :attr:`~Permissions.manage_messages` and the
        message has to be your own.

        Parameters
        -----------
        suppress: :class:`bool`
            Whether to suppress the embeds.

        Raises
        -------
        InsufficientPermissions
            The cache knows you lack :attr:`~Permissions.manage_messages`.
        NotAuthor
            The cache knows the message is not yours.
        HTTPException
            Editing the message failed.

        Returns
        --------
        :class:`Message`
            The message as the server has it after the edit.
        """
        cache = self._state.cache
        if cache is not None:
            authorize(cache, self.channel.id, self.guild_id, Permissions(manage_messages=True))
            if self._is_foreign(cache):
                raise NotAuthor()

        flags = MessageFlags._from_value(self.flags.value)
        flags.suppress_embeds = suppress
        params = EditMessageBuilder(flags=flags).build()
        data = await self._state.http.edit_message(self.channel.id, self.id, params=params)
        return self._state.create_message(channel=self.channel, data=data)

    async def delete(self, *, reason: Optional[str] = None) -> None:
        """|coro|

        Deletes the message.

        Your own messages can always be deleted. Other people's messages
        need :attr:`~Permissions.manage_messages` and cannot be deleted at
        all in direct messages.

        Parameters
        -----------
        reason: Optional[:class:`str`]
            The reason for deleting the message. Shows up on the audit log.

        Raises
        ------
        NotAuthor
            The cache knows this is someone else's direct message.
        InsufficientPermissions
            The cache knows you lack :attr:`~Permissions.manage_messages`.
        NotFound
            The message was deleted already.
        HTTPException
            Deleting the message failed.
        """
        cache = self._state.cache
        if self._is_foreign(cache):
            if self.is_private():
                raise NotAuthor()
            authorize(cache, self.channel.id, self.guild_id, Permissions(manage_messages=True))

        await self._state.http.delete_message(self.channel.id, self.id, reason=reason)

    async def crosspost(self) -> Message:
        """|coro|

        Publishes this message to the channels following the announcement channel.

        Only regular messages that are neither crossposts themselves nor
        published already can be crossposted. Publishing someone else's
        message needs :attr:`~Permissions.manage_messages`.

        Raises
        -------
        AlreadyCrossposted
            The message was published already.
        CannotCrosspost
            The message is a crosspost or not a regular message.
        InsufficientPermissions
            The cache knows you lack :attr:`~Permissions.manage_messages`.
        HTTPException
            Publishing the message failed.

        Returns
        --------
        :class:`Message`
            The published message.
        """
        if self.flags.crossposted:
            raise AlreadyCrossposted()
        if self.flags.is_crossposted or self.type != MessageType.default:
            raise CannotCrosspost()

        cache = self._state.cache
        if self.guild_id is not None and self._is_foreign(cache):
            authorize(cache, self.channel.id, self.guild_id, Permissions(manage_messages=True))

        data = await self._state.http.publish_message(self.channel.id, self.id)
        return self._state.create_message(channel=self.channel, data=data)

    async def pin(self, *, reason: Optional[str] = None) -> None:
        """|coro|

        Pins the message.

        You must have :attr:`~Permissions.manage_messages` to do
        this in a non-private channel context.

        Parameters
        -----------
        reason: Optional[:class:`str`]
            The reason for pinning the message. Shows up on the audit log.

        Raises
        -------
        InsufficientPermissions
            The cache knows you lack :attr:`~Permissions.manage_messages`.
        NotFound
            The message or channel was not found or deleted.
        HTTPException
            Pinning the message failed, probably due to the channel
            having more than 50 pinned messages.
        """
        authorize(self._state.cache, self.channel.id, self.guild_id, Permissions(manage_messages=True))
        await self._state.http.pin_message(self.channel.id, self.id, reason=reason)

    async def unpin(self, *, reason: Optional[str] = None) -> None:
        """|coro|

        Unpins the message.

        You must have :attr:`~Permissions.manage_messages` to do
        this in a non-private channel context.

        Parameters
        -----------
        reason: Optional[:class:`str`]
            The reason for unpinning the message. Shows up on the audit log.

        Raises
        -------
        InsufficientPermissions
            The cache knows you lack :attr:`~Permissions.manage_messages`.
        NotFound
            The message or channel was not found or deleted.
        HTTPException
            Unpinning the message failed.
        """
        authorize(self._state.cache, self.channel.id, self.guild_id, Permissions(manage_messages=True))
        await self._state.http.unpin_message(self.channel.id, self.id, reason=reason)

    async def react(self, emoji: Union[EmojiInputType, Reaction, RawReaction], /) -> RawReaction:
        """|coro|

        Adds a reaction to the message.

        The emoji may be a unicode emoji or a custom guild :class:`PartialEmoji`.

        You must have :attr:`~Permissions.add_reactions` to use this in a guild.

        Parameters
        ------------
        emoji: Union[:class:`PartialEmoji`, :class:`Reaction`, :class:`str`]
            The emoji to react with.

        Raises
        --------
        InsufficientPermissions
            The cache knows you lack :attr:`~Permissions.add_reactions`.
        NotFound
            The emoji you specified was not found.
        HTTPException
            Adding the reaction failed.
        TypeError
            The emoji parameter is invalid.

        Returns
        --------
        :class:`RawReaction`
            The reaction as it was added. :attr:`RawReaction.user_id` is
            ``None`` when there is no cache that knows the current user.
        """
        cache = self._state.cache
        authorize(cache, self.channel.id, self.guild_id, Permissions(add_reactions=True))

        await self._state.http.add_reaction(self.channel.id, self.id, convert_emoji_reaction(emoji))

        me = cache.current_user() if cache is not None else None
        user_id = me.id if me is not None else None
        member = None
        if cache is not None and user_id is not None and self.guild_id is not None:
            member = cache.get_member(self.guild_id, user_id)

        return RawReaction(
            message_id=self.id,
            channel_id=self.channel.id,
            guild_id=self.guild_id,
            user_id=user_id,
            emoji=_to_partial_emoji(emoji),
            member=member,
        )

    async def remove_reaction(self, emoji: Union[EmojiInputType, Reaction, RawReaction], member: Snowflake) -> None:
        """|coro|

        Removes a reaction by the member from the message.

        If the reaction is not your own (i.e. ``member`` parameter is not you) then
        :attr:`~Permissions.manage_messages` is needed.

        Parameters
        ------------
        emoji: Union[:class:`PartialEmoji`, :class:`Reaction`, :class:`str`]
            The emoji to remove.
        member: :class:`abc.Snowflake`
            The member for which to remove the reaction.

        Raises
        --------
        InsufficientPermissions
            The cache knows you lack :attr:`~Permissions.manage_messages`.
        NotFound
            The member or emoji you specified was not found.
        HTTPException
            Removing the reaction failed.
        TypeError
            The emoji parameter is invalid.
        """
        emoji = convert_emoji_reaction(emoji)

        if member.id == self._state.self_id:
            await self._state.http.remove_own_reaction(self.channel.id, self.id, emoji)
        else:
            authorize(self._state.cache, self.channel.id, self.guild_id, Permissions(manage_messages=True))
            await self._state.http.remove_reaction(self.channel.id, self.id, emoji, member.id)

    async def clear_reaction(self, emoji: Union[EmojiInputType, Reaction]) -> None:
        """|coro|

        Clears a specific reaction from the message.

        You must have :attr:`~Permissions.manage_messages` to do this.

        Parameters
        -----------
        emoji: Union[:class:`PartialEmoji`, :class:`Reaction`, :class:`str`]
            The emoji to clear.

        Raises
        --------
        InsufficientPermissions
            The cache knows you lack :attr:`~Permissions.manage_messages`.
        NotFound
            The emoji you specified was not found.
        HTTPException
            Clearing the reaction failed.
        TypeError
            The emoji parameter is invalid.
        """
        authorize(self._state.cache, self.channel.id, self.guild_id, Permissions(manage_messages=True))
        await self._state.http.clear_single_reaction(self.channel.id, self.id, convert_emoji_reaction(emoji))

    async def clear_reactions(self) -> None:
        """|coro|

        Removes all the reactions from the message.

        You must have :attr:`~Permissions.manage_messages` to do this.

        Raises
        --------
        InsufficientPermissions
            The cache knows you lack :attr:`~Permissions.manage_messages`.
        HTTPException
            Removing the reactions failed.
        """
        authorize(self._state.cache, self.channel.id, self.guild_id, Permissions(manage_messages=True))
        await self._state.http.clear_reactions(self.channel.id, self.id)

    # Replies

    async def _reply(
        self,
        content: Optional[Any],
        builder: Optional[ReplyCallback],
        fields: Dict[str, Any],
        *,
        ping: Optional[bool],
    ) -> Message:
        draft = MessageBuilder(**fields)
        if content is not MISSING:
            draft.content(content)
        if ping is not None:
            draft.reference(self)
            draft.allowed_mentions(AllowedMentions.reply(ping=ping))
        if builder is not None:
            builder(draft)
        return await self.channel._send_draft(draft)

    async def reply(
        self, content: Optional[Any] = MISSING, *, builder: Optional[ReplyCallback] = None, **fields: Any
    ) -> Message:
        r"""|coro|

        Replies inline to the message without pinging its author.

        The reply carries a reference to this message and allowed mentions
        that let everything but the reply ping through. Everything else works
        like :meth:`PartialMessageable.send`.

        Raises
        --------
        InsufficientPermissions
            The cache knows you lack :attr:`~Permissions.send_messages`.
        ValidationError
            The reply goes over one of the platform's limits.
        HTTPException
            Sending the message failed.

        Returns
        ---------
        :class:`Message`
            The message that was sent.
        """
        return await self._reply(content, builder, fields, ping=False)

    async def reply_ping(
        self, content: Optional[Any] = MISSING, *, builder: Optional[ReplyCallback] = None, **fields: Any
    ) -> Message:
        """|coro|

        Like :meth:`reply`, but the author of this message is pinged.
        """
        return await self._reply(content, builder, fields, ping=True)

    async def reply_mention(self, content: Any, *, builder: Optional[ReplyCallback] = None, **fields: Any) -> Message:
        """|coro|

        Sends ``content`` to the channel prefixed with a mention of the
        author. This is a plain message, no reference is attached and the
        allowed mentions are left alone.
        """
        return await self._reply(f'{self.author.mention} {content}', builder, fields, ping=None)
