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

from io import BytesIO

import chatmodels
import pytest
from chatmodels import AllowedMentions, EditMessageBuilder, MessageBuilder

from conftest import make_message


def test_message_builder_defaults():
    params = MessageBuilder(content='hi').build()

    assert params.payload['content'] == 'hi'
    assert params.payload['tts'] is False
    assert 'nonce' in params.payload
    assert 'embeds' not in params.payload
    assert params.files == []


def test_payload_is_read_only():
    params = MessageBuilder(content='hi').build()

    with pytest.raises(TypeError):
        params.payload['content'] = 'changed'  # type: ignore

    copy = params.to_json()
    copy['content'] = 'changed'
    assert params.payload['content'] == 'hi'


def test_fluent_chaining():
    embed = chatmodels.Embed(title='t')
    builder = MessageBuilder().content('a').add_embed(embed).add_embed({'title': 'u'}).tts().nonce(None).stickers([1, 2])
    params = builder.build()

    assert params.payload['embeds'] == [{'type': 'rich', 'title': 't'}, {'title': 'u'}]
    assert params.payload['tts'] is True
    assert 'nonce' not in params.payload
    assert params.payload['sticker_ids'] == ['1', '2']


def test_unknown_field():
    with pytest.raises(TypeError):
        MessageBuilder(colour=5)

    with pytest.raises(TypeError):
        EditMessageBuilder(tts=True)


def test_allowed_mentions_merge_with_default():
    default = AllowedMentions(everyone=False, replied_user=False)
    params = MessageBuilder(content='hi', allowed_mentions=AllowedMentions(replied_user=True)).build(
        default_allowed_mentions=default
    )
    assert params.payload['allowed_mentions'] == {'replied_user': True, 'parse': ['users', 'roles']}

    params = MessageBuilder(content='hi').build(default_allowed_mentions=default)
    assert params.payload['allowed_mentions'] == {'replied_user': False, 'parse': ['users', 'roles']}


def test_reference(state):
    message = make_message(state)
    params = MessageBuilder().reference(message, fail_if_not_exists=False).build()

    assert params.payload['message_reference'] == {
        'message_id': message.id,
        'channel_id': message.channel.id,
        'guild_id': message.guild_id,
        'fail_if_not_exists': False,
    }


def test_files_become_multipart():
    fp = BytesIO(b'data')
    params = MessageBuilder(content='hi', file=chatmodels.File(fp, 'a.txt')).build()

    assert params.payload['attachments'] == [{'id': 0, 'filename': 'a.txt'}]
    form = params.multipart
    assert form[0]['name'] == 'payload_json'
    assert form[1]['name'] == 'files[0]'
    assert form[1]['filename'] == 'a.txt'

    with params:
        pass
    assert not fp.closed


def test_edit_builder_leaves_unset_fields_out():
    params = EditMessageBuilder(content='new').build()
    assert dict(params.payload) == {'content': 'new'}


def test_edit_builder_explicit_none_clears_content():
    params = EditMessageBuilder(content=None).build()
    assert dict(params.payload) == {'content': None}


def test_edit_builder_suppress():
    params = EditMessageBuilder(suppress=True).build()
    assert params.payload['flags'] == 4


def test_edit_builder_attachments(state):
    attachment = {
        'id': '10',
        'filename': 'cat.png',
        'size': 3,
        'url': 'https://cdn.example.com/cat.png',
        'proxy_url': 'https://media.example.com/cat.png',
    }
    message = make_message(state, attachments=[attachment, dict(attachment, id='11', filename='dog.png')])

    builder = EditMessageBuilder().attachments(message.attachments).remove_attachment(11)
    builder.add_file(chatmodels.File(BytesIO(b'x'), 'new.txt'))
    params = builder.build()

    ids = [a['id'] for a in params.payload['attachments']]
    assert ids == [10, 0]
    assert len(params.files) == 1
