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

import chatmodels
import pytest
from chatmodels.validation import (
    check_all,
    check_content_length,
    check_embed_limits,
    check_sticker_count,
    embed_length,
    overflow_length,
)


@pytest.mark.parametrize(
    ('content', 'expected'),
    [
        ('', None),
        ('a' * 2000, None),
        ('a' * 2001, 1),
        ('a' * 2500, 500),
        ('\N{PARTY POPPER}' * 2000, None),
        ('\N{PARTY POPPER}' * 2001, 1),
    ],
)
def test_overflow_length(content, expected):
    assert overflow_length(content) == expected
    assert chatmodels.Message.overflow_length(content) == expected


def test_content_too_long():
    with pytest.raises(chatmodels.ContentTooLong) as excinfo:
        check_content_length({'content': 'x' * 2001})

    assert excinfo.value.excess == 1


def test_content_limit_is_inclusive():
    check_content_length({'content': 'x' * 2000})
    check_content_length({'content': None})
    check_content_length({})


def test_embed_length_tracked_fields():
    embed = {
        'title': 'abc',
        'description': 'de',
        'fields': [{'name': 'f', 'value': 'gh', 'inline': True}],
        'footer': {'text': 'i', 'icon_url': 'https://example.com/untracked.png'},
        'author': {'name': 'jk', 'url': 'https://example.com'},
        'url': 'https://example.com/also-untracked',
    }
    assert embed_length(embed) == 11


def test_embed_length_matches_len():
    embed = chatmodels.Embed(title='title', description='description')
    embed.add_field(name='name', value='value').set_footer(text='footer').set_author(name='author')
    assert len(embed) == embed_length(embed.to_dict()) == 37


def test_too_many_embeds_is_independent_of_contents():
    with pytest.raises(chatmodels.TooManyEmbeds) as excinfo:
        check_embed_limits({'embeds': [{} for _ in range(11)]})

    assert excinfo.value.count == 11

    check_embed_limits({'embeds': [{} for _ in range(10)]})


def test_embed_too_large_reports_first_offender():
    embeds = [
        {'description': 'a' * 10},
        {'description': 'a' * 6001},
        {'title': 'a' * 6100},
    ]

    with pytest.raises(chatmodels.EmbedTooLarge) as excinfo:
        check_embed_limits({'embeds': embeds})

    assert excinfo.value.excess == 1
    assert excinfo.value.index == 1


def test_embed_at_limit():
    embed = {'title': 'a' * 1000, 'description': 'b' * 4000, 'fields': [{'name': 'c' * 500, 'value': 'd' * 500}]}
    check_embed_limits({'embeds': [embed]})


def test_too_many_stickers():
    check_sticker_count({'sticker_ids': ['1', '2', '3']})

    with pytest.raises(chatmodels.TooManyStickers) as excinfo:
        check_sticker_count({'sticker_ids': ['1', '2', '3', '4']})

    assert excinfo.value.count == 4


def test_check_all_precedence():
    payload = {
        'content': 'x' * 2001,
        'embeds': [{} for _ in range(11)],
        'sticker_ids': ['1', '2', '3', '4'],
    }
    with pytest.raises(chatmodels.ContentTooLong):
        check_all(payload)

    del payload['content']
    with pytest.raises(chatmodels.TooManyEmbeds):
        check_all(payload)

    del payload['embeds']
    with pytest.raises(chatmodels.TooManyStickers):
        check_all(payload)


def test_validation_errors_are_client_exceptions():
    for exc in (chatmodels.ContentTooLong(1), chatmodels.TooManyEmbeds(11), chatmodels.EmbedTooLarge(1)):
        assert isinstance(exc, chatmodels.ValidationError)
        assert isinstance(exc, chatmodels.ClientException)
