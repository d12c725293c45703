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

import pytest
from chatmodels import PartialEmoji
from chatmodels.reaction import convert_emoji_reaction


@pytest.mark.parametrize(
    ('value', 'name', 'id', 'animated'),
    [
        ('<:cool:123456789012345678>', 'cool', 123456789012345678, False),
        ('<a:party:123456789012345678>', 'party', 123456789012345678, True),
        ('cool:123456789012345678', 'cool', 123456789012345678, False),
        ('abc:123456789012345678', 'abc', 123456789012345678, False),
        ('<:abc:123456789012345678>', 'abc', 123456789012345678, False),
        ('a:abc:123456789012345678', 'abc', 123456789012345678, True),
        ('\N{THUMBS UP SIGN}', '\N{THUMBS UP SIGN}', None, False),
        ('not:an_id', 'not:an_id', None, False),
    ],
)
def test_from_str(value, name, id, animated):
    emoji = PartialEmoji.from_str(value)
    assert emoji.name == name
    assert emoji.id == id
    assert emoji.animated is animated


def test_str_and_reaction_form():
    custom = PartialEmoji(name='cool', id=123456789012345678, animated=True)
    assert str(custom) == '<a:cool:123456789012345678>'
    assert convert_emoji_reaction(custom) == 'cool:123456789012345678'
    assert convert_emoji_reaction('<:cool:123456789012345678>') == ':cool:123456789012345678'

    unicode = PartialEmoji(name='\N{THUMBS UP SIGN}')
    assert str(unicode) == '\N{THUMBS UP SIGN}'
    assert unicode.url == ''
    assert unicode.created_at is None


def test_equality():
    assert PartialEmoji(name='a', id=123) == PartialEmoji(name='b', id=123)
    assert PartialEmoji(name='\N{THUMBS UP SIGN}') != PartialEmoji(name='\N{THUMBS DOWN SIGN}')
    assert len({PartialEmoji(name='a', id=123), PartialEmoji(name='b', id=123)}) == 1


def test_round_trip_payload():
    data = {'id': '123456789012345678', 'name': 'cool', 'animated': True}
    emoji = PartialEmoji.from_dict(data)
    assert emoji.to_dict() == {'id': 123456789012345678, 'name': 'cool', 'animated': True}
