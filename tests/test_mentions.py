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
from chatmodels import AllowedMentions
from chatmodels.mentions import content_safe

from conftest import ROLE_ID, user_payload


@pytest.fixture
def crab() -> chatmodels.User:
    return chatmodels.User(data=user_payload(114, 'crab', '7'))


def test_plain_user_mention(crab):
    assert content_safe('hi <@114>', [crab], []) == 'hi @crab#0007'


def test_nickname_user_mention(crab):
    assert content_safe('hi <@!114> and <@!114>', [crab], []) == 'hi @crab#0007 and @crab#0007'


def test_plain_mention_wins_over_nickname_mention(crab):
    assert content_safe('<@114> <@!114>', [crab], []) == '@crab#0007 <@!114>'


def test_unlisted_users_are_left_alone(crab):
    assert content_safe('<@115>', [crab], []) == '<@115>'


def test_role_mentions(cache):
    cache.store_role(ROLE_ID, 'mods')
    content = f'<@&{ROLE_ID}> <@&12>'

    assert content_safe(content, [], [ROLE_ID, 12], cache) == '@mods @deleted-role'
    assert content_safe(content, [], [ROLE_ID], None) == '@deleted-role <@&12>'


def test_everyone_and_here():
    result = content_safe('@everyone and @here', [], [])
    assert result == '@\u200beveryone and @\u200bhere'
    assert '@everyone' not in result


def test_idempotent(crab, cache):
    cache.store_role(ROLE_ID, 'mods')
    once = content_safe(f'@here <@114> <@&{ROLE_ID}>', [crab], [ROLE_ID], cache)
    assert content_safe(once, [crab], [ROLE_ID], cache) == once


def test_allowed_mentions_reply():
    assert AllowedMentions.reply(ping=False).to_dict() == {
        'replied_user': False,
        'parse': ['everyone', 'users', 'roles'],
    }
    assert AllowedMentions.reply(ping=True).to_dict()['replied_user'] is True


def test_allowed_mentions_merge():
    base = AllowedMentions(everyone=False, users=True)
    merged = base.merge(AllowedMentions(users=[chatmodels.Object(id=5)]))

    assert merged.everyone is False
    assert merged.to_dict() == {'users': [5], 'replied_user': True, 'parse': ['roles']}
