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

import chatmodels
import pytest
from chatmodels import Permissions
from chatmodels.permissions import authorize

from conftest import CHANNEL_ID, GUILD_ID, ME_ID


def test_permission_values():
    assert Permissions(send_messages=True).value == 1 << 11
    assert Permissions(manage_messages=True).value == 1 << 13
    assert Permissions(add_reactions=True).value == 1 << 6
    assert Permissions(view_channel=True) == Permissions(read_messages=True)


def test_invalid_permission_name():
    with pytest.raises(TypeError):
        Permissions(fly=True)


def test_subset_and_superset():
    text = Permissions.text()
    assert Permissions(send_messages=True) <= text
    assert text >= Permissions(send_messages=True, add_reactions=True)
    assert not Permissions.none() >= Permissions(send_messages=True)
    assert Permissions.all() >= text


def test_missing_from():
    required = Permissions(send_messages=True, manage_messages=True)
    missing = required.missing_from(Permissions(send_messages=True))
    assert missing == Permissions(manage_messages=True)
    assert required.missing_from(Permissions(administrator=True)).value == 0


def test_authorize_without_cache_or_guild(cache):
    required = Permissions(manage_messages=True)
    authorize(None, CHANNEL_ID, GUILD_ID, required)
    authorize(cache, CHANNEL_ID, None, required)


def test_authorize_cache_miss_defers(cache, caplog):
    with caplog.at_level(logging.DEBUG, logger='chatmodels'):
        authorize(cache, CHANNEL_ID, GUILD_ID, Permissions(manage_messages=True))

    assert 'not cached' in caplog.text


def test_authorize_unknown_current_user():
    authorize(chatmodels.MemoryCache(), CHANNEL_ID, GUILD_ID, Permissions(manage_messages=True))


def test_authorize_insufficient(cache):
    cache.set_permissions(GUILD_ID, CHANNEL_ID, ME_ID, Permissions(send_messages=True))
    required = Permissions(send_messages=True, manage_messages=True)

    with pytest.raises(chatmodels.InsufficientPermissions) as excinfo:
        authorize(cache, CHANNEL_ID, GUILD_ID, required)

    assert excinfo.value.required == required
    assert excinfo.value.missing == Permissions(manage_messages=True)
    assert 'manage_messages' in str(excinfo.value)


def test_authorize_sufficient(cache):
    cache.set_permissions(GUILD_ID, CHANNEL_ID, ME_ID, Permissions.text())
    authorize(cache, CHANNEL_ID, GUILD_ID, Permissions(manage_messages=True))


def test_administrator_implies_everything(cache):
    cache.set_permissions(GUILD_ID, CHANNEL_ID, ME_ID, Permissions(administrator=True))
    authorize(cache, CHANNEL_ID, GUILD_ID, Permissions.all())
