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

import collections
import logging
import random
import secrets
import typing

import pytest
from chatmodels import utils


@pytest.mark.parametrize(
    ('snowflake', 'time_tuple'),
    [
        (10000000000000000, (2015, 1, 28, 14, 16, 25)),
        (12345678901234567, (2015, 2, 4, 1, 37, 19)),
        (100000000000000000, (2015, 10, 3, 22, 44, 17)),
        (123456789012345678, (2015, 12, 7, 16, 13, 12)),
        (661720302316814366, (2020, 1, 1, 0, 0, 14)),
        (1000000000000000000, (2022, 7, 22, 11, 22, 59)),
    ],
)
def test_snowflake_time(snowflake: int, time_tuple: typing.Tuple[int, int, int, int, int, int]):
    dt = utils.snowflake_time(snowflake)

    assert (dt.year, dt.month, dt.day, dt.hour, dt.minute, dt.second) == time_tuple

    assert utils.time_snowflake(dt, high=False) <= snowflake <= utils.time_snowflake(dt, high=True)


def test_get_find():
    mapping = {secrets.token_bytes(32): secrets.token_bytes(32) for _ in range(100)}

    pair = collections.namedtuple('pair', 'key value')
    array = [pair(key=k, value=v) for k, v in mapping.items()]
    random.shuffle(array)

    for key, value in mapping.items():
        item = utils.get(array, key=key)
        assert item is not None
        assert item.value == value

        item = utils.find(lambda i: i.key == key, array)
        assert item is not None
        assert item.value == value

    assert utils.get(array, key=b'missing') is None
    assert utils.get(array, key=array[0].key, value=array[0].value) is array[0]


@pytest.mark.parametrize(
    'mention', ['@everyone', '@here', '<@80088516616269824>', '<@!80088516616269824>', '<@&381978264698224660>']
)
def test_escape_mentions(mention):
    assert mention not in utils.escape_mentions(mention)
    assert mention not in utils.escape_mentions(f"one {mention} two")


def test_parse_time():
    assert utils.parse_time(None) is None
    dt = utils.parse_time('2022-07-22T11:22:59.817000+00:00')
    assert dt is not None
    assert dt.tzinfo is not None
    assert dt.microsecond == 817000


def test_json_round_trip():
    data = {'content': 'hi', 'embeds': [], 'tts': False, 'nonce': None}
    assert utils._from_json(utils._to_json(data)) == data


def test_setup_logging_library_logger():
    handler = logging.NullHandler()
    logger = logging.getLogger('chatmodels')

    try:
        utils.setup_logging(handler=handler, level=logging.DEBUG, root=False)
        assert handler in logger.handlers
        assert logger.level == logging.DEBUG
        assert handler.formatter is not None
    finally:
        logger.removeHandler(handler)
        logger.setLevel(logging.NOTSET)


def test_escape_mentions_output():
    text = 'hi @everyone and <@!80088516616269824>, not me@example.com'
    expected = 'hi @\u200beveryone and <@\u200b!80088516616269824>, not me@example.com'
    assert utils.escape_mentions(text) == expected
