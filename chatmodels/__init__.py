"""
Chat Models
~~~~~~~~~~~

Message models and a REST client for a Discord style chat API.

:copyright: (c) 2015-present Rapptz
:license: MIT, see LICENSE for more details.

"""

__title__ = 'chatmodels'
__author__ = 'Rapptz'
__license__ = 'MIT'
__copyright__ = 'Copyright 2015-present Rapptz'
__version__ = '1.0.0'

import logging
from typing import NamedTuple, Literal

from .client import *
from .user import *
from .partial_emoji import *
from .channel import *
from .flags import *
from .message import *
from .errors import *
from .permissions import *
from .file import *
from .object import *
from .reaction import *
from . import (
    utils as utils,
    abc as abc,
    validation as validation,
)
from .enums import *
from .embeds import *
from .mentions import *
from .sticker import *
from .builders import *
from .cache import *
from .http import *


class VersionInfo(NamedTuple):
    major: int
    minor: int
    micro: int
    releaselevel: Literal['alpha', 'beta', 'candidate', 'final']
    serial: int


version_info: VersionInfo = VersionInfo(major=1, minor=0, micro=0, releaselevel='final', serial=0)

logging.getLogger(__name__).addHandler(logging.NullHandler())

del logging, NamedTuple, Literal, VersionInfo
