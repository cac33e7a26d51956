# -*- coding: utf-8 -*-
"""Deferred results, and their composition.

A ``Deferred`` holds a result not yet known, plus the continuations waiting
for it. ``join()`` waits for many Deferreds, ``chain()`` calls
Deferred-returning functions one after the other. The ``network`` module
produces Deferreds from HTTP requests.
"""

from .__version__ import __version__  # noqa

from .common import config, log
from .promise import Deferred, chain, join, resolved, wrap_deferred
from .network import (Client, ENOXHR, ETIMEOUT, FormData, RequestSettings,
                      encode)

__all__ = ['Deferred', 'chain', 'join', 'resolved', 'wrap_deferred',
           'Client', 'ENOXHR', 'ETIMEOUT', 'FormData', 'RequestSettings',
           'encode', 'config', 'log']
