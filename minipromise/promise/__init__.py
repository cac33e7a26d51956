# -*- coding: utf-8 -*-

from .combinators import chain, join
from .decorators import wrap_deferred
from .deferred import Deferred, TimeoutError, resolved
from .outcome import Pending, Value
from .thread_pool import ThreadPoolExecutor
from .util import is_deferred

__all__ = ['Deferred', 'TimeoutError', 'resolved', 'join', 'chain',
           'Pending', 'Value', 'ThreadPoolExecutor', 'wrap_deferred',
           'is_deferred']
