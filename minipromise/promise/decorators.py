# -*- coding: utf-8 -*-

import functools
import logging

from .deferred import resolved
from .util import is_deferred

_logger = logging.getLogger(__name__)


def wrap_deferred(f):
    """Decorator who converts the result in a Deferred object.

    If the function decorated returns a Deferred, it's transmitted as is.
    Else, a new Deferred is created, following the error-first convention:
    resolved with ``(None, value)`` when the function returns ``value``, or
    with ``(error, None)`` when it raises ``error``.

    It allows to use plain functions as steps of ``chain()``.
    """
    @functools.wraps(f)
    def wrapper(*args, **kwargs):
        try:
            result = f(*args, **kwargs)
        except Exception as error:
            _logger.debug('%s raised %r', f.__name__, error)
            return resolved(error, None)

        if is_deferred(result):
            return result
        return resolved(None, result)

    return wrapper
