# -*- coding: utf-8 -*-

from .deferred import Deferred


def is_deferred(value):
    """Check if an object is a Deferred, and so can be subscribed.

    The promise module uses this function to differentiate Deferred objects
    and direct return values, when using a callback who can returns both.

    Returns:
        boolean: True if the value is a Deferred instance. False if not.
    """
    return isinstance(value, Deferred)
