# -*- coding: utf-8 -*-

import functools
import logging
from threading import Lock

from .deferred import Deferred, resolved
from .util import is_deferred

_logger = logging.getLogger(__name__)


def join(deferreds):
    """Create a Deferred who waits a list of Deferreds to be all resolved.

    The resulting Deferred resolves when all the Deferreds of the list are
    resolved, with a single value: a list containing the result tuple of each
    Deferred, keeping the order of the Deferred list (and not the order of
    resolution).

    There is no failure path: error values are not inspected, and the
    resulting Deferred always waits for all the Deferreds.
    If the same Deferred is present several times in the list, each
    occurrence is counted.

    Args:
        deferreds (list of Deferred)
    Returns:
        Deferred<list of tuple>: resolved when all Deferreds are resolved.
    """
    deferreds = list(deferreds)
    if not deferreds:
        return resolved([])

    lock = Lock()
    results = [None] * len(deferreds)
    remaining = [len(deferreds)]
    joined = Deferred(_name='JOIN')

    def notify(index, *values):
        with lock:
            results[index] = values
            remaining[0] -= 1
            if remaining[0] != 0:
                return
        joined.resolve(results)

    for index, deferred in enumerate(deferreds):
        deferred._add_subscriber(functools.partial(notify, index))

    return joined


def chain(callbacks, initial_args=None):
    """Call Deferred-returning functions one after the other.

    The first function is called with ``initial_args``. Each next function is
    called when the Deferred returned by the previous one is resolved, with
    its whole result as arguments. The returned Deferred resolves with the
    result of the last one.

    The error convention (first result value) is not inspected: the next
    function is always called. Stopping on error is up to the functions.

    Functions whose Deferred is already resolved are consumed in a loop, so
    a long chain of synchronous steps doesn't grow the stack.

    Args:
        callbacks (list of callable): each callable must return a Deferred.
        initial_args (list, optional): arguments of the first callable.
    Returns:
        Deferred: resolved with the result of the last callable. If
            ``callbacks`` is empty, it's resolved with ``initial_args``.
    Raises:
        TypeError: if a callable doesn't return a Deferred. When the callable
            is called asynchronously, the error is logged by the Deferred
            which has triggered it.
    """
    steps = iter(list(callbacks))
    chained = Deferred(_name='CHAIN')

    def run(*values):
        for step in steps:
            deferred = step(*values)
            if not is_deferred(deferred):
                raise TypeError('chain(): %s has returned %r instead of a '
                                'Deferred' % (getattr(step, '__name__', step),
                                              deferred))
            if deferred.is_resolved:
                values = deferred.result
                continue
            _logger.log(5, 'chain(): wait for %r', deferred)
            deferred.subscribe(run)
            return
        chained.resolve(*values)

    run(*(initial_args or ()))
    return chained
