# -*- coding: utf-8 -*-

import logging
from threading import Condition

from .outcome import Pending, Value

_logger = logging.getLogger(__name__)


class TimeoutError(Exception):
    """A Deferred was not resolved within the time allowed."""
    pass


class Deferred(object):
    """It represents a result expected to be known in the future.

    A Deferred is a single-assignment container: it's created empty, then
    resolved with an ordered sequence of values (conventionally an error
    indicator first, followed by the payload). Continuations can be
    subscribed at any time:
    - before the resolution, they are stored and called by ``resolve()``, in
      the order they have been subscribed.
    - after the resolution, they are called immediately, inside the call to
      ``subscribe()``.

    There is no failure path: errors are values like any others, and are
    transmitted to the continuations through the same ``resolve()``.

    The state is protected by a lock, so a Deferred can be resolved from
    another thread. Continuations are always called outside of the lock.
    """

    PENDING = 'P'
    RESOLVED = 'R'

    def __init__(self, _name=None, _previous=None):
        """Constructor of the Deferred.

        Args:
            _name (str, optional): if set, name used when converted to text.
            _previous (Deferred, optional): Deferred this one is derived from.
                Only used when converted to text.
        """
        self._is_resolved = False
        self._result = ()
        self._condition = Condition()
        self._name = _name or '???'
        self._previous = _previous

        self._subscribers = []

    @property
    def is_resolved(self):
        """boolean: True as soon as ``resolve()`` has been called once."""
        with self._condition:
            return self._is_resolved

    @property
    def result(self):
        """tuple: values of the resolution. Empty until resolved."""
        with self._condition:
            return self._result

    def resolve(self, *values):
        """Set the result of the Deferred and call the subscribers.

        The subscribers are called synchronously, in the order they have been
        registered, with ``values`` as positional arguments. The subscriber
        list is then emptied.

        Calling ``resolve()`` again replaces the stored result. Only the
        subscribers registered since the last call are fired, and as any
        subscription made after the first resolution is fired immediately,
        there are usually none.

        Args:
            *values: result of the Deferred.
        Returns:
            Deferred: self
        """
        with self._condition:
            if self._is_resolved:
                _logger.debug('Deferred %r resolved again with %r',
                              self, values)
            self._result = values
            self._is_resolved = True
            subscribers, self._subscribers = self._subscribers, []
            self._condition.notify_all()

        for subscriber in subscribers:
            subscriber(*values)
        return self

    def subscribe(self, callback, context=None):
        """Register a continuation, called when the Deferred is resolved.

        If the Deferred is already resolved, the continuation is executed
        right away.

        The continuation defines the result of the returned Deferred. It can
        returns:
        - A value: the new Deferred will be resolved with this value (alone).
        - Another Deferred: the new Deferred will be resolved with the same
          values, as soon as the other one is resolved.
        - A ``Value`` or ``Pending`` outcome, used as is.

        If the continuation raises an exception, it's logged and the new
        Deferred is never resolved.

        Args:
            callback (callable): called with the result values spread as
                positional arguments.
            context (optional): if set, passed as first argument of
                ``callback``, before the result values. It allows to use an
                unbound method: ``d.subscribe(Foo.method, foo_instance)``.
        Returns:
            Deferred: new Deferred depending of self.
        """
        derived = Deferred(_name=getattr(callback, '__name__', '???'),
                           _previous=self)

        def continuation(*values):
            try:
                if context is None:
                    returned = callback(*values)
                else:
                    returned = callback(context, *values)
            except Exception:
                _logger.exception('Deferred continuation %s raised an '
                                  'exception!', derived)
                return
            _outcome_of(returned).settle(derived)

        self._add_subscriber(continuation)
        return derived

    then = subscribe

    def _add_subscriber(self, subscriber):
        """Register a raw subscriber, called with the result values.

        Unlike ``subscribe()``, no Deferred is derived and the value returned
        by the subscriber is ignored. If the Deferred is already resolved,
        the subscriber is called right away.
        """
        with self._condition:
            if not self._is_resolved:
                self._subscribers.append(subscriber)
                return
            values = self._result

        subscriber(*values)

    def wait(self, timeout=None):
        """Wait for the resolution, then returns the result.

        Args:
            timeout (float, optional): if set, maximum time to wait, in
                seconds. By default, it can wait indefinitely.
        Returns:
            tuple: values the Deferred has been resolved with.
        Raises:
            TimeoutError: if the Deferred is not resolved within the delay.
        """
        with self._condition:
            if not self._is_resolved:
                self._condition.wait(timeout)

            if not self._is_resolved:
                raise TimeoutError()
            return self._result

    def __repr__(self):
        return 'Deferred(%s)' % self._inner_print()

    def _inner_print(self):
        with self._condition:
            state = self.RESOLVED if self._is_resolved else self.PENDING

        if self._previous:
            return '%s -> %s %s' % (self._previous._inner_print(), self._name,
                                    state)
        return '%s %s' % (self._name, state)


def resolved(*values):
    """Create a Deferred already resolved with the selected values.

    Args:
        *values: result of the Deferred.
    Returns:
        Deferred: new Deferred, already resolved.
    """
    return Deferred(_name='RESOLVED').resolve(*values)


def _outcome_of(returned):
    """Classify the value returned by a continuation.

    Returns:
        Value or Pending
    """
    if isinstance(returned, (Value, Pending)):
        return returned
    if isinstance(returned, Deferred):
        return Pending(returned)
    return Value(returned)
