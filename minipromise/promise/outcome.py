# -*- coding: utf-8 -*-
"""Outcome of a continuation registered on a Deferred.

A continuation can either produce a value right away, or hand over another
Deferred whose result will be known later. Both cases are represented
explicitly, and each one knows how to settle the Deferred derived from the
continuation:

    Value(v)    -> the derived Deferred resolves with the single value ``v``.
    Pending(d)  -> the derived Deferred resolves with whatever ``d`` resolves
                   with (one level of nesting is flattened).

A continuation may return a ``Value`` or a ``Pending`` itself; other return
values are classified by ``Deferred`` when the continuation returns.
"""


class Value(object):
    """Outcome already known: a single plain value."""

    __slots__ = ('value',)

    def __init__(self, value):
        self.value = value

    def settle(self, target):
        """Resolve the target Deferred with the wrapped value.

        Args:
            target (Deferred): Deferred derived from the continuation.
        """
        target.resolve(self.value)

    def __eq__(self, other):
        return isinstance(other, Value) and other.value == self.value

    def __ne__(self, other):
        return not self == other

    def __repr__(self):
        return 'Value(%r)' % (self.value,)


class Pending(object):
    """Outcome not yet known: it will be the result of another Deferred."""

    __slots__ = ('deferred',)

    def __init__(self, deferred):
        self.deferred = deferred

    def settle(self, target):
        """Forward the future result of the wrapped Deferred to the target.

        Args:
            target (Deferred): Deferred derived from the continuation.
        """
        self.deferred._add_subscriber(target.resolve)

    def __eq__(self, other):
        return isinstance(other, Pending) and other.deferred is self.deferred

    def __ne__(self, other):
        return not self == other

    def __repr__(self):
        return 'Pending(%r)' % (self.deferred,)
