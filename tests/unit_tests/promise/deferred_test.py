# -*- coding: utf-8 -*-

import logging
import threading
from threading import Timer

import pytest

from minipromise.promise import (Deferred, Pending, TimeoutError, Value,
                                 is_deferred, resolved)


def late(delay, value):
    """Deferred resolved with (None, value) after ``delay`` seconds."""
    df = Deferred()
    Timer(delay, df.resolve, args=[None, value]).start()
    return df


@pytest.fixture
def thread_errors(monkeypatch):
    """Exceptions escaped from the threads started during the test."""
    errors = []
    monkeypatch.setattr(threading, 'excepthook',
                        lambda args: errors.append(args.exc_value))
    return errors


class TestDeferred(object):

    def test_new_deferred_is_pending(self):
        df = Deferred()
        assert not df.is_resolved
        assert df.result == ()

    def test_resolve_returns_self(self):
        df = Deferred()
        assert df.resolve(None, 3) is df
        assert df.is_resolved
        assert df.result == (None, 3)

    def test_subscribe_after_resolution(self):
        """The callback is called immediately, during subscribe()."""
        calls = []
        df = resolved(None, 123)
        df.subscribe(lambda error, result: calls.append((error, result)))
        assert calls == [(None, 123)]

    def test_subscribe_before_resolution(self):
        calls = []
        df = Deferred()
        df.subscribe(lambda *values: calls.append(values))
        assert calls == []

        df.resolve(None, 'foo')
        assert calls == [(None, 'foo')]

    def test_subscribers_are_called_in_order(self):
        calls = []
        df = Deferred()
        for i in range(10):
            df.subscribe(lambda _, i=i: calls.append(i))
        df.resolve(None)
        assert calls == list(range(10))

    def test_multiple_results(self):
        """Result values are spread as arguments, whenever the subscription
        has been made."""
        calls = []
        df = Deferred()
        df.subscribe(lambda res, a, b, c: calls.append(a))
        df.subscribe(lambda res, a, b, c: calls.append(b))
        df.resolve(None, 1, 2, 3)
        df.subscribe(lambda res, a, b, c: calls.append(c))
        assert calls == [1, 2, 3]

    def test_subscribe_always_returns_deferred(self):
        p1 = resolved(None, 123).subscribe(lambda error, result: None)
        assert isinstance(p1, Deferred)
        p2 = Deferred().subscribe(lambda: None)
        assert isinstance(p2, Deferred)
        assert not p2.is_resolved

    def test_then_is_subscribe(self):
        df = resolved(4)
        assert df.then(lambda x: x * 2).result == (8,)

    def test_subscribe_with_context(self):
        class Counter(object):
            def __init__(self):
                self.total = 0

            def add(self, value):
                self.total += value
                return self.total

        counter = Counter()
        df = Deferred()
        p = df.subscribe(Counter.add, counter)
        df.resolve(5)
        assert counter.total == 5
        assert p.result == (5,)

    def test_resolve_twice(self):
        """A new resolution replaces the result, without calling the
        subscribers already fired."""
        calls = []
        df = Deferred()
        df.subscribe(lambda value: calls.append(value))
        df.resolve('first')
        df.resolve('second')

        assert calls == ['first']
        assert df.result == ('second',)

    def test_subscribe_during_firing(self):
        """A subscription made by a subscriber is fired immediately, inside
        the nested call."""
        calls = []
        df = Deferred()

        def first(value):
            calls.append('first start')
            df.subscribe(lambda v: calls.append('nested %s' % v))
            calls.append('first end')

        df.subscribe(first)
        df.subscribe(lambda v: calls.append('second'))
        df.resolve('X')

        assert calls == ['first start', 'nested X', 'first end', 'second']

    def test_callback_raising_error(self, caplog):
        """The error is logged, and others subscribers are still called."""
        class Err(Exception):
            pass

        def failing(value):
            raise Err()

        calls = []
        df = Deferred()
        p = df.subscribe(failing)
        df.subscribe(lambda value: calls.append(value))

        with caplog.at_level(logging.ERROR):
            df.resolve(42)

        assert calls == [42]
        assert not p.is_resolved
        assert any(r.exc_info and r.exc_info[0] is Err
                   for r in caplog.records)

    def test_wait_resolved(self):
        assert resolved(None, 'value').wait(0.001) == (None, 'value')

    def test_wait_timeout(self):
        with pytest.raises(TimeoutError):
            Deferred().wait(0.001)

    def test_wait_resolution_from_another_thread(self):
        df = late(0.01, 'OK')
        assert df.wait(1) == (None, 'OK')

    def test_repr(self):
        df = Deferred(_name='root')
        p = df.subscribe(lambda: None)
        assert repr(df) == 'Deferred(root P)'
        assert repr(p) == 'Deferred(root P -> <lambda> P)'
        df.resolve()
        assert repr(p) == 'Deferred(root R -> <lambda> R)'


class TestChaining(object):

    def test_then_then_sync(self):
        """Returned values are passed through the chain."""
        queue = []
        p1 = resolved(None, 123)
        p2 = p1.subscribe(
            lambda error, result: queue.append(1) or 'foo'
        ).subscribe(
            lambda arg: queue.append(arg)
        )
        assert isinstance(p2, Deferred)
        assert queue == [1, 'foo']

    def test_plain_value_is_wrapped(self):
        df = Deferred()
        p = df.subscribe(lambda x: x * 2)
        df.resolve(21)
        assert p.result == (42,)

    def test_tuple_value_is_a_single_value(self):
        p = resolved(1).subscribe(lambda x: (x, x))
        assert p.result == ((1, 1),)

    def test_callback_returning_deferred(self):
        """The returned Deferred is flattened."""
        inner = Deferred()
        df = Deferred()
        p = df.subscribe(lambda x: inner)
        df.resolve(1)
        assert not p.is_resolved

        inner.resolve(None, 'inner', 'values')
        assert p.result == (None, 'inner', 'values')

    def test_flattening_keeps_inner_deferred_intact(self):
        """The inner Deferred resolves normally, and fires its other
        subscribers."""
        calls = []
        inner = Deferred()
        p = resolved(1).subscribe(lambda x: inner)
        inner.subscribe(lambda *values: calls.append('before'))

        assert inner.resolve(None, 'x') is inner
        inner.subscribe(lambda *values: calls.append('after'))

        assert p.result == (None, 'x')
        assert inner.result == (None, 'x')
        assert calls == ['before', 'after']

    def test_callback_returning_resolved_deferred(self):
        p = resolved(1).subscribe(lambda x: resolved(None, x + 1))
        assert p.result == (None, 2)
        assert repr(p) == 'Deferred(RESOLVED R -> <lambda> R)'

    def test_flattening_async(self, thread_errors):
        df = resolved().subscribe(lambda: late(0.01, 'OK'))
        assert df.wait(1) == (None, 'OK')
        assert thread_errors == []

    def test_chaining_law(self):
        """d.subscribe(f).subscribe(g) is g(f(x))."""
        def f(x):
            return x + 1

        def g(x):
            return x * 10

        df = Deferred()
        p = df.subscribe(f).subscribe(g)
        df.resolve(4)
        assert p.result == (g(f(4)),)

    def test_chaining_law_with_deferred(self):
        results = []

        def f(x):
            return resolved(None, x + 1, 'meta')

        df = Deferred()
        df.subscribe(f).subscribe(lambda *values: results.append(values))
        df.resolve(4)
        assert results == [(None, 5, 'meta')]

    def test_then_then_async(self, thread_errors):
        check = []
        df = Deferred()
        p = df.subscribe(
            lambda: late(0.01, 100)
        ).subscribe(
            lambda error, n: late(0.01, n + 200)
        ).subscribe(
            lambda error, n: late(0.01, n + 300)
        ).subscribe(
            lambda error, n: check.append(n)
        )
        df.resolve()
        p.wait(1)
        assert check == [600]
        assert thread_errors == []

    def test_explicit_value_outcome(self):
        inner = Deferred()
        p = resolved().subscribe(lambda: Value(inner))
        assert p.result == (inner,)

    def test_explicit_pending_outcome(self):
        inner = Deferred()
        p = resolved().subscribe(lambda: Pending(inner))
        inner.resolve('x')
        assert p.result == ('x',)


class TestOutcome(object):

    def test_value_settle(self):
        target = Deferred()
        Value(3).settle(target)
        assert target.result == (3,)

    def test_pending_settle(self):
        source = Deferred()
        target = Deferred()
        Pending(source).settle(target)
        assert not target.is_resolved
        source.resolve(1, 2)
        assert target.result == (1, 2)

    def test_equality(self):
        df = Deferred()
        assert Value(1) == Value(1)
        assert Value(1) != Value(2)
        assert Pending(df) == Pending(df)
        assert Pending(df) != Pending(Deferred())
        assert Value(df) != Pending(df)


class TestIsDeferred(object):

    def test_is_deferred(self):
        assert is_deferred(Deferred())
        assert is_deferred(resolved(1))

    @pytest.mark.parametrize('value', [None, 3, 'text', Value(1), object()])
    def test_is_not_deferred(self, value):
        assert not is_deferred(value)
