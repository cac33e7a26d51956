# -*- coding: utf-8 -*-

from concurrent.futures import ThreadPoolExecutor as Executor

from .deferred import Deferred


class ThreadPoolExecutor(object):
    """Execute callables asynchronously on demand, in another threads."""

    def __init__(self, max_workers):
        """Initialize the thread pool

        Args:
            max_workers: The maximum number of threads that can be used to
                execute the given calls.
        """
        self._executor = Executor(max_workers)

    def submit(self, callback, *args, **kwargs):
        """Schedule the callable to be executed and return a Deferred.

        Args:
            callback (callable): callback who will run in another thread.
            *args: argument passed to callback.
            **kwargs: keywords arguments passed to callback.
        Returns:
            Deferred: Deferred who resolves after the callback has been
                executed, from the worker thread. It's resolved with
                ``(None, value)``, ``value`` being returned by the callback.
                If the callback raise an exception, it's resolved with
                ``(exception, None)``.
        """
        df = Deferred(_name=getattr(callback, '__name__', None))

        def on_future_done(f):
            try:
                value = f.result()
            except BaseException as error:
                df.resolve(error, None)
            else:
                df.resolve(None, value)

        f = self._executor.submit(callback, *args, **kwargs)
        f.add_done_callback(on_future_done)

        return df

    def shutdown(self, wait=True):
        """Free the resources once the pending callables are executed.

        Args:
            wait (boolean): if True, blocks until all callables are done.
        """
        self._executor.shutdown(wait)
