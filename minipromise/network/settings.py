# -*- coding: utf-8 -*-

from ..common import config


class RequestSettings(object):
    """Settings applied to the requests of a ``Client``.

    Attributes:
        timeout (float): time in seconds after which a pending request is
            considered unresponsive and is aborted. Useful to deal with bad
            connectivity (e.g. on a mobile network). 0 disables the timeout.
            Aborted requests resolve their Deferred with the ETIMEOUT error
            code.
        max_workers (int): maximum number of requests sent at the same time.
    """

    DEFAULT_TIMEOUT = 0
    DEFAULT_MAX_WORKERS = 4

    def __init__(self, timeout=DEFAULT_TIMEOUT,
                 max_workers=DEFAULT_MAX_WORKERS):
        if timeout < 0:
            raise ValueError('timeout must be positive or 0, not %s'
                             % timeout)
        self.timeout = timeout
        self.max_workers = max_workers

    @classmethod
    def from_config(cls):
        """Create the settings from the config entries.

        Uses 'request_timeout' and 'max_workers'.
        """
        return cls(timeout=config.get('request_timeout'),
                   max_workers=config.get('max_workers'))

    def __repr__(self):
        return 'RequestSettings(timeout=%s, max_workers=%s)' % (
            self.timeout, self.max_workers)
