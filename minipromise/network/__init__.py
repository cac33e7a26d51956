# -*- coding: utf-8 -*-
"""Network module

This module performs HTTP(S) requests and returns a Deferred for each of
them. Requests are executed in separate threads, using the ``requests``
library.

The Deferred of a request is resolved with 3 values:
- an error indicator: falsy on success, ``True`` for an HTTP error status
  (or no response at all), ``ENOXHR`` if the transport could not be created,
  or ``ETIMEOUT`` if the request has been aborted after the delay configured
  in ``RequestSettings.timeout``.
- the response body, as text. Empty in case of timeout.
- the transport object (see ``Transport``), for advanced inspection.

Examples:

    >>> with Client(RequestSettings(timeout=10)) as client:
    ...     df = client.get('https://httpbin.org/get', {'foo': 'bar'})
    ...     error, text, transport = df.wait()
    ...     print(error, transport.status)
    False 200

    Requests can be composed with the Deferred tools:

    >>> def create_item(error, text, transport):
    ...     return client.post('https://example.com/items', {'id': text},
    ...                        {'Content-Type': 'application/json'})
    >>> chain([lambda: client.get('https://example.com/next-id'),
    ...        create_item])
"""

from . import errors  # noqa
from .client import Client
from .encoding import FormData, encode
from .errors import ENOXHR, ETIMEOUT
from .settings import RequestSettings
from .transport import Transport

__all__ = ['Client', 'FormData', 'encode', 'ENOXHR', 'ETIMEOUT',
           'RequestSettings', 'Transport']
