# -*- coding: utf-8 -*-

import logging
from threading import Lock, Timer

from ..promise import Deferred, ThreadPoolExecutor
from .encoding import (FORM_URLENCODED, FormData, add_query, encode,
                       encode_query, find_header, match_content_type)
from .errors import ENOXHR, ETIMEOUT, is_error_status
from .settings import RequestSettings
from .transport import Transport

_logger = logging.getLogger(__name__)

# Extra delay (in seconds) given to the socket timeout, compared to the
# request timeout. The socket timeout only frees the worker thread of an
# aborted request: it must not fire before the request timeout.
_SOCKET_TIMEOUT_MARGIN = 1


class Client(object):
    """HTTP client producing Deferreds.

    It's a "facade", sending each request in a worker thread and resolving
    the request's Deferred with 3 values: ``(error, text, transport)``.
    See ``minipromise.network.errors`` for the possible error values.

    The client must be started before use, either by calling ``start()``,
    or by using it as a context manager.
    """

    def __init__(self, settings=None, transport_factory=Transport):
        """
        Args:
            settings (RequestSettings, optional): settings applied to all
                requests. They are read at the start of each request, so
                they can be modified at any time. Default to
                ``RequestSettings()`` (no timeout).
            transport_factory (callable, optional): called without argument
                to create the transport of each request.
        """
        self.settings = settings or RequestSettings()
        self._transport_factory = transport_factory
        self._executor = None

    def start(self):
        self._executor = ThreadPoolExecutor(self.settings.max_workers)

    def stop(self):
        if self._executor is None:
            return
        self._executor.shutdown()
        self._executor = None

    def __enter__(self):
        self.start()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.stop()

    def request(self, method, url, data=None, headers=None):
        """Send an HTTP request.

        The payload is encoded according to the 'Content-Type' header
        (form-urlencoded by default). GET requests send their payload in the
        query string, form-urlencoded. A FormData payload is sent as a
        multipart body, and the 'Content-Type' header is then ignored.

        Args:
            method (str): HTTP verb
            url (str): HTTP URL
            data (optional): payload. See ``encoding.encode()``.
            headers (dict, optional): request headers.
        Returns:
            Deferred<error, str, Transport>: resolved when the response is
                received, when the request has failed or when it has timed
                out. If the transport can't be created, the Deferred is
                already resolved with ``(ENOXHR, '', None)``.
        Raises:
            RuntimeError: if the client is not started.
        """
        if self._executor is None:
            raise RuntimeError('The client must be started before sending '
                               'requests.')

        df = Deferred(_name='%s %s' % (method, url))

        try:
            transport = self._transport_factory()
        except Exception:
            _logger.warning('Unable to create the transport of %s %s',
                            method, url, exc_info=True)
            return df.resolve(ENOXHR, '', None)

        headers = headers or {}
        content_type = find_header(headers, 'content-type') or FORM_URLENCODED
        request_headers = {}
        payload = None

        if method.upper() == 'GET':
            url = add_query(url, encode_query(data) if data else '')
            request_headers['Content-Type'] = FORM_URLENCODED
        elif isinstance(data, FormData):
            # The multipart content type (and its boundary) is set by the
            # transport.
            payload = data
        else:
            request_headers['Content-Type'] = content_type
            payload = encode(data, match_content_type(content_type))

        for (name, value) in headers.items():
            if name.lower() != 'content-type':
                request_headers[name] = value

        # Only the first of the response and the timeout resolves df.
        lock = Lock()
        is_settled = [False]

        def settle_once():
            with lock:
                if is_settled[0]:
                    return False
                is_settled[0] = True
                return True

        timeout = self.settings.timeout
        timer = None
        if timeout:
            def on_timeout():
                if not settle_once():
                    return
                _logger.info('Request %s %s timed out after %ss', method,
                             url, timeout)
                transport.abort()
                df.resolve(ETIMEOUT, '', transport)

            timer = Timer(timeout, on_timeout)
            timer.daemon = True

        def on_sent(error, _result):
            if timer:
                timer.cancel()
            if error is not None:
                _logger.error('Transport of %s %s has raised an exception',
                              method, url, exc_info=error)
            if not settle_once():
                _logger.log(5, 'Response of %s ignored: already settled', df)
                return
            df.resolve(is_error_status(transport.status), transport.text,
                       transport)

        socket_timeout = timeout + _SOCKET_TIMEOUT_MARGIN if timeout else None
        _logger.log(5, 'Add request %s %s', method, url)
        if timer:
            timer.start()
        self._executor.submit(transport.send, method, url, request_headers,
                              payload, socket_timeout).subscribe(on_sent)
        return df

    def get(self, url, data=None, headers=None):
        return self.request('GET', url, data, headers)

    def post(self, url, data=None, headers=None):
        return self.request('POST', url, data, headers)

    def put(self, url, data=None, headers=None):
        return self.request('PUT', url, data, headers)

    def patch(self, url, data=None, headers=None):
        return self.request('PATCH', url, data, headers)

    def delete(self, url, data=None, headers=None):
        return self.request('DELETE', url, data, headers)
