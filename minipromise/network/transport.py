# -*- coding: utf-8 -*-

import logging

import requests
from requests import __version__ as requests_version

from .. import __version__ as minipromise_version
from . import errors
from .encoding import FormData

_logger = logging.getLogger(__name__)

# Maximum number of automatic retry in case of connexion error
# HTTP errors (4XX and 5XX) are not retried.
MAX_RETRY = 3


def _prepare_session():
    """Prepare a session to send an HTTP(S) request, with auto retry.

    Returns:
        requests.Session: new HTTP(s) session
    """
    session = requests.Session()
    adapter = requests.adapters.HTTPAdapter(max_retries=MAX_RETRY)
    session.mount('http://', adapter)
    session.mount('https://', adapter)
    session.headers.update({
        'User-Agent': 'minipromise/%s python-requests/%s' % (
            minipromise_version, requests_version)
    })
    return session


class Transport(object):
    """Underlying object of one HTTP exchange.

    It's the opaque handle given as third value of the request's Deferred.
    A transport is used for one request only.

    Attributes:
        method (str): HTTP verb. None until sent.
        url (str): HTTP URL, query included. None until sent.
        headers (dict): request headers.
        response (requests.Response): None until a response is received.
        error (NetworkError): error raised while sending the request, if any.
        aborted (boolean): True if ``abort()`` has been called.
    """

    def __init__(self, session=None):
        """
        Args:
            session (requests.Session, optional): session used to send the
                request. By default, a new session is created. It is then
                closed once the response is received.
        """
        self._owns_session = session is None
        self.session = session or _prepare_session()
        self.method = None
        self.url = None
        self.headers = {}
        self.response = None
        self.error = None
        self.aborted = False

    @property
    def status(self):
        """int: HTTP status code of the response. 0 if there is none."""
        if self.response is None:
            return 0
        return self.response.status_code

    @property
    def text(self):
        """str: body of the response. Empty if there is none."""
        if self.response is None:
            return ''
        return self.response.text

    def send(self, method, url, headers=None, payload=None, timeout=None):
        """Send the request, then wait for the response.

        This method blocks until the response is received. Network errors are
        not raised: they are kept in the ``error`` attribute.

        Args:
            method (str): HTTP verb
            url (str): HTTP URL
            headers (dict, optional): request headers.
            payload (str, bytes or FormData, optional): request body.
            timeout (float, optional): socket timeout, in seconds.
        Returns:
            Transport: self
        """
        self.method = method
        self.url = url
        self.headers = dict(headers or {})

        _logger.log(5, 'start request %s', self)
        try:
            self.response = self._send(payload, timeout)
        except errors.NetworkError as error:
            _logger.debug('request %s failed: %r', self, error)
            self.error = error
        else:
            _logger.log(5, 'request %s -> %s', self, self.status)
        finally:
            if self._owns_session:
                self.session.close()
        return self

    @errors.handler
    def _send(self, payload, timeout):
        params = {}
        if isinstance(payload, FormData):
            params['data'] = payload.fields
            params['files'] = payload.files
        elif isinstance(payload, str):
            params['data'] = payload.encode('utf-8')
        elif payload is not None:
            params['data'] = payload

        return self.session.request(method=self.method, url=self.url,
                                    headers=self.headers, timeout=timeout,
                                    **params)

    def abort(self):
        """Give up the request.

        The session is closed, so its connections are released. A response
        received after the call is ignored by the client.
        """
        _logger.debug('abort request %s', self)
        self.aborted = True
        self.session.close()

    def __str__(self):
        return '%s %s' % (self.method, self.url)
