# -*- coding: utf-8 -*-
"""This module defines all errors which can occur in the network module.

A request never raises: its Deferred is resolved with an error indicator as
first value. The indicator is one of:
- a falsy value, if the request has succeeded.
- ``True``, if the server has responded with an HTTP error status, or if no
  response has been received at all.
- ``ENOXHR``, if the transport object could not be constructed.
- ``ETIMEOUT``, if the request has been aborted after the configured delay.

requests exceptions raised while sending a request can be converted to
minipromise.network errors using the ``handler`` decorator. They are kept on
the transport object, for inspection.
"""

import requests.exceptions

# Error codes
ENOXHR = 1
ETIMEOUT = 2


def is_error_status(status):
    """Tell if an HTTP status code must be reported as an error.

    Args:
        status (int): HTTP status code. 0 if there is no response.
    Returns:
        boolean: True if there is no status, or if the status is not a 2XX
            nor a 304 (Not Modified).
    """
    return (not status or
            (status < 200 or status >= 300) and status != 304)


class NetworkError(Exception):
    """Base class for minipromise.network errors.

    Attributes:
        message (str): Human readable message, describing the error.
        reason (Exception): internal exception which've produced this error.
            Can be None.
    """

    def __init__(self, reason=None, message=None):
        """
        Args:
            reason (Exception, optional): base error
            message (str, optional): User-friendly message.
        """
        self.reason = reason
        self.message = message or "A network error has occurred."
        Exception.__init__(self, self.message)

    def __repr__(self):
        return '%s("%s")' % (self.__class__.__name__, self.message)

    def __str__(self):
        return self.message


class ConnectionError(NetworkError):
    def __init__(self, error):
        NetworkError.__init__(self, error, "Unable to connect to the server.")


class TimeoutError(NetworkError):
    def __init__(self, error):
        NetworkError.__init__(self, error,
                              "The server did not respond on time.")


class ProxyError(NetworkError):
    def __init__(self, error, message=None):
        if not message:
            message = 'Proxy error'
        NetworkError.__init__(self, error, message)


def handler(func):
    """Decorator who handles errors of the requests.

    Converts requests.exceptions.* into minipromise.network.errors.
    """

    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except requests.exceptions.ProxyError as error:
            raise ProxyError(error)
        except requests.exceptions.ConnectionError as error:
            raise ConnectionError(error)
        except requests.exceptions.Timeout as error:
            raise TimeoutError(error)
        except requests.exceptions.RequestException as error:
            raise NetworkError(error)

    return wrapper
