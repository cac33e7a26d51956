# -*- coding: utf-8 -*-

import pytest
from dummy_http_server import DummyHttpServer


@pytest.fixture
def http_server(request):
    """Local HTTP server, answering GET queries and echoing other requests.

    The server is started by entering it as a context manager, and is
    closed at the end of the test.

    Returns:
        DummyHttpServer: the server instance. Its ``base_uri`` attribute is
            the root URL of the server.
    """
    httpd = DummyHttpServer()
    request.addfinalizer(httpd.close)
    return httpd
