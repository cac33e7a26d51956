# -*- coding: utf-8 -*-

from http.server import HTTPServer, BaseHTTPRequestHandler
import json
import random
import threading
from urllib.parse import urlparse, parse_qs


class DefaultHandler(BaseHTTPRequestHandler):
    """Respond to GET with the ``code`` and ``response`` query parameters,
    and echo the other requests as a JSON object."""

    def do_GET(self):
        query = parse_qs(urlparse(self.path).query)
        response_code = int(query.get('code', [200])[0])
        response_content = query.get('response', ['{}'])[0]

        self.send_response(response_code)
        self.send_header('Content-Type', 'application/json')
        self.end_headers()
        if response_code != 304:
            self.wfile.write(response_content.encode('utf-8'))

    def _echo(self):
        content_length = int(self.headers.get('content-length') or 0)
        body = self.rfile.read(content_length).decode('utf-8')
        echo = json.dumps({
            'method': self.command,
            'path': self.path,
            'content_type': self.headers.get('content-type'),
            'headers': dict(self.headers.items()),
            'body': body
        }).encode('utf-8')

        self.send_response(200)
        self.send_header('Content-Type', 'application/json')
        self.send_header('Content-Length', str(len(echo)))
        self.end_headers()
        self.wfile.write(echo)

    do_POST = _echo
    do_PUT = _echo
    do_PATCH = _echo
    do_DELETE = _echo

    def log_message(self, format, *args):
        pass


class DummyHttpServer(object):
    """HTTP server ready to use, for testing purpose.

    At creation, the server starts listening on a random port. When the
    server is no more used, it must be closed by calling close().

    By default, GET requests return a 200 response code, with an empty object
    "{}" in json format. The desired response content and/or the desired
    response code can be asked in the query part:

        url = %s?code=%s&response=%s % (server.base_uri, 200, '{"foo":"bar"}')

    Others requests (POST, PUT, PATCH, DELETE) return a JSON description of
    the request received: method, path, content_type, headers and body.

    The easiest way to use this server is too (optionally) prepare all custom
    handlers, them use the instance as a context manager. The context manager
    will handle all requests, until the context is closed:

        http_server = DummyHttpServer()

        # Optionally, set custom handler:
        http_server.handler.do_GET = my_handler;
        with http_server:
            # make requests to http_server.base_uri
        http_server.close()

    Attributes:
        handler (class BaseHTTPRequestHandler): Handler class used by the
            server.
        base_uri (str): Base URI (with leading slash).
    """

    def __init__(self):

        self._server = None
        self._thread = None

        # A new class is defined for each call, so the test functions can set
        # new methods (like do_GET) without interfering with others instances.
        class Handler(DefaultHandler):
            pass

        # Try 5 times on different ports to find one who is unused.
        attempts = 0
        while self._server is None:
            try:
                port = random.randint(1025, 65500)
                self._server = HTTPServer(('localhost', port), Handler)
            except (IOError, OSError):
                attempts += 1
                if attempts > 5:
                    raise

        self._server.timeout = 1
        self.handler = Handler
        self.base_uri = 'http://localhost:%s/' % self._server.server_port

    def close(self):
        self._server.server_close()

    def __enter__(self):
        self._thread = threading.Thread(target=self._server.serve_forever)
        self._thread.daemon = True
        self._thread.start()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self._server.shutdown()
        self._thread.join()
        self._thread = None
