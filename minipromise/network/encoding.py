# -*- coding: utf-8 -*-
"""Encoding of the request payloads.

The payload encoding depends of the content type declared in the request
headers. Three content types are supported:
- 'application/x-www-form-urlencoded' (the default)
- 'application/json'
- 'text/plain'

A ``FormData`` payload is already "encoded": it's sent as a multipart body,
whatever the declared content type is.
"""

from collections.abc import Mapping
import json
import re
from urllib.parse import quote

FORM_URLENCODED = 'application/x-www-form-urlencoded'
JSON = 'application/json'
TEXT_PLAIN = 'text/plain'

SUPPORTED_TYPES = (FORM_URLENCODED, JSON, TEXT_PLAIN)

# Characters left as is by the form encoding (like ``encodeURIComponent``).
_URI_COMPONENT_SAFE = "-_.!~*'()"


class FormData(object):
    """Multipart payload, passed as is to the transport.

    Attributes:
        fields (dict): form fields, name -> value.
        files (dict): files to upload, name -> file-like object, or tuple
            ``(filename, file-like[, content_type])``, as expected by
            the ``files`` argument of ``requests``.
    """

    def __init__(self, fields=None, files=None):
        self.fields = dict(fields or {})
        self.files = dict(files or {})

    def append(self, name, value):
        """Add a form field."""
        self.fields[name] = value

    def append_file(self, name, file_object, filename=None,
                    content_type=None):
        """Add a file field.

        Args:
            name (str): field name.
            file_object (File-like or bytes): file content.
            filename (str, optional): name of the file sent to the server.
            content_type (str, optional): content type of the file part.
        """
        if content_type:
            self.files[name] = (filename or name, file_object, content_type)
        else:
            self.files[name] = (filename or name, file_object)

    def __repr__(self):
        return 'FormData(fields=%s, files=%s)' % (list(self.fields),
                                                  list(self.files))


def _quote(value):
    return quote(str(value), safe=_URI_COMPONENT_SAFE)


def _pairs(data):
    # Sequences are keyed by index.
    if isinstance(data, Mapping):
        return list(data.items())
    return list(enumerate(data))


def encode(data, content_type=None):
    """Serialize a payload, according to the content type.

    Args:
        data: payload. Dicts, lists and tuples are serialized. A
            ``FormData`` is returned unchanged. Other values (str, bytes,
            ...) are returned as is, or as an empty string if they are falsy.
        content_type (str, optional): one of ``SUPPORTED_TYPES``. Default
            to form-urlencoded.
    Returns:
        str: the encoded payload, or the FormData.
    """
    if isinstance(data, FormData):
        return data
    if not isinstance(data, (Mapping, list, tuple)):
        return data or ''

    if content_type == JSON:
        return json.dumps(data)
    elif content_type == TEXT_PLAIN:
        return '\r\n'.join('%s=%s' % (name, value)
                           for name, value in _pairs(data))
    else:
        return '&'.join('%s=%s' % (_quote(name), _quote(value))
                        for name, value in _pairs(data))


def find_header(headers, name):
    """Find a header value, with a case-insensitive name.

    Returns:
        str: the value of the first matching header, or None.
    """
    for header, value in (headers or {}).items():
        if header.lower() == name.lower():
            return value
    return None


def match_content_type(content_type):
    """Find the supported type declared by a Content-Type header value.

    The comparison is case-insensitive and allows parameters, so
    'Application/JSON; charset=utf-8' matches 'application/json'.

    Returns:
        str: one of ``SUPPORTED_TYPES``, or None if the type is not
            supported.
    """
    for supported_type in SUPPORTED_TYPES:
        if re.search(re.escape(supported_type), content_type or '', re.I):
            return supported_type
    return None


def encode_query(data):
    """Form-encode a payload into an URL query string.

    The fields of a ``FormData`` are encoded, its files are ignored. Bytes
    are decoded as UTF-8, other values are converted to text.

    Returns:
        str: the query string, without the leading '?'.
    """
    if isinstance(data, FormData):
        data = data.fields
    elif isinstance(data, bytes):
        return data.decode('utf-8')
    return str(encode(data))


def add_query(url, query):
    """Append an encoded query string to an URL.

    Returns:
        str: the new URL. Unchanged if the query is empty.
    """
    if not query:
        return url
    separator = '&' if '?' in url else '?'
    return url + separator + query
