"""
One-shot blocking helpers. Every call builds its own Client and closes it
before returning, so calls never share connections or settings.

Optional arguments follow the order headers, options:

    get("http://api/items", {"page": 2}, ["Token: 123"], {"timeout": 5})
"""

from typing import Any, Mapping, Optional

import httpx

from .client import Client
from .options import resolve_timeout
from .builder import build_request, new_form_post_request, new_get_request, new_json_post_request


def _send(request: httpx.Request, options, transport) -> httpx.Response:
    with Client(resolve_timeout(options), transport=transport) as client:
        return client.do(request)


def get(url: str, params: Optional[Mapping[str, Any]] = None, headers=None,
        options: Optional[Mapping[str, Any]] = None, *, transport: httpx.BaseTransport = None) -> httpx.Response:
    return _send(new_get_request(url, params, headers), options, transport)


def post(url: str, params: Optional[Mapping[str, Any]] = None, headers=None,
         options: Optional[Mapping[str, Any]] = None, *, transport: httpx.BaseTransport = None) -> httpx.Response:
    return _send(new_form_post_request(url, params, headers), options, transport)


def post_json(url: str, params: Optional[Mapping[str, Any]] = None, headers=None,
              options: Optional[Mapping[str, Any]] = None, *, transport: httpx.BaseTransport = None) -> httpx.Response:
    return _send(new_json_post_request(url, params, headers), options, transport)


def request(method: str, url: str, params: Optional[Mapping[str, Any]] = None, headers=None,
            options: Optional[Mapping[str, Any]] = None, *, transport: httpx.BaseTransport = None) -> httpx.Response:
    """Send with the builder chosen by method.

    "POST" sends a form body, "POST/JSON" a JSON body (both case-insensitive).
    Every other method, unknown ones included, is sent as GET.
    """
    return _send(build_request(method, url, params, headers), options, transport)


def read_body(response: httpx.Response) -> bytes:
    """Read the whole body and close the response, even if reading fails."""
    try:
        return response.read()
    finally:
        if not response.is_closed:
            response.close()
