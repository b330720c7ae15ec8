"""
Builds httpx.Request objects for GET, form POST and JSON POST.
"""

import json
from enum import Enum
from typing import Any, Mapping, Optional
from urllib.parse import urlsplit

import httpx

from .config import config
from .exceptions import EncodingError, RequestBuildError
from .headers import set_headers
from .log import get_logger
from .query import append_query, build_query

logger = get_logger(__name__)

# request extension holding the host[:port] exactly as the caller wrote it
HOST_EXTENSION = "httputil.host"


class ContentType(str, Enum):
    JSON = "application/json"
    FORM = "application/x-www-form-urlencoded"

    def __str__(self):
        return self.value


class Method(str, Enum):
    """Methods understood by build_request. Anything else means GET."""
    GET = "GET"
    POST = "POST"
    POST_JSON = "POST/JSON"

    @classmethod
    def resolve(cls, method: str) -> "Method":
        # unrecognized methods fall back to GET
        try:
            return cls(method.upper())
        except ValueError:
            return cls.GET


def _parse_url(url: str) -> httpx.URL:
    try:
        parsed = httpx.URL(url)
    except (httpx.InvalidURL, TypeError) as e:
        raise RequestBuildError(f"Invalid URL {url!r}: {e}", url=url) from e

    if parsed.scheme not in ("http", "https"):
        raise RequestBuildError(f"Invalid scheme: {parsed.scheme!r}", url=url)
    if not parsed.host:
        raise RequestBuildError(f"Missing host in URL {url!r}", url=url)
    return parsed


def _new_request(method: str, url: str, content: Optional[bytes] = None,
                 content_type: Optional[ContentType] = None, headers=None) -> httpx.Request:
    parsed = _parse_url(url)

    default_headers = {}
    user_agent = config.get('http', 'user_agent')
    if user_agent:
        default_headers['User-Agent'] = str(user_agent)
    if content_type is not None:
        default_headers['Content-Type'] = content_type.value

    request = httpx.Request(method, parsed, content=content, headers=default_headers)
    # httpx drops default ports from the URL, error messages use the original form
    request.extensions[HOST_EXTENSION] = urlsplit(url).netloc.rpartition("@")[2]
    # caller headers go last so they can override the defaults above
    set_headers(request, headers)

    logger.debug("http_request_built", method=method, url=str(request.url))
    return request


def new_get_request(url: str, params: Optional[Mapping[str, Any]] = None, headers=None) -> httpx.Request:
    """
    GET request
    :param url: request URL, may already carry a query string
    :param params: parameter map appended to the query string
    :param headers: optional, {"Token": "123"} or ["Token: 123"]
    """
    if params is not None:
        url = append_query(url, build_query(params))
    return _new_request("GET", url, headers=headers)


def new_form_post_request(url: str, params: Optional[Mapping[str, Any]] = None, headers=None) -> httpx.Request:
    """Form POST request; the body is the url-encoded parameter map."""
    body = build_query(params) if params is not None else ""
    return _new_request("POST", url, content=body.encode("utf-8"),
                        content_type=ContentType.FORM, headers=headers)


def new_json_post_request(url: str, params: Optional[Mapping[str, Any]] = None, headers=None) -> httpx.Request:
    """JSON POST request; the body is the compact JSON encoding of params."""
    body = ""
    if params is not None:
        try:
            body = json.dumps(params, separators=(",", ":"), ensure_ascii=False, allow_nan=False)
        except (TypeError, ValueError) as e:
            raise EncodingError(f"Cannot encode params as JSON: {e}") from e
    return _new_request("POST", url, content=body.encode("utf-8"),
                        content_type=ContentType.JSON, headers=headers)


def build_request(method: str, url: str, params: Optional[Mapping[str, Any]] = None, headers=None) -> httpx.Request:
    """Pick the builder for method: POST, POST/JSON, anything else is GET."""
    resolved = Method.resolve(method)
    if resolved is Method.POST:
        return new_form_post_request(url, params, headers)
    if resolved is Method.POST_JSON:
        return new_json_post_request(url, params, headers)
    return new_get_request(url, params, headers)
