"""httputil - one-shot GET / form POST / JSON POST helpers on top of httpx."""

from .api import get, post, post_json, request, read_body
from .client import Client, AsyncClient, check_response
from .exceptions import (
    HTTPUtilError,
    RequestBuildError,
    EncodingError,
    ResponseError,
    TransportError,
)
from .headers import HeaderSpec, set_headers, string_list_to_map
from .options import resolve_timeout
from .query import build_query, append_query
from .builder import (
    ContentType,
    Method,
    new_get_request,
    new_form_post_request,
    new_json_post_request,
    build_request,
)

__version__ = "0.1.0"
