"""
Asyncio counterparts of httputil.api. Cancelling the awaiting task cancels
the request; the per-call timeout still applies.
"""

from typing import Any, Mapping, Optional

import httpx

from .client import AsyncClient
from .options import resolve_timeout
from .builder import build_request, new_form_post_request, new_get_request, new_json_post_request


async def _send(request: httpx.Request, options, transport) -> httpx.Response:
    async with AsyncClient(resolve_timeout(options), transport=transport) as client:
        return await client.do(request)


async def get(url: str, params: Optional[Mapping[str, Any]] = None, headers=None,
              options: Optional[Mapping[str, Any]] = None, *,
              transport: httpx.AsyncBaseTransport = None) -> httpx.Response:
    return await _send(new_get_request(url, params, headers), options, transport)


async def post(url: str, params: Optional[Mapping[str, Any]] = None, headers=None,
               options: Optional[Mapping[str, Any]] = None, *,
               transport: httpx.AsyncBaseTransport = None) -> httpx.Response:
    return await _send(new_form_post_request(url, params, headers), options, transport)


async def post_json(url: str, params: Optional[Mapping[str, Any]] = None, headers=None,
                    options: Optional[Mapping[str, Any]] = None, *,
                    transport: httpx.AsyncBaseTransport = None) -> httpx.Response:
    return await _send(new_json_post_request(url, params, headers), options, transport)


async def request(method: str, url: str, params: Optional[Mapping[str, Any]] = None, headers=None,
                  options: Optional[Mapping[str, Any]] = None, *,
                  transport: httpx.AsyncBaseTransport = None) -> httpx.Response:
    """See httputil.api.request; unknown methods are sent as GET."""
    return await _send(build_request(method, url, params, headers), options, transport)


async def read_body(response: httpx.Response) -> bytes:
    try:
        return await response.aread()
    finally:
        if not response.is_closed:
            await response.aclose()
