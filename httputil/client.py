"""
Dispatch clients: send a built request with a fixed timeout and turn every
outcome other than HTTP 200 into a ResponseError.

Only 200 counts as success. 201, 204 and the other 2xx codes raise too.
"""

import time
from typing import Optional

import httpx

from .builder import HOST_EXTENSION
from .exceptions import ResponseError, TransportError
from .log import get_logger

logger = get_logger(__name__)

GATEWAY_TIMEOUT = 504


def _host(request: httpx.Request) -> str:
    host = request.extensions.get(HOST_EXTENSION)
    if host:
        return host
    return request.url.netloc.decode("ascii")


def check_response(request: httpx.Request, response: Optional[httpx.Response] = None,
                   error: Optional[Exception] = None) -> httpx.Response:
    """Return response when it is a 200, raise ResponseError otherwise.

    A missing response (error set) is classified as 504 Gateway Timeout.
    """
    if error is not None:
        status_code = GATEWAY_TIMEOUT
        message = str(error) or type(error).__name__
    else:
        status_code = response.status_code
        message = ""

    if status_code == httpx.codes.OK:
        return response

    exc_class = TransportError if error is not None else ResponseError
    raise exc_class(
        request.method,
        _host(request),
        request.url.path,
        status_code,
        message,
        response=response,
    )


class _BaseClient:
    def __init__(self, timeout: float):
        self.timeout = timeout

    def _client_kwargs(self, transport) -> dict:
        kwargs = {
            'timeout': httpx.Timeout(self.timeout),
            'follow_redirects': True,
        }
        if transport is not None:
            kwargs['transport'] = transport
        return kwargs

    def _bind(self, request: httpx.Request) -> httpx.Request:
        # requests built outside httpx.Client carry no timeout of their own
        request.extensions["timeout"] = httpx.Timeout(self.timeout).as_dict()
        return request

    def _finish(self, request: httpx.Request, start_time: float,
                response: Optional[httpx.Response] = None,
                error: Optional[Exception] = None) -> httpx.Response:
        elapsed = time.time() - start_time
        if error is not None:
            logger.debug("http_request_failed", method=request.method, url=str(request.url),
                         error=str(error), elapsed=elapsed)
        else:
            logger.debug("http_request_dispatched", method=request.method, url=str(request.url),
                         status_code=response.status_code, elapsed=elapsed)
        try:
            return check_response(request, response, error)
        except TransportError as e:
            raise e from error


class Client(_BaseClient):
    """Blocking dispatch client with a timeout fixed at construction."""

    def __init__(self, timeout: float, transport: httpx.BaseTransport = None):
        super().__init__(timeout)
        self._client = httpx.Client(**self._client_kwargs(transport))

    def do(self, request: httpx.Request) -> httpx.Response:
        """Send request, raising ResponseError for anything but HTTP 200."""
        start_time = time.time()
        try:
            response = self._client.send(self._bind(request))
        except httpx.RequestError as e:
            return self._finish(request, start_time, error=e)
        return self._finish(request, start_time, response=response)

    def close(self):
        self._client.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()


class AsyncClient(_BaseClient):
    """Asyncio dispatch client.

    The calling task is the cancellation context: cancelling it, or wrapping
    do() in asyncio.timeout(), aborts the request. Cancellation is not
    classified, it propagates as usual.
    """

    def __init__(self, timeout: float, transport: httpx.AsyncBaseTransport = None):
        super().__init__(timeout)
        self._client = httpx.AsyncClient(**self._client_kwargs(transport))

    async def do(self, request: httpx.Request) -> httpx.Response:
        start_time = time.time()
        try:
            response = await self._client.send(self._bind(request))
        except httpx.RequestError as e:
            return self._finish(request, start_time, error=e)
        return self._finish(request, start_time, response=response)

    async def aclose(self):
        await self._client.aclose()

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.aclose()
