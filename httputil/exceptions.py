from typing import Optional

import httpx


class HTTPUtilError(Exception):
    """Base exception for everything raised by httputil."""
    pass


class RequestBuildError(HTTPUtilError):
    """Raised when a request cannot be built from the given URL."""

    def __init__(self, message: str, url: str = None):
        super().__init__(message)
        self.url = url


class EncodingError(HTTPUtilError):
    """Raised when the parameter map cannot be serialized to JSON."""
    pass


class ResponseError(HTTPUtilError):
    """Raised for every outcome other than HTTP 200.

    Other 2xx codes are failures too. ``response`` is the response that
    arrived, if any; its body is still the caller's to release.
    """

    def __init__(self, method: str, host: str, path: str, status_code: int,
                 message: str = "", response: Optional[httpx.Response] = None):
        super().__init__(
            f"{method} {host}{path} http_code({status_code}) err({message})"
        )
        self.method = method
        self.host = host
        self.path = path
        self.status_code = status_code
        self.message = message
        self.response = response


class TransportError(ResponseError):
    """Raised when the request never got a response (network error or timeout).

    Classified as 504 Gateway Timeout.
    """
    pass
