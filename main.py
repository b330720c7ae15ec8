"""
Entrypoint: load .env and config, init logging, send one request, print the body.

    python main.py GET https://httpbin.org/get page=2 -H "Token: 123" --timeout 5
"""

import argparse
import sys

from dotenv import load_dotenv

import httputil
from httputil.config import config
from httputil.log import configure_logging, get_logger


def parse_params(pairs):
    """Turn ["a=1", "b=2"] into {"a": "1", "b": "2"}."""
    params = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep:
            raise ValueError(f"Expected key=value, got {pair!r}")
        params[key] = value
    return params


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Send a single HTTP request")
    parser.add_argument("method", help="GET, POST (form) or POST/JSON")
    parser.add_argument("url")
    parser.add_argument("params", nargs="*", help="key=value parameters")
    parser.add_argument("-H", "--header", action="append", default=[], dest="headers",
                        help='"Key: Value" header, may be repeated')
    parser.add_argument("--timeout", type=int, default=None, help="timeout in seconds")
    parser.add_argument("--log-level", default=None)
    return parser


def main(argv=None) -> int:
    """Parse arguments, send the request and write the body to stdout"""
    # Load environment variables from .env file
    load_dotenv()
    config.reload()

    args = build_parser().parse_args(argv)
    configure_logging(level=args.log_level)
    logger = get_logger(__name__)

    try:
        params = parse_params(args.params)
    except ValueError as e:
        print(e, file=sys.stderr)
        return 2

    options = {"timeout": args.timeout} if args.timeout is not None else None

    try:
        response = httputil.request(args.method, args.url, params or None, args.headers, options)
    except httputil.HTTPUtilError as e:
        logger.debug("request_failed", error=str(e))
        if isinstance(e, httputil.ResponseError) and e.response is not None:
            httputil.read_body(e.response)
        print(e, file=sys.stderr)
        return 1

    sys.stdout.buffer.write(httputil.read_body(response))
    sys.stdout.flush()
    return 0


if __name__ == "__main__":
    sys.exit(main())
