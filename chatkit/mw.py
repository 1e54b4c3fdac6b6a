"""WSGI middleware that logs request and response bodies."""

from __future__ import annotations

import io
import logging
import time
from typing import Callable, Iterable

logger = logging.getLogger(__name__)


def _request_uri(environ: dict) -> str:
    for key in ("REQUEST_URI", "RAW_URI"):
        if environ.get(key):
            return environ[key]
    uri = environ.get("SCRIPT_NAME", "") + environ.get("PATH_INFO", "")
    query = environ.get("QUERY_STRING", "")
    return f"{uri}?{query}" if query else uri


def _read_body(environ: dict) -> bytes:
    length = environ.get("CONTENT_LENGTH") or ""
    stream = environ.get("wsgi.input")
    if stream is None or not length:
        return b""
    return stream.read(int(length))


class RequestLogMiddleware:
    """Logs each request body and the response status and body at debug level."""

    def __init__(self, app: Callable, log: logging.Logger | None = None):
        self.app = app
        self.log = log or logger

    def __call__(self, environ: dict, start_response: Callable) -> Iterable[bytes]:
        try:
            body = _read_body(environ)
        except (OSError, ValueError) as exc:
            message = str(exc).encode()
            start_response(
                "400 Bad Request",
                [("Content-Type", "text/plain; charset=utf-8"), ("Content-Length", str(len(message)))],
            )
            return [message]
        start = time.monotonic()
        self.log.debug(
            "http request method=%s uri=%s req=%s",
            environ.get("REQUEST_METHOD", ""), _request_uri(environ), body.decode(errors="replace"),
        )
        environ["wsgi.input"] = io.BytesIO(body)
        environ["CONTENT_LENGTH"] = str(len(body))
        return self._respond(environ, start_response, start)

    def _respond(self, environ: dict, start_response: Callable, start: float) -> Iterable[bytes]:
        captured = bytearray()
        status = [""]

        def capturing_start(status_line, headers, exc_info=None):
            status[0] = status_line
            write = start_response(status_line, headers, exc_info)

            def capturing_write(data: bytes):
                captured.extend(data)
                return write(data)

            return capturing_write

        result = self.app(environ, capturing_start)
        try:
            for chunk in result:
                captured.extend(chunk)
                yield chunk
        finally:
            close = getattr(result, "close", None)
            if close is not None:
                close()
            self.log.debug(
                "http response time=%.3fs status=%s resp=%s",
                time.monotonic() - start, status[0], bytes(captured).decode(errors="replace"),
            )