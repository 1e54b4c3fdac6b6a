"""JSON calls to the IM server's HTTP API."""

from __future__ import annotations

import dataclasses
import functools
import json
import logging
import time
from typing import Any

import httpx

from chatkit.errors import CodeError
from chatkit.mctx import API_TOKEN, OPERATION_ID, Context

logger = logging.getLogger(__name__)

OPERATION_ID_HEADER = "operationID"
TOKEN_HEADER = "token"
DEFAULT_TIMEOUT = 10.0


@functools.lru_cache(maxsize=None)
def _default_client() -> httpx.Client:
    return httpx.Client(timeout=DEFAULT_TIMEOUT)


def _to_json_ready(req: Any) -> Any:
    if dataclasses.is_dataclass(req) and not isinstance(req, type):
        return dataclasses.asdict(req)
    return req


class ApiCaller:
    """Posts a request to one API path and unwraps the server's response envelope."""

    def __init__(self, api: str, client: httpx.Client | None = None):
        self.api = api
        self._client = client

    def __repr__(self) -> str:
        return f"ApiCaller(api={self.api!r})"

    @property
    def client(self) -> httpx.Client:
        return self._client if self._client is not None else _default_client()

    def call(self, ctx: Context, api_prefix: str, req: Any) -> Any:
        """Post req as JSON to api_prefix + api and return the "data" of the reply.

        Raises CodeError when the server reports a non-zero error code, ValueError
        when the reply is not a JSON envelope, and httpx errors on transport failure.
        """
        start = time.monotonic()
        try:
            resp = self._call(ctx, api_prefix, req)
        except Exception as exc:
            logger.error(
                "api caller failed api=%s duration=%.3fs req=%r err=%s",
                self.api, time.monotonic() - start, req, exc,
            )
            raise
        logger.info(
            "api caller success resp api=%s duration=%.3fs req=%r resp=%r",
            self.api, time.monotonic() - start, req, resp,
        )
        return resp

    def _call(self, ctx: Context, api_prefix: str, req: Any) -> Any:
        url = api_prefix + self.api
        body = json.dumps(_to_json_ready(req)).encode()
        operation_id = ctx.value(OPERATION_ID)
        headers = {
            "Content-Type": "application/json",
            OPERATION_ID_HEADER: "" if operation_id is None else str(operation_id),
        }
        token = ctx.value(API_TOKEN)
        if isinstance(token, str) and token:
            headers[TOKEN_HEADER] = token
        response = self.client.post(url, content=body, headers=headers)
        text = response.text
        try:
            envelope = json.loads(response.content)
        except ValueError as exc:
            raise ValueError(text) from exc
        if not isinstance(envelope, dict):
            raise ValueError(text)
        err_code = envelope.get("errCode") or 0
        if err_code != 0:
            error = CodeError(envelope.get("errMsg") or "", code=err_code)
            raise error.with_detail(envelope.get("errDlt") or "")
        return envelope.get("data")