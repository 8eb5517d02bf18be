"""Readiness check against the CometBFT status endpoint."""

from __future__ import annotations

import json
import logging
import threading
from collections.abc import Callable, Iterable, Mapping
from http import HTTPStatus
from typing import Any, Protocol


class Statuser(Protocol):
    def status(self, rpc_host: str, timeout: float) -> Mapping[str, Any]: ...


def _catching_up(status: Mapping[str, Any]) -> bool:
    result = status.get("result") or {}
    sync_info = result.get("sync_info") or {}
    return bool(sync_info.get("catching_up", False))


class Comet:
    """WSGI application reporting whether the node is in sync."""

    def __init__(
        self, logger: logging.Logger, client: Statuser, rpc_host: str, timeout: float
    ) -> None:
        self._logger = logger
        self._client = client
        self._rpc_host = rpc_host
        self._timeout = timeout
        self._last_status = 0
        self._lock = threading.Lock()

    def __call__(
        self, environ: dict[str, Any], start_response: Callable[..., Any]
    ) -> Iterable[bytes]:
        resp: dict[str, Any] = {"address": self._rpc_host, "in_sync": False}
        try:
            status = self._client.status(self._rpc_host, timeout=self._timeout)
        except Exception as err:
            resp["error"] = str(err)
            return self._write(HTTPStatus.SERVICE_UNAVAILABLE, start_response, resp)

        resp["in_sync"] = not _catching_up(status)
        if not resp["in_sync"]:
            return self._write(HTTPStatus.UNPROCESSABLE_ENTITY, start_response, resp)
        return self._write(HTTPStatus.OK, start_response, resp)

    def _write(
        self, code: HTTPStatus, start_response: Callable[..., Any], resp: dict[str, Any]
    ) -> list[bytes]:
        body = (json.dumps(resp, separators=(",", ":")) + "\n").encode()
        start_response(
            f"{code.value} {code.phrase}",
            [("Content-Type", "application/json"), ("Content-Length", str(len(body)))],
        )
        # Only log when the status code changes, so logs are not spammed.
        with self._lock:
            previous, self._last_status = self._last_status, int(code)
        if previous != int(code):
            self._logger.info(
                "Health state change statusCode=%d response=%s", int(code), resp
            )
        return [body]