"""Disk usage statistics of a directory, served as JSON over WSGI."""

from __future__ import annotations

import json
import os
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from http import HTTPStatus
from typing import Any
from urllib.parse import parse_qs

# Port of the healthcheck sidecar.
PORT = 1251


def _field(data: dict[str, Any], key: str, kind: type, default: Any) -> Any:
    value = data.get(key)
    if value is None:
        return default
    if isinstance(value, bool) or not isinstance(value, kind):
        raise ValueError(f"field {key}: expected {kind.__name__}, got {type(value).__name__}")
    if kind is int and value < 0:
        raise ValueError(f"field {key}: negative value {value}")
    return value


@dataclass
class DiskUsageResponse:
    """Disk statistics in bytes for a directory."""

    dir: str = ""
    all_bytes: int = 0
    free_bytes: int = 0
    error: str = ""

    def to_json(self) -> str:
        """Encode as compact JSON, leaving out zero byte counts and an empty error."""
        data: dict[str, Any] = {"dir": self.dir}
        if self.all_bytes:
            data["all_bytes"] = self.all_bytes
        if self.free_bytes:
            data["free_bytes"] = self.free_bytes
        if self.error:
            data["error"] = self.error
        return json.dumps(data, separators=(",", ":"))

    @classmethod
    def from_json(cls, text: str | bytes) -> DiskUsageResponse:
        """Decode from JSON; unknown fields are ignored.

        Raises ValueError (or json.JSONDecodeError) on malformed input.
        """
        data = json.loads(text)
        if not isinstance(data, dict):
            raise ValueError(
                f"cannot decode JSON {type(data).__name__} into DiskUsageResponse"
            )
        return cls(
            dir=_field(data, "dir", str, ""),
            all_bytes=_field(data, "all_bytes", int, 0),
            free_bytes=_field(data, "free_bytes", int, 0),
            error=_field(data, "error", str, ""),
        )


StartResponse = Callable[[str, list[tuple[str, str]]], Any]


def _respond(start_response: StartResponse, code: int, resp: DiskUsageResponse) -> list[bytes]:
    status = HTTPStatus(code)
    body = (resp.to_json() + "\n").encode()
    start_response(
        f"{status.value} {status.phrase}",
        [("Content-Type", "application/json"), ("Content-Length", str(len(body)))],
    )
    return [body]


def _os_error_text(err: OSError) -> str:
    msg = err.strerror or str(err)
    return msg[:1].lower() + msg[1:]


def disk_usage_app(environ: dict[str, Any], start_response: StartResponse) -> Iterable[bytes]:
    """WSGI application answering with disk statistics of the directory in query param dir."""
    params = parse_qs(environ.get("QUERY_STRING", ""), keep_blank_values=True)
    directory = params.get("dir", [""])[0]
    if not directory:
        return _respond(
            start_response,
            HTTPStatus.BAD_REQUEST,
            DiskUsageResponse(error="query param dir must be specified"),
        )

    try:
        stats = os.statvfs(os.path.normpath(directory))
    except OSError as err:
        return _respond(
            start_response,
            HTTPStatus.INTERNAL_SERVER_ERROR,
            DiskUsageResponse(dir=directory, error=_os_error_text(err)),
        )

    return _respond(
        start_response,
        HTTPStatus.OK,
        DiskUsageResponse(
            dir=directory,
            all_bytes=stats.f_blocks * stats.f_frsize,
            free_bytes=stats.f_bfree * stats.f_frsize,
        ),
    )