"""Client for querying the healthcheck sidecar."""

from __future__ import annotations

import json
import urllib.error
import urllib.request
from collections.abc import Callable
from typing import Any
from urllib.parse import urlencode, urlsplit, urlunsplit

from nodeops.healthcheck.disk_usage import PORT, DiskUsageResponse


class HealthcheckError(Exception):
    """Disk usage could not be obtained from the healthcheck sidecar."""


def _join_host_port(host: str, port: int) -> str:
    host = host.strip("[]")
    if ":" in host:
        return f"[{host}]:{port}"
    return f"{host}:{port}"


def _decode_message(err: json.JSONDecodeError) -> str:
    if not err.doc.strip():
        return "EOF"
    if err.pos >= len(err.doc.rstrip()):
        return "unexpected EOF"
    return err.msg


class Client:
    """Queries healthcheck information from a node's sidecar."""

    def __init__(self, http_do: Callable[[urllib.request.Request], Any] | None = None) -> None:
        self._http_do = http_do or urllib.request.urlopen

    def disk_usage(self, host: str, home_dir: str) -> DiskUsageResponse:
        """Return disk usage statistics for home_dir on host.

        Do not include the port in host. Raises HealthcheckError on failure.
        """
        try:
            parsed = urlsplit(host)
        except ValueError as err:
            raise HealthcheckError(f"url parse: {err}") from err

        url = urlunsplit(
            (
                parsed.scheme,
                _join_host_port(parsed.netloc, PORT),
                "/disk",
                urlencode({"dir": home_dir}),
                "",
            )
        )
        req = urllib.request.Request(url, method="GET")

        try:
            resp = self._http_do(req)
        except urllib.error.HTTPError as err:
            resp = err
        except Exception as err:
            raise HealthcheckError(f"http do: {err}") from err

        with resp:
            body = resp.read()

        try:
            result = DiskUsageResponse.from_json(body)
        except json.JSONDecodeError as err:
            raise HealthcheckError(f"malformed json: {_decode_message(err)}") from err
        except ValueError as err:
            raise HealthcheckError(f"malformed json: {err}") from err

        if result.error:
            raise HealthcheckError(result.error)
        if result.all_bytes == 0:
            raise HealthcheckError("invalid response: 0 free bytes")
        return result