import json
import logging
from wsgiref.util import setup_testing_defaults

from nodeops.healthcheck.comet import Comet

TEST_RPC = "http://my-rpc:25567"
LOGGER_NAME = "nodeops-test-comet"


class _StubStatuser:
    def __init__(self, result=None, error=None):
        self.result = result if result is not None else {}
        self.error = error
        self.calls = []

    def status(self, rpc_host, timeout):
        self.calls.append((rpc_host, timeout))
        if self.error is not None:
            raise self.error
        return self.result


def _call(app):
    environ = {}
    setup_testing_defaults(environ)
    captured = {}

    def start_response(status, headers):
        captured["status"] = status

    body = b"".join(app(environ, start_response))
    return int(captured["status"].split()[0]), json.loads(body)


def _comet(client, timeout=10.0):
    return Comet(logging.getLogger(LOGGER_NAME), client, TEST_RPC, timeout)


def test_happy_path():
    client = _StubStatuser()
    code, got = _call(_comet(client))

    assert code == 200
    assert got == {"address": TEST_RPC, "in_sync": True}
    assert client.calls[0][0] == TEST_RPC


def test_still_catching_up():
    client = _StubStatuser({"result": {"sync_info": {"catching_up": True}}})
    code, got = _call(_comet(client))

    assert code == 422
    assert got == {"address": TEST_RPC, "in_sync": False}


def test_status_error():
    client = _StubStatuser(error=RuntimeError("boom"))
    code, got = _call(_comet(client))

    assert code == 503
    assert got == {"address": TEST_RPC, "in_sync": False, "error": "boom"}


def test_passes_timeout():
    client = _StubStatuser()
    _call(_comet(client, timeout=1e-9))

    assert client.calls == [(TEST_RPC, 1e-9)]


def test_logs_only_on_state_change(caplog):
    caplog.set_level(logging.INFO, logger=LOGGER_NAME)
    client = _StubStatuser()
    app = _comet(client)

    _call(app)
    _call(app)
    changes = [r for r in caplog.records if "Health state change" in r.getMessage()]
    assert len(changes) == 1

    client.error = RuntimeError("boom")
    _call(app)
    changes = [r for r in caplog.records if "Health state change" in r.getMessage()]
    assert len(changes) == 2