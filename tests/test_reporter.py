import logging

import pytest

from nodeops.kube.reporter import EventReporter

LOGGER_NAME = "nodeops.tests.reporter"


class _Recorder:
    def __init__(self):
        self.events = []

    def event(self, resource, event_type, reason, message):
        self.events.append((resource, event_type, reason, message))


@pytest.fixture
def reporter():
    return EventReporter(logging.getLogger(LOGGER_NAME), _Recorder(), "the-resource")


def test_record_info():
    recorder = _Recorder()
    reporter = EventReporter(logging.getLogger(LOGGER_NAME), recorder, "the-resource")

    reporter.record_info("Started", "work began")

    events = recorder.events
    assert len(events) == 1
    assert events[0] == ("the-resource", "Normal", "Started", "work began")


def test_record_error():
    recorder = _Recorder()
    reporter = EventReporter(logging.getLogger(LOGGER_NAME), recorder, "the-resource")

    reporter.record_error("Failed", RuntimeError("boom"))

    events = recorder.events
    assert len(events) == 1
    assert events[0] == ("the-resource", "Warning", "Failed", "boom")


def test_info_logs_message_and_fields(reporter, caplog):
    caplog.set_level(logging.DEBUG, logger=LOGGER_NAME)
    reporter.info("Creating service", svcName="osmosis-rpc")

    assert len(caplog.records) == 1
    record = caplog.records[0]
    assert record.levelno == logging.INFO
    assert "Creating service" in record.getMessage()
    assert "osmosis-rpc" in record.getMessage()


def test_debug_logs_at_debug_level(reporter, caplog):
    caplog.set_level(logging.DEBUG, logger=LOGGER_NAME)
    reporter.debug("details")

    assert [r.levelno for r in caplog.records] == [logging.DEBUG]
    assert caplog.records[0].getMessage() == "details"


def test_debug_hidden_at_info_level(reporter, caplog):
    caplog.set_level(logging.INFO, logger=LOGGER_NAME)
    reporter.debug("details")
    assert caplog.records == []


def test_error_logs_error(reporter, caplog):
    caplog.set_level(logging.DEBUG, logger=LOGGER_NAME)
    reporter.error(ValueError("boom"), "Reconcile failed", attempt=3)

    assert len(caplog.records) == 1
    record = caplog.records[0]
    assert record.levelno == logging.ERROR
    message = record.getMessage()
    assert "Reconcile failed" in message
    assert "boom" in message
    assert "attempt=3" in message