import io
import json
import logging

import pytest
import structlog

from txmanager.logging_config import setup_logging, shorten_hex_payloads


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
    structlog.reset_defaults()


def test_json_lines_for_stdlib_loggers(restore_root_logger):
    stream = io.StringIO()
    setup_logging("INFO", "json", stream=stream)

    logging.getLogger("txmanager.core.execution.manager").info("Transaction submitted: 0xabc")

    line = json.loads(stream.getvalue().strip())
    assert line["event"] == "Transaction submitted: 0xabc"
    assert line["level"] == "info"
    assert line["logger"] == "txmanager.core.execution.manager"
    assert "timestamp" in line


def test_level_filters_debug(restore_root_logger):
    stream = io.StringIO()
    setup_logging("INFO", "json", stream=stream)

    logging.getLogger("txmanager.providers.rpc").debug("RPC eth_chainId []")

    assert stream.getvalue() == ""


def test_console_format(restore_root_logger):
    stream = io.StringIO()
    setup_logging("DEBUG", "console", stream=stream)

    logging.getLogger("txmanager.test").warning("Call reverted: nope")

    output = stream.getvalue()
    assert "Call reverted: nope" in output
    with pytest.raises(ValueError):
        json.loads(output)


def test_http_client_loggers_are_quieted(restore_root_logger):
    setup_logging("DEBUG", "json", stream=io.StringIO())

    assert logging.getLogger("httpx").level == logging.WARNING
    assert logging.getLogger("httpcore").level == logging.WARNING


def test_unknown_format_rejected(restore_root_logger):
    with pytest.raises(ValueError):
        setup_logging("INFO", "xml")


def test_long_calldata_is_shortened():
    init_code = "0x" + "60" * 200
    tx_hash = "0x" + "ab" * 32

    event = shorten_hex_payloads(None, "debug", {"event": f"RPC eth_sendTransaction {init_code} {tx_hash}"})

    assert init_code not in event["event"]
    assert "0x6060606060606060...60606060 (200 bytes)" in event["event"]
    assert tx_hash in event["event"]


def test_shortened_payload_in_rendered_output(restore_root_logger):
    stream = io.StringIO()
    setup_logging("DEBUG", "json", stream=stream)

    logging.getLogger("txmanager.providers.rpc").debug("RPC eth_call " + "0x" + "ff" * 100)

    line = json.loads(stream.getvalue().strip())
    assert line["event"].endswith("(100 bytes)")
