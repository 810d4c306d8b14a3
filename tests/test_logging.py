"""
Tests for structured logging helpers
"""

import json
import logging

import pytest

from postboard.logging import (
    add_request_context,
    bind_user_id,
    clear_request_context,
    configure_logging,
    generate_request_id,
    get_logger,
    get_request_id,
    get_user_id,
    logging_configured,
    set_request_context,
)


@pytest.fixture(autouse=True)
def clean_context():
    clear_request_context()
    yield
    clear_request_context()


@pytest.mark.unit
def test_generate_request_id_is_compact_and_unique():
    ids = {generate_request_id() for _ in range(50)}

    assert len(ids) == 50
    assert all(len(request_id) == 14 for request_id in ids)


@pytest.mark.unit
def test_set_request_context_generates_id():
    request_id = set_request_context()

    assert request_id
    assert get_request_id() == request_id


@pytest.mark.unit
def test_add_request_context_stamps_ids():
    set_request_context(request_id="req-123")
    bind_user_id(42)

    event = add_request_context(None, "info", {"event": "hello"})

    assert event == {"event": "hello", "request_id": "req-123", "user_id": "42"}
    assert get_user_id() == "42"


@pytest.mark.unit
def test_clear_request_context():
    set_request_context(request_id="req-123", user_id="u1")
    clear_request_context()

    assert get_request_id() is None
    assert get_user_id() is None
    assert add_request_context(None, "info", {"event": "x"}) == {"event": "x"}


@pytest.mark.unit
def test_json_output_in_production_mode(capsys):
    configure_logging(debug=False)
    set_request_context(request_id="req-json")

    try:
        get_logger("postboard.test").info("Something happened", count=3)
        line = capsys.readouterr().out.strip().splitlines()[-1]
    finally:
        # The handler points at capsys' stream, which closes after this test
        logging.getLogger().handlers.clear()

    record = json.loads(line)
    assert record["event"] == "Something happened"
    assert record["count"] == 3
    assert record["request_id"] == "req-json"
    assert record["level"] == "info"


@pytest.mark.unit
def test_explicit_level_wins_over_debug():
    try:
        configure_logging(debug=True, log_level="warning")

        assert logging_configured()
        assert logging.getLogger().level == logging.WARNING
    finally:
        logging.getLogger().handlers.clear()
