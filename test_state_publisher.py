"""
Test Validation State Publishing (Without Real Broker)
======================================================

ValidationStateMessage serialization, ValidationStatePublisher formatting
and structured log output.

Usage:
    pytest test_state_publisher.py
"""

import json
import logging

import pytest

from palisade_mqtt import (
    LogEvent,
    Timestamp,
    ValidationStateMessage,
    ValidationStatePublisher,
    create_logger,
)
from palisade_mqtt.schemas.validation_state import SCHEMA_VERSION
from palisade_zone import Point, points_from_pairs, validate_boundary

TRIANGLE = points_from_pairs([(0, 0), (0, 1), (1, 0)])


@pytest.fixture
def publisher():
    return ValidationStatePublisher(
        broker_host="localhost",
        topic="palisade/data/validation/test",
        session_id="test",
        logger=create_logger("test_publisher"),
    )


def test_open_valid_boundary_carries_closed_boundary():
    msg = ValidationStateMessage.from_result("test", TRIANGLE, validate_boundary(TRIANGLE))

    assert msg.schema_version == SCHEMA_VERSION
    assert msg.point_count == 3
    assert msg.closed_boundary == (*TRIANGLE, TRIANGLE[0])


def test_invalid_boundary_has_no_closed_boundary():
    boundary = points_from_pairs([(0, 0), (0, 1)])
    msg = ValidationStateMessage.from_result("test", boundary, validate_boundary(boundary))

    assert msg.closed_boundary is None
    assert "closed_boundary" not in msg.to_dict()


def test_message_survives_json(publisher):
    msg = ValidationStateMessage.from_result("test", TRIANGLE, validate_boundary(TRIANGLE))

    data = json.loads(json.dumps(publisher.format_message(msg)))
    restored = ValidationStateMessage.from_dict(data)

    assert restored == msg
    assert data["result"]["warnings"][0]["code"] == "AUTO_CLOSE"
    assert data["boundary"][1] == {"latitude": 0, "longitude": 1}


def test_from_dict_requires_fields():
    with pytest.raises(ValueError):
        ValidationStateMessage.from_dict({"schema_version": "1.0"})


def test_timestamp_parses():
    ts = Timestamp.now()

    assert ts.to_datetime().tzinfo is not None
    with pytest.raises(ValueError):
        Timestamp(value="yesterday").to_datetime()


def test_format_message_rejects_garbage(publisher):
    with pytest.raises(ValueError):
        publisher.format_message(object())


def test_publish_without_connection_fails(publisher):
    publisher.on_result(tuple(TRIANGLE), validate_boundary(TRIANGLE))

    assert publisher.last_message is not None
    assert publisher.last_message.session_id == "test"
    assert not publisher.is_connected()
    assert publisher.get_stats()["message_count"] == 0


def test_structured_log_lines_are_json(caplog):
    logger = create_logger("test_json", level=logging.DEBUG)

    with caplog.at_level(logging.DEBUG, logger="palisade.test_json"):
        logger.info(
            event=LogEvent.VALIDATION_PUBLISHED,
            message="Published validation result",
            metadata={"point_count": 3, "point": Point(1, 2)},
        )

    entry = json.loads(caplog.records[-1].getMessage())
    assert entry["event"] == "validation.published"
    assert entry["component"] == "test_json"
    assert entry["metadata"]["point_count"] == 3
    assert entry["metadata"]["point"] == "(1, 2)"
